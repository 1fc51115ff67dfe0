"""Department domain service."""

import logging
from decimal import Decimal
from typing import Optional

from costbook.database.base import Database
from costbook.domain.entities import Account, Department
from costbook.domain.errors import NotFoundError, ValidationError, entity_not_found
from costbook.domain.visibility import VisibilityResolver

logger = logging.getLogger(__name__)


class DepartmentService:
    """Service for managing departments."""

    def __init__(self, db: Database):
        """Initialize department service.

        Args:
            db: Database instance
        """
        self.db = db
        self.visibility = VisibilityResolver(db)

    def create_department(
        self,
        actor: Optional[Account],
        name: str,
        share_percent: Decimal = Decimal("0"),
    ) -> int:
        """Create a department owned by the actor, or a shared one when actor is None.

        Raises:
            ValidationError: If the name is empty or share_percent is outside 0-100
        """
        if not name or not name.strip():
            raise ValidationError("Department name must not be empty")
        if not Decimal("0") <= share_percent <= Decimal("100"):
            raise ValidationError("Share percent must be between 0 and 100")

        account_id = actor.id if actor is not None else None
        department_id = self.db.create_department(
            name=name, account_id=account_id, share_percent=share_percent
        )
        logger.info("Created department %s for account %s", department_id, account_id)
        return department_id

    def get_department(self, actor: Account, department_id: int) -> Department:
        """Get a department visible to the actor.

        Raises:
            NotFoundError: If department not found
            AuthorizationError: If it belongs to another tenant
        """
        department = self.db.get_department(department_id)
        if department is None:
            raise NotFoundError(entity_not_found("department", department_id))
        if department.account_id is not None:
            self.visibility.require_visible(actor, department.account_id, "department", department_id)
        return department

    def list_departments(self, actor: Account) -> list[Department]:
        """List departments of the actor's group plus shared ones."""
        return self.db.list_departments(self.visibility.visible_accounts(actor))
