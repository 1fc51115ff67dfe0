"""Category domain service."""

import logging
from typing import Optional

from costbook.database.base import Database
from costbook.domain.entities import Account, Category, CategoryKind
from costbook.domain.errors import (
    AuthorizationError,
    ConflictError,
    ValidationError,
    category_not_allowed,
)
from costbook.domain.visibility import VisibilityResolver

logger = logging.getLogger(__name__)


class CategoryService:
    """Service for managing cost, income and recipe categories.

    A category is usable by an actor when it is global or owned by an account
    of the actor's group.
    """

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db
        self.visibility = VisibilityResolver(db)

    def create_category(
        self, name: str, kind: CategoryKind, actor: Optional[Account] = None
    ) -> int:
        """Create a category.

        Args:
            name: Category name
            kind: What the category classifies
            actor: Owning account; None creates a global category

        Returns:
            Category ID

        Raises:
            ValidationError: If the name is empty
            ConflictError: If the name is already used in the same scope
        """
        if not name or not name.strip():
            raise ValidationError("Category name must not be empty")

        kind = CategoryKind(kind)
        scope = self.visibility.visible_accounts(actor) if actor is not None else frozenset()
        for existing in self.db.list_categories(kind, scope):
            if existing.name == name and (actor is None or existing.account_id is not None):
                raise ConflictError(f"{kind.value.capitalize()} category '{name}' already exists")

        account_id = actor.id if actor is not None else None
        category_id = self.db.create_category(name=name, kind=kind, account_id=account_id)
        logger.info("Created %s category %s for account %s", kind.value, category_id, account_id)
        return category_id

    def list_categories(self, actor: Account, kind: CategoryKind) -> list[Category]:
        """List categories of a kind usable by the actor.

        Returns:
            Global categories plus those owned by the actor's group
        """
        return self.db.list_categories(CategoryKind(kind), self.visibility.visible_accounts(actor))

    def allowed_category_ids(self, actor: Account, kind: CategoryKind) -> frozenset[int]:
        """IDs of the categories the actor may select."""
        return frozenset(c.id for c in self.list_categories(actor, kind))

    def require_allowed(
        self, actor: Account, category_id: Optional[int], kind: CategoryKind
    ) -> None:
        """Reject a category selection outside the actor's allowed set.

        None (uncategorized) is always accepted.

        Raises:
            AuthorizationError: If the category is unknown, of another kind or
                owned by another tenant
        """
        if category_id is None:
            return
        if category_id not in self.allowed_category_ids(actor, kind):
            raise AuthorizationError(category_not_allowed(category_id, CategoryKind(kind).value))
