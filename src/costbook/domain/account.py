"""Account domain service."""

import logging
from typing import Optional

from costbook.database.base import Database
from costbook.domain.entities import Account as AccountEntity
from costbook.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    account_delete_blocked,
    account_not_found,
)

logger = logging.getLogger(__name__)


class AccountService:
    """Service for managing tenant accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(self, name: str, parent_id: Optional[int] = None) -> int:
        """Create a root account, or a child when parent_id is given.

        Args:
            name: Account name
            parent_id: Optional root account to attach the new account to

        Returns:
            Account ID

        Raises:
            ConflictError: If account name already exists
            NotFoundError: If the parent does not exist
            ValidationError: If the parent is itself a child (no grandchildren)
        """
        if not name or not name.strip():
            raise ValidationError("Account name must not be empty")
        if self.db.get_account_by_name(name) is not None:
            raise ConflictError(f"Account with name '{name}' already exists")

        if parent_id is not None:
            parent = self.db.get_account(parent_id)
            if parent is None:
                raise NotFoundError(account_not_found(parent_id))
            if parent.parent_id is not None:
                raise ValidationError(
                    f"Account {parent_id} is a child account; child accounts cannot have children"
                )

        account_id = self.db.create_account(name=name, parent_id=parent_id)
        logger.info("Created account %s (parent=%s)", account_id, parent_id)
        return account_id

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def require_account(self, account_id: int) -> AccountEntity:
        """Get account by ID or raise NotFoundError."""
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def get_account_by_name(self, name: str) -> Optional[AccountEntity]:
        """Get account by name."""
        return self.db.get_account_by_name(name)

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts.

        Returns:
            List of account entities
        """
        return self.db.list_accounts()

    def delete_account(self, account_id: int) -> None:
        """Delete an account that has no children and owns no records.

        Raises:
            NotFoundError: If account not found
            DependencyError: If the account still has children or records
        """
        self.require_account(account_id)

        child_count = len(self.db.list_child_account_ids(account_id))
        record_count = self.db.count_account_records(account_id)
        if child_count > 0 or record_count > 0:
            raise DependencyError(account_delete_blocked(account_id, child_count, record_count))

        self.db.delete_account(account_id)
        logger.info("Deleted account %s", account_id)
