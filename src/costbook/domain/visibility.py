"""Tenant visibility resolution.

A root account sees itself and its children; a child sees itself and its
root. Every service scopes reads and authorizes writes through this module.
"""

import logging
from typing import Optional

from costbook.database.base import Database
from costbook.domain.entities import Account
from costbook.domain.errors import AuthorizationError, not_visible

logger = logging.getLogger(__name__)


class VisibilityResolver:
    """Resolve which accounts' data an actor may see or modify."""

    def __init__(self, db: Database):
        """Initialize visibility resolver.

        Args:
            db: Database instance
        """
        self.db = db

    def visible_accounts(self, actor: Account) -> frozenset[int]:
        """Return the IDs of accounts whose data the actor may see.

        Never empty: the actor itself is always included.
        """
        if actor.parent_id is None:
            visible = frozenset([actor.id, *self.db.list_child_account_ids(actor.id)])
        else:
            visible = frozenset([actor.id, actor.parent_id])
        logger.debug("Account %s sees accounts %s", actor.id, sorted(visible))
        return visible

    @staticmethod
    def root_id(actor: Account) -> int:
        """Return the root of the actor's account group."""
        return actor.id if actor.parent_id is None else actor.parent_id

    def can_see(self, actor: Account, owner_id: Optional[int]) -> bool:
        """True if data owned by owner_id is visible to the actor."""
        return owner_id in self.visible_accounts(actor)

    def require_visible(self, actor: Account, owner_id: Optional[int], kind: str, entity_id: int) -> None:
        """Raise AuthorizationError unless owner_id is in the actor's visible set.

        Args:
            actor: Acting account
            owner_id: Owner of the target entity
            kind: Entity kind used in the error message (e.g. "recipe")
            entity_id: Target entity ID used in the error message
        """
        if not self.can_see(actor, owner_id):
            raise AuthorizationError(not_visible(kind, entity_id))
