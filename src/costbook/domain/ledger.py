"""Cost and income ledger services."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from costbook.database.base import Database
from costbook.domain.category import CategoryService
from costbook.domain.entities import Account, CategoryKind, CostRecord, IncomeRecord
from costbook.domain.errors import NotFoundError, ValidationError, entity_not_found
from costbook.domain.visibility import VisibilityResolver
from costbook.utils.money import round2, to_decimal

logger = logging.getLogger(__name__)


def _checked_amount(amount: Decimal) -> Decimal:
    value = to_decimal(amount)
    if value < 0:
        raise ValidationError("Amount must not be negative")
    return round2(value)


class CostService:
    """Service for booking and browsing costs."""

    def __init__(self, db: Database):
        """Initialize cost service.

        Args:
            db: Database instance
        """
        self.db = db
        self.visibility = VisibilityResolver(db)
        self.categories = CategoryService(db)

    def _validate(
        self, actor: Account, amount: Decimal, supplier: str, category_id: Optional[int]
    ) -> Decimal:
        if not supplier or not supplier.strip():
            raise ValidationError("Supplier must not be empty")
        value = _checked_amount(amount)
        self.categories.require_allowed(actor, category_id, CategoryKind.COST)
        return value

    def create_cost(
        self,
        actor: Account,
        amount: Decimal,
        date: date,
        supplier: str,
        category_id: Optional[int] = None,
        identifier: Optional[str] = None,
        other_category: Optional[str] = None,
    ) -> int:
        """Book a cost owned by the actor.

        Args:
            actor: Acting account
            amount: Cost amount (non-negative)
            date: Booking date
            supplier: Supplier name
            category_id: Optional cost category
            identifier: Optional invoice number or reference
            other_category: Optional free-text category

        Returns:
            Cost ID

        Raises:
            ValidationError: If the amount is negative or the supplier empty
            AuthorizationError: If the category is not allowed for the actor
        """
        value = self._validate(actor, amount, supplier, category_id)
        cost_id = self.db.create_cost(
            account_id=actor.id,
            amount=value,
            date=date,
            supplier=supplier,
            category_id=category_id,
            identifier=identifier,
            other_category=other_category,
        )
        logger.info("Booked cost %s of %s for account %s", cost_id, value, actor.id)
        return cost_id

    def get_cost(self, actor: Account, cost_id: int) -> CostRecord:
        """Get a cost visible to the actor.

        Raises:
            NotFoundError: If cost not found
            AuthorizationError: If it belongs to another tenant
        """
        cost = self.db.get_cost(cost_id)
        if cost is None:
            raise NotFoundError(entity_not_found("cost", cost_id))
        self.visibility.require_visible(actor, cost.account_id, "cost", cost_id)
        return cost

    def update_cost(
        self,
        actor: Account,
        cost_id: int,
        amount: Decimal,
        date: date,
        supplier: str,
        category_id: Optional[int] = None,
        identifier: Optional[str] = None,
        other_category: Optional[str] = None,
    ) -> None:
        """Replace the editable fields of a cost; ownership does not change."""
        self.get_cost(actor, cost_id)
        value = self._validate(actor, amount, supplier, category_id)
        self.db.update_cost(
            cost_id,
            amount=value,
            date=date,
            supplier=supplier,
            category_id=category_id,
            identifier=identifier,
            other_category=other_category,
        )
        logger.info("Updated cost %s", cost_id)

    def delete_cost(self, actor: Account, cost_id: int) -> None:
        self.get_cost(actor, cost_id)
        self.db.delete_cost(cost_id)
        logger.info("Deleted cost %s", cost_id)

    def list_costs(
        self,
        actor: Account,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category_id: Optional[int] = None,
    ) -> list[CostRecord]:
        """List costs of the actor's group, newest first (end_date exclusive)."""
        return self.db.list_costs(
            self.visibility.visible_accounts(actor),
            start_date=start_date,
            end_date=end_date,
            category_id=category_id,
        )


class IncomeService:
    """Service for booking and browsing incomes."""

    def __init__(self, db: Database):
        self.db = db
        self.visibility = VisibilityResolver(db)
        self.categories = CategoryService(db)

    def create_income(
        self,
        actor: Account,
        amount: Decimal,
        date: date,
        category_id: Optional[int] = None,
        identifier: Optional[str] = None,
    ) -> int:
        """Book an income owned by the actor.

        Raises:
            ValidationError: If the amount is negative
            AuthorizationError: If the category is not allowed for the actor
        """
        value = _checked_amount(amount)
        self.categories.require_allowed(actor, category_id, CategoryKind.INCOME)
        income_id = self.db.create_income(
            account_id=actor.id,
            amount=value,
            date=date,
            category_id=category_id,
            identifier=identifier,
        )
        logger.info("Booked income %s of %s for account %s", income_id, value, actor.id)
        return income_id

    def get_income(self, actor: Account, income_id: int) -> IncomeRecord:
        """Get an income visible to the actor."""
        income = self.db.get_income(income_id)
        if income is None:
            raise NotFoundError(entity_not_found("income", income_id))
        self.visibility.require_visible(actor, income.account_id, "income", income_id)
        return income

    def update_income(
        self,
        actor: Account,
        income_id: int,
        amount: Decimal,
        date: date,
        category_id: Optional[int] = None,
        identifier: Optional[str] = None,
    ) -> None:
        self.get_income(actor, income_id)
        value = _checked_amount(amount)
        self.categories.require_allowed(actor, category_id, CategoryKind.INCOME)
        self.db.update_income(
            income_id, amount=value, date=date, category_id=category_id, identifier=identifier
        )
        logger.info("Updated income %s", income_id)

    def delete_income(self, actor: Account, income_id: int) -> None:
        self.get_income(actor, income_id)
        self.db.delete_income(income_id)
        logger.info("Deleted income %s", income_id)

    def list_incomes(
        self,
        actor: Account,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category_id: Optional[int] = None,
    ) -> list[IncomeRecord]:
        """List incomes of the actor's group, newest first (end_date exclusive)."""
        return self.db.list_incomes(
            self.visibility.visible_accounts(actor),
            start_date=start_date,
            end_date=end_date,
            category_id=category_id,
        )
