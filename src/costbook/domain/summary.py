"""Financial dashboard aggregation."""

import logging
from decimal import Decimal
from typing import Iterable, Optional

from costbook.database.base import Database
from costbook.domain.entities import Account, DashboardSummary, YearSeries
from costbook.domain.errors import ValidationError
from costbook.domain.visibility import VisibilityResolver
from costbook.utils.date_parser import month_bounds
from costbook.utils.money import (
    ZERO,
    ZERO_CENTS,
    all_equal,
    first_max_index,
    first_min_index,
    round2,
)

logger = logging.getLogger(__name__)

MONTHS = range(1, 13)


class FinancialAggregator:
    """Build the monthly dashboard for a set of visible accounts."""

    def __init__(self, db: Database):
        """Initialize financial aggregator.

        Args:
            db: Database instance
        """
        self.db = db
        self.visibility = VisibilityResolver(db)

    def year_series(self, account_ids: Iterable[int], year: int) -> YearSeries:
        """Monthly costs and incomes of a year; months without records are zero."""
        account_ids = frozenset(account_ids)
        costs = self.db.sum_costs_by_month(account_ids, year)
        incomes = self.db.sum_incomes_by_month(account_ids, year)
        return YearSeries(
            year=year,
            costs=tuple(costs.get(m, ZERO_CENTS) for m in MONTHS),
            incomes=tuple(incomes.get(m, ZERO_CENTS) for m in MONTHS),
        )

    def dashboard(self, visible_accounts: Iterable[int], year: int, month: int) -> DashboardSummary:
        """Compute the dashboard for a year and month.

        Args:
            visible_accounts: Account IDs whose records are aggregated
            year: Selected year
            month: Selected month (1-12)

        Returns:
            DashboardSummary with category totals of the month, the monthly
            series of year and year - 1, and best/worst months of year

        Raises:
            ValidationError: If month is outside 1-12
        """
        if month not in MONTHS:
            raise ValidationError(f"Month must be between 1 and 12, got {month}")

        account_ids = frozenset(visible_accounts)
        start, end = month_bounds(year, month)
        category_totals = self.db.sum_costs_by_category(account_ids, start, end)

        current = self.year_series(account_ids, year)
        previous = self.year_series(account_ids, year - 1)

        nets = current.nets
        best = first_max_index(nets)
        if all_equal(nets):
            worst_month = None
            worst_net = nets[best]
        else:
            worst = first_min_index(nets)
            worst_month = worst + 1
            worst_net = nets[worst]

        logger.debug(
            "Dashboard %s-%02d for accounts %s: best %s, worst %s",
            year,
            month,
            sorted(account_ids),
            best + 1,
            worst_month,
        )
        return DashboardSummary(
            year=year,
            month=month,
            category_totals=category_totals,
            current=current,
            previous=previous,
            best_month=best + 1,
            best_net=nets[best],
            worst_month=worst_month,
            worst_net=worst_net,
            income_this_month=current.income(month),
            income_same_month_last_year=previous.income(month),
            available_years=tuple(self.db.list_cost_years(account_ids)),
        )

    def dashboard_for(self, actor: Account, year: int, month: int) -> DashboardSummary:
        """Dashboard over the actor's visible accounts."""
        return self.dashboard(self.visibility.visible_accounts(actor), year, month)

    def category_share(self, summary: DashboardSummary, category_id: Optional[int]) -> Decimal:
        """Share (0-100) of a category in the month's total cost, rounded to cents."""
        total = sum(summary.category_totals.values(), ZERO)
        if total == 0:
            return ZERO
        return round2(summary.category_total(category_id) * 100 / total)
