"""Tests for the financial dashboard."""

from datetime import date
from decimal import Decimal

import pytest

from costbook.domain.entities import CategoryKind
from costbook.domain.errors import ValidationError


def test_all_equal_nets_have_no_worst_month(aggregator, income_service, tenants):
    for month in range(1, 13):
        income_service.create_income(tenants.root, Decimal("100"), date(2024, month, 5))

    summary = aggregator.dashboard_for(tenants.root, 2024, 6)
    assert summary.best_month == 1
    assert summary.best_net == Decimal("100")
    assert summary.worst_month is None
    assert summary.worst_net == Decimal("100")


def test_empty_year_is_all_zero_tie(aggregator, tenants):
    summary = aggregator.dashboard_for(tenants.root, 2024, 1)
    assert summary.current.nets == (Decimal("0"),) * 12
    assert summary.best_month == 1
    assert summary.worst_month is None
    assert summary.category_totals == {}
    assert summary.available_years == ()


def test_best_and_worst_take_first_extreme(aggregator, cost_service, income_service, tenants):
    income_service.create_income(tenants.root, Decimal("500"), date(2024, 3, 1))
    income_service.create_income(tenants.root, Decimal("500"), date(2024, 7, 1))
    cost_service.create_cost(tenants.root, Decimal("200"), date(2024, 2, 1), "Mill")
    cost_service.create_cost(tenants.root, Decimal("200"), date(2024, 9, 1), "Mill")

    summary = aggregator.dashboard_for(tenants.root, 2024, 3)
    assert summary.best_month == 3
    assert summary.best_net == Decimal("500")
    assert summary.worst_month == 2
    assert summary.worst_net == Decimal("-200")


def test_series_cover_year_and_previous_year(aggregator, cost_service, income_service, tenants):
    income_service.create_income(tenants.root, Decimal("300"), date(2024, 4, 10))
    income_service.create_income(tenants.root, Decimal("250"), date(2023, 4, 12))
    cost_service.create_cost(tenants.root, Decimal("120.50"), date(2024, 4, 2), "Metro")
    cost_service.create_cost(tenants.root, Decimal("80"), date(2023, 12, 31), "Metro")

    summary = aggregator.dashboard_for(tenants.root, 2024, 4)
    assert summary.previous_year == 2023
    assert summary.current.cost(4) == Decimal("120.50")
    assert summary.current.net(4) == Decimal("179.50")
    assert summary.previous.income(4) == Decimal("250")
    assert summary.previous.net(12) == Decimal("-80")
    assert summary.current.total_net == Decimal("179.50")
    assert summary.previous.total_net == Decimal("170")
    assert summary.income_this_month == Decimal("300")
    assert summary.income_same_month_last_year == Decimal("250")
    assert summary.available_years == (2024, 2023)


def test_category_totals_for_selected_month(
    aggregator, cost_service, category_service, tenants
):
    flour = category_service.create_category("Flour", CategoryKind.COST, tenants.root)
    energy = category_service.create_category("Energy", CategoryKind.COST)
    cost_service.create_cost(tenants.root, Decimal("100"), date(2024, 5, 1), "Mill", category_id=flour)
    cost_service.create_cost(tenants.shop_a, Decimal("50"), date(2024, 5, 31), "Mill", category_id=flour)
    cost_service.create_cost(tenants.root, Decimal("70"), date(2024, 5, 15), "Grid", category_id=energy)
    cost_service.create_cost(tenants.root, Decimal("5"), date(2024, 5, 15), "Kiosk")
    cost_service.create_cost(tenants.root, Decimal("999"), date(2024, 6, 1), "Mill", category_id=flour)

    summary = aggregator.dashboard_for(tenants.root, 2024, 5)
    assert summary.category_totals == {
        flour: Decimal("150.00"),
        energy: Decimal("70.00"),
        None: Decimal("5.00"),
    }
    assert summary.category_total(12345) == Decimal("0")
    assert aggregator.category_share(summary, energy) == Decimal("31.11")


def test_child_dashboard_excludes_siblings(aggregator, income_service, tenants):
    income_service.create_income(tenants.root, Decimal("10"), date(2024, 1, 1))
    income_service.create_income(tenants.shop_a, Decimal("20"), date(2024, 1, 1))
    income_service.create_income(tenants.shop_b, Decimal("40"), date(2024, 1, 1))
    income_service.create_income(tenants.other, Decimal("80"), date(2024, 1, 1))

    assert aggregator.dashboard_for(tenants.root, 2024, 1).income_this_month == Decimal("70")
    assert aggregator.dashboard_for(tenants.shop_a, 2024, 1).income_this_month == Decimal("30")
    assert aggregator.dashboard_for(tenants.other, 2024, 1).income_this_month == Decimal("80")


@pytest.mark.parametrize("month", [0, 13])
def test_month_out_of_range(aggregator, tenants, month):
    with pytest.raises(ValidationError):
        aggregator.dashboard_for(tenants.root, 2024, month)


def test_empty_months_keep_cent_scale(aggregator, income_service, tenants):
    income_service.create_income(tenants.root, Decimal("600"), date(2024, 5, 1))

    summary = aggregator.dashboard_for(tenants.root, 2024, 5)
    assert str(summary.best_net) == "600.00"
    assert summary.worst_month == 1
    assert str(summary.worst_net) == "0.00"
    assert str(summary.current.costs[0]) == "0.00"
    assert str(summary.previous.incomes[4]) == "0.00"


def test_first_year_has_empty_previous_series(aggregator, tenants):
    summary = aggregator.dashboard_for(tenants.root, 1, 1)
    assert summary.previous.year == 0
    assert summary.previous.incomes == (Decimal("0"),) * 12
    assert summary.income_same_month_last_year == Decimal("0")
    assert summary.worst_month is None
