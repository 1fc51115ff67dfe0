"""Tests for domain entities."""

import pytest
from dataclasses import FrozenInstanceError
from datetime import datetime, UTC
from decimal import Decimal

from costbook.domain.entities import (
    Account,
    CategoryKind,
    LaborRate,
    RateSource,
    SellMode,
    YearSeries,
)


class TestAccount:
    def test_root_and_child(self):
        now = datetime.now(UTC)
        assert Account(id=1, name="Bakery", parent_id=None, created_at=now).is_root
        assert not Account(id=2, name="Shop", parent_id=1, created_at=now).is_root

    def test_immutability(self):
        account = Account(id=1, name="Bakery", parent_id=None, created_at=datetime.now(UTC))
        with pytest.raises(FrozenInstanceError):
            account.name = "Deli"


class TestEnums:
    def test_values_round_trip_from_strings(self):
        assert SellMode("weight") is SellMode.WEIGHT
        assert CategoryKind("income") is CategoryKind.INCOME
        assert RateSource.OVERRIDE == "override"

    def test_labor_rate_defaults_to_global(self):
        assert LaborRate(Decimal("1"), Decimal("2")).source is RateSource.GLOBAL


class TestYearSeries:
    def test_nets_and_totals(self):
        costs = tuple(Decimal(m) for m in range(1, 13))
        incomes = tuple(Decimal("10") for _ in range(12))
        series = YearSeries(year=2024, costs=costs, incomes=incomes)

        assert series.net(1) == Decimal("9")
        assert series.net(12) == Decimal("-2")
        assert series.total_cost == Decimal("78")
        assert series.total_income == Decimal("120")
        assert series.total_net == Decimal("42")
        assert series.cost(3) == Decimal("3")
        assert series.income(3) == Decimal("10")
