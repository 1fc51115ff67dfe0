"""Tests for Database interface returning domain models."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from costbook.domain import entities
from costbook.domain.entities import CategoryKind, LineInput
from costbook.domain.errors import NotFoundError


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_account_returns_domain_model(self, temp_db):
        account_id = temp_db.create_account(name="Bakery")
        account = temp_db.get_account(account_id)

        assert isinstance(account, entities.Account)
        assert account.name == "Bakery"
        assert account.parent_id is None
        assert isinstance(account.created_at, datetime)

    def test_child_account_ids(self, temp_db):
        root = temp_db.create_account(name="Bakery")
        a = temp_db.create_account(name="A", parent_id=root)
        b = temp_db.create_account(name="B", parent_id=root)
        assert sorted(temp_db.list_child_account_ids(root)) == [a, b]
        assert temp_db.list_child_account_ids(a) == []

    def test_rate_versions_increase(self, temp_db):
        root = temp_db.create_account(name="Bakery")
        first = temp_db.create_rate_record(root, None, Decimal("0.1"), Decimal("0.2"))
        second = temp_db.create_rate_record(root, None, Decimal("0.3"), Decimal("0.4"))

        latest = temp_db.get_latest_rate_record(root, None)
        assert isinstance(latest, entities.RateRecord)
        assert latest.id == second
        assert latest.shop_cost_per_min == Decimal("0.3")
        assert [r.id for r in temp_db.list_rate_records(root)] == [second, first]

    def test_rate_records_by_scope(self, temp_db):
        root = temp_db.create_account(name="Bakery")
        dept = temp_db.create_department("Pastry", root)
        base = temp_db.create_rate_record(root, None, Decimal("1"), Decimal("1"))
        override = temp_db.create_rate_record(root, dept, Decimal("2"), Decimal("0"))

        assert [r.id for r in temp_db.list_rate_records(root, dept)] == [override]
        assert {r.id for r in temp_db.list_rate_records(root)} == {base, override}

    def test_latest_department_records(self, temp_db):
        root = temp_db.create_account(name="Bakery")
        dept = temp_db.create_department("Pastry", root)
        temp_db.create_rate_record(root, dept, Decimal("1"), Decimal("1"))
        newest = temp_db.create_rate_record(root, dept, Decimal("2"), Decimal("0"))
        temp_db.create_rate_record(root, None, Decimal("5"), Decimal("5"))

        records = temp_db.get_latest_department_rate_records(root)
        assert list(records) == [dept]
        assert records[dept].id == newest

    def test_shadow_ingredient_upsert(self, temp_db):
        root = temp_db.create_account(name="Bakery")
        flour = temp_db.create_ingredient("Flour", Decimal("1"), root)
        recipe_id = temp_db.create_recipe(
            root,
            entities.RecipeDraft(
                name="Bread",
                category_id=None,
                department_id=None,
                sell_mode=entities.SellMode.PIECE,
                labor_cost_mode=entities.LaborCostMode.INTERNAL,
                labour_minutes=0,
                lines=(LineInput(flour, Decimal("100")),),
            ),
            Decimal("0.10"),
        )

        first = temp_db.upsert_shadow_ingredient(recipe_id, root, "Bread", Decimal("2"))
        second = temp_db.upsert_shadow_ingredient(recipe_id, root, "Bread v2", Decimal("3"))
        assert first == second
        shadow = temp_db.get_ingredient(first)
        assert shadow.recipe_id == recipe_id
        assert shadow.name == "Bread v2"

    def test_replace_recipe_lines(self, temp_db):
        root = temp_db.create_account(name="Bakery")
        flour = temp_db.create_ingredient("Flour", Decimal("1"), root)
        salt = temp_db.create_ingredient("Salt", Decimal("1"), root)
        draft = entities.RecipeDraft(
            name="Bread",
            category_id=None,
            department_id=None,
            sell_mode=entities.SellMode.PIECE,
            labor_cost_mode=entities.LaborCostMode.INTERNAL,
            labour_minutes=0,
            lines=(),
        )
        recipe_id = temp_db.create_recipe(root, draft, Decimal("0"))
        temp_db.replace_recipe_lines(recipe_id, [LineInput(flour, Decimal("500"))])
        temp_db.replace_recipe_lines(
            recipe_id, [LineInput(salt, Decimal("10")), LineInput(flour, Decimal("490"))]
        )

        lines = temp_db.get_recipe_lines(recipe_id)
        assert [(l.ingredient_id, l.quantity_g) for l in lines] == [
            (salt, Decimal("10")),
            (flour, Decimal("490")),
        ]
        assert temp_db.count_ingredient_usages(flour) == 1

    def test_transaction_rolls_back_everything(self, temp_db):
        with pytest.raises(RuntimeError):
            with temp_db.transaction():
                temp_db.create_account(name="Bakery")
                with temp_db.transaction():
                    temp_db.create_account(name="Deli")
                raise RuntimeError("boom")
        assert temp_db.list_accounts() == []

    def test_transaction_commits(self, temp_db):
        with temp_db.transaction():
            temp_db.create_account(name="Bakery")
        assert [a.name for a in temp_db.list_accounts()] == ["Bakery"]

    def test_missing_rows_raise_not_found(self, temp_db):
        with pytest.raises(NotFoundError):
            temp_db.delete_cost(1)
        with pytest.raises(NotFoundError):
            temp_db.update_ingredient_price(1, Decimal("1"))

    def test_category_listing_includes_global(self, temp_db):
        root = temp_db.create_account(name="Bakery")
        temp_db.create_category("Energy", CategoryKind.COST)
        temp_db.create_category("Flour", CategoryKind.COST, account_id=root)
        temp_db.create_category("Sales", CategoryKind.INCOME)

        categories = temp_db.list_categories(CategoryKind.COST, [root])
        assert all(isinstance(c, entities.Category) for c in categories)
        assert [c.name for c in categories] == ["Energy", "Flour"]
        assert categories[0].kind is CategoryKind.COST

    def test_monthly_sums(self, temp_db):
        root = temp_db.create_account(name="Bakery")
        temp_db.create_cost(root, Decimal("10.10"), date(2024, 1, 5), "A")
        temp_db.create_cost(root, Decimal("0.90"), date(2024, 1, 20), "B")
        temp_db.create_cost(root, Decimal("3"), date(2024, 11, 1), "C")
        temp_db.create_cost(root, Decimal("99"), date(2023, 1, 1), "D")
        temp_db.create_income(root, Decimal("7"), date(2024, 2, 1))

        assert temp_db.sum_costs_by_month([root], 2024) == {1: Decimal("11.00"), 11: Decimal("3.00")}
        assert temp_db.sum_incomes_by_month([root], 2024) == {2: Decimal("7.00")}
        assert temp_db.list_cost_years([root]) == [2024, 2023]

    def test_monthly_sums_outside_date_range(self, temp_db):
        root = temp_db.create_account(name="Bakery")
        temp_db.create_cost(root, Decimal("1"), date(9999, 12, 31), "A")

        assert temp_db.sum_costs_by_month([root], 0) == {}
        assert temp_db.sum_incomes_by_month([root], 10000) == {}
        assert temp_db.sum_costs_by_month([root], 9999) == {12: Decimal("1.00")}
