"""Tests for cost, income and dashboard commands."""

from datetime import date
from decimal import Decimal

from costbook.cli.main import cli
from costbook.domain.entities import CategoryKind


def invoke(cli_runner, temp_db, actor, *args):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "--actor", actor, *args])


def test_cost_add_and_list(cli_runner, temp_db, tenants):
    result = invoke(
        cli_runner, temp_db, "Bakery Shop A",
        "cost", "add", "--amount", "1.234,50", "--date", "2024-03-02", "--supplier", "Mill",
    )
    assert result.exit_code == 0, result.output
    assert "Booked cost" in result.output

    result = invoke(cli_runner, temp_db, "Bakery", "cost", "list", "--month", "2024-03")
    assert result.exit_code == 0
    assert "Mill" in result.output
    assert "Total: 1234.50" in result.output

    result = invoke(cli_runner, temp_db, "Bakery", "cost", "list", "--month", "2024-04")
    assert "No costs found" in result.output


def test_cost_list_period_conflict(cli_runner, temp_db, tenants):
    result = invoke(
        cli_runner, temp_db, "Bakery", "cost", "list", "--month", "2024-03", "--start-date", "2024-03-01"
    )
    assert result.exit_code == 1


def test_cost_edit_and_delete(cli_runner, temp_db, tenants, cost_service):
    cost_id = cost_service.create_cost(tenants.root, Decimal("10"), date(2024, 1, 1), "Mill")

    result = invoke(cli_runner, temp_db, "Bakery", "cost", "edit", str(cost_id), "--amount", "12")
    assert result.exit_code == 0, result.output
    assert cost_service.get_cost(tenants.root, cost_id).amount == Decimal("12.00")
    assert cost_service.get_cost(tenants.root, cost_id).supplier == "Mill"

    result = invoke(cli_runner, temp_db, "Deli", "cost", "delete", str(cost_id))
    assert result.exit_code == 3

    result = invoke(cli_runner, temp_db, "Bakery", "cost", "delete", str(cost_id))
    assert result.exit_code == 0


def test_income_add_with_foreign_category(cli_runner, temp_db, tenants, category_service):
    deli_sales = category_service.create_category("Sales", CategoryKind.INCOME, tenants.other)
    result = invoke(
        cli_runner, temp_db, "Bakery", "income", "add", "--amount", "100", "--category", str(deli_sales)
    )
    assert result.exit_code == 3
    assert "Forbidden" in result.output


def test_income_list_inclusive_end_date(cli_runner, temp_db, tenants, income_service):
    income_service.create_income(tenants.root, Decimal("100"), date(2024, 1, 31), identifier="R-1")
    result = invoke(
        cli_runner, temp_db, "Bakery",
        "income", "list", "--start-date", "2024-01-01", "--end-date", "2024-01-31",
    )
    assert result.exit_code == 0
    assert "R-1" in result.output


def test_dashboard(cli_runner, temp_db, tenants, cost_service, income_service, category_service):
    energy = category_service.create_category("Energy", CategoryKind.COST)
    cost_service.create_cost(tenants.root, Decimal("200"), date(2024, 2, 3), "Grid", category_id=energy)
    income_service.create_income(tenants.shop_a, Decimal("500"), date(2024, 3, 1))
    income_service.create_income(tenants.root, Decimal("450"), date(2023, 2, 1))

    result = invoke(cli_runner, temp_db, "Bakery", "dashboard", "--month", "2024-02")
    assert result.exit_code == 0, result.output
    assert "Dashboard February 2024" in result.output
    assert "Energy" in result.output
    assert "100.00%" in result.output
    assert "Best month:  March (500" in result.output
    assert "Worst month: February (-200" in result.output
    assert "Same month of 2023:" in result.output
    assert "450" in result.output


def test_dashboard_flat_year(cli_runner, temp_db, tenants):
    result = invoke(cli_runner, temp_db, "Bakery", "dashboard", "--month", "2024-05")
    assert result.exit_code == 0
    assert "Worst month: none" in result.output
    assert "(no costs this month)" in result.output


def test_dashboard_invalid_month(cli_runner, temp_db, tenants):
    result = invoke(cli_runner, temp_db, "Bakery", "dashboard", "--month", "2024-13")
    assert result.exit_code == 1
    assert "Month must be between 1 and 12" in result.output
