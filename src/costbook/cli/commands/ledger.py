"""Cost and income commands."""

from datetime import date, timedelta

import click
from costbook.cli.account_resolution import require_actor_or_exit
from costbook.cli.error_handling import handle_domain_error
from costbook.domain.ledger import CostService, IncomeService
from costbook.utils.amount_parser import parse_amount
from costbook.utils.date_parser import month_bounds, parse_date, parse_year_month


def _parse_date_or_exit(ctx, value: str) -> date:
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)


def _parse_amount_or_exit(ctx, value: str):
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)


def resolve_period(
    ctx, month: str | None, start_date: str | None, end_date: str | None
) -> tuple[date | None, date | None]:
    """Turn --month or --start-date/--end-date into a [start, end) range.

    --end-date is inclusive on the command line.
    """
    if month and (start_date or end_date):
        click.echo("Error: --month cannot be combined with --start-date or --end-date.", err=True)
        ctx.exit(1)

    if month:
        try:
            return month_bounds(*parse_year_month(month))
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)

    start = _parse_date_or_exit(ctx, start_date) if start_date else None
    end = _parse_date_or_exit(ctx, end_date) + timedelta(days=1) if end_date else None
    if start and end and start >= end:
        click.echo("Error: --start-date must not be after --end-date.", err=True)
        ctx.exit(1)
    return start, end


def period_options(f):
    f = click.option("--end-date", help="Last date (inclusive)")(f)
    f = click.option("--start-date", help="First date (YYYY-MM-DD or relative like 'last month')")(f)
    f = click.option("--month", help="Month as YYYY-MM")(f)
    return f


@click.group()
def cost_group():
    """Book and browse costs."""
    pass


@cost_group.command("add")
@click.option("--amount", required=True, help="Cost amount (e.g., 123.45 or '1.234,50 EUR')")
@click.option("--date", "date_str", default="today", show_default=True, help="Booking date")
@click.option("--supplier", required=True, help="Supplier name")
@click.option("--category", type=int, help="Cost category ID")
@click.option("--identifier", help="Invoice number or reference")
@click.option("--other-category", help="Free-text category")
@click.pass_context
def add_cost(ctx, amount, date_str, supplier, category, identifier, other_category):
    """Book a cost.

    Examples:
        costbook --actor Bakery cost add --amount 250 --supplier "Mill & Co" --category 1
        costbook --actor Bakery cost add --amount "49,90" --date 2024-03-02 --supplier Metro
    """
    actor = require_actor_or_exit(ctx)
    value = _parse_amount_or_exit(ctx, amount)
    booked_on = _parse_date_or_exit(ctx, date_str)
    try:
        cost_id = CostService(ctx.obj["db"]).create_cost(
            actor,
            amount=value,
            date=booked_on,
            supplier=supplier,
            category_id=category,
            identifier=identifier,
            other_category=other_category,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Booked cost {cost_id}: {value} on {booked_on}")


@cost_group.command("list")
@period_options
@click.option("--category", type=int, help="Only this category")
@click.pass_context
def list_costs(ctx, month, start_date, end_date, category):
    """List costs of the acting account's group, newest first."""
    actor = require_actor_or_exit(ctx)
    start, end = resolve_period(ctx, month, start_date, end_date)
    costs = CostService(ctx.obj["db"]).list_costs(
        actor, start_date=start, end_date=end, category_id=category
    )
    if not costs:
        click.echo("No costs found.")
        return

    for cost in costs:
        category_label = cost.category_id if cost.category_id is not None else (cost.other_category or "-")
        click.echo(
            f"ID: {cost.id:4d} | {cost.date} | {cost.amount:>10} | {cost.supplier:20s} | "
            f"{category_label} | {cost.identifier or ''}"
        )
    click.echo(f"\nTotal: {sum(c.amount for c in costs)}")


@cost_group.command("edit")
@click.argument("cost_id", type=int)
@click.option("--amount", help="New amount")
@click.option("--date", "date_str", help="New date")
@click.option("--supplier", help="New supplier")
@click.option("--category", type=int, help="New cost category ID")
@click.option("--identifier", help="New reference")
@click.option("--other-category", help="New free-text category")
@click.pass_context
def edit_cost(ctx, cost_id, amount, date_str, supplier, category, identifier, other_category):
    """Change a cost; options not given keep their current value."""
    actor = require_actor_or_exit(ctx)
    service = CostService(ctx.obj["db"])
    try:
        current = service.get_cost(actor, cost_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    try:
        service.update_cost(
            actor,
            cost_id,
            amount=_parse_amount_or_exit(ctx, amount) if amount else current.amount,
            date=_parse_date_or_exit(ctx, date_str) if date_str else current.date,
            supplier=supplier if supplier is not None else current.supplier,
            category_id=category if category is not None else current.category_id,
            identifier=identifier if identifier is not None else current.identifier,
            other_category=other_category if other_category is not None else current.other_category,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated cost {cost_id}")


@cost_group.command("delete")
@click.argument("cost_id", type=int)
@click.pass_context
def delete_cost(ctx, cost_id):
    """Delete a cost."""
    actor = require_actor_or_exit(ctx)
    try:
        CostService(ctx.obj["db"]).delete_cost(actor, cost_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted cost {cost_id}")


@click.group()
def income_group():
    """Book and browse incomes."""
    pass


@income_group.command("add")
@click.option("--amount", required=True, help="Income amount")
@click.option("--date", "date_str", default="today", show_default=True, help="Booking date")
@click.option("--category", type=int, help="Income category ID")
@click.option("--identifier", help="Reference")
@click.pass_context
def add_income(ctx, amount, date_str, category, identifier):
    """Book an income.

    Examples:
        costbook --actor Bakery income add --amount 1200 --date 2024-03-31
    """
    actor = require_actor_or_exit(ctx)
    value = _parse_amount_or_exit(ctx, amount)
    booked_on = _parse_date_or_exit(ctx, date_str)
    try:
        income_id = IncomeService(ctx.obj["db"]).create_income(
            actor, amount=value, date=booked_on, category_id=category, identifier=identifier
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Booked income {income_id}: {value} on {booked_on}")


@income_group.command("list")
@period_options
@click.option("--category", type=int, help="Only this category")
@click.pass_context
def list_incomes(ctx, month, start_date, end_date, category):
    """List incomes of the acting account's group, newest first."""
    actor = require_actor_or_exit(ctx)
    start, end = resolve_period(ctx, month, start_date, end_date)
    incomes = IncomeService(ctx.obj["db"]).list_incomes(
        actor, start_date=start, end_date=end, category_id=category
    )
    if not incomes:
        click.echo("No incomes found.")
        return

    for income in incomes:
        category_label = income.category_id if income.category_id is not None else "-"
        click.echo(
            f"ID: {income.id:4d} | {income.date} | {income.amount:>10} | "
            f"{category_label} | {income.identifier or ''}"
        )
    click.echo(f"\nTotal: {sum(i.amount for i in incomes)}")


@income_group.command("edit")
@click.argument("income_id", type=int)
@click.option("--amount", help="New amount")
@click.option("--date", "date_str", help="New date")
@click.option("--category", type=int, help="New income category ID")
@click.option("--identifier", help="New reference")
@click.pass_context
def edit_income(ctx, income_id, amount, date_str, category, identifier):
    """Change an income; options not given keep their current value."""
    actor = require_actor_or_exit(ctx)
    service = IncomeService(ctx.obj["db"])
    try:
        current = service.get_income(actor, income_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    try:
        service.update_income(
            actor,
            income_id,
            amount=_parse_amount_or_exit(ctx, amount) if amount else current.amount,
            date=_parse_date_or_exit(ctx, date_str) if date_str else current.date,
            category_id=category if category is not None else current.category_id,
            identifier=identifier if identifier is not None else current.identifier,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated income {income_id}")


@income_group.command("delete")
@click.argument("income_id", type=int)
@click.pass_context
def delete_income(ctx, income_id):
    """Delete an income."""
    actor = require_actor_or_exit(ctx)
    try:
        IncomeService(ctx.obj["db"]).delete_income(actor, income_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted income {income_id}")


def register_commands(cli):
    """Register cost and income commands with main CLI."""
    cli.add_command(cost_group, name="cost")
    cli.add_command(income_group, name="income")
