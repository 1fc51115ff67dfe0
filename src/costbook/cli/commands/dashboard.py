"""Dashboard command."""

import calendar
from datetime import date

import click
from costbook.cli.account_resolution import require_actor_or_exit
from costbook.cli.error_handling import handle_domain_error
from costbook.domain.category import CategoryService
from costbook.domain.entities import CategoryKind
from costbook.domain.summary import FinancialAggregator
from costbook.utils.date_parser import parse_year_month


@click.command("dashboard")
@click.option("--month", help="Month as YYYY-MM (defaults to the current month)")
@click.pass_context
def dashboard(ctx, month: str | None):
    """Show costs per category, the monthly series of this and last year,
    and the best and worst month.

    Examples:
        costbook --actor Bakery dashboard
        costbook --actor Bakery dashboard --month 2024-03
    """
    actor = require_actor_or_exit(ctx)
    db = ctx.obj["db"]

    if month is None:
        today = date.today()
        year, month_number = today.year, today.month
    else:
        try:
            year, month_number = parse_year_month(month)
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)

    aggregator = FinancialAggregator(db)
    try:
        summary = aggregator.dashboard_for(actor, year, month_number)
    except ValueError as e:
        handle_domain_error(ctx, e)

    names = {c.id: c.name for c in CategoryService(db).list_categories(actor, CategoryKind.COST)}

    click.echo(f"\nDashboard {calendar.month_name[month_number]} {year}")
    click.echo("=" * 60)
    click.echo("\nCosts by category:")
    if not summary.category_totals:
        click.echo("  (no costs this month)")
    for category_id, total in sorted(summary.category_totals.items(), key=lambda item: -item[1]):
        name = "Uncategorized" if category_id is None else names.get(category_id, f"Category {category_id}")
        share = aggregator.category_share(summary, category_id)
        click.echo(f"  {name:30s} {total:>12} {share:>7}%")

    click.echo(f"\nIncome this month:           {summary.income_this_month:>12}")
    click.echo(f"Same month of {summary.previous_year}:         {summary.income_same_month_last_year:>12}")

    click.echo(f"\n{'Month':10s} {'Cost ' + str(year):>12} {'Income':>12} {'Net':>12} {'Net ' + str(summary.previous_year):>12}")
    click.echo("-" * 62)
    for m in range(1, 13):
        click.echo(
            f"{calendar.month_abbr[m]:10s} {summary.current.cost(m):>12} {summary.current.income(m):>12} "
            f"{summary.current.net(m):>12} {summary.previous.net(m):>12}"
        )
    click.echo("-" * 62)
    click.echo(
        f"{'Total':10s} {summary.current.total_cost:>12} {summary.current.total_income:>12} "
        f"{summary.current.total_net:>12} {summary.previous.total_net:>12}"
    )

    click.echo(f"\nBest month:  {calendar.month_name[summary.best_month]} ({summary.best_net})")
    worst = calendar.month_name[summary.worst_month] if summary.worst_month is not None else "none"
    click.echo(f"Worst month: {worst} ({summary.worst_net})")

    if summary.available_years:
        click.echo(f"\nYears with costs: {', '.join(str(y) for y in summary.available_years)}")


def register_commands(cli):
    """Register dashboard command with main CLI."""
    cli.add_command(dashboard)
