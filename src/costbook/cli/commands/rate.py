"""Labor rate commands."""

import click
from costbook.cli.account_resolution import require_actor_or_exit
from costbook.cli.error_handling import handle_domain_error
from costbook.domain.labor_rate import LaborRateService
from costbook.utils.amount_parser import parse_amount


@click.group()
def rate_group():
    """Record and look up labor rates (cost per minute)."""
    pass


@rate_group.command("set")
@click.option("--shop", required=True, help="Internal (shop) labor cost per minute")
@click.option("--external", required=True, help="External labor cost per minute")
@click.option("--department", type=int, help="Department ID the rate overrides")
@click.pass_context
def set_rate(ctx, shop: str, external: str, department: int | None):
    """Record a new labor rate for the acting account's group.

    Without --department the group's global rate is set. Older records are
    kept; the newest one wins.

    Examples:
        costbook --actor Bakery rate set --shop 0.50 --external 0.80
        costbook --actor Bakery rate set --shop 0.65 --external 0 --department 2
    """
    actor = require_actor_or_exit(ctx)
    service = LaborRateService(ctx.obj["db"])

    try:
        shop_rate = parse_amount(shop)
        external_rate = parse_amount(external)
    except ValueError as e:
        click.echo(f"Error: Invalid rate: {e}", err=True)
        ctx.exit(1)

    try:
        record_id = service.record_rate(actor, shop_rate, external_rate, department_id=department)
    except ValueError as e:
        handle_domain_error(ctx, e)

    scope = f"department {department}" if department is not None else "global"
    click.echo(f"Recorded {scope} rate (ID: {record_id}): shop {shop_rate}, external {external_rate}")


@rate_group.command("show")
@click.option("--department", type=int, help="Department ID")
@click.pass_context
def show_rate(ctx, department: int | None):
    """Show the effective rate for a department (or the global rate)."""
    actor = require_actor_or_exit(ctx)
    try:
        rate = LaborRateService(ctx.obj["db"]).effective_rate_for(actor, department)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Shop:     {rate.shop}")
    click.echo(f"External: {rate.external}")
    click.echo(f"Source:   {rate.source.value}")


@rate_group.command("list")
@click.pass_context
def list_rates(ctx):
    """List the effective rate of every visible department."""
    actor = require_actor_or_exit(ctx)
    rates = LaborRateService(ctx.obj["db"]).department_rates_for(actor)

    click.echo(f"{'Department':>10} | {'Shop':>10} | {'External':>10} | Source")
    click.echo("-" * 50)
    for department_id, rate in sorted(rates.items(), key=lambda item: (item[0] is not None, item[0] or 0)):
        label = "global" if department_id is None else str(department_id)
        click.echo(f"{label:>10} | {rate.shop:>10} | {rate.external:>10} | {rate.source.value}")


@rate_group.command("history")
@click.option("--department", type=int, help="Only records of this department")
@click.pass_context
def rate_history(ctx, department: int | None):
    """List recorded rates, newest first."""
    actor = require_actor_or_exit(ctx)
    try:
        records = LaborRateService(ctx.obj["db"]).rate_history(actor, department)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not records:
        click.echo("No rates recorded.")
        return
    for record in records:
        scope = "global" if record.department_id is None else f"dept {record.department_id}"
        click.echo(
            f"v{record.version:<4d} | {scope:10s} | shop {record.shop_cost_per_min} | "
            f"external {record.external_cost_per_min} | {record.created_at:%Y-%m-%d %H:%M}"
        )


def register_commands(cli):
    """Register rate commands with main CLI."""
    cli.add_command(rate_group, name="rate")
