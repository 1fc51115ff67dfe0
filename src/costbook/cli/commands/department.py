"""Department management commands."""

from decimal import Decimal, InvalidOperation

import click
from costbook.cli.account_resolution import require_actor_or_exit
from costbook.cli.error_handling import handle_domain_error
from costbook.domain.department import DepartmentService


@click.group()
def department_group():
    """Manage departments."""
    pass


@department_group.command("create")
@click.argument("name")
@click.option("--share", default="0", help="Share of overhead in percent (0-100)")
@click.option("--shared", is_flag=True, help="Create a department shared by all accounts")
@click.pass_context
def create_department(ctx, name: str, share: str, shared: bool):
    """Create a department.

    Examples:
        costbook --actor Bakery department create "Pastry" --share 40
        costbook department create "Packaging" --shared
    """
    service = DepartmentService(ctx.obj["db"])
    actor = None if shared else require_actor_or_exit(ctx)

    try:
        share_percent = Decimal(share)
    except InvalidOperation:
        click.echo(f"Error: Invalid share '{share}'", err=True)
        ctx.exit(1)

    try:
        department_id = service.create_department(actor, name, share_percent)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created department '{name}' (ID: {department_id})")


@department_group.command("list")
@click.pass_context
def list_departments(ctx):
    """List departments available to the acting account."""
    actor = require_actor_or_exit(ctx)
    departments = DepartmentService(ctx.obj["db"]).list_departments(actor)
    if not departments:
        click.echo("No departments found.")
        return

    for dept in departments:
        owner = "shared" if dept.account_id is None else f"account {dept.account_id}"
        click.echo(f"ID: {dept.id:3d} | {dept.name:25s} | {dept.share_percent:>6}% | {owner}")


def register_commands(cli):
    """Register department commands with main CLI."""
    cli.add_command(department_group, name="department")
