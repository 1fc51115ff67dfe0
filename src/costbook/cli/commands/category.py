"""Category management commands."""

import click
from costbook.cli.account_resolution import require_actor_or_exit
from costbook.cli.error_handling import handle_domain_error
from costbook.domain.category import CategoryService
from costbook.domain.entities import CategoryKind

KIND_CHOICE = click.Choice([kind.value for kind in CategoryKind])


@click.group()
def category_group():
    """Manage cost, income and recipe categories."""
    pass


@category_group.command("create")
@click.argument("name")
@click.option("--kind", type=KIND_CHOICE, required=True, help="What the category classifies")
@click.option("--global", "is_global", is_flag=True, help="Create a category visible to everyone")
@click.pass_context
def create_category(ctx, name: str, kind: str, is_global: bool):
    """Create a category.

    Examples:
        costbook --actor Bakery category create "Flour suppliers" --kind cost
        costbook category create "Bread" --kind recipe --global
    """
    actor = None if is_global else require_actor_or_exit(ctx)
    try:
        category_id = CategoryService(ctx.obj["db"]).create_category(
            name, CategoryKind(kind), actor=actor
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created {kind} category '{name}' (ID: {category_id})")


@category_group.command("list")
@click.option("--kind", type=KIND_CHOICE, required=True, help="Category kind")
@click.pass_context
def list_categories(ctx, kind: str):
    """List categories the acting account may use."""
    actor = require_actor_or_exit(ctx)
    categories = CategoryService(ctx.obj["db"]).list_categories(actor, CategoryKind(kind))
    if not categories:
        click.echo(f"No {kind} categories found.")
        return
    for cat in categories:
        scope = "global" if cat.account_id is None else f"account {cat.account_id}"
        click.echo(f"ID: {cat.id:3d} | {cat.name:30s} | {scope}")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
