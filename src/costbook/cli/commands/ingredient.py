"""Ingredient management commands."""

import click
from costbook.cli.account_resolution import require_actor_or_exit
from costbook.cli.error_handling import handle_domain_error
from costbook.domain.ingredient import IngredientService
from costbook.utils.amount_parser import parse_amount


@click.group()
def ingredient_group():
    """Manage ingredients and their prices."""
    pass


def _parse_price_or_exit(ctx, price: str):
    try:
        return parse_amount(price)
    except ValueError as e:
        click.echo(f"Error: Invalid price: {e}", err=True)
        ctx.exit(1)


@ingredient_group.command("add")
@click.argument("name")
@click.option("--price", required=True, help="Price per kg")
@click.pass_context
def add_ingredient(ctx, name: str, price: str):
    """Add an ingredient.

    Examples:
        costbook --actor Bakery ingredient add "Flour T55" --price 0.95
        costbook --actor Bakery ingredient add "Butter" --price "8,40 EUR"
    """
    actor = require_actor_or_exit(ctx)
    price_per_kg = _parse_price_or_exit(ctx, price)
    try:
        ingredient_id = IngredientService(ctx.obj["db"]).create_ingredient(actor, name, price_per_kg)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created ingredient '{name}' (ID: {ingredient_id})")


@ingredient_group.command("list")
@click.pass_context
def list_ingredients(ctx):
    """List ingredients of the acting account's group."""
    actor = require_actor_or_exit(ctx)
    ingredients = IngredientService(ctx.obj["db"]).list_ingredients(actor)
    if not ingredients:
        click.echo("No ingredients found.")
        return
    for ing in ingredients:
        marker = f" (recipe {ing.recipe_id})" if ing.recipe_id is not None else ""
        click.echo(f"ID: {ing.id:3d} | {ing.name + marker:35s} | {ing.price_per_kg:>10} /kg")


@ingredient_group.command("price")
@click.argument("ingredient_id", type=int)
@click.argument("price")
@click.pass_context
def set_price(ctx, ingredient_id: int, price: str):
    """Change the price per kg of an ingredient."""
    actor = require_actor_or_exit(ctx)
    price_per_kg = _parse_price_or_exit(ctx, price)
    try:
        IngredientService(ctx.obj["db"]).update_price(actor, ingredient_id, price_per_kg)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated price of ingredient {ingredient_id} to {price_per_kg}")


@ingredient_group.command("delete")
@click.argument("ingredient_id", type=int)
@click.pass_context
def delete_ingredient(ctx, ingredient_id: int):
    """Delete an ingredient no recipe uses."""
    actor = require_actor_or_exit(ctx)
    try:
        IngredientService(ctx.obj["db"]).delete_ingredient(actor, ingredient_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted ingredient {ingredient_id}")


@ingredient_group.command("cost")
@click.argument("ingredient_id", type=int)
@click.argument("grams")
@click.pass_context
def line_cost(ctx, ingredient_id: int, grams: str):
    """Show what GRAMS of an ingredient cost at its current price."""
    actor = require_actor_or_exit(ctx)
    try:
        quantity = parse_amount(grams)
    except ValueError as e:
        click.echo(f"Error: Invalid quantity: {e}", err=True)
        ctx.exit(1)
    try:
        cost = IngredientService(ctx.obj["db"]).preview_line_cost(actor, ingredient_id, quantity)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"{quantity} g of ingredient {ingredient_id}: {cost}")


def register_commands(cli):
    """Register ingredient commands with main CLI."""
    cli.add_command(ingredient_group, name="ingredient")
