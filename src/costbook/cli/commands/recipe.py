"""Recipe commands."""

import click
from costbook.cli.account_resolution import require_actor_or_exit
from costbook.cli.error_handling import handle_domain_error
from costbook.domain.entities import LaborCostMode, LineInput, RecipeCosting, RecipeDraft, SellMode
from costbook.domain.recipe import RecipeService, draft_from_recipe
from costbook.utils.amount_parser import parse_amount

# Option name -> (RecipeDraft field, negative values allowed)
DECIMAL_OPTIONS = {
    "weight": ("recipe_weight_g", False),
    "packing": ("packing_cost", False),
    "price_piece": ("selling_price_per_piece", False),
    "price_kg": ("selling_price_per_kg", False),
    "vat": ("vat_rate", False),
    "production_cost": ("production_cost_per_kg", False),
    "total": ("declared_total", False),
    "margin": ("potential_margin", True),
    "margin_pct": ("potential_margin_pct", True),
}


def recipe_options(required: bool):
    """Attach the recipe form options to a command."""

    def decorator(f):
        options = [
            click.option("--name", required=required, help="Recipe name"),
            click.option("--category", type=int, help="Recipe category ID"),
            click.option("--department", type=int, help="Department ID (selects the labor rate)"),
            click.option(
                "--mode",
                type=click.Choice([m.value for m in SellMode]),
                default=SellMode.PIECE.value if required else None,
                help="Sell per piece or per weight",
            ),
            click.option(
                "--labor",
                type=click.Choice([m.value for m in LaborCostMode]),
                default=LaborCostMode.INTERNAL.value if required else None,
                help="Use the shop (internal) or external labor rate",
            ),
            click.option("--minutes", type=int, help="Labour minutes per batch"),
            click.option("--pieces", type=int, help="Pieces per batch (piece mode)"),
            click.option("--weight", help="Batch weight in grams (weight mode)"),
            click.option("--packing", help="Packing cost"),
            click.option("--price-piece", help="Selling price per piece"),
            click.option("--price-kg", help="Selling price per kg"),
            click.option("--vat", help="VAT rate in percent"),
            click.option("--production-cost", help="Production cost per kg"),
            click.option("--total", help="Total unit expense as calculated by you"),
            click.option("--margin", help="Potential margin"),
            click.option("--margin-pct", help="Potential margin in percent"),
            click.option(
                "--as-ingredient/--not-as-ingredient",
                default=None,
                help="Expose the recipe as an ingredient of other recipes",
            ),
            click.option(
                "--line",
                "lines",
                multiple=True,
                required=required,
                help="Ingredient line as INGREDIENT_ID:GRAMS (repeatable)",
            ),
        ]
        for option in reversed(options):
            f = option(f)
        return f

    return decorator


def _parse_lines(ctx, values) -> tuple[LineInput, ...]:
    lines = []
    for value in values:
        ingredient, sep, grams = value.partition(":")
        try:
            if not sep:
                raise ValueError("expected INGREDIENT_ID:GRAMS")
            lines.append(LineInput(ingredient_id=int(ingredient), quantity_g=parse_amount(grams)))
        except ValueError as e:
            click.echo(f"Error: Invalid line '{value}': {e}", err=True)
            ctx.exit(1)
    return tuple(lines)


def _collect_changes(ctx, options: dict) -> dict:
    """Translate given command-line options into RecipeDraft fields."""
    changes = {}
    if options["name"] is not None:
        changes["name"] = options["name"]
    if options["category"] is not None:
        changes["category_id"] = options["category"]
    if options["department"] is not None:
        changes["department_id"] = options["department"]
    if options["mode"] is not None:
        changes["sell_mode"] = SellMode(options["mode"])
    if options["labor"] is not None:
        changes["labor_cost_mode"] = LaborCostMode(options["labor"])
    if options["minutes"] is not None:
        changes["labour_minutes"] = options["minutes"]
    if options["pieces"] is not None:
        changes["total_pieces"] = options["pieces"]
    if options["as_ingredient"] is not None:
        changes["add_as_ingredient"] = options["as_ingredient"]
    if options["lines"]:
        changes["lines"] = _parse_lines(ctx, options["lines"])

    for option, (field_name, allow_negative) in DECIMAL_OPTIONS.items():
        value = options[option]
        if value is None:
            continue
        try:
            changes[field_name] = parse_amount(value, allow_negative=allow_negative)
        except ValueError as e:
            click.echo(f"Error: Invalid --{option.replace('_', '-')}: {e}", err=True)
            ctx.exit(1)
    return changes


def _print_costing(costing: RecipeCosting) -> None:
    recipe, b = costing.recipe, costing.breakdown
    unit = "piece" if recipe.sell_mode is SellMode.PIECE else "kg"

    click.echo(f"\nRecipe {recipe.id}: {recipe.name}")
    click.echo("-" * 60)
    click.echo(f"Sell mode:            {recipe.sell_mode.value} ({b.divisor} {unit} per batch)")
    click.echo(f"Labor:                {recipe.labor_cost_mode.value}, {recipe.labour_minutes} min "
               f"at {b.labor_rate_per_min}/min ({costing.rate.source.value} rate)")
    click.echo("\nIngredients:")
    for line in costing.lines:
        click.echo(f"  ingredient {line.ingredient_id:4d}: {line.quantity_g} g")
    click.echo("\nCosts:")
    click.echo(f"  Batch ingredients:  {b.batch_ingredient_cost:>10}")
    click.echo(f"  Batch labor:        {b.batch_labor_cost:>10}")
    click.echo(f"  Ingredients per {unit}: {b.unit_ingredient_cost:>10}")
    click.echo(f"  Labor per {unit}:       {b.unit_labor_cost:>10}")
    click.echo(f"  Packing per {unit}:     {b.unit_packing_cost:>10}")
    click.echo(f"  Total per {unit}:       {b.total_unit_cost:>10}")
    click.echo(f"  Declared total:     {costing.declared_total:>10}")
    if recipe.add_as_ingredient:
        click.echo(f"\nUsed as ingredient at {recipe.production_cost_per_kg}/kg")


@click.group()
def recipe_group():
    """Create, price and manage recipes."""
    pass


@recipe_group.command("create")
@recipe_options(required=True)
@click.pass_context
def create_recipe(ctx, **options):
    """Create a recipe.

    Examples:
        costbook --actor Bakery recipe create --name Baguette --pieces 10 \\
            --minutes 30 --line 1:1000 --line 2:20
        costbook --actor Bakery recipe create --name Brioche --mode weight \\
            --weight 900 --line 1:500 --line 3:250 --as-ingredient --production-cost 4.20
    """
    actor = require_actor_or_exit(ctx)
    changes = _collect_changes(ctx, options)
    draft = RecipeDraft(
        name=changes.pop("name"),
        category_id=changes.pop("category_id", None),
        department_id=changes.pop("department_id", None),
        sell_mode=changes.pop("sell_mode"),
        labor_cost_mode=changes.pop("labor_cost_mode"),
        labour_minutes=changes.pop("labour_minutes", 0),
        lines=changes.pop("lines"),
        **changes,
    )
    try:
        recipe_id = RecipeService(ctx.obj["db"]).create_recipe(actor, draft)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created recipe '{draft.name}' (ID: {recipe_id})")


@recipe_group.command("update")
@click.argument("recipe_id", type=int)
@recipe_options(required=False)
@click.pass_context
def update_recipe(ctx, recipe_id: int, **options):
    """Update a recipe; options not given keep their current value.

    Passing any --line replaces all ingredient lines.
    """
    actor = require_actor_or_exit(ctx)
    service = RecipeService(ctx.obj["db"])
    changes = _collect_changes(ctx, options)
    try:
        recipe = service.get_recipe(actor, recipe_id)
        draft = draft_from_recipe(recipe, service.get_lines(actor, recipe_id), **changes)
        service.update_recipe(actor, recipe_id, draft)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated recipe {recipe_id}")


@recipe_group.command("list")
@click.pass_context
def list_recipes(ctx):
    """List recipes with costs computed from current prices and rates."""
    actor = require_actor_or_exit(ctx)
    costings = RecipeService(ctx.obj["db"]).list_recipe_costings(actor)
    if not costings:
        click.echo("No recipes found.")
        return

    click.echo(f"{'ID':>4} | {'Name':25s} | {'Mode':6s} | {'Unit cost':>10} | {'Declared':>10}")
    click.echo("-" * 68)
    for costing in costings:
        r = costing.recipe
        click.echo(
            f"{r.id:4d} | {r.name:25s} | {r.sell_mode.value:6s} | "
            f"{costing.computed_total:>10} | {costing.declared_total:>10}"
        )


@recipe_group.command("show")
@click.argument("recipe_id", type=int)
@click.pass_context
def show_recipe(ctx, recipe_id: int):
    """Show a recipe's cost breakdown."""
    actor = require_actor_or_exit(ctx)
    try:
        costing = RecipeService(ctx.obj["db"]).get_recipe_costing(actor, recipe_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    _print_costing(costing)


@recipe_group.command("delete")
@click.argument("recipe_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_recipe(ctx, recipe_id: int, yes: bool):
    """Delete a recipe and its ingredient lines."""
    actor = require_actor_or_exit(ctx)
    if not yes and not click.confirm(f"Are you sure you want to delete recipe {recipe_id}?"):
        click.echo("Deletion cancelled.")
        return
    try:
        RecipeService(ctx.obj["db"]).delete_recipe(actor, recipe_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted recipe {recipe_id}")


@recipe_group.command("duplicate")
@click.argument("recipe_id", type=int)
@click.pass_context
def duplicate_recipe(ctx, recipe_id: int):
    """Copy a recipe with its ingredient lines."""
    actor = require_actor_or_exit(ctx)
    try:
        copy_id = RecipeService(ctx.obj["db"]).duplicate_recipe(actor, recipe_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Duplicated recipe {recipe_id} as {copy_id}")


def register_commands(cli):
    """Register recipe commands with main CLI."""
    cli.add_command(recipe_group, name="recipe")
