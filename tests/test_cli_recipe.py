"""Tests for recipe and ingredient commands."""

from decimal import Decimal

from costbook.cli.main import cli


def invoke(cli_runner, temp_db, actor, *args, **kwargs):
    base = ["--db-path", temp_db.database_path]
    if actor is not None:
        base += ["--actor", actor]
    return cli_runner.invoke(cli, base + list(args), **kwargs)


def test_create_and_show(cli_runner, temp_db, tenants, flour):
    result = invoke(
        cli_runner, temp_db, "Bakery",
        "recipe", "create", "--name", "Baguette", "--pieces", "10", "--line", f"{flour.id}:1000",
        "--total", "0,95",
    )
    assert result.exit_code == 0, result.output
    assert "Created recipe 'Baguette'" in result.output

    recipe = temp_db.list_recipes([tenants.root.id])[0]
    result = invoke(cli_runner, temp_db, "Bakery", "recipe", "show", str(recipe.id))
    assert result.exit_code == 0, result.output
    assert "Baguette" in result.output
    assert "Total per piece" in result.output
    assert "1.00" in result.output
    assert "0.95" in result.output


def test_list(cli_runner, temp_db, tenants, flour, recipe_service, draft):
    recipe_service.create_recipe(tenants.root, draft([(flour.id, 1000)], name="Baguette"))
    result = invoke(cli_runner, temp_db, "Bakery Shop A", "recipe", "list")
    assert result.exit_code == 0
    assert "Baguette" in result.output

    result = invoke(cli_runner, temp_db, "Deli", "recipe", "list")
    assert "No recipes found" in result.output


def test_other_tenant_is_forbidden(cli_runner, temp_db, tenants, flour, recipe_service, draft):
    recipe_id = recipe_service.create_recipe(tenants.root, draft([(flour.id, 1000)]))
    result = invoke(cli_runner, temp_db, "Deli", "recipe", "show", str(recipe_id))
    assert result.exit_code == 3
    assert "Forbidden" in result.output


def test_actor_required(cli_runner, temp_db, tenants):
    result = invoke(cli_runner, temp_db, None, "recipe", "list")
    assert result.exit_code == 1
    assert "No acting account" in result.output


def test_invalid_line(cli_runner, temp_db, tenants):
    result = invoke(
        cli_runner, temp_db, "Bakery", "recipe", "create", "--name", "X", "--line", "flour"
    )
    assert result.exit_code == 1
    assert "Invalid line" in result.output


def test_update_keeps_unspecified_fields(cli_runner, temp_db, tenants, flour, recipe_service, draft):
    recipe_id = recipe_service.create_recipe(
        tenants.root, draft([(flour.id, 1000)], declared_total=Decimal("2.50"))
    )
    result = invoke(
        cli_runner, temp_db, "Bakery", "recipe", "update", str(recipe_id), "--name", "Pain", "--pieces", "20"
    )
    assert result.exit_code == 0, result.output

    recipe = recipe_service.get_recipe(tenants.root, recipe_id)
    assert recipe.name == "Pain"
    assert recipe.total_pieces == 20
    assert recipe.declared_total == Decimal("2.50")
    assert recipe.unit_ingredient_cost == Decimal("0.50")
    assert len(recipe_service.get_lines(tenants.root, recipe_id)) == 1


def test_duplicate_and_delete(cli_runner, temp_db, tenants, flour, recipe_service, draft):
    recipe_id = recipe_service.create_recipe(tenants.root, draft([(flour.id, 1000)]))

    result = invoke(cli_runner, temp_db, "Bakery", "recipe", "duplicate", str(recipe_id))
    assert result.exit_code == 0
    assert "Duplicated recipe" in result.output
    names = sorted(r.name for r in temp_db.list_recipes([tenants.root.id]))
    assert names == ["Baguette", "Copy of Baguette"]

    result = invoke(cli_runner, temp_db, "Bakery", "recipe", "delete", str(recipe_id), "--yes")
    assert result.exit_code == 0
    assert temp_db.get_recipe(recipe_id) is None


def test_ingredient_commands(cli_runner, temp_db, tenants):
    result = invoke(cli_runner, temp_db, "Bakery", "ingredient", "add", "Butter", "--price", "8,40 EUR")
    assert result.exit_code == 0, result.output
    ingredient = temp_db.list_ingredients([tenants.root.id])[0]
    assert ingredient.price_per_kg == Decimal("8.40")

    result = invoke(cli_runner, temp_db, "Bakery Shop B", "ingredient", "cost", str(ingredient.id), "250")
    assert result.exit_code == 0
    assert "2.10" in result.output

    result = invoke(cli_runner, temp_db, "Deli", "ingredient", "price", str(ingredient.id), "9")
    assert result.exit_code == 3
