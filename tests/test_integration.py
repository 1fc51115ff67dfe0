"""Integration tests for end-to-end workflows."""

import re

from costbook.cli.main import cli


def _created_id(output):
    match = re.search(r"\(ID: (\d+)\)", output)
    assert match is not None, output
    return match.group(1)


def test_full_workflow(cli_runner, temp_db):
    """Accounts -> rates -> ingredients -> recipe as ingredient -> costs -> dashboard."""

    def run(*args, actor="Bakery"):
        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "--actor", actor, *args]
        )
        assert result.exit_code == 0, result.output
        return result.output

    run("account", "create", "Bakery")
    run("account", "create", "Shop", "--parent", "Bakery")

    pastry = _created_id(run("department", "create", "Pastry"))
    run("rate", "set", "--shop", "0.50", "--external", "0.80")
    run("rate", "set", "--shop", "1.00", "--external", "0", "--department", pastry)

    flour = _created_id(run("ingredient", "add", "Flour", "--price", "10"))
    butter = _created_id(run("ingredient", "add", "Butter", "--price", "20"))

    dough = _created_id(
        run(
            "recipe", "create", "--name", "Dough", "--mode", "weight",
            "--line", f"{flour}:600", "--line", f"{butter}:400",
            "--as-ingredient", "--production-cost", "14",
        )
    )
    output = run("recipe", "show", dough)
    # 6.00 + 8.00 over 1 kg
    assert "Total per kg" in output
    assert "14.00" in output

    ingredients = run("ingredient", "list", actor="Shop")
    shadow = re.search(r"ID:\s+(\d+) \| Dough \(recipe", ingredients)
    assert shadow is not None, ingredients

    croissant = _created_id(
        run(
            "recipe", "create", "--name", "Croissant", "--pieces", "10", "--minutes", "30",
            "--department", pastry, "--line", f"{shadow.group(1)}:500", "--packing", "1",
            actor="Shop",
        )
    )
    output = run("recipe", "show", croissant, actor="Shop")
    # 7.00 ingredients, 30.00 labor at the override rate, 1.00 packing over 10 pieces
    assert "override rate" in output
    assert re.search(r"Total per piece:\s+3\.80", output)

    run("cost", "add", "--amount", "300", "--date", "2024-05-02", "--supplier", "Mill")
    run("income", "add", "--amount", "900", "--date", "2024-05-20", actor="Shop")

    output = run("dashboard", "--month", "2024-05", actor="Shop")
    assert "Best month:  May (600.00)" in output
    assert "Worst month: January (0.00)" in output
