"""Main CLI entry point."""

import logging

import click
from costbook.database.factories import create_sqlite_database

# Import and register all commands at module level
from costbook.cli.commands import (
    account,
    department,
    rate,
    ingredient,
    category,
    recipe,
    ledger,
    dashboard,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides COSTBOOK_DB_PATH environment variable)",
    envvar="COSTBOOK_DB_PATH",
)
@click.option(
    "--actor",
    help="Acting account name or ID (overrides COSTBOOK_ACTOR environment variable)",
    envvar="COSTBOOK_ACTOR",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="COSTBOOK_LOG_LEVEL",
    help="Logging level",
)
@click.pass_context
def cli(ctx, db_path: str | None, actor: str | None, log_level: str):
    """Costbook - recipe costing and bookkeeping for small organizations.

    Track costs and incomes per account group, price recipes from their
    ingredients and labor, and compare months on the dashboard.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["actor"] = actor
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
department.register_commands(cli)
rate.register_commands(cli)
ingredient.register_commands(cli)
category.register_commands(cli)
recipe.register_commands(cli)
ledger.register_commands(cli)
dashboard.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
