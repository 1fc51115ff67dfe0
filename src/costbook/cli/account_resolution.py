"""CLI helpers for account resolution."""

from __future__ import annotations

import click
from costbook.domain.account import AccountService
from costbook.domain.entities import Account
from costbook.utils.account_resolver import resolve_account


def resolve_account_or_exit(
    ctx: click.Context, account_service: AccountService, account: str | int
) -> Account:
    """Resolve account name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_account(account_service, account)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def require_actor_or_exit(ctx: click.Context) -> Account:
    """Resolve the acting account given by --actor / COSTBOOK_ACTOR."""
    actor = ctx.obj.get("actor")
    if not actor:
        click.echo(
            "Error: No acting account. Pass --actor or set COSTBOOK_ACTOR.", err=True
        )
        ctx.exit(1)
    return resolve_account_or_exit(ctx, AccountService(ctx.obj["db"]), actor)
