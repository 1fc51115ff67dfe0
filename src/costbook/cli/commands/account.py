"""Account management commands."""

import click
from costbook.cli.account_resolution import resolve_account_or_exit
from costbook.cli.error_handling import handle_domain_error
from costbook.domain.account import AccountService


@click.group()
def account_group():
    """Manage accounts and account groups."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--parent", help="Root account (name or ID) this account belongs to")
@click.pass_context
def create_account(ctx, name: str, parent: str | None):
    """Create a new account.

    Without --parent the account is a root; with it, a child of that root
    sharing its data.

    Examples:
        costbook account create "Bakery"
        costbook account create "Bakery Shop 2" --parent "Bakery"
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    parent_id = None
    if parent is not None:
        parent_id = resolve_account_or_exit(ctx, service, parent).id

    try:
        account_id = service.create_account(name=name, parent_id=parent_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created account '{name}' (ID: {account_id})")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts, children under their root."""
    db = ctx.obj["db"]
    service = AccountService(db)

    accounts = service.list_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    children: dict[int, list] = {}
    for acc in accounts:
        if acc.parent_id is not None:
            children.setdefault(acc.parent_id, []).append(acc)

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        if acc.parent_id is not None:
            continue
        click.echo(f"ID: {acc.id:3d} | {acc.name}")
        for child in children.get(acc.id, []):
            click.echo(f"ID: {child.id:3d} |   └─ {child.name}")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account name or ID. The account can only be deleted if
    it has no child accounts and owns no records.

    Examples:
        costbook account delete "Bakery Shop 2"
        costbook account delete 2 --yes
    """
    db = ctx.obj["db"]
    service = AccountService(db)
    account_obj = resolve_account_or_exit(ctx, service, account)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.name}' (ID: {account_obj.id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_obj.id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted account '{account_obj.name}'")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
