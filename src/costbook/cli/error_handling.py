"""CLI error handling helpers."""

import click

from costbook.domain.errors import AuthorizationError, DomainError

EXIT_ERROR = 1
EXIT_FORBIDDEN = 3


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure.

    Authorization failures are reported as "Forbidden" with their own exit code.
    """
    if isinstance(error, AuthorizationError):
        click.echo(f"Forbidden: {error}", err=True)
        ctx.exit(EXIT_FORBIDDEN)
    click.echo(f"Error: {error}", err=True)
    ctx.exit(EXIT_ERROR)
