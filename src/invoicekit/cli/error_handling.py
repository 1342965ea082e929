"""Reporting domain failures from CLI commands."""

import click

from invoicekit.domain.errors import DomainError, NotFoundError

HINTS = {
    NotFoundError: "Use 'invoicekit invoice list' to see stored invoice numbers.",
}


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Print ``error`` (plus a hint for known categories) to stderr and exit 1."""
    click.echo(f"Error: {error}", err=True)
    for error_type, hint in HINTS.items():
        if isinstance(error, error_type):
            click.echo(hint, err=True)
            break
    ctx.exit(1)
