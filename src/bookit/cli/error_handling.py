"""CLI error handling helpers."""

import click

from bookit.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def format_money(amount) -> str:
    """Render a Decimal amount for display; negatives in parentheses."""
    if amount < 0:
        return f"(${-amount:,.2f})"
    return f"${amount:,.2f}"
