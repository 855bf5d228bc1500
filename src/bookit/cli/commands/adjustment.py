"""Balance sheet adjustment commands."""

import click
from bookit.cli.error_handling import format_money, handle_domain_error
from bookit.domain.entities import AdjustmentType
from bookit.domain.statements import StatementService


@click.group()
def adjustment_group():
    """Manage manual balance sheet lines."""
    pass


@adjustment_group.command("list")
@click.pass_context
def list_adjustments(ctx):
    """List manual balance sheet adjustments."""
    adjustments = StatementService(ctx.obj["db"]).list_adjustments()
    if not adjustments:
        click.echo("No adjustments.")
        return

    click.echo(f"\n{'ID':<6} {'Name':<36} {'Type':<10} {'Amount':>16}")
    click.echo("-" * 71)
    for adj in adjustments:
        click.echo(f"{adj.id:<6} {adj.name:<36} {adj.type.value:<10} {format_money(adj.amount):>16}")


@adjustment_group.command("add")
@click.argument("name")
@click.argument("amount")
@click.option(
    "--type",
    "adjustment_type",
    type=click.Choice([t.value for t in AdjustmentType], case_sensitive=False),
    required=True,
    help="ASSET lines go under current assets, LIABILITY lines under long-term liabilities",
)
@click.pass_context
def add_adjustment(ctx, name: str, amount: str, adjustment_type: str):
    """Add a manual balance sheet line.

    Examples:
        bookit adjustment add "Accounts Receivable" 4200 --type ASSET
        bookit adjustment add "Owner Loan" 10000 --type LIABILITY
    """
    service = StatementService(ctx.obj["db"])
    try:
        adjustment_id = service.add_adjustment(name, amount, adjustment_type)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added adjustment {adjustment_id}: {name} ({adjustment_type.upper()})")


@adjustment_group.command("remove")
@click.argument("adjustment_id", type=int)
@click.pass_context
def remove_adjustment(ctx, adjustment_id: int):
    """Remove a manual balance sheet line."""
    service = StatementService(ctx.obj["db"])
    try:
        service.remove_adjustment(adjustment_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Removed adjustment {adjustment_id}")


def register_commands(cli):
    """Register adjustment commands with main CLI."""
    cli.add_command(adjustment_group, name="adjustment")
