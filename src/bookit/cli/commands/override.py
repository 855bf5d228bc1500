"""Balance sheet override commands."""

import click
from bookit.cli.error_handling import format_money, handle_domain_error
from bookit.domain.statements import StatementService


@click.group()
def override_group():
    """Force the amount shown on a balance sheet line."""
    pass


@override_group.command("list")
@click.pass_context
def list_overrides(ctx):
    """List overridden balance sheet lines."""
    overrides = StatementService(ctx.obj["db"]).list_overrides()
    if not overrides:
        click.echo("No overrides.")
        return
    for name, amount in overrides.items():
        click.echo(f"{name:<48} {format_money(amount):>20}")


@override_group.command("set")
@click.argument("line_name")
@click.argument("amount")
@click.pass_context
def set_override(ctx, line_name: str, amount: str):
    """Show AMOUNT on LINE_NAME instead of the computed value."""
    service = StatementService(ctx.obj["db"])
    try:
        service.set_override(line_name, amount)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Override set: {line_name} = {amount}")


@override_group.command("reset")
@click.argument("line_name")
@click.pass_context
def reset_override(ctx, line_name: str):
    """Restore the computed value of a line."""
    service = StatementService(ctx.obj["db"])
    if service.reset_override(line_name):
        click.echo(f"Override removed: {line_name}")
    else:
        click.echo(f"No override for '{line_name}'")


def register_commands(cli):
    """Register override commands with main CLI."""
    cli.add_command(override_group, name="override")
