"""Add transaction command."""

import click
from bookit.cli.error_handling import format_money, handle_domain_error
from bookit.cli.profile_resolution import resolve_profile_or_exit
from bookit.domain.entities import TransactionType
from bookit.domain.profile import ProfileService
from bookit.domain.transaction import TransactionService
from bookit.utils.date_parser import parse_date
from bookit.utils.amount_parser import parse_amount


@click.command("add")
@click.option(
    "--date",
    required=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--amount", required=True, help="Transaction amount (e.g., 123.45)")
@click.option(
    "--type",
    "txn_type",
    type=click.Choice([t.value for t in TransactionType], case_sensitive=False),
    help="income or expense (defaults to the sign of the amount: negative is an expense)",
)
@click.option("--description", default="", help="Transaction description")
@click.option("--category", help="Category name (created if it doesn't exist)")
@click.option("--profile", help="Vendor or client profile name or ID")
@click.option("--id", "transaction_id", help="Transaction ID (auto-generated if not provided)")
@click.pass_context
def add_transaction(
    ctx,
    date: str,
    amount: str,
    txn_type: str | None,
    description: str,
    category: str | None,
    profile: str | None,
    transaction_id: str | None,
):
    """Add a transaction manually.

    Examples:
        bookit add --date 2024-01-15 --amount -50.00 --description "Office Depot"
        bookit add --date today --amount 1200 --type income --category "Sales Revenue"
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)

    try:
        txn_date = parse_date(date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        signed = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    if txn_type is None:
        txn_type = TransactionType.EXPENSE.value if signed < 0 else TransactionType.INCOME.value
    magnitude = abs(signed)

    entity_id = None
    if profile:
        entity_id = resolve_profile_or_exit(ctx, ProfileService(db), profile)

    try:
        txn_id = transaction_service.create_transaction(
            date=txn_date,
            description=description,
            amount=magnitude,
            type=txn_type,
            category=category,
            entity_id=entity_id,
            transaction_id=transaction_id,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    txn = transaction_service.get_transaction(txn_id)
    click.echo(f"Created transaction {txn.id}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Amount: {format_money(txn.amount)} ({txn.type.value})")
    if txn.description:
        click.echo(f"  Description: {txn.description}")
    click.echo(f"  Category: {txn.category}")
    if txn.entity_name:
        click.echo(f"  Profile: {txn.entity_name}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
