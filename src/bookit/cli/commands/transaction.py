"""Transaction management commands."""

import click
from bookit.cli.date_filters import date_range_options, resolve_cli_date_range
from bookit.cli.error_handling import format_money, handle_domain_error
from bookit.cli.profile_resolution import resolve_profile_or_exit
from bookit.domain.entities import TransactionType, UNCATEGORIZED
from bookit.domain.profile import ProfileService
from bookit.domain.transaction import TransactionService
from bookit.utils.amount_parser import parse_money


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("list")
@date_range_options
@click.option("--category", help="Category name")
@click.option("--uncategorized", is_flag=True, help="Show only uncategorized transactions")
@click.option("--search", help="Text the description must contain (case-insensitive)")
@click.option("--min-amount", help="Minimum amount")
@click.option("--max-amount", help="Maximum amount")
@click.option("--profile", help="Vendor or client profile name or ID")
@click.option("--verbose", "-v", is_flag=True, help="Show all fields including original description")
@click.pass_context
def list_transactions(
    ctx,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
    category: str | None,
    uncategorized: bool,
    search: str | None,
    min_amount: str | None,
    max_amount: str | None,
    profile: str | None,
    verbose: bool,
):
    """View transactions with optional filters.

    Use --uncategorized to show only transactions without a category.
    Profile can be specified by name or ID.
    """
    db = ctx.obj["db"]
    service = TransactionService(db)

    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period=period
    )

    bounds = {}
    for label, raw in (("min_amount", min_amount), ("max_amount", max_amount)):
        if raw is None:
            continue
        try:
            bounds[label] = parse_money(raw)
        except ValueError as e:
            click.echo(f"Error: Invalid {label.replace('_', ' ')}: {e}", err=True)
            ctx.exit(1)

    entity_id = None
    if profile:
        entity_id = resolve_profile_or_exit(ctx, ProfileService(db), profile)

    if uncategorized:
        category = UNCATEGORIZED

    transactions = service.list_transactions(
        start_date=start,
        end_date=end,
        category=category,
        search=search,
        min_amount=bounds.get("min_amount"),
        max_amount=bounds.get("max_amount"),
        entity_id=entity_id,
    )

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    if verbose:
        click.echo("=" * 100)
        for txn in transactions:
            _echo_details(txn)
            click.echo("-" * 100)
    else:
        click.echo("-" * 118)
        click.echo(
            f"{'ID':<34} {'Date':<12} {'Type':<8} {'Amount':>12}  {'Category':<24} {'Description':<24}"
        )
        click.echo("-" * 118)
        for txn in transactions:
            click.echo(
                f"{txn.id:<34} {str(txn.date):<12} {txn.type.value:<8} "
                f"{format_money(txn.amount):>12}  {txn.category[:24]:<24} {txn.description[:24]:<24}"
            )

    total_income = sum(t.amount for t in transactions if t.type == TransactionType.INCOME)
    total_expense = sum(t.amount for t in transactions if t.type == TransactionType.EXPENSE)
    click.echo("-" * 118)
    click.echo(
        f"TOTAL  Income: {format_money(total_income)} | "
        f"Expenses: {format_money(total_expense)} | Count: {len(transactions)}"
    )


def _echo_details(txn) -> None:
    click.echo(f"\nTransaction ID: {txn.id}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Amount: {format_money(txn.amount)} ({txn.type.value})")
    click.echo(f"  Category: {txn.category}")
    click.echo(f"  Description: {txn.description}")
    if txn.original_description and txn.original_description != txn.description:
        click.echo(f"  Original description: {txn.original_description}")
    if txn.entity_name:
        click.echo(f"  Profile: {txn.entity_name} (ID: {txn.entity_id})")
    if txn.document_id:
        click.echo(f"  Document: {txn.document_id}")
    if txn.imported_at:
        click.echo(f"  Imported: {txn.imported_at}")


@transaction_group.command("show")
@click.argument("transaction_id")
@click.pass_context
def show_transaction(ctx, transaction_id: str):
    """Show one transaction in full."""
    service = TransactionService(ctx.obj["db"])
    try:
        txn = service.require_transaction(transaction_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    _echo_details(txn)


@transaction_group.command("categorize")
@click.argument("transaction_ids", nargs=-1, required=True)
@click.argument("category", nargs=1)
@click.pass_context
def categorize_transactions(ctx, transaction_ids: tuple[str, ...], category: str):
    """Assign a category to one or more transactions.

    The category is created if it doesn't exist. Use "Uncategorized" to clear.

    Examples:
        bookit transaction categorize a1b2c3 "Office Supplies"
        bookit transaction categorize a1b2c3 d4e5f6 "Rent"
    """
    service = TransactionService(ctx.obj["db"])
    try:
        updated = service.bulk_update_category(transaction_ids, category)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if updated == 1:
        click.echo(f"Transaction {transaction_ids[0]} categorized as '{category}'")
    else:
        click.echo(f"Categorized {updated} transactions as '{category}'")


@transaction_group.command("describe")
@click.argument("transaction_id")
@click.argument("description")
@click.pass_context
def describe_transaction(ctx, transaction_id: str, description: str):
    """Edit a transaction description (the original description is kept)."""
    service = TransactionService(ctx.obj["db"])
    try:
        service.update_description(transaction_id, description)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated description of transaction {transaction_id}")


@transaction_group.command("delete")
@click.argument("transaction_ids", nargs=-1, required=True)
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_transactions(ctx, transaction_ids: tuple[str, ...], yes: bool) -> None:
    """Delete one or more transactions.

    Examples:
        bookit transaction delete a1b2c3
        bookit transaction delete a1b2c3 d4e5f6 --yes
    """
    service = TransactionService(ctx.obj["db"])

    if not yes and not click.confirm(
        f"Are you sure you want to delete {len(transaction_ids)} transaction(s)?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        deleted = service.bulk_delete(transaction_ids)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted {deleted} transaction(s)")


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
