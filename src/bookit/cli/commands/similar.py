"""Similar transaction lookup command."""

import click
from bookit.cli.error_handling import format_money, handle_domain_error
from bookit.domain.similarity import SimilarityOptions, SimilarityService
from bookit.utils.amount_parser import parse_money


@click.command("similar")
@click.argument("transaction_id")
@click.option("--min-overlap", default=2, show_default=True, type=click.IntRange(min=0), help="Shared description words required")
@click.option("--tolerance", default="0", show_default=True, help="Amount difference still counted as a match")
@click.option("--limit", default=100, show_default=True, type=click.IntRange(min=1), help="Maximum number of matches")
@click.option("--exact-amount-only", is_flag=True, help="Keep only matches with exactly the same amount")
@click.option("--apply", "category", help="Assign this category to the transaction and all matches")
@click.pass_context
def similar(
    ctx,
    transaction_id: str,
    min_overlap: int,
    tolerance: str,
    limit: int,
    exact_amount_only: bool,
    category: str | None,
):
    """Find transactions that look like the same counterparty.

    Examples:
        bookit similar a1b2c3
        bookit similar a1b2c3 --tolerance 1 --exact-amount-only --apply "Software"
    """
    service = SimilarityService(ctx.obj["db"])

    try:
        amount_tolerance = parse_money(tolerance)
    except ValueError as e:
        click.echo(f"Error: Invalid tolerance: {e}", err=True)
        ctx.exit(1)

    options = SimilarityOptions(
        min_token_overlap=min_overlap,
        amount_tolerance=amount_tolerance,
        max_results=limit,
    )
    try:
        base, matches = service.find_similar(transaction_id, options)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if exact_amount_only:
        matches = [txn for txn in matches if txn.amount == base.amount]

    click.echo(f"\nBase: {base.date} {format_money(base.amount)} {base.description} [{base.category}]")
    if not matches:
        click.echo("No similar transactions found.")
    else:
        click.echo(f"Found {len(matches)} similar transaction(s):")
        for txn in matches:
            marker = "=" if txn.amount == base.amount else " "
            click.echo(
                f"  {marker} {txn.id:<34} {str(txn.date):<12} {format_money(txn.amount):>12}  "
                f"{txn.description[:30]:<30} [{txn.category}]"
            )

    if category:
        try:
            updated = service.apply_category([base.id] + [txn.id for txn in matches], category)
        except ValueError as e:
            handle_domain_error(ctx, e)
        click.echo(f"Categorized {updated} transaction(s) as '{category}'")


def register_commands(cli):
    """Register similar command with main CLI."""
    cli.add_command(similar)
