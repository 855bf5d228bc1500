"""Import command for extracted transactions."""

import click
from bookit.domain.ingest import ImportService
from bookit.domain.statements import StatementService


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--no-rules", is_flag=True, help="Don't apply categorization rules on import")
@click.pass_context
def import_transactions(ctx, csv_file: str, no_rules: bool):
    """Import transactions from an extraction export (CSV).

    Required columns are date, description and amount. Re-importing the same
    file updates the existing transactions instead of duplicating them.
    """
    db = ctx.obj["db"]
    service = ImportService(db)

    try:
        result = service.import_file(csv_file, apply_rules=not no_rules)
    except (ValueError, FileNotFoundError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    click.echo("\nImport complete:")
    click.echo(f"  Imported: {result['imported']} transactions")
    click.echo(f"  Updated: {result['updated']} existing transactions")
    if result["errors"]:
        click.echo(f"  Errors: {len(result['errors'])}")
        for error in result["errors"]:
            click.echo(f"    {error}", err=True)

    uncategorized = StatementService(db).uncategorized_count()
    if uncategorized:
        click.echo(f"Warning: {uncategorized} transaction(s) are uncategorized.", err=True)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_transactions)
