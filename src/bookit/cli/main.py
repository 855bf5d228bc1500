"""Main CLI entry point."""

import click
from bookit.database.factories import create_sqlite_database
from bookit.domain.classifier import AccountClassifier
from bookit.domain.classifier_config import load_classifier_config
from bookit.utils.log_config import LOG_LEVELS, configure_logging

# Import and register all commands at module level
from bookit.cli.commands import (
    init_categories,
    category,
    add,
    transaction,
    import_cmd,
    rule,
    statement,
    adjustment,
    override,
    similar,
    profile,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides BOOKIT_DB_PATH environment variable)",
    envvar="BOOKIT_DB_PATH",
)
@click.option(
    "--classifier-config",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON file with account classification tables",
    envvar="BOOKIT_CLASSIFIER_CONFIG",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging level",
    envvar="BOOKIT_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, classifier_config: str | None, log_level: str):
    """Bookit - Bookkeeping for small businesses.

    Categorize extracted bank transactions with keyword rules and build a
    profit and loss statement and balance sheet from them.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        config = None
        if classifier_config:
            try:
                config = load_classifier_config(classifier_config)
            except (ValueError, FileNotFoundError) as e:
                click.echo(f"Error: Invalid classifier config: {e}", err=True)
                ctx.exit(1)
        ctx.obj["classifier"] = AccountClassifier(config)

        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
init_categories.register_commands(cli)
category.register_commands(cli)
add.register_commands(cli)
transaction.register_commands(cli)
import_cmd.register_commands(cli)
rule.register_commands(cli)
statement.register_commands(cli)
adjustment.register_commands(cli)
override.register_commands(cli)
similar.register_commands(cli)
profile.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
