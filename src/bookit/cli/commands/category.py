"""Category management commands."""

import click
from bookit.cli.error_handling import handle_domain_error
from bookit.domain.category import CategoryService
from bookit.domain.entities import AccountType, UNCATEGORIZED

ACCOUNT_TYPE_CHOICES = [t.value for t in AccountType]


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List categories with their declared type and statement bucket."""
    db = ctx.obj["db"]
    service = CategoryService(db)
    classifier = ctx.obj["classifier"]

    categories = service.list_categories()
    if not categories:
        click.echo("No categories found. Run 'init-categories' to create default categories.")
        return

    registry = service.get_registry()
    click.echo(f"\n{'ID':<6} {'Name':<32} {'Declared type':<22} {'Bucket':<22}")
    click.echo("-" * 84)
    for cat in categories:
        declared = cat.account_type.value if cat.account_type else "-"
        bucket = classifier.classify(cat.name, registry).value
        click.echo(f"{cat.id:<6} {cat.name:<32} {declared:<22} {bucket:<22}")
    click.echo(f"\n'{UNCATEGORIZED}' is built in and always available.")


@category_group.command("create")
@click.argument("name")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(ACCOUNT_TYPE_CHOICES, case_sensitive=False),
    help="Declared account type (classified from the name if omitted)",
)
@click.pass_context
def create_category(ctx, name: str, account_type: str | None):
    """Create a new category."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    try:
        category_id = service.create_category(
            name=name, account_type=AccountType(account_type.upper()) if account_type else None
        )
        type_str = f" as {account_type.upper()}" if account_type else ""
        click.echo(f"Created category '{name}'{type_str} (ID: {category_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@category_group.command("rename")
@click.argument("old_name")
@click.argument("new_name")
@click.pass_context
def rename_category(ctx, old_name: str, new_name: str):
    """Rename a category; transactions and rules follow the new name."""
    service = CategoryService(ctx.obj["db"])
    try:
        service.rename_category(old_name, new_name)
        click.echo(f"Renamed category '{old_name}' to '{new_name}'")
    except ValueError as e:
        handle_domain_error(ctx, e)


@category_group.command("delete")
@click.argument("name")
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_category(ctx, name: str, yes: bool):
    """Delete a category.

    Its transactions become Uncategorized and rules targeting it are removed.
    """
    service = CategoryService(ctx.obj["db"])
    if not yes and not click.confirm(f"Are you sure you want to delete category '{name}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        detached = service.delete_category(name)
        click.echo(f"Deleted category '{name}' ({detached} transaction(s) now {UNCATEGORIZED})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@category_group.command("set-type")
@click.argument("name")
@click.argument(
    "account_type", type=click.Choice(ACCOUNT_TYPE_CHOICES + ["NONE"], case_sensitive=False)
)
@click.pass_context
def set_type(ctx, name: str, account_type: str):
    """Declare the account type of a category (NONE clears it)."""
    service = CategoryService(ctx.obj["db"])
    value = None if account_type.upper() == "NONE" else AccountType(account_type.upper())
    try:
        service.set_account_type(name, value)
        if value is None:
            click.echo(f"Cleared account type of '{name}'")
        else:
            click.echo(f"Category '{name}' declared as {value.value}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@category_group.command("classify")
@click.argument("name")
@click.pass_context
def classify(ctx, name: str):
    """Show which statement bucket a category name resolves to.

    The name doesn't have to exist; undeclared names go through the default
    mapping and the keyword heuristics.
    """
    service = CategoryService(ctx.obj["db"])
    classifier = ctx.obj["classifier"]
    registry = service.get_registry()

    declared = classifier.declared_bucket(name, registry)
    bucket = classifier.classify(name, registry)
    if declared is not None:
        source = "declared type"
    elif classifier.config.default_bucket_for(name) is not None:
        source = "default mapping"
    elif classifier.keyword_bucket(name) is not None:
        source = "keyword heuristic"
    else:
        source = "fallback"
    click.echo(f"{name}: {bucket.value} ({source})")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
