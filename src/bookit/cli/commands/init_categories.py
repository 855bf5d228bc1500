"""Initialize default categories."""

import click
from bookit.domain.category import CategoryService
from bookit.domain.entities import AccountType


# Default categories for a small business. Balance sheet items carry a
# declared account type; everything else is left to the classifier.
INITIAL_CATEGORIES = [
    ("Sales Revenue", AccountType.INCOME),
    ("Services Income", AccountType.INCOME),
    ("Client Revenue", AccountType.INCOME),
    ("Other Income", AccountType.INCOME),
    ("Rent", AccountType.EXPENSE),
    ("Utilities", AccountType.EXPENSE),
    ("Payroll", AccountType.EXPENSE),
    ("Contractors", AccountType.EXPENSE),
    ("Software", AccountType.EXPENSE),
    ("Office Supplies", AccountType.EXPENSE),
    ("Travel", AccountType.EXPENSE),
    ("Professional Fees", AccountType.EXPENSE),
    ("Bank Fees", AccountType.EXPENSE),
    ("Marketing", AccountType.EXPENSE),
    ("Insurance", AccountType.EXPENSE),
    ("Repairs & Maintenance", AccountType.EXPENSE),
    ("Inventory", AccountType.CURRENT_ASSET),
    ("Equipment Purchase", AccountType.FIXED_ASSET),
    ("Computer Hardware", AccountType.FIXED_ASSET),
    ("Vehicle Loan Payment", AccountType.LONG_TERM_LIABILITY),
    ("Business Loan", AccountType.LONG_TERM_LIABILITY),
]


@click.command("init-categories")
@click.pass_context
def init_categories(ctx):
    """Initialize database with the default categories.

    Categories that already exist are left untouched, so running this again
    only adds what is missing.
    """
    db = ctx.obj["db"]
    service = CategoryService(db)

    created = 0
    skipped = 0
    for name, account_type in INITIAL_CATEGORIES:
        if service.get_category_by_name(name) is not None:
            skipped += 1
            continue
        try:
            service.create_category(name=name, account_type=account_type)
            created += 1
        except ValueError as e:
            click.echo(f"Warning: Could not create category '{name}': {e}", err=True)

    click.echo(f"Created {created} categories ({skipped} already existed).")


def register_commands(cli):
    """Register init-categories command with main CLI."""
    cli.add_command(init_categories)
