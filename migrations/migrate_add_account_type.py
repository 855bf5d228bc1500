#!/usr/bin/env python3
"""Migration script to add account type columns.

Databases created before account classification existed lack two columns:
- categories.account_type (TEXT, NULL) - declared account type of a category
- rules.target_type (TEXT, NULL) - transaction type a rule is limited to

NULL means "not declared": categories are classified by name and rules match
both income and expenses, which is how those databases behaved before.

Usage:
    python migrations/migrate_add_account_type.py [--db-path PATH]
"""

import sys
from pathlib import Path

# Add src to path so we can import bookit modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sqlalchemy import text, inspect
from bookit.database.factories import create_sqlite_database

COLUMNS = (
    ("categories", "account_type"),
    ("rules", "target_type"),
)


def column_exists(engine, table_name: str, column_name: str) -> bool:
    """Check if a column exists in a table."""
    inspector = inspect(engine)
    columns = [col["name"] for col in inspector.get_columns(table_name)]
    return column_name in columns


def migrate_database(database_path: str | None = None) -> list[str]:
    """Add the missing account type columns.

    Args:
        database_path: Path to database file. If None, uses default location.

    Returns:
        List of "table.column" names that were added (empty if already migrated)
    """
    db = create_sqlite_database(database_path=database_path)
    db.connect()

    added = []
    try:
        session = db.session_factory()
        try:
            engine = session.bind
            if engine is None:
                raise RuntimeError("Could not get database engine from session")
        finally:
            session.close()

        inspector = inspect(engine)
        tables = inspector.get_table_names()
        for table, column in COLUMNS:
            if table not in tables:
                raise RuntimeError(
                    f"Table '{table}' does not exist. Please initialize the database schema first."
                )

        with engine.begin() as conn:
            for table, column in COLUMNS:
                if column_exists(engine, table, column):
                    continue
                conn.execute(text(f"ALTER TABLE {table} ADD COLUMN {column} VARCHAR"))
                added.append(f"{table}.{column}")
                print(f"  Added column: {table}.{column}")
    finally:
        db.disconnect()

    if added:
        print("Migration completed successfully!")
    else:
        print("Migration already applied: account type columns exist")
    return added


def main():
    """Main entry point for migration script."""
    import argparse

    parser = argparse.ArgumentParser(description="Migrate database to add account type columns")
    parser.add_argument(
        "--db-path",
        type=str,
        help="Path to database file (overrides BOOKIT_DB_PATH environment variable)",
    )
    args = parser.parse_args()

    try:
        migrate_database(database_path=args.db_path)
        return 0
    except Exception as e:
        print(f"\nMigration failed: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
