"""Tests for the account type migration script."""

import importlib.util
from pathlib import Path

import pytest
from sqlalchemy import create_engine, inspect, text

MIGRATION = Path(__file__).parent.parent / "migrations" / "migrate_add_account_type.py"


@pytest.fixture
def migration():
    spec = importlib.util.spec_from_file_location("migrate_add_account_type", MIGRATION)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def old_database(tmp_path):
    """A database created before categories and rules carried a type."""
    path = tmp_path / "old.db"
    engine = create_engine(f"sqlite:///{path}")
    with engine.begin() as conn:
        conn.execute(text(
            "CREATE TABLE categories (id INTEGER PRIMARY KEY, name VARCHAR NOT NULL UNIQUE, "
            "created_at DATETIME NOT NULL)"
        ))
        conn.execute(text(
            "CREATE TABLE rules (id INTEGER PRIMARY KEY, keyword VARCHAR NOT NULL, "
            "category_id INTEGER NOT NULL REFERENCES categories(id), created_at DATETIME NOT NULL)"
        ))
        conn.execute(text(
            "INSERT INTO categories (id, name, created_at) VALUES (1, 'Equipment', '2024-01-01 00:00:00')"
        ))
        conn.execute(text(
            "INSERT INTO rules (id, keyword, category_id, created_at) VALUES (1, 'dell', 1, '2024-01-01 00:00:00')"
        ))
    engine.dispose()
    return path


def _columns(path, table):
    engine = create_engine(f"sqlite:///{path}")
    try:
        return {col["name"] for col in inspect(engine).get_columns(table)}
    finally:
        engine.dispose()


def test_adds_missing_columns(migration, old_database):
    added = migration.migrate_database(str(old_database))

    assert added == ["categories.account_type", "rules.target_type"]
    assert "account_type" in _columns(old_database, "categories")
    assert "target_type" in _columns(old_database, "rules")


def test_migrated_data_reads_as_undeclared(migration, old_database):
    from bookit.database.factories import create_sqlite_database

    migration.migrate_database(str(old_database))

    db = create_sqlite_database(str(old_database))
    try:
        assert db.get_category_by_name("equipment").account_type is None
        assert db.list_rules()[0].target_type is None
    finally:
        db.disconnect()


def test_second_run_is_a_no_op(migration, old_database, capsys):
    migration.migrate_database(str(old_database))

    assert migration.migrate_database(str(old_database)) == []
    assert "already applied" in capsys.readouterr().out


def test_new_database_needs_nothing(migration, temp_db):
    assert migration.migrate_database(temp_db.database_path) == []
