"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

import structlog

from bookit.database.sqlalchemy_db import SQLAlchemyDatabase

logger = structlog.get_logger(__name__)

DB_PATH_ENV = "BOOKIT_DB_PATH"


def default_database_path() -> Path:
    """Return ~/.bookit/bookit.db, creating the directory if needed."""
    db_dir = Path.home() / ".bookit"
    db_dir.mkdir(exist_ok=True)
    return db_dir / "bookit.db"


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks BOOKIT_DB_PATH
            environment variable, then defaults to ~/.bookit/bookit.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get(DB_PATH_ENV)

    if database_path is None:
        database_path = str(default_database_path())

    logger.debug("database_opened", path=database_path)
    db = SQLAlchemyDatabase(f"sqlite:///{database_path}")
    db.database_path = database_path
    return db
