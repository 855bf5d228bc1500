"""Shared pytest fixtures for bookit tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
from pathlib import Path
import pytest

from bookit.database.factories import create_sqlite_database
from bookit.domain.category import CategoryService
from bookit.domain.entities import (
    AccountType,
    CategorizationRule,
    Category,
    Transaction,
    TransactionType,
)
from bookit.domain.profile import ProfileService
from bookit.domain.rules import RuleService
from bookit.domain.statements import StatementService
from bookit.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def rule_service(temp_db):
    """Create a RuleService with a temporary database."""
    return RuleService(temp_db)


@pytest.fixture
def statement_service(temp_db):
    """Create a StatementService with a temporary database."""
    return StatementService(temp_db)


@pytest.fixture
def profile_service(temp_db):
    """Create a ProfileService with a temporary database."""
    return ProfileService(temp_db)


@pytest.fixture
def sample_categories(category_service):
    """Create the default categories and return name -> ID."""
    from bookit.cli.commands.init_categories import INITIAL_CATEGORIES

    return {
        name: category_service.create_category(name=name, account_type=account_type)
        for name, account_type in INITIAL_CATEGORIES
    }


@pytest.fixture
def make_txn():
    """Build in-memory transactions without a database."""
    counter = iter(range(1, 10_000))

    def _make(
        description: str = "",
        amount: str | Decimal = "10.00",
        type: TransactionType = TransactionType.EXPENSE,
        category: str = "Uncategorized",
        txn_date: date = date(2024, 1, 15),
        original_description: str | None = None,
        id: str | None = None,
    ) -> Transaction:
        return Transaction(
            id=id or f"t{next(counter)}",
            date=txn_date,
            description=description,
            amount=Decimal(amount),
            type=type,
            category=category,
            original_description=original_description if original_description is not None else description,
        )

    return _make


@pytest.fixture
def make_rule():
    """Build in-memory rules without a database."""
    counter = iter(range(1, 10_000))

    def _make(keyword: str, category: str, target_type: TransactionType | None = None, id: int | None = None):
        return CategorizationRule(
            id=id or next(counter), keyword=keyword, target_category=category, target_type=target_type
        )

    return _make


@pytest.fixture
def seeded_transactions(transaction_service, sample_categories):
    """A small set of stored, categorized transactions. Returns their IDs."""
    rows = [
        ("s1", date(2024, 1, 5), "STRIPE PAYOUT 1001", "1000.00", "income", "Sales Revenue"),
        ("s2", date(2024, 1, 10), "LANDLORD LLC RENT JAN", "400.00", "expense", "Rent"),
        ("s3", date(2024, 1, 12), "DELL COMPUTERS ORDER", "250.00", "expense", "Computer Hardware"),
        ("s4", date(2024, 1, 20), "BANK LOAN DISBURSEMENT", "500.00", "income", "Business Loan"),
        ("s5", date(2024, 1, 25), "UNKNOWN POS 4411", "30.00", "expense", None),
    ]
    for txn_id, txn_date, description, amount, txn_type, category in rows:
        transaction_service.create_transaction(
            date=txn_date,
            description=description,
            amount=Decimal(amount),
            type=txn_type,
            category=category,
            transaction_id=txn_id,
        )
    return [row[0] for row in rows]


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
