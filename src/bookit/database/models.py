"""SQLAlchemy models for bookit database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Category(Base):
    """Category model. Uncategorized is a NULL category_id, never a row."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    account_type = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    transactions = relationship("Transaction", back_populates="category")
    rules = relationship("Rule", back_populates="category", cascade="all, delete-orphan")


class Profile(Base):
    """Vendor or client profile model."""

    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    type = Column(String, nullable=False)
    keyword = Column(String, nullable=True)
    default_category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    description = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    default_category = relationship("Category")
    transactions = relationship("Transaction", back_populates="entity")


class Transaction(Base):
    """Transaction model.

    Amounts are stored as non-negative magnitudes; ``type`` carries the
    direction.
    """

    __tablename__ = "transactions"

    id = Column(String, primary_key=True)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=False, default="")
    original_description = Column(String, nullable=False, default="")
    amount = Column(Numeric(12, 2), nullable=False)
    type = Column(String, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    entity_id = Column(Integer, ForeignKey("profiles.id"), nullable=True)
    document_id = Column(String, nullable=True)
    imported_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    category = relationship("Category", back_populates="transactions")
    entity = relationship("Profile", back_populates="transactions")


class Rule(Base):
    """Keyword categorization rule model."""

    __tablename__ = "rules"

    id = Column(Integer, primary_key=True)
    keyword = Column(String, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    target_type = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    category = relationship("Category", back_populates="rules")


class BalanceSheetAdjustment(Base):
    """Manual balance sheet line model."""

    __tablename__ = "balance_sheet_adjustments"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    amount = Column(Numeric(), nullable=False)
    type = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class StatementOverride(Base):
    """User-forced balance sheet line amount, keyed by line name."""

    __tablename__ = "statement_overrides"

    id = Column(Integer, primary_key=True)
    line_name = Column(String, unique=True, nullable=False)
    amount = Column(Numeric(), nullable=False)
    updated_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
