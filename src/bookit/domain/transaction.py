"""Transaction domain service."""

import uuid
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

import structlog

from bookit.database.base import Database
from bookit.domain.category import CategoryService
from bookit.domain.entities import Transaction as TransactionEntity, TransactionType
from bookit.domain.errors import (
    NotFoundError,
    ValidationError,
    negative_amount,
    profile_not_found,
    transaction_not_found,
)
from bookit.domain.registry import is_uncategorized

logger = structlog.get_logger(__name__)


def new_transaction_id() -> str:
    """Generate an opaque transaction identity."""
    return uuid.uuid4().hex


def coerce_transaction_type(value: TransactionType | str) -> TransactionType:
    """Convert user input into a TransactionType.

    Raises:
        ValidationError: If the value isn't income or expense
    """
    if isinstance(value, TransactionType):
        return value
    try:
        return TransactionType(str(value).strip().lower())
    except ValueError:
        raise ValidationError(f"Transaction type must be income or expense (got '{value}')")


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db
        self.category_service = CategoryService(db)

    def _validate(self, amount: Decimal, txn_type: TransactionType | str) -> TransactionType:
        if amount is None or not Decimal(amount).is_finite():
            raise ValidationError(f"Invalid amount: {amount}")
        if Decimal(amount) < 0:
            raise ValidationError(negative_amount(amount))
        return coerce_transaction_type(txn_type)

    def _category_id(self, category: Optional[str]) -> Optional[int]:
        target = self.category_service.ensure_category(category)
        return target.id if target else None

    def create_transaction(
        self,
        date: date,
        description: str,
        amount: Decimal,
        type: TransactionType | str,
        category: Optional[str] = None,
        original_description: Optional[str] = None,
        entity_id: Optional[int] = None,
        document_id: Optional[str] = None,
        transaction_id: Optional[str] = None,
    ) -> str:
        """Create a transaction.

        Args:
            date: Transaction date
            description: Description as extracted
            amount: Non-negative magnitude
            type: income or expense
            category: Optional category name (created on first encounter)
            original_description: Description before any user edit
            entity_id: Optional profile ID
            document_id: Optional source document reference
            transaction_id: Optional identity (generated if omitted)

        Returns:
            Transaction ID

        Raises:
            ValidationError: If amount is negative or type is unknown
            NotFoundError: If the profile doesn't exist
        """
        txn_type = self._validate(amount, type)
        if entity_id is not None and self.db.get_profile(entity_id) is None:
            raise NotFoundError(profile_not_found(entity_id))

        txn_id = self.db.upsert_transaction(
            transaction_id=transaction_id or new_transaction_id(),
            date=date,
            description=description or "",
            amount=Decimal(amount),
            type=txn_type,
            category_id=self._category_id(category),
            original_description=original_description or description or "",
            entity_id=entity_id,
            document_id=document_id,
        )
        return txn_id

    def upsert_transactions(self, transactions: Iterable[TransactionEntity]) -> tuple[int, int]:
        """Insert or update transactions by identity.

        Re-submitting the same transaction refreshes its extracted fields in
        place. A category or profile link already set on it is kept.

        Returns:
            Tuple of (inserted count, updated count)
        """
        inserted = 0
        updated = 0
        for txn in transactions:
            txn_type = self._validate(txn.amount, txn.type)
            exists = self.db.get_transaction(txn.id) is not None
            self.db.upsert_transaction(
                transaction_id=txn.id,
                date=txn.date,
                description=txn.description,
                amount=txn.amount,
                type=txn_type,
                category_id=self._category_id(txn.category),
                original_description=txn.original_description or txn.description,
                entity_id=txn.entity_id,
                document_id=txn.document_id,
            )
            if exists:
                updated += 1
            else:
                inserted += 1
        logger.info("transactions_upserted", inserted=inserted, updated=updated)
        return inserted, updated

    def get_transaction(self, transaction_id: str) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def require_transaction(self, transaction_id: str) -> TransactionEntity:
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    def update_category(self, transaction_id: str, category: Optional[str]) -> None:
        """Update transaction category.

        Args:
            transaction_id: Transaction ID
            category: Category name; None or "Uncategorized" clears it

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        self.require_transaction(transaction_id)
        self.db.update_transaction_category(transaction_id, self._category_id(category))

    def bulk_update_category(self, transaction_ids: Iterable[str], category: Optional[str]) -> int:
        """Assign one category to many transactions.

        Every ID is checked before anything is written.

        Returns:
            Number of transactions updated
        """
        unique_ids = list(dict.fromkeys(transaction_ids))
        for txn_id in unique_ids:
            self.require_transaction(txn_id)

        category_id = self._category_id(category)
        for txn_id in unique_ids:
            self.db.update_transaction_category(txn_id, category_id)
        logger.info("transactions_categorized", category=category, count=len(unique_ids))
        return len(unique_ids)

    def update_description(self, transaction_id: str, description: str) -> None:
        """Edit the description; the original description is preserved."""
        self.require_transaction(transaction_id)
        self.db.update_transaction_description(transaction_id, description)

    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If transaction doesn't exist
        """
        self.require_transaction(transaction_id)
        self.db.delete_transaction(transaction_id)

    def bulk_delete(self, transaction_ids: Iterable[str]) -> int:
        unique_ids = list(dict.fromkeys(transaction_ids))
        for txn_id in unique_ids:
            self.require_transaction(txn_id)
        for txn_id in unique_ids:
            self.db.delete_transaction(txn_id)
        logger.info("transactions_deleted", count=len(unique_ids))
        return len(unique_ids)

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
        min_amount: Optional[Decimal] = None,
        max_amount: Optional[Decimal] = None,
        entity_id: Optional[int] = None,
    ) -> list[TransactionEntity]:
        """List transactions with filters, most recent first.

        Args:
            start_date: Optional start date filter
            end_date: Optional end date filter
            category: Optional category name ("Uncategorized" for uncategorized)
            search: Optional case-insensitive description substring
            min_amount: Optional minimum amount
            max_amount: Optional maximum amount
            entity_id: Optional profile ID filter

        Returns:
            List of transaction entities
        """
        category_id = None
        uncategorized = False
        if category is not None:
            if is_uncategorized(category):
                uncategorized = True
            else:
                cat = self.category_service.get_category_by_name(category)
                if cat is None:
                    return []
                category_id = cat.id

        return self.db.list_transactions(
            start_date=start_date,
            end_date=end_date,
            category_id=category_id,
            uncategorized=uncategorized,
            search=search,
            min_amount=min_amount,
            max_amount=max_amount,
            entity_id=entity_id,
        )

    def count_transactions(self) -> int:
        return self.db.count_transactions()

    def count_uncategorized(self) -> int:
        """Number of transactions still in Uncategorized."""
        return self.db.count_transactions(uncategorized=True)
