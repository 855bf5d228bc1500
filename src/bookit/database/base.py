"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date
from decimal import Decimal

from bookit.domain.entities import (
    AccountType,
    AdjustmentType,
    BalanceSheetAdjustment,
    CategorizationRule,
    Category,
    EntityProfile,
    ProfileType,
    Transaction,
    TransactionType,
)


class Database(ABC):
    """Abstract database interface for bookit."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Category operations
    @abstractmethod
    def create_category(self, name: str, account_type: Optional[AccountType] = None) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_by_name(self, name: str) -> Optional[Category]:
        """Get category by name, compared case-insensitively."""
        pass

    @abstractmethod
    def list_categories(self) -> list[Category]:
        """List all categories in definition order."""
        pass

    @abstractmethod
    def update_category(
        self,
        category_id: int,
        name: Optional[str] = None,
        account_type: Optional[AccountType] = None,
        update_account_type: bool = False,
    ) -> None:
        """Update category fields.

        Args:
            update_account_type: If True, update account_type even if it's None (to clear it)
        """
        pass

    @abstractmethod
    def delete_category(self, category_id: int) -> int:
        """Delete a category and the rules targeting it.

        Transactions in the category become uncategorized.

        Returns:
            Number of transactions detached
        """
        pass

    # Transaction operations
    @abstractmethod
    def upsert_transaction(
        self,
        transaction_id: str,
        date: date,
        description: str,
        amount: Decimal,
        type: TransactionType,
        category_id: Optional[int] = None,
        original_description: str = "",
        entity_id: Optional[int] = None,
        document_id: Optional[str] = None,
    ) -> str:
        """Insert a transaction or refresh the one with the same ID. Returns ID.

        An existing row keeps its category, profile link and edited description.
        """
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def update_transaction_category(self, transaction_id: str, category_id: Optional[int]) -> None:
        """Update transaction category (None for uncategorized)."""
        pass

    @abstractmethod
    def update_transaction_description(self, transaction_id: str, description: str) -> None:
        """Update transaction description, keeping the original description."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category_id: Optional[int] = None,
        uncategorized: bool = False,
        search: Optional[str] = None,
        min_amount: Optional[Decimal] = None,
        max_amount: Optional[Decimal] = None,
        entity_id: Optional[int] = None,
    ) -> list[Transaction]:
        """List transactions with optional filters, most recent first."""
        pass

    @abstractmethod
    def count_transactions(self, uncategorized: bool = False) -> int:
        """Count transactions, optionally only uncategorized ones."""
        pass

    # Rule operations
    @abstractmethod
    def create_rule(
        self, keyword: str, category_id: int, target_type: Optional[TransactionType] = None
    ) -> int:
        """Create a categorization rule. Returns rule ID."""
        pass

    @abstractmethod
    def get_rule(self, rule_id: int) -> Optional[CategorizationRule]:
        """Get rule by ID."""
        pass

    @abstractmethod
    def list_rules(self) -> list[CategorizationRule]:
        """List all rules in creation order."""
        pass

    @abstractmethod
    def delete_rule(self, rule_id: int) -> None:
        """Delete a rule."""
        pass

    # Profile operations
    @abstractmethod
    def create_profile(
        self,
        name: str,
        type: ProfileType,
        keyword: Optional[str] = None,
        default_category_id: Optional[int] = None,
        description: Optional[str] = None,
    ) -> int:
        """Create a profile. Returns profile ID."""
        pass

    @abstractmethod
    def get_profile(self, profile_id: int) -> Optional[EntityProfile]:
        """Get profile by ID."""
        pass

    @abstractmethod
    def list_profiles(self) -> list[EntityProfile]:
        """List all profiles sorted by name."""
        pass

    @abstractmethod
    def delete_profile(self, profile_id: int) -> int:
        """Delete a profile. Returns number of transactions detached."""
        pass

    @abstractmethod
    def link_transactions_to_profile(
        self, profile_id: int, keyword: str, category_id: Optional[int] = None
    ) -> int:
        """Link transactions whose description contains keyword to a profile.

        Returns:
            Number of transactions linked
        """
        pass

    # Balance sheet adjustment operations
    @abstractmethod
    def create_adjustment(self, name: str, amount: Decimal, type: AdjustmentType) -> int:
        """Create a balance sheet adjustment. Returns adjustment ID."""
        pass

    @abstractmethod
    def get_adjustment(self, adjustment_id: int) -> Optional[BalanceSheetAdjustment]:
        """Get adjustment by ID."""
        pass

    @abstractmethod
    def list_adjustments(self) -> list[BalanceSheetAdjustment]:
        """List adjustments in creation order."""
        pass

    @abstractmethod
    def delete_adjustment(self, adjustment_id: int) -> None:
        """Delete an adjustment."""
        pass

    # Statement override operations
    @abstractmethod
    def set_override(self, line_name: str, amount: Decimal) -> None:
        """Create or replace the override for a line (name matched case-insensitively)."""
        pass

    @abstractmethod
    def delete_override(self, line_name: str) -> bool:
        """Delete the override for a line. Returns True if one existed."""
        pass

    @abstractmethod
    def list_overrides(self) -> dict[str, Decimal]:
        """Map of line name to override amount."""
        pass
