"""Category domain service."""

from typing import Optional

import structlog

from bookit.database.base import Database
from bookit.domain.entities import AccountType, Category, UNCATEGORIZED
from bookit.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    category_exists,
    category_not_found,
)
from bookit.domain.registry import CategoryRegistry, is_uncategorized, normalize_name

logger = structlog.get_logger(__name__)


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(
        self, name: str, account_type: Optional[AccountType] = None
    ) -> int:
        """Create a category.

        Args:
            name: Category name (unique, compared case-insensitively)
            account_type: Optional declared account type

        Returns:
            Category ID

        Raises:
            ValidationError: If the name is blank or reserved
            ConflictError: If a category with the same name exists
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Category name cannot be empty")
        if is_uncategorized(name):
            raise ValidationError(f"'{UNCATEGORIZED}' is the built-in default category")
        if self.get_category_by_name(name) is not None:
            raise ConflictError(category_exists(name))

        category_id = self.db.create_category(name=name, account_type=account_type)
        logger.info(
            "category_created",
            category_id=category_id,
            name=name,
            account_type=account_type.value if account_type else None,
        )
        return category_id

    def ensure_category(self, name: Optional[str]) -> Optional[Category]:
        """Return the category for a name, creating it on first encounter.

        Returns:
            Category entity, or None for Uncategorized
        """
        if is_uncategorized(name):
            return None
        existing = self.get_category_by_name(name)
        if existing is not None:
            return existing
        category_id = self.create_category(name)
        return self.db.get_category(category_id)

    def get_category(self, category_id: int) -> Optional[Category]:
        return self.db.get_category(category_id)

    def get_category_by_name(self, name: str) -> Optional[Category]:
        """Get category by name, ignoring case.

        Args:
            name: Category name

        Returns:
            Category entity or None if not found
        """
        if not name or not name.strip():
            return None
        return self.db.get_category_by_name(name.strip())

    def require_category(self, name: str) -> Category:
        """Get category by name or raise NotFoundError."""
        category = self.get_category_by_name(name)
        if category is None:
            raise NotFoundError(category_not_found(name))
        return category

    def list_categories(self) -> list[Category]:
        """List all categories in definition order."""
        return self.db.list_categories()

    def get_registry(self) -> CategoryRegistry:
        """Snapshot the stored categories as a registry."""
        return CategoryRegistry.from_categories(self.db.list_categories())

    def rename_category(self, old_name: str, new_name: str) -> None:
        """Rename a category.

        Transactions and rules reference categories by ID, so they follow the
        new name without being rewritten.

        Raises:
            NotFoundError: If the category doesn't exist
            ValidationError: If the new name is blank or reserved
            ConflictError: If another category already has the new name
        """
        category = self.require_category(old_name)
        new_name = (new_name or "").strip()
        if not new_name:
            raise ValidationError("Category name cannot be empty")
        if is_uncategorized(new_name):
            raise ValidationError(f"'{UNCATEGORIZED}' is the built-in default category")

        clash = self.get_category_by_name(new_name)
        if clash is not None and clash.id != category.id:
            raise ConflictError(category_exists(new_name))

        self.db.update_category(category.id, name=new_name)
        logger.info("category_renamed", category_id=category.id, old=category.name, new=new_name)

    def set_account_type(self, name: str, account_type: Optional[AccountType]) -> None:
        """Declare (or clear with None) the account type of a category."""
        category = self.require_category(name)
        self.db.update_category(
            category.id, account_type=account_type, update_account_type=True
        )
        logger.info(
            "category_account_type_set",
            category_id=category.id,
            account_type=account_type.value if account_type else None,
        )

    def delete_category(self, name: str) -> int:
        """Delete a category.

        Referencing transactions fall back to Uncategorized and rules that
        target the category are removed.

        Returns:
            Number of transactions detached
        """
        category = self.require_category(name)
        detached = self.db.delete_category(category.id)
        logger.info("category_deleted", category_id=category.id, name=category.name, detached=detached)
        return detached

    def category_names(self) -> list[str]:
        """Category names plus the built-in default, for choices."""
        names = [cat.name for cat in self.list_categories()]
        if not any(normalize_name(n) == normalize_name(UNCATEGORIZED) for n in names):
            names.append(UNCATEGORIZED)
        return names
