"""Counterparty profile domain service."""

from typing import Optional

import structlog

from bookit.database.base import Database
from bookit.domain.category import CategoryService
from bookit.domain.entities import EntityProfile, ProfileType
from bookit.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    profile_not_found,
)
from bookit.domain.registry import normalize_name

logger = structlog.get_logger(__name__)


class ProfileService:
    """Service for managing vendor and client profiles."""

    def __init__(self, db: Database):
        """Initialize profile service.

        Args:
            db: Database instance
        """
        self.db = db
        self.category_service = CategoryService(db)

    def create_profile(
        self,
        name: str,
        profile_type: ProfileType | str = ProfileType.VENDOR,
        keyword: Optional[str] = None,
        default_category: Optional[str] = None,
        description: Optional[str] = None,
    ) -> int:
        """Create a profile.

        Args:
            name: Profile name
            profile_type: VENDOR or CLIENT
            keyword: Description keyword used to link transactions (defaults to name)
            default_category: Category assigned to linked transactions
            description: Free-text notes

        Returns:
            Profile ID

        Raises:
            ValidationError: If name is blank or type is unknown
            ConflictError: If a profile with the same name exists
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Profile name cannot be empty")
        if isinstance(profile_type, ProfileType):
            ptype = profile_type
        else:
            try:
                ptype = ProfileType(str(profile_type).upper())
            except ValueError:
                raise ValidationError(
                    f"Profile type must be VENDOR or CLIENT (got '{profile_type}')"
                )

        for profile in self.db.list_profiles():
            if normalize_name(profile.name) == normalize_name(name):
                raise ConflictError(f"Profile with name '{name}' already exists")

        category = self.category_service.ensure_category(default_category)
        profile_id = self.db.create_profile(
            name=name,
            type=ptype,
            keyword=(keyword or "").strip() or None,
            default_category_id=category.id if category else None,
            description=description,
        )
        logger.info("profile_created", profile_id=profile_id, name=name, type=ptype.value)
        return profile_id

    def get_profile(self, profile_id: int) -> Optional[EntityProfile]:
        """Get profile by ID.

        Args:
            profile_id: Profile ID

        Returns:
            Profile entity or None if not found
        """
        return self.db.get_profile(profile_id)

    def list_profiles(self) -> list[EntityProfile]:
        """List all profiles sorted by name."""
        return self.db.list_profiles()

    def delete_profile(self, profile_id: int) -> int:
        """Delete a profile, detaching its transactions first.

        Returns:
            Number of transactions detached
        """
        if self.db.get_profile(profile_id) is None:
            raise NotFoundError(profile_not_found(profile_id))
        detached = self.db.delete_profile(profile_id)
        logger.info("profile_deleted", profile_id=profile_id, detached=detached)
        return detached

    def apply_profile(self, profile_id: int) -> int:
        """Link matching transactions to a profile.

        Every transaction whose description contains the profile keyword
        (case-insensitively) is linked; when the profile has a default
        category, that category is assigned too.

        Returns:
            Number of transactions linked
        """
        profile = self.db.get_profile(profile_id)
        if profile is None:
            raise NotFoundError(profile_not_found(profile_id))

        category_id = None
        if profile.default_category is not None:
            category = self.category_service.get_category_by_name(profile.default_category)
            category_id = category.id if category else None

        linked = self.db.link_transactions_to_profile(
            profile_id=profile.id,
            keyword=profile.match_keyword,
            category_id=category_id,
        )
        logger.info("profile_applied", profile_id=profile.id, keyword=profile.match_keyword, linked=linked)
        return linked
