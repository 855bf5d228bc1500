"""Utility for resolving profile names to IDs."""

from bookit.domain.errors import NotFoundError, profile_not_found
from bookit.domain.profile import ProfileService
from bookit.domain.registry import normalize_name


def resolve_profile(profile_service: ProfileService, profile: str | int) -> int:
    """Resolve profile name or ID to profile ID.

    Args:
        profile_service: ProfileService instance
        profile: Profile name (str) or ID (int or string representation of int)

    Returns:
        Profile ID

    Raises:
        NotFoundError: If profile is not found
    """
    if isinstance(profile, int):
        if profile_service.get_profile(profile) is None:
            raise NotFoundError(profile_not_found(profile))
        return profile

    try:
        profile_id = int(profile)
    except (ValueError, TypeError):
        profile_id = None

    if profile_id is not None:
        if profile_service.get_profile(profile_id) is None:
            raise NotFoundError(profile_not_found(profile_id))
        return profile_id

    for candidate in profile_service.list_profiles():
        if normalize_name(candidate.name) == normalize_name(profile):
            return candidate.id

    raise NotFoundError(profile_not_found(profile))
