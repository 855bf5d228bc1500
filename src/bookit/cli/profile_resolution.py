"""CLI helpers for profile resolution."""

from __future__ import annotations

import click
from bookit.domain.profile import ProfileService
from bookit.utils.profile_resolver import resolve_profile


def resolve_profile_or_exit(
    ctx: click.Context, profile_service: ProfileService, profile: str | int
) -> int:
    """Resolve profile name or ID, or exit with a CLI error."""
    try:
        return resolve_profile(profile_service, profile)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
