"""Vendor and client profile commands."""

import click
from bookit.cli.error_handling import handle_domain_error
from bookit.cli.profile_resolution import resolve_profile_or_exit
from bookit.domain.entities import ProfileType
from bookit.domain.profile import ProfileService


@click.group()
def profile_group():
    """Manage vendor and client profiles."""
    pass


@profile_group.command("list")
@click.pass_context
def list_profiles(ctx):
    """List all profiles."""
    profiles = ProfileService(ctx.obj["db"]).list_profiles()
    if not profiles:
        click.echo("No profiles found.")
        return

    click.echo(f"\n{'ID':<6} {'Name':<28} {'Type':<8} {'Keyword':<20} {'Default category':<24}")
    click.echo("-" * 90)
    for p in profiles:
        click.echo(
            f"{p.id:<6} {p.name:<28} {p.type.value:<8} {p.match_keyword:<20} "
            f"{p.default_category or '-':<24}"
        )


@profile_group.command("create")
@click.argument("name")
@click.option(
    "--type",
    "profile_type",
    type=click.Choice([t.value for t in ProfileType], case_sensitive=False),
    default=ProfileType.VENDOR.value,
    show_default=True,
    help="Profile type",
)
@click.option("--keyword", help="Description text that identifies this counterparty (defaults to the name)")
@click.option("--category", help="Default category for linked transactions")
@click.option("--description", help="Notes")
@click.pass_context
def create_profile(
    ctx,
    name: str,
    profile_type: str,
    keyword: str | None,
    category: str | None,
    description: str | None,
):
    """Create a vendor or client profile."""
    service = ProfileService(ctx.obj["db"])
    try:
        profile_id = service.create_profile(
            name=name,
            profile_type=profile_type,
            keyword=keyword,
            default_category=category,
            description=description,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created profile '{name}' (ID: {profile_id})")


@profile_group.command("delete")
@click.argument("profile")
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_profile(ctx, profile: str, yes: bool):
    """Delete a profile (by name or ID). Linked transactions are kept."""
    service = ProfileService(ctx.obj["db"])
    profile_id = resolve_profile_or_exit(ctx, service, profile)

    if not yes and not click.confirm(f"Are you sure you want to delete profile '{profile}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        detached = service.delete_profile(profile_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted profile '{profile}' ({detached} transaction(s) unlinked)")


@profile_group.command("apply")
@click.argument("profile")
@click.pass_context
def apply_profile(ctx, profile: str):
    """Link every transaction mentioning the profile keyword to the profile."""
    service = ProfileService(ctx.obj["db"])
    profile_id = resolve_profile_or_exit(ctx, service, profile)
    try:
        linked = service.apply_profile(profile_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Linked {linked} transaction(s) to '{profile}'")


def register_commands(cli):
    """Register profile commands with main CLI."""
    cli.add_command(profile_group, name="profile")
