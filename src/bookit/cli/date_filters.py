"""CLI helpers for statement and listing date ranges."""

from datetime import date
from typing import Callable

import click

from bookit.utils.date_parser import PERIODS, get_date_range, parse_date


def date_range_options(command: Callable) -> Callable:
    """Add --start-date, --end-date and --period to a command."""
    command = click.option(
        "--period",
        type=click.Choice(PERIODS, case_sensitive=False),
        help="Named period (cannot be combined with explicit dates)",
    )(command)
    command = click.option(
        "--end-date", help="End date (YYYY-MM-DD or relative like 'today', 'this month')"
    )(command)
    command = click.option(
        "--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')"
    )(command)
    return command


def resolve_cli_date_range(
    ctx: click.Context,
    *,
    start_date: str | None,
    end_date: str | None,
    period: str | None = None,
) -> tuple[date | None, date | None]:
    """Resolve the date range from a named period or explicit dates.

    Exits with an error when a period is combined with explicit dates or when
    a date cannot be parsed.
    """
    if period and (start_date or end_date):
        click.echo(
            "Error: Period options cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if period:
        return get_date_range(period)

    start = None
    end = None
    for label, raw in (("start", start_date), ("end", end_date)):
        if not raw:
            continue
        try:
            parsed = parse_date(raw)
        except ValueError as e:
            click.echo(f"Error: Invalid {label} date: {e}", err=True)
            ctx.exit(1)
        if label == "start":
            start = parsed
        else:
            end = parsed

    if start is not None and end is not None and start > end:
        click.echo("Error: Start date must not be after end date.", err=True)
        ctx.exit(1)

    return start, end
