"""Date parsing utilities."""

import re
from datetime import date, timedelta
from typing import Callable, Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


def _start_of_week(day: date) -> date:
    return day - timedelta(days=day.weekday())


def _start_of_month(day: date) -> date:
    return day.replace(day=1)


def _start_of_year(day: date) -> date:
    return day.replace(month=1, day=1)


RELATIVE_DATES: dict[str, Callable[[date], date]] = {
    "today": lambda today: today,
    "yesterday": lambda today: today - timedelta(days=1),
    "this week": _start_of_week,
    "this month": _start_of_month,
    "this year": _start_of_year,
    "last week": lambda today: _start_of_week(today) - timedelta(days=7),
    "last month": lambda today: _start_of_month(today - relativedelta(months=1)),
    "last year": lambda today: _start_of_year(today) - relativedelta(years=1),
}


def _last_weekday(period: str, today: date) -> Optional[date]:
    if period not in WEEKDAYS:
        return None
    days_ago = (today.weekday() - WEEKDAYS.index(period)) % 7 or 7
    return today - timedelta(days=days_ago)


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Extracted transactions carry ``YYYY-MM-DD`` dates, which are parsed
    strictly. Other absolute formats ("January 15, 2024") and relative dates
    ("today", "last month", "last friday", ...) are accepted for CLI input.

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = (date_str or "").strip().lower()
    if not text:
        raise ValueError("Empty date string")

    if ISO_DATE.match(text):
        return date.fromisoformat(text)

    today = date.today()
    if text in RELATIVE_DATES:
        return RELATIVE_DATES[text](today)
    if text.startswith("last "):
        weekday = _last_weekday(text[5:], today)
        if weekday is not None:
            return weekday

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def format_date(value: date) -> str:
    """Format a date the way statements and exports show it (YYYY-MM-DD)."""
    return value.isoformat()


PERIODS = ("this-month", "this-year", "this-week", "last-month", "last-year", "last-week")


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a named period.

    Args:
        period: One of this-month, this-year, this-week, last-month, last-year, last-week

    Returns:
        Tuple of (start_date, end_date). "this-" periods end today.

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    if period not in PERIODS:
        raise ValueError(
            f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}"
        )

    today = date.today()
    start = RELATIVE_DATES[period.replace("-", " ")](today)
    if period.startswith("this-"):
        return start, today

    if period == "last-week":
        return start, start + timedelta(days=6)
    if period == "last-month":
        return start, _start_of_month(today) - timedelta(days=1)
    return start, _start_of_year(today) - timedelta(days=1)
