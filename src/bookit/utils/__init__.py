"""Utility functions for bookit."""

from bookit.utils.date_parser import parse_date
from bookit.utils.amount_parser import parse_amount, parse_money
from bookit.utils.profile_resolver import resolve_profile

__all__ = ["parse_date", "parse_amount", "parse_money", "resolve_profile"]
