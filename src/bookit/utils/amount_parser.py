"""Amount parsing utilities."""

import re
from decimal import Decimal, InvalidOperation


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a signed Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "-$123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Currency symbols and thousands separators
    amount_str = re.sub(r"[$€£¥,\s]", "", amount_str)

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Amount must be a finite number (got '{amount_str}')")
    return -amount if is_negative else amount


def parse_money(value: object) -> Decimal:
    """Validate a user-supplied money value for overrides and adjustments.

    Accepts Decimal, int, float or an amount string.

    Raises:
        ValueError: If the value is not numeric, is NaN or is infinite
    """
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Amount must be a number (got '{value}')")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        return parse_amount(value)
    else:
        raise ValueError(f"Amount must be a number (got '{value}')")

    if not amount.is_finite():
        raise ValueError(f"Amount must be a finite number (got '{value}')")
    return amount
