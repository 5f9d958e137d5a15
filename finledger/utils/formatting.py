"""Text formatting helpers for money and dates."""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from finledger.utils.decimal_utils import coerce_decimal


def format_currency(value, places: int = 2, signed: bool = False) -> str:
    """Format a value as US dollars.

    Args:
        value: Amount to format.
        places: Number of fractional digits.
        signed: Prefix non-negative values with "+".

    Returns:
        str: Text such as "$1,234.50", "-$12.00" or "+$3".
    """
    amount = coerce_decimal(value)
    quantum = Decimal(1).scaleb(-places)
    rounded = amount.quantize(quantum, rounding=ROUND_HALF_UP)
    magnitude = f"${abs(rounded):,.{places}f}"
    if rounded < 0:
        return f"-{magnitude}"
    if signed:
        return f"+{magnitude}"
    return magnitude


def format_long_date(day: date) -> str:
    """Return a date as "October 5, 2026"."""
    return f"{day:%B} {day.day}, {day.year}"


def format_short_date(day: date) -> str:
    """Return a date as "Oct 5"."""
    return f"{day:%b} {day.day}"


__all__ = ["format_currency", "format_long_date", "format_short_date"]
