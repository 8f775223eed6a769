"""Display formatting shared by the aggregation and export engines."""

from datetime import date
from decimal import Decimal
from typing import Union


def format_currency(amount: Union[Decimal, int, float], symbol: str = "$") -> str:
    """Format an amount as a currency string, e.g. '$1,234.56'."""
    return f"{symbol}{amount:,.2f}"


def format_display_date(d: date) -> str:
    """Format a date for people, e.g. 'Jan 5, 2025'."""
    return f"{d:%b} {d.day}, {d.year}"


def format_plain_amount(amount: Decimal) -> str:
    """Plain decimal string with no exponent and no grouping, e.g. '1234.5'."""
    return format(amount, "f")
