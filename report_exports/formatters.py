"""
Value formatting helpers shared by the projector and the template builder
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Optional, Union

from core.config import settings

Number = Union[int, float, Decimal]


def is_number(value: Any) -> bool:
    """True for real numbers; booleans are not amounts"""
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def number_text(value: Number) -> str:
    """Render a number the way it appears in the source data (10.0 -> '10')"""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_currency(amount: Any, currency: Optional[str] = None) -> str:
    """Format an amount as '<CODE> 1,234.56'; non-numeric amounts render as zero"""
    currency = currency or settings.currency_code
    if not is_number(amount):
        return f"{currency} 0.00"

    sign = "-" if amount < 0 else ""
    return f"{sign}{currency} {abs(amount):,.2f}"


def format_thousands(value: Any) -> str:
    """Thousands-separated number, at most three fraction digits"""
    if not is_number(value):
        return "0"
    if isinstance(value, int) or (isinstance(value, float) and value.is_integer()):
        return f"{int(value):,}"
    text = f"{value:,.3f}".rstrip("0").rstrip(".")
    return text


def format_percentage(value: Any, decimals: Optional[int] = None) -> str:
    """Append '%'; with decimals the value is rounded first"""
    if decimals is not None:
        numeric = value if is_number(value) else 0
        return f"{numeric:.{decimals}f}%"
    if is_number(value):
        return f"{number_text(value)}%"
    return f"{value}%"


def _coerce_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if is_number(value):
        # Epoch milliseconds, as produced by JavaScript clients
        return datetime.fromtimestamp(float(value) / 1000, tz=timezone.utc)
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


def format_date(value: Any) -> str:
    """Format as 'Jan 5, 2024'; empty input gives '' and unparseable strings pass through"""
    if value is None or value == "":
        return ""

    parsed = _coerce_datetime(value)
    if parsed is None:
        return str(value)
    return f"{parsed:%b} {parsed.day}, {parsed.year}"


def format_datetime(value: Any) -> str:
    """Format as 'Jan 5, 2024, 02:30 PM'"""
    if value is None or value == "":
        return ""

    parsed = _coerce_datetime(value)
    if parsed is None:
        return str(value)
    return f"{parsed:%b} {parsed.day}, {parsed.year}, {parsed:%I:%M %p}"
