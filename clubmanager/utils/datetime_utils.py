"""
Datetime utility functions.
Dates are formatted here before they leave the service layer.
"""

from datetime import date, datetime
from typing import Optional, Union
import pytz


def utcnow() -> datetime:
    """
    Get current UTC datetime using pytz.UTC.

    Returns:
        Current UTC datetime with pytz timezone information
    """
    return datetime.now(pytz.UTC)


def _as_date(value: Union[str, date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value.strip()[:10])
    raise ValueError(f"Expected string, date or datetime, got {type(value)}")


def format_iso_date(value: Optional[Union[str, date, datetime]]) -> Optional[str]:
    """
    Format a date as YYYY-MM-DD (the shape HTML date inputs expect).

    Examples:
        >>> format_iso_date(date(2026, 1, 5))
        "2026-01-05"
    """
    if value is None:
        return None
    return _as_date(value).isoformat()


def format_long_date(value: Optional[Union[str, date, datetime]]) -> Optional[str]:
    """
    Format a date for dashboard lists, e.g. "January 05, 2026".
    """
    if value is None:
        return None
    return _as_date(value).strftime("%B %d, %Y")


def age_on(dob: date, today: date) -> int:
    """Whole years between ``dob`` and ``today``."""
    years = today.year - dob.year
    if (today.month, today.day) < (dob.month, dob.day):
        years -= 1
    return years
