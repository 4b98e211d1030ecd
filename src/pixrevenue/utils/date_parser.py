"""Date and timestamp parsing utilities."""

from datetime import date, datetime, timedelta
from typing import Optional
from dateutil import parser as date_parser
from dateutil import tz
from dateutil.relativedelta import relativedelta


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 (or similar) timestamp into an aware datetime.

    Timestamps without an offset are taken to be UTC, which is how the
    payment backend stores them.

    Args:
        value: Timestamp string, e.g. "2024-05-01T13:45:00-03:00"

    Returns:
        Timezone-aware datetime

    Raises:
        ValueError: If the string cannot be parsed
    """
    if value is None or not str(value).strip():
        raise ValueError("Empty timestamp string")
    try:
        parsed = date_parser.isoparse(value.strip())
    except (ValueError, TypeError, OverflowError):
        try:
            parsed = date_parser.parse(value.strip())
        except (ValueError, TypeError, OverflowError) as e:
            raise ValueError(f"Could not parse timestamp '{value}': {e}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz.UTC)
    return parsed


def format_timestamp(instant: datetime) -> str:
    """Format an instant the way parse_timestamp reads it back."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=tz.UTC)
    return instant.isoformat()


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "15/01/2024", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "last month", "this year", etc.

    Args:
        date_str: Date string in various formats
        today: Date treated as today for relative forms; defaults to the
            host's current date

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = today or date.today()

    # Handle relative dates
    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)
        elif period == "week":
            return today - timedelta(days=today.weekday() + 7)

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1)
        elif period == "week":
            return today - timedelta(days=today.weekday())

    # Try parsing as absolute date; ISO first, then day-first (pt-BR)
    try:
        return date.fromisoformat(date_str)
    except ValueError:
        pass
    try:
        dt = date_parser.parse(date_str, dayfirst=True)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
