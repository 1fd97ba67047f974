"""Date parsing utilities."""

from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

_WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "3 days ago", "last friday",
      "this month", "last month", "this week", "last week"

    Args:
        date_str: Date string in various formats
        today: Reference date for relative forms (defaults to date.today())

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    if not date_str or not date_str.strip():
        raise ValueError("Empty date string")

    date_str = date_str.strip().lower()
    today = today or date.today()

    if date_str == "today":
        return today
    if date_str == "yesterday":
        return today - timedelta(days=1)

    # "N days ago"
    parts = date_str.split()
    if len(parts) == 3 and parts[1] in ("day", "days") and parts[2] == "ago":
        try:
            return today - timedelta(days=int(parts[0]))
        except ValueError:
            raise ValueError(f"Could not parse date '{date_str}'")

    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "week":
            # Monday of last week
            return today - timedelta(days=today.weekday() + 7)
        elif period in _WEEKDAYS:
            days_ago = (today.weekday() - _WEEKDAYS.index(period)) % 7
            if days_ago == 0:
                days_ago = 7
            return today - timedelta(days=days_ago)

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "week":
            return today - timedelta(days=today.weekday())

    # Try parsing as absolute date
    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
