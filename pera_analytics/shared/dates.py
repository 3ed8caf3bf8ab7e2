"""Date helpers for session and PB date strings ('YYYY-MM-DD')."""

from __future__ import annotations

import datetime


def parse_date(value: str | None) -> datetime.date | None:
    """Parse an ISO date string (with optional time) to a date object."""
    if not value:
        return None
    try:
        return datetime.date.fromisoformat(value.split("T", 1)[0])
    except ValueError:
        return None


def date_year(value: str | None) -> str | None:
    """Return the calendar year as the leading 4 digits of a date string."""
    if not value:
        return None
    year = value.split("-", 1)[0].strip()
    if len(year) == 4 and year.isdigit():
        return year
    return None


def chronological_key(value: str | None) -> datetime.date:
    """Sort key for date strings; unparseable dates sort first."""
    return parse_date(value) or datetime.date.min
