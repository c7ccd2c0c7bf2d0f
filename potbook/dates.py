"""Date utilities for potbook.

Pure functions for month keys and labels.
"""

from datetime import MAXYEAR, date, datetime

from potbook.domain.models import MonthKey


def month_key(when: date | None = None) -> MonthKey:
    """Derive the month key for a point in time.

    Args:
        when: Date or datetime. If None, uses the current local time.

    Returns:
        Month in YYYY-MM format. Day and time are discarded.
    """
    if when is None:
        when = datetime.now()
    return MonthKey(f"{when.year:04d}-{when.month:02d}")


def parse_month(month: MonthKey) -> tuple[int, int]:
    """Split a month key into year and month.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Tuple of (year, month).

    Raises:
        ValueError: If the key is not a valid YYYY-MM month.
    """
    if len(month) != 7:
        raise ValueError(f"Invalid month key: {month!r}")
    dt = datetime.strptime(month, "%Y-%m")
    return dt.year, dt.month


def month_label(month: MonthKey) -> str:
    """Render a human-readable label (e.g., "January 2026")."""
    year, month_int = parse_month(month)
    return date(year, month_int, 1).strftime("%B %Y")


def next_month(month: MonthKey) -> MonthKey:
    """Return the key of the calendar month following month.

    December rolls over into January of the next year. 9999-12 is the last
    representable month and has no successor.

    Raises:
        ValueError: If month is malformed or is 9999-12.
    """
    year, month_int = parse_month(month)
    if month_int == 12:
        if year == MAXYEAR:
            raise ValueError(f"No month after {month}")
        return month_key(date(year + 1, 1, 1))
    return month_key(date(year, month_int + 1, 1))
