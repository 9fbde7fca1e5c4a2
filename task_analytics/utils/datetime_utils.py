"""Date and time utilities."""

import math
from datetime import datetime, timezone
from typing import Tuple, Union

Timestamp = Union[str, datetime]

SECONDS_PER_DAY = 24 * 3600


def utc_now() -> datetime:
    """Current time as a naive UTC datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_timestamp(value: Timestamp) -> datetime:
    """Parse an ISO-8601 timestamp into a naive UTC datetime.

    Offset-aware values are converted to UTC so that timestamps from
    different sources can be subtracted from each other.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        dt = datetime.fromisoformat(value.strip())
    else:
        raise ValueError(f"Unsupported timestamp: {value!r}")

    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def days_between(start: Timestamp, end: Timestamp) -> int:
    """Whole days from start to end, rounded half up and never negative."""
    delta = parse_timestamp(end) - parse_timestamp(start)
    days = math.floor(delta.total_seconds() / SECONDS_PER_DAY + 0.5)
    return max(0, days)


def get_week_number(value: Timestamp) -> Tuple[int, int]:
    """ISO-8601 (year, week) for a timestamp.

    Weeks start on Monday and week 1 holds the year's first Thursday, so
    the ISO year can differ from the calendar year around January 1st.
    """
    iso = parse_timestamp(value).isocalendar()
    return iso[0], iso[1]


def week_key(value: Timestamp) -> str:
    """Grouping key like ``2024-W09``; sorts correctly as a string."""
    year, week = get_week_number(value)
    return f"{year}-W{week:02d}"
