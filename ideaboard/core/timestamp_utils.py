"""Timestamp utilities for Ideaboard.

Timestamps are stored as ISO-8601 UTC strings with microsecond precision,
so that lexical ordering in SQL matches chronological ordering.
"""

from datetime import datetime, timezone
from typing import Optional


def current_timestamp() -> str:
    """Get current time as a stored timestamp string.

    Returns:
        ISO-8601 UTC string, e.g. "2026-10-19T12:00:00.123456+00:00"
    """
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse a stored timestamp string back into an aware datetime."""
    if not value:
        return None
    return datetime.fromisoformat(value)


def format_timestamp(value: Optional[str]) -> str:
    """Format a stored timestamp in the local timezone for display.

    Args:
        value: Stored timestamp string or None

    Returns:
        Formatted string "YYYY-MM-DD HH:MM:SS" in local timezone,
        or empty string if value is None
    """
    dt = parse_timestamp(value)
    if dt is None:
        return ""
    return dt.astimezone().strftime("%Y-%m-%d %H:%M:%S")
