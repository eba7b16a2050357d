"""UTC datetime utilities.

This module provides utility functions for parsing and formatting datetime values.
All datetime operations follow one rule: UTC storage, ISO-8601 format.
"""

import re
from datetime import datetime, timedelta, timezone


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_iso_timestamp(timestamp: str) -> datetime:
    """Parse ISO-8601 timestamp, handling both Z and +00:00 suffixes.

    Args:
        timestamp: ISO-8601 timestamp string (e.g., "2024-01-15T10:30:00Z").

    Returns:
        Timezone-aware datetime object (always UTC if no offset specified).

    Note:
        Naive datetime strings (no timezone) are assumed to be UTC.
    """
    normalized = timestamp.replace("Z", "+00:00")
    dt = datetime.fromisoformat(normalized)
    # Ensure timezone awareness - assume UTC for naive timestamps
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def mtime_to_datetime(mtime: float) -> datetime:
    """Convert a Unix modification time to a UTC datetime.

    Args:
        mtime: Seconds since epoch, as returned by os.stat().st_mtime.

    Returns:
        Timezone-aware UTC datetime.
    """
    return datetime.fromtimestamp(mtime, tz=timezone.utc)


def format_local_datetime(value: datetime) -> str:
    """Format a datetime in local time with second precision for display."""
    return value.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def format_local_time(value: datetime) -> str:
    """Format only the time-of-day part of a datetime in local time."""
    return value.astimezone().strftime("%H:%M:%S")


# Supported time unit suffixes and their timedelta keyword arguments
_TIME_UNIT_MAP: dict[str, str] = {
    "d": "days",
    "w": "weeks",
    "h": "hours",
    "m": "minutes",
}


def parse_duration(value: str) -> timedelta:
    """Parse a duration string such as "30m", "2h" or "7d".

    Supported formats:
        - Nd: N days (e.g., "1d", "7d")
        - Nw: N weeks (e.g., "1w", "2w")
        - Nh: N hours (e.g., "2h", "24h")
        - Nm: N minutes (e.g., "30m", "90m")
        - N: bare number, N minutes

    Args:
        value: Duration string (case-insensitive).

    Returns:
        The corresponding timedelta.

    Raises:
        ValueError: If format is invalid or unparseable.
    """
    text = value.strip()
    if text.isdigit():
        return timedelta(minutes=int(text))

    match = re.match(r"^(\d+)([dwhmDWHM])$", text)
    if not match:
        units = ", ".join(f"{k} ({_TIME_UNIT_MAP[k]})" for k in _TIME_UNIT_MAP)
        raise ValueError(
            f"Invalid duration format '{value}'. "
            f"Expected format: <number><unit> where unit is one of: {units}. "
            "Examples: '30m' (30 minutes), '2h' (2 hours), '7d' (7 days)"
        )

    amount = int(match.group(1))
    unit = match.group(2).lower()
    return timedelta(**{_TIME_UNIT_MAP[unit]: amount})
