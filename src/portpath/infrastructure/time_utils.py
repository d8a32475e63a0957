"""Time utility helpers.

File timestamps are exposed as timezone-aware UTC datetimes.
"""

from __future__ import annotations

from datetime import datetime, timezone


def from_timestamp(ts: float) -> datetime:
    """Convert a POSIX timestamp into an aware UTC datetime."""
    return datetime.fromtimestamp(ts, timezone.utc)


def to_timestamp(value: datetime) -> float:
    """Convert a datetime to a POSIX timestamp. Naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.timestamp()
