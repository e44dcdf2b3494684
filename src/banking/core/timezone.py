"""UTC time helpers."""

from datetime import datetime

import pytz

UTC = pytz.utc


def now_utc() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def to_utc(dt: datetime) -> datetime:
    """Convert a datetime to UTC."""
    if dt.tzinfo is None:
        # Naive values come back from SQLite and are stored as UTC
        return UTC.localize(dt)
    return dt.astimezone(UTC)
