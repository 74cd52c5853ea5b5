"""
UTC timestamps

Timestamps are written timezone-aware. SQLite hands DateTime columns back
without tzinfo, so values read from the store go through as_utc before being
compared with the current time.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive values; convert aware ones"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
