"""Audit Clock — timezone-aware timestamps for created/updated audit fields."""

from datetime import datetime, timedelta, timezone

_TICK = timedelta(microseconds=1)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def next_audit_timestamp(previous: datetime | None) -> datetime:
    """Current UTC time, bumped past `previous` when the clock has not advanced."""
    now = utc_now()
    if previous is not None and now <= previous:
        return previous + _TICK
    return now


def ensure_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes (SQLite drops tzinfo on read)."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)
