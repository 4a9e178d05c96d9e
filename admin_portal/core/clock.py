# admin_portal/core/clock.py
from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock in UTC (timezone-aware)."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """
    Normalize a datetime read back from the database.

    Columns are timezone-aware; only SQLite drops the offset, and the
    values it hands back were written as UTC, so they only need the
    tzinfo attached.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def get_clock() -> Clock:
    """FastAPI dependency; overridden in tests with a frozen clock."""
    return SystemClock()
