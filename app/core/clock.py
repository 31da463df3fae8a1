from datetime import datetime, timezone
from typing import Protocol

from app.core.config import IST


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Clock pinned to one instant; ``advance_to`` moves it."""

    def __init__(self, at: datetime):
        self._at = ensure_utc(at)

    def now(self) -> datetime:
        return self._at

    def advance_to(self, at: datetime) -> None:
        self._at = ensure_utc(at)


_system_clock = SystemClock()


def get_clock() -> Clock:
    return _system_clock


def ensure_utc(dt: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything we store is UTC
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def is_overdue(now: datetime, due_at: datetime) -> bool:
    """True once ``now`` is strictly past ``due_at``."""
    return ensure_utc(now) > ensure_utc(due_at)


def from_ist_input(dt: datetime) -> datetime:
    """Interpret user input as IST when it carries no offset, return UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=IST)
    return dt.astimezone(timezone.utc)


def to_ist(dt: datetime | None) -> datetime | None:
    if dt is None:
        return None
    return ensure_utc(dt).astimezone(IST)
