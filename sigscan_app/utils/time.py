"""
Clock helpers for evaluation timestamps.

Every component that needs "now" takes a clock callable so tests can pin
the evaluation time; only the default clock reads the wall clock.
"""

from datetime import datetime, timezone
from typing import Callable, Optional

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Default clock: current wall-clock time in UTC."""
    return datetime.now(timezone.utc)


def fixed_clock(moment: datetime) -> Clock:
    """
    Build a clock that always returns the same instant.

    Naive datetimes are interpreted as UTC.
    """
    pinned = ensure_utc(moment)

    def _clock() -> datetime:
        return pinned

    return _clock


def ensure_utc(moment: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """
    Format a timestamp for result records.

    Produces ISO-8601 with millisecond precision and a trailing ``Z``,
    e.g. ``2024-05-01T12:00:00.000Z``.
    """
    utc_moment = ensure_utc(moment)
    return utc_moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc_moment.microsecond // 1000:03d}Z"


def resolve_time(clock: Optional[Clock] = None) -> datetime:
    """Read the given clock, falling back to wall-clock UTC."""
    if clock is None:
        return utc_now()
    return ensure_utc(clock())
