"""Clock helpers shared by the domain and service layers.

Timestamps are naive UTC throughout: SQLite hands back naive datetimes, so
mixing in aware values would make deadline comparisons raise.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

Clock = Callable[[], datetime]


def utcnow_naive() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Normalize an aware timestamp to naive UTC; naive input is assumed UTC."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def fixed_clock(moment: datetime) -> Clock:
    """Return a clock frozen at `moment` (tests and replays)."""
    frozen = to_naive_utc(moment)
    return lambda: frozen
