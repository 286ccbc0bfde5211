from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Optional

from .errors import NotUtcError

# Smallest representable step between two instants.
TICK = timedelta(microseconds=1)


def is_utc(instant: datetime) -> bool:
    """True when the datetime is aware and tagged with ``timezone.utc``."""
    return isinstance(instant, datetime) and instant.tzinfo is timezone.utc


def require_utc(instant: datetime, name: str = "instant") -> datetime:
    """Return ``instant`` unchanged, or raise NotUtcError. Never converts."""
    if not is_utc(instant):
        raise NotUtcError(f"{name} should be a UTC datetime (tzinfo=timezone.utc), got {instant!r}")
    return instant


def shift_or_none(instant: datetime, delta: timedelta) -> Optional[datetime]:
    """``instant + delta``, or None when the result leaves the datetime range."""
    try:
        return instant + delta
    except OverflowError:
        return None
