"""
cronzone.engines.zones
----------------------
Timezone service. Resolves zone keys and maps wall-clock times onto the UTC
timeline under one fixed disambiguation policy:

- gap (wall time skipped by a spring-forward transition): the first valid
  instant after the gap, which is the transition instant itself.
- overlap (wall time repeated by a fall-back transition): the instant under the
  standard offset (``dst() == 0``); the later offset when that does not single
  one out.

Both rules are independent of search direction, so repeated lookups of the same
wall-clock value always land on the same instant.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.errors import UnknownZoneError
from ..core.time import TICK, shift_or_none

ZoneLike = Union[str, ZoneInfo, timezone]

UTC_ZONE = ZoneInfo("UTC")
_DAY = timedelta(days=1)


def resolve_zone(zone: ZoneLike) -> ZoneInfo:
    if isinstance(zone, ZoneInfo):
        return zone
    if zone is timezone.utc:
        return UTC_ZONE
    if isinstance(zone, str):
        try:
            return ZoneInfo(zone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise UnknownZoneError(f"Unknown timezone '{zone}'") from exc
    raise TypeError(f"zone must be an IANA key or a ZoneInfo, got {type(zone).__name__}")


def offset_at(instant: datetime, zone: ZoneInfo) -> timedelta:
    """UTC offset in effect at a UTC instant."""
    try:
        return instant.astimezone(zone).utcoffset()
    except OverflowError:
        # Next to the datetime range edges no transitions apply.
        return zone.utcoffset(instant.replace(tzinfo=None))


def utc_to_local(instant: datetime, zone: ZoneInfo) -> datetime:
    """Naive wall-clock time of a UTC instant."""
    return instant.astimezone(zone).replace(tzinfo=None)


def _to_utc(local: datetime, offset: timedelta) -> Optional[datetime]:
    moved = shift_or_none(local, -offset)
    return None if moved is None else moved.replace(tzinfo=timezone.utc)


def _transition_instant(zone: ZoneInfo, before: datetime, after: datetime) -> datetime:
    """First instant in (before, after] that carries the offset in effect at ``after``."""
    target = offset_at(after, zone)
    lo, hi = before, after
    while hi - lo > TICK:
        mid = lo + (hi - lo) / 2
        if offset_at(mid, zone) == target:
            hi = mid
        else:
            lo = mid
    return hi


def local_to_utc(local: datetime, zone: ZoneInfo) -> Optional[datetime]:
    """
    Map a naive wall-clock time in ``zone`` to a UTC instant.

    Returns None when the instant falls outside the datetime range.
    """
    early = local.replace(tzinfo=zone, fold=0)
    late = local.replace(tzinfo=zone, fold=1)
    early_offset, late_offset = early.utcoffset(), late.utcoffset()

    if early_offset == late_offset:
        return _to_utc(local, early_offset)

    if early_offset > late_offset:
        # Overlap: the wall time occurs twice.
        chosen = early if (not early.dst() and late.dst()) else late
        return _to_utc(local, chosen.utcoffset())

    # Gap: fold=0 reads the wall time with the old offset, fold=1 with the new one.
    before = _to_utc(local, late_offset)
    after = _to_utc(local, early_offset)
    if before is None or after is None:
        return after
    return _transition_instant(zone, before, after)


def search_floor(instant: datetime, zone: ZoneInfo) -> datetime:
    """
    Earliest wall-clock time a forward search has to start from so that no
    wall-clock candidate mapping at or after ``instant`` is skipped.

    Uses the smallest offset in effect within one day on either side, which
    covers the first pass of an overlap and the wall times of a gap.
    """
    samples = [instant]
    for delta in (-_DAY, _DAY):
        shifted = shift_or_none(instant, delta)
        if shifted is not None:
            samples.append(shifted)
    lowest = min(offset_at(s, zone) for s in samples)

    local = shift_or_none(instant.replace(tzinfo=None), lowest)
    if local is None:
        return datetime.min if lowest < timedelta(0) else datetime.max
    return local
