"""
cronzone.engines.cron_timeline
------------------------------
The instant resolution engine. Binds one parsed cron schedule to one timezone
and answers next / previous / is-instant queries on the UTC timeline.

The evaluator only searches forward. Predecessor lookups are derived from it by
scanning half-open windows backwards from the query point, each one 1.5 cadence
estimates wide, and taking the latest occurrence of the first non-empty window.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

from loguru import logger

from ..core.time import TICK, require_utc, shift_or_none
from ..core.types import RepresentableRange
from .interfaces import CronScheduleProtocol

# Window width in cadence estimates. Covers rules whose spacing locally
# contracts (leap days, short months, DST days).
WINDOW_FACTOR = 1.5


def first_period_duration(
    schedule: CronScheduleProtocol,
    zone: ZoneInfo,
    bounds: RepresentableRange,
) -> Optional[timedelta]:
    """
    Spacing between the first two occurrences after the representable floor,
    or None when the rule has fewer than two occurrences in range.
    """
    # One tick past the floor: an occurrence sitting exactly on the origin is
    # not reliably reported.
    first = schedule.next_occurrence(bounds.floor + TICK, zone, inclusive=True)
    if first is None:
        return None
    second = schedule.next_occurrence(first, zone)
    if second is None:
        return None
    return second - first


class CronTimeline:
    """
    Instant timeline of a cron schedule in a fixed timezone.

    Immutable after construction; the cadence estimate is derived eagerly.
    All arguments and results are UTC datetimes (``tzinfo is timezone.utc``).
    """
    def __init__(
        self,
        schedule: CronScheduleProtocol,
        zone: ZoneInfo,
        bounds: RepresentableRange,
    ):
        self._schedule = schedule
        self._zone = zone
        self._bounds = bounds
        self._cadence = first_period_duration(schedule, zone, bounds)
        logger.debug(
            "Cron timeline {!r} in {}: cadence estimate {}",
            schedule.expression, zone.key, self._cadence,
        )

    @property
    def schedule(self) -> CronScheduleProtocol:
        return self._schedule

    @property
    def expression(self) -> str:
        return self._schedule.expression

    @property
    def zone(self) -> ZoneInfo:
        return self._zone

    @property
    def bounds(self) -> RepresentableRange:
        return self._bounds

    @property
    def cadence(self) -> Optional[timedelta]:
        """Cadence estimate; None when the schedule has at most one occurrence."""
        return self._cadence

    def __repr__(self) -> str:
        return f"CronTimeline({self.expression!r}, zone={self._zone.key!r})"

    # ---------------------------------------------------------
    # Queries
    # ---------------------------------------------------------

    def next_instant(self, from_utc: datetime) -> Optional[datetime]:
        """First occurrence strictly after ``from_utc``."""
        require_utc(from_utc, "from_utc")
        if from_utc.year > self._bounds.max_year:
            return None
        return self._schedule.next_occurrence(from_utc, self._zone)

    def previous_instant(self, from_utc: datetime) -> Optional[datetime]:
        """Latest occurrence strictly before ``from_utc``."""
        require_utc(from_utc, "from_utc")
        if from_utc > self._bounds.ceiling:
            from_utc = self._bounds.ceiling - TICK

        if self._cadence is None:
            return self._previous_single(from_utc)

        floor = self._bounds.floor
        estimate = self._cadence * WINDOW_FACTOR
        attempt = 0
        while True:
            upper = shift_or_none(from_utc, -(estimate * attempt))
            if upper is None or upper <= floor:
                return None

            lower = shift_or_none(from_utc, -(estimate * (attempt + 1)))
            at_floor = lower is None or lower <= floor
            if at_floor:
                lower = floor

            latest = None
            for latest in self._schedule.occurrences(lower, upper, self._zone):
                pass
            if latest is not None:
                return latest
            if at_floor:
                return None

            attempt += 1
            logger.trace(
                "{!r}: no occurrence in [{}, {}), widening (attempt {})",
                self.expression, lower, upper, attempt,
            )

    def _previous_single(self, from_utc: datetime) -> Optional[datetime]:
        # At most one occurrence in range: it is the predecessor iff it lies before from_utc.
        only = self._schedule.next_occurrence(self._bounds.floor + TICK, self._zone, inclusive=True)
        if only is None or only >= from_utc:
            return None
        return only

    def is_instant(self, utc: datetime) -> bool:
        require_utc(utc, "utc")
        if utc.year > self._bounds.max_year:
            return False
        return self._schedule.next_occurrence(utc, self._zone, inclusive=True) == utc
