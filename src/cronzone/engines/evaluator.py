"""
cronzone.engines.evaluator
--------------------------
Recurrence evaluator backed by croniter.

croniter is driven with naive datetimes, which it treats as plain wall-clock
values with no DST handling of its own. Every wall-clock candidate is mapped
onto the UTC timeline by the timezone service. That mapping is monotonic
(non-decreasing), so walking candidates in ascending order yields instants in
ascending order and the first one past the query point is the answer.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterator, Optional
from zoneinfo import ZoneInfo

from croniter import CroniterBadDateError, CroniterError, croniter
from loguru import logger

from ..core.errors import CronParseError
from ..core.time import TICK, shift_or_none
from ..core.types import CronFormat, RepresentableRange
from .zones import local_to_utc, search_floor

# Keeps croniter's bounded forward search (50 years) and local offset
# arithmetic inside the datetime range.
DEFAULT_MAX_YEAR = 9899

_SECOND = timedelta(seconds=1)


def representable_range(max_year: int = DEFAULT_MAX_YEAR) -> RepresentableRange:
    floor = datetime.min.replace(tzinfo=timezone.utc)
    ceiling = datetime(max_year + 1, 1, 1, tzinfo=timezone.utc) - TICK
    return RepresentableRange(floor=floor, ceiling=ceiling)


class CronSchedule:
    """
    Parsed, immutable cron rule. Queries run on a private copy of the parsed
    croniter template, so one schedule can be shared between threads.
    """
    def __init__(
        self,
        expression: str,
        fmt: CronFormat,
        template: croniter,
        bounds: RepresentableRange,
    ):
        self._expression = expression
        self._format = fmt
        self._template = template
        self._bounds = bounds

    @property
    def expression(self) -> str:
        return self._expression

    @property
    def format(self) -> CronFormat:
        return self._format

    @property
    def bounds(self) -> RepresentableRange:
        return self._bounds

    def __repr__(self) -> str:
        return f"CronSchedule({self._expression!r}, {self._format.name})"

    # ---------------------------------------------------------
    # Candidate generation
    # ---------------------------------------------------------

    def _wall_clock_candidates(self, start_local: datetime) -> Iterator[datetime]:
        """Matching wall-clock times from ``start_local`` (second-aligned) on, ascending."""
        cursor = copy.deepcopy(self._template)
        start = start_local.replace(microsecond=0)
        # croniter searches strictly after its current time.
        prior = shift_or_none(start, -_SECOND)
        cursor.set_current(prior if prior is not None else start, force=True)

        while True:
            try:
                local = cursor.get_next(datetime)
            except CroniterBadDateError:
                # Nothing within croniter's search horizon: the rule is exhausted.
                return
            yield local

    def _instants(self, from_utc: datetime, zone: ZoneInfo) -> Iterator[datetime]:
        """Distinct UTC instants of the rule, ascending, from around ``from_utc`` to the ceiling."""
        last: Optional[datetime] = None
        for local in self._wall_clock_candidates(search_floor(from_utc, zone)):
            instant = local_to_utc(local, zone)
            if instant is None:
                continue  # below the floor
            if instant > self._bounds.ceiling:
                return
            if instant == last:
                continue  # several gap wall times collapse onto one instant
            last = instant
            yield instant

    # ---------------------------------------------------------
    # Queries
    # ---------------------------------------------------------

    def next_occurrence(
        self,
        from_utc: datetime,
        zone: ZoneInfo,
        *,
        inclusive: bool = False,
    ) -> Optional[datetime]:
        for instant in self._instants(from_utc, zone):
            if instant > from_utc or (inclusive and instant == from_utc):
                return instant
        return None

    def occurrences(
        self,
        from_utc: datetime,
        to_utc: datetime,
        zone: ZoneInfo,
        *,
        from_inclusive: bool = True,
        to_inclusive: bool = False,
    ) -> Iterator[datetime]:
        for instant in self._instants(from_utc, zone):
            if instant < from_utc or (instant == from_utc and not from_inclusive):
                continue
            if instant > to_utc or (instant == to_utc and not to_inclusive):
                return
            yield instant


@dataclass(frozen=True)
class CroniterEvaluator:
    """
    Parses cron text with croniter.

    ``max_year`` sets the representable ceiling; ``day_or`` keeps croniter's
    (Vixie cron) rule that a restricted day-of-month and day-of-week match when
    either matches.
    """
    max_year: int = DEFAULT_MAX_YEAR
    day_or: bool = True

    @property
    def bounds(self) -> RepresentableRange:
        return representable_range(self.max_year)

    def parse(self, text: str, fmt: CronFormat) -> CronSchedule:
        if not text or not text.strip():
            raise CronParseError("Cron expression is empty.", text or "")

        expression = text.strip()
        tokens = expression.split()
        is_alias = len(tokens) == 1 and tokens[0].startswith("@")
        if not is_alias and len(tokens) != fmt.field_count:
            raise CronParseError(
                f"Expected {fmt.field_count} fields for the {fmt.name} format, "
                f"got {len(tokens)}: '{expression}'",
                expression,
            )

        seconds_first = fmt is CronFormat.WITH_SECONDS
        try:
            # strict: impossible day/month combinations (e.g. Feb 31st) fail here
            croniter.expand(expression, second_at_beginning=seconds_first, strict=True)
            template = croniter(
                expression,
                datetime(1970, 1, 1),
                ret_type=datetime,
                day_or=self.day_or,
                second_at_beginning=seconds_first,
            )
        except CroniterError as exc:
            raise CronParseError(f"Invalid cron expression '{expression}': {exc}", expression) from exc

        logger.debug("Parsed cron expression {!r} ({})", expression, fmt.name)
        return CronSchedule(expression, fmt, template, self.bounds)
