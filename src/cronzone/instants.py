"""
cronzone.instants
-----------------
Named timelines and calendar boundary helpers built from cron timelines.

The timezone is always an explicit argument. Weekdays follow
``datetime.date.weekday()`` numbering (Monday=0 ... Sunday=6); months are 1-12.
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Iterable, List, Optional, Union

from .core.errors import NoInstantError
from .core.time import TICK
from .core.types import CronFormat
from .engines.cron_timeline import CronTimeline
from .engines.factory import build_cron_timeline, make_timeline
from .engines.specs import ANNUALLY, DAILY, EVERY_MINUTE, EVERY_SECOND, HOURLY, MONTHLY, WEEKLY
from .engines.zones import ZoneLike, local_to_utc, resolve_zone

LocalDate = Union[date, datetime]


def time_to_cron(t: time) -> str:
    """Cron expression matching ``t`` once a day. Sub-second times are rejected."""
    if t.microsecond:
        raise ValueError(f"Sub-second times are not supported in cron expressions: {t.isoformat()}")
    if t.second:
        return f"{t.second} {t.minute} {t.hour} * * *"
    return f"{t.minute} {t.hour} * * *"


def _checked_weekdays(weekdays: Iterable[int]) -> List[int]:
    days = list(weekdays)
    if not days:
        raise ValueError("At least one weekday is required.")
    for d in days:
        if not 0 <= d <= 6:
            raise ValueError(f"weekday should be in 0..6 (Monday=0), got {d}")
    return days


def _checked_months(months: Iterable[int]) -> List[int]:
    values = list(months)
    if not values:
        raise ValueError("At least one month is required.")
    for m in values:
        if not 1 <= m <= 12:
            raise ValueError(f"month should be in 1..12, got {m}")
    return values


# ============================================================
# Timelines
# ============================================================

def from_cron(expression: str, zone: ZoneLike, fmt: Optional[CronFormat] = None) -> CronTimeline:
    return build_cron_timeline(expression, zone, fmt)


def daily_at(t: time, zone: ZoneLike) -> CronTimeline:
    """One instant per day at wall-clock time ``t`` (whole seconds only)."""
    return build_cron_timeline(time_to_cron(t), zone)


def every_second() -> CronTimeline:
    return make_timeline(EVERY_SECOND, timezone.utc)


def every_minute() -> CronTimeline:
    return make_timeline(EVERY_MINUTE, timezone.utc)


def hourly(zone: ZoneLike) -> CronTimeline:
    return make_timeline(HOURLY, zone)


def daily(zone: ZoneLike) -> CronTimeline:
    return make_timeline(DAILY, zone)


def weekly(zone: ZoneLike) -> CronTimeline:
    """Start of every week (Monday, local midnight)."""
    return make_timeline(WEEKLY, zone)


def start_of_days(weekdays: Iterable[int], zone: ZoneLike) -> CronTimeline:
    # cron counts from Sunday=0
    field = ",".join(str((d + 1) % 7) for d in _checked_weekdays(weekdays))
    return build_cron_timeline(f"0 0 * * {field}", zone)


def end_of_days(weekdays: Iterable[int], zone: ZoneLike) -> CronTimeline:
    """The end of a day is the start of the following one."""
    return start_of_days([(d + 1) % 7 for d in _checked_weekdays(weekdays)], zone)


def monthly(zone: ZoneLike) -> CronTimeline:
    return make_timeline(MONTHLY, zone)


def start_of_months(months: Iterable[int], zone: ZoneLike) -> CronTimeline:
    field = ",".join(str(m) for m in _checked_months(months))
    return build_cron_timeline(f"0 0 1 {field} *", zone)


def end_of_months(months: Iterable[int], zone: ZoneLike) -> CronTimeline:
    # December ends on January 1st
    return start_of_months([m % 12 + 1 for m in _checked_months(months)], zone)


def annually(zone: ZoneLike) -> CronTimeline:
    return make_timeline(ANNUALLY, zone)


# ============================================================
# Boundary helpers
# ============================================================

def _local_midnight_utc(local: LocalDate, zone: ZoneLike) -> datetime:
    day = local.date() if isinstance(local, datetime) else local
    instant = local_to_utc(datetime.combine(day, time()), resolve_zone(zone))
    if instant is None:
        raise NoInstantError(f"Local midnight of {day} in {zone} is outside the datetime range")
    return instant


def _start(timeline: CronTimeline, local: LocalDate, zone: ZoneLike, what: str) -> datetime:
    # A boundary at local midnight itself counts as the start.
    found = timeline.previous_instant(_local_midnight_utc(local, zone) + TICK)
    if found is None:
        raise NoInstantError(f"No {what} was found for local date {local} in timezone {zone}")
    return found


def _end(timeline: CronTimeline, local: LocalDate, zone: ZoneLike, what: str) -> datetime:
    found = timeline.next_instant(_local_midnight_utc(local, zone))
    if found is None:
        raise NoInstantError(f"No {what} was found for local date {local} in timezone {zone}")
    return found


def start_of_day(local: LocalDate, zone: ZoneLike) -> datetime:
    return _start(daily(zone), local, zone, "day")


def end_of_day(local: LocalDate, zone: ZoneLike) -> datetime:
    return _end(daily(zone), local, zone, "day")


def start_of_week(local: LocalDate, zone: ZoneLike) -> datetime:
    return _start(weekly(zone), local, zone, "week")


def end_of_week(local: LocalDate, zone: ZoneLike) -> datetime:
    return _end(weekly(zone), local, zone, "week")


def start_of_month(local: LocalDate, zone: ZoneLike) -> datetime:
    return _start(monthly(zone), local, zone, "month")


def end_of_month(local: LocalDate, zone: ZoneLike) -> datetime:
    return _end(monthly(zone), local, zone, "month")


def start_of_year(local: LocalDate, zone: ZoneLike) -> datetime:
    return _start(annually(zone), local, zone, "year")


def end_of_year(local: LocalDate, zone: ZoneLike) -> datetime:
    return _end(annually(zone), local, zone, "year")
