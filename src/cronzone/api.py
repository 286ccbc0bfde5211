from __future__ import annotations

from datetime import datetime
from typing import Iterator, List, Optional

from .core.time import require_utc
from .core.timeline import InstantTimeline, TimelineRegistry
from .core.types import CronFormat, CronSpec
from .engines.cron_timeline import CronTimeline
from .engines.factory import build_cron_timeline
from .engines.factory import make_timeline as _make_timeline
from .engines.zones import ZoneLike

_registry: Optional[TimelineRegistry] = None

def set_registry(reg: TimelineRegistry) -> None:
    global _registry
    _registry = reg

def _reg() -> TimelineRegistry:
    if _registry is None:
        raise RuntimeError("Timeline registry not initialized")
    return _registry

def list_timelines() -> List[str]:
    return _reg().list()

def timeline_spec(name: str) -> CronSpec:
    return _reg().get(name)

def register_timeline(name: str, spec: CronSpec, *, overwrite: bool = False) -> None:
    _reg().register(name, spec, overwrite=overwrite)

def get_timeline(name: str, zone: ZoneLike) -> CronTimeline:
    return _make_timeline(_reg().get(name), zone)

def make_timeline(spec: CronSpec, zone: ZoneLike) -> CronTimeline:
    return _make_timeline(spec, zone)

# ============================================================
# One-shot queries on cron text
# ============================================================

def next_instant(
    expression: str,
    from_utc: datetime,
    zone: ZoneLike,
    fmt: Optional[CronFormat] = None,
) -> Optional[datetime]:
    return build_cron_timeline(expression, zone, fmt).next_instant(from_utc)

def previous_instant(
    expression: str,
    from_utc: datetime,
    zone: ZoneLike,
    fmt: Optional[CronFormat] = None,
) -> Optional[datetime]:
    return build_cron_timeline(expression, zone, fmt).previous_instant(from_utc)

def is_instant(
    expression: str,
    utc: datetime,
    zone: ZoneLike,
    fmt: Optional[CronFormat] = None,
) -> bool:
    return build_cron_timeline(expression, zone, fmt).is_instant(utc)

def occurrences(timeline: InstantTimeline, start: datetime, stop: datetime) -> Iterator[datetime]:
    """Yields the timeline's instants in ``[start, stop)``, ascending."""
    require_utc(start, "start")
    require_utc(stop, "stop")
    if timeline.is_instant(start):
        current: Optional[datetime] = start
    else:
        current = timeline.next_instant(start)
    while current is not None and current < stop:
        yield current
        current = timeline.next_instant(current)
