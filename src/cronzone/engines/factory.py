"""
cronzone.engines.factory
------------------------
Transforms pure data specifications into live timeline objects.
"""

from __future__ import annotations

from typing import Optional

from cronzone.core.types import CronFormat, CronSpec
from cronzone.engines.cron_timeline import CronTimeline
from cronzone.engines.evaluator import CroniterEvaluator
from cronzone.engines.formats import resolve_cron_format
from cronzone.engines.interfaces import RecurrenceEvaluatorProtocol
from cronzone.engines.zones import ZoneLike, resolve_zone

DEFAULT_EVALUATOR = CroniterEvaluator()


def build_cron_timeline(
    expression: str,
    zone: ZoneLike,
    fmt: Optional[CronFormat] = None,
    evaluator: Optional[RecurrenceEvaluatorProtocol] = None,
) -> CronTimeline:
    """Parses ``expression`` once and binds it to ``zone``. Parse faults surface here."""
    evaluator = evaluator if evaluator is not None else DEFAULT_EVALUATOR
    # 1. Pick the field convention
    if fmt is None:
        fmt = resolve_cron_format(expression)
    # 2. Parse
    schedule = evaluator.parse(expression, fmt)
    # 3. Bind to the zone
    return CronTimeline(schedule, resolve_zone(zone), evaluator.bounds)


def make_timeline(
    spec: CronSpec,
    zone: ZoneLike,
    evaluator: Optional[RecurrenceEvaluatorProtocol] = None,
) -> CronTimeline:
    """The universal entry point."""
    return build_cron_timeline(spec.expression, zone, spec.format, evaluator)
