"""cronzone public API.

Keep this surface small: users should mostly interact with functions re-exported here.
Logging goes through loguru and is disabled for this package until the
application calls ``logger.enable("cronzone")``.
"""

from loguru import logger

# Initialize registry on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    list_timelines,
    timeline_spec,
    register_timeline,
    get_timeline,
    make_timeline,
    next_instant,
    previous_instant,
    is_instant,
    occurrences,
)
from .core.errors import (
    CronzoneError,
    CronParseError,
    NotUtcError,
    NoInstantError,
    UnknownZoneError,
)
from .core.types import CronFormat, CronSpec, RepresentableRange
from .engines.cron_timeline import CronTimeline
from .engines.evaluator import CroniterEvaluator
from .engines.factory import build_cron_timeline

logger.disable("cronzone")

__all__ = [
    "list_timelines",
    "timeline_spec",
    "register_timeline",
    "get_timeline",
    "make_timeline",
    "next_instant",
    "previous_instant",
    "is_instant",
    "occurrences",
    "build_cron_timeline",
    "CronTimeline",
    "CroniterEvaluator",
    "CronFormat",
    "CronSpec",
    "RepresentableRange",
    "CronzoneError",
    "CronParseError",
    "NotUtcError",
    "NoInstantError",
    "UnknownZoneError",
]
