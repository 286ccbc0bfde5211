from __future__ import annotations
from cronzone.core.timeline import TimelineRegistry
from cronzone.engines.specs import STANDARD_SPECS

def build_registry() -> TimelineRegistry:
    return TimelineRegistry(dict(STANDARD_SPECS))
