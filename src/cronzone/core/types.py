from __future__ import annotations
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Optional

class CronFormat(Enum):
    STANDARD = "standard"            # minute hour dom month dow
    WITH_SECONDS = "with_seconds"    # second minute hour dom month dow

    @property
    def field_count(self) -> int:
        return 6 if self is CronFormat.WITH_SECONDS else 5

@dataclass(frozen=True)
class RepresentableRange:
    """Inclusive span of UTC instants an evaluator can compute over."""
    floor: datetime
    ceiling: datetime

    @property
    def max_year(self) -> int:
        return self.ceiling.year

    def contains(self, instant: datetime) -> bool:
        return self.floor <= instant <= self.ceiling

@dataclass(frozen=True)
class CronSpec:
    """Pure data payload for constructing a cron timeline (zone supplied separately)."""
    expression: str
    format: Optional[CronFormat] = None  # None: resolved from the field count
    description: str = ""

    @staticmethod
    def like(name: str) -> "CronSpec":
        from ..engines.specs import STANDARD_SPECS
        if name not in STANDARD_SPECS:
            raise KeyError(f"Unknown base spec '{name}'. Available: {sorted(STANDARD_SPECS)}")
        return STANDARD_SPECS[name]

    def tweak(self, **kwargs) -> "CronSpec":
        return replace(self, **kwargs)
