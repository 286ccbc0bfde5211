from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional, Protocol

from .types import CronSpec

class InstantTimeline(Protocol):
    def next_instant(self, from_utc: datetime) -> Optional[datetime]: ...
    def previous_instant(self, from_utc: datetime) -> Optional[datetime]: ...
    def is_instant(self, utc: datetime) -> bool: ...

@dataclass
class TimelineRegistry:
    _specs: Dict[str, CronSpec]

    def get(self, name: str) -> CronSpec:
        if name not in self._specs:
            raise KeyError(f"Unknown timeline '{name}'. Available: {sorted(self._specs)}")
        return self._specs[name]

    def list(self) -> List[str]:
        return sorted(self._specs.keys())

    def register(self, name: str, spec: CronSpec, *, overwrite: bool = False) -> None:
        if (not overwrite) and (name in self._specs):
            raise KeyError(f"Timeline '{name}' already exists. Use overwrite=True to replace.")
        self._specs[name] = spec
