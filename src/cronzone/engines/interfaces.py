"""
cronzone.engines.interfaces
---------------------------
Defines the boundary between the recurrence evaluator (grammar + forward
search) and the instant resolution engine built on top of it.

Standard Reference Frame:
Every instant crossing this boundary is an aware datetime tagged with
``timezone.utc`` at microsecond resolution. Wall-clock (local) times only exist
inside the evaluator, which converts them through the timezone service.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterator, Optional, Protocol
from zoneinfo import ZoneInfo

from ..core.types import CronFormat, RepresentableRange


class CronScheduleProtocol(Protocol):
    """
    A validated, immutable handle to one parsed recurrence rule.
    All searches run forward in time only.
    """
    @property
    def expression(self) -> str:
        ...

    @property
    def format(self) -> CronFormat:
        ...

    def next_occurrence(
        self,
        from_utc: datetime,
        zone: ZoneInfo,
        *,
        inclusive: bool = False,
    ) -> Optional[datetime]:
        """
        Returns the first occurrence after ``from_utc`` (or at it, when
        ``inclusive``), or None when the representable range is exhausted.
        """
        ...

    def occurrences(
        self,
        from_utc: datetime,
        to_utc: datetime,
        zone: ZoneInfo,
        *,
        from_inclusive: bool = True,
        to_inclusive: bool = False,
    ) -> Iterator[datetime]:
        """Yields the occurrences between the two bounds in ascending order."""
        ...


class RecurrenceEvaluatorProtocol(Protocol):
    """
    Parses recurrence text into schedules and reports the calendar span it can
    compute over.
    """
    @property
    def bounds(self) -> RepresentableRange:
        ...

    def parse(self, text: str, fmt: CronFormat) -> CronScheduleProtocol:
        """Raises CronParseError on malformed text."""
        ...
