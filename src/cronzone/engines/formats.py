from __future__ import annotations
from typing import Optional

from ..core.types import CronFormat


def resolve_cron_format(expression: Optional[str]) -> CronFormat:
    """
    Pick the field convention from the token count: six whitespace-separated
    tokens read as seconds-first, anything else as the standard five fields.

    This is a heuristic, not a grammar check; malformed text is rejected when
    the evaluator parses it.
    """
    if expression and len(expression.split()) == CronFormat.WITH_SECONDS.field_count:
        return CronFormat.WITH_SECONDS
    return CronFormat.STANDARD
