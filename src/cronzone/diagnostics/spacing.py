from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, List, Optional

from ..core.time import require_utc
from ..engines.cron_timeline import WINDOW_FACTOR, CronTimeline


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "cronzone[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "cronzone[diagnostics]"') from e


@dataclass(frozen=True)
class SpacingReport:
    expression: str
    zone: str
    count: int
    min_seconds: float
    max_seconds: float
    mean_seconds: float
    cadence: Optional[timedelta]
    # gaps wider than one backward search window, i.e. extra windows needed
    wide_gaps: int


def collect_instants(timeline: CronTimeline, start: datetime, count: int) -> List[datetime]:
    """Up to ``count`` successive occurrences strictly after ``start``."""
    require_utc(start, "start")
    out: List[datetime] = []
    current = start
    while len(out) < count:
        nxt = timeline.next_instant(current)
        if nxt is None:
            break
        out.append(nxt)
        current = nxt
    return out


def occurrence_spacing(timeline: CronTimeline, start: datetime, count: int) -> Any:
    """Seconds between successive occurrences after ``start`` (numpy array, ``count - 1`` long at most)."""
    np = _need_numpy()
    instants = collect_instants(timeline, start, count)
    if len(instants) < 2:
        return np.zeros(0, dtype=float)
    deltas = [(b - a).total_seconds() for a, b in zip(instants, instants[1:])]
    return np.array(deltas, dtype=float)


def spacing_report(timeline: CronTimeline, start: datetime, count: int) -> SpacingReport:
    np = _need_numpy()
    spacing = occurrence_spacing(timeline, start, count)
    if spacing.size == 0:
        raise ValueError(f"Need at least two occurrences of {timeline.expression!r} after {start}")

    cadence = timeline.cadence
    if cadence is None:
        wide = 0
    else:
        window = cadence.total_seconds() * WINDOW_FACTOR
        wide = int(np.count_nonzero(spacing > window))

    return SpacingReport(
        expression=timeline.expression,
        zone=timeline.zone.key,
        count=int(spacing.size) + 1,
        min_seconds=float(spacing.min()),
        max_seconds=float(spacing.max()),
        mean_seconds=float(spacing.mean()),
        cadence=cadence,
        wide_gaps=wide,
    )


def plot_spacing(
    timeline: CronTimeline,
    start: datetime,
    count: int,
    *,
    out: Optional[str] = None,
    title: Optional[str] = None,
):
    """
    Step plot of the spacing series, with the cadence estimate and the backward
    search window drawn as reference lines. Saves to ``out`` when given.
    """
    np = _need_numpy()
    plt = _need_matplotlib()

    spacing = occurrence_spacing(timeline, start, count)
    x = np.arange(1, spacing.size + 1)

    fig, ax = plt.subplots(figsize=(12, 3.6))
    ax.step(x, spacing, where="mid", color="0.15", lw=1.2, label="spacing")

    if timeline.cadence is not None:
        cad = timeline.cadence.total_seconds()
        ax.axhline(cad, color="tab:blue", lw=0.8, ls="--", label="cadence estimate")
        ax.axhline(cad * WINDOW_FACTOR, color="tab:red", lw=0.8, ls=":", label="search window")

    ax.set_xlabel("occurrence index")
    ax.set_ylabel("seconds to next occurrence")
    ax.set_title(title or f"{timeline.expression} ({timeline.zone.key})")
    ax.legend(loc="upper right", frameon=False)
    fig.tight_layout()

    if out:
        fig.savefig(out, dpi=150)
    return fig
