"""Derive the data time bounds from the current event set."""

from __future__ import annotations

import time
from typing import Iterable, Optional

from event_timeline.models import DAY_MS, TimelineEvent

# Half-width of the window shown when there are no events
EMPTY_RANGE_HALF_WIDTH_MS = 7 * DAY_MS


def now_ms() -> float:
    """Current wall-clock time in milliseconds since the epoch."""
    return time.time() * 1000.0


def compute_time_bounds(
    events: Iterable[TimelineEvent],
    now: Optional[float] = None,
) -> tuple[float, float, bool]:
    """Compute ``(min_time, max_time, synthetic)`` for an event set.

    An empty set yields a window of one week either side of ``now``
    and ``synthetic=True``.
    """
    min_time: Optional[float] = None
    max_time: Optional[float] = None
    for event in events:
        low = min(event.start_time, event.end_time)
        high = max(event.start_time, event.end_time)
        min_time = low if min_time is None else min(min_time, low)
        max_time = high if max_time is None else max(max_time, high)

    if min_time is None or max_time is None:
        if now is None:
            now = now_ms()
        return now - EMPTY_RANGE_HALF_WIDTH_MS, now + EMPTY_RANGE_HALF_WIDTH_MS, True
    return min_time, max_time, False
