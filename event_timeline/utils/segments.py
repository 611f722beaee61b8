"""Axis partitioning into drawable line segments."""

from __future__ import annotations

import math
from typing import Iterable

from event_timeline.models import Segment, TimelineEvent


def auto_split_times(events: Iterable[TimelineEvent], threshold_ms: float) -> list[float]:
    """Midpoints of consecutive start-time gaps wider than ``threshold_ms``."""
    starts = sorted(event.start_time for event in events)
    splits = []
    for previous, current in zip(starts, starts[1:]):
        gap = current - previous
        if gap > threshold_ms:
            splits.append(previous + gap / 2)
    return splits


def collect_splits(
    events: Iterable[TimelineEvent],
    manual_splits: Iterable[float] = (),
    enable_auto_splits: bool = False,
    threshold_ms: float = math.inf,
) -> set[float]:
    """Union of manual split times and, if enabled, automatic ones."""
    splits = set(manual_splits)
    if enable_auto_splits:
        splits.update(auto_split_times(events, threshold_ms))
    return splits


def build_segments(start: float, end: float, splits: Iterable[float]) -> list[Segment]:
    """Partition the window ``[start, end)`` at the given split times.

    Segments are expressed as fractions of the window and cover ``[0, 1]``
    without gaps. Splits outside the open window are ignored.

    A window without positive finite width cannot be normalized, so it has
    no drawable segments at all (not a single full-width one); callers
    treat that as "nothing to lay out".
    """
    width = end - start
    if not math.isfinite(width) or width <= 0:
        return []

    inside = sorted(t for t in splits if start < t < end)

    segments = []
    boundary = 0.0
    for split in inside:
        fraction = (split - start) / width
        segments.append(Segment(boundary, fraction))
        boundary = fraction
    segments.append(Segment(boundary, 1.0))
    return segments
