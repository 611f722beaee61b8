"""Greedy pixel-proximity clustering of timeline events.

Events are sorted by start time and scanned once. An event joins the open
cluster when its pixel position is within ``radius_px`` of the *previous
member's* position, so a cluster may chain further than ``2 * radius_px``
across gradually drifting data.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, Optional

from event_timeline.models import Cluster, ClusterType, Interval, TimelineEvent

logger = logging.getLogger(__name__)


@dataclass
class ClusterResult:
    """Clusters in ascending start order plus bars for range clusters."""
    clusters: list[Cluster] = field(default_factory=list)
    intervals: list[Interval] = field(default_factory=list)

    @property
    def event_count(self) -> int:
        return sum(cluster.count for cluster in self.clusters)


def visible_events(events: Iterable[TimelineEvent], start: float, end: float) -> list[TimelineEvent]:
    """Events overlapping ``[start, end]``, stably sorted by start time."""
    overlapping = [e for e in events if not (e.end_time < start or e.start_time > end)]
    return sorted(overlapping, key=lambda e: e.start_time)


def finalize_cluster(
    members: list[TimelineEvent],
    scale: float,
    start: float,
    default_icon: str,
) -> Cluster:
    """Compute aggregate position, type and extent for a cluster's members."""
    count = len(members)
    center_time = sum(e.start_time for e in members) / count
    is_range = any(e.start_time != e.end_time for e in members)

    range_start: Optional[float] = None
    range_end: Optional[float] = None
    if is_range:
        range_start = (min(e.start_time for e in members) - start) * scale
        range_end = (max(e.end_time for e in members) - start) * scale

    icon = members[0].icon
    return Cluster(
        events=tuple(members),
        count=count,
        center_time=center_time,
        position=(center_time - start) * scale,
        type=ClusterType.RANGE if is_range else ClusterType.POINT,
        icon=default_icon if icon is None else icon,
        range_start=range_start,
        range_end=range_end,
    )


def build_clusters(
    events: Iterable[TimelineEvent],
    scale: float,
    start: float,
    end: float,
    radius_px: float,
    default_icon: str = "●",
) -> ClusterResult:
    """Cluster one track's events for the window ``[start, end]``.

    Args:
        events: Events of a single track
        scale: Pixels per millisecond
        start: Window start time
        end: Window end time
        radius_px: Max pixel distance to the previous member
        default_icon: Icon used when the first member has none

    Returns:
        ClusterResult; empty when the scale or window is not finite
    """
    if not (math.isfinite(scale) and math.isfinite(start) and math.isfinite(end)):
        logger.debug("Skipping clustering for non-finite scale=%r window=(%r, %r)", scale, start, end)
        return ClusterResult()

    result = ClusterResult()
    members: list[TimelineEvent] = []
    last_position = 0.0

    for event in visible_events(events, start, end):
        position = (event.start_time - start) * scale
        if members and abs(position - last_position) > radius_px:
            result.clusters.append(finalize_cluster(members, scale, start, default_icon))
            members = []
        members.append(event)
        last_position = position

    if members:
        result.clusters.append(finalize_cluster(members, scale, start, default_icon))

    result.intervals = [
        Interval(cluster.range_start, cluster.range_end)
        for cluster in result.clusters
        if cluster.type is ClusterType.RANGE
    ]
    return result
