"""Data models for timeline events, configuration and layout results."""

from .data_types import (
    DEFAULT_TRACK_ID,
    Cluster,
    ClusterType,
    Interval,
    Orientation,
    RangeSelection,
    Segment,
    SelectionGeometry,
    SelectionHandle,
    TimelineEvent,
    TimelineLayout,
    Track,
    TrackLayout,
    ViewWindow,
    to_epoch_ms,
)
from .timeline_config import DAY_MS, TimelineConfig, coerce_track

__all__ = [
    "DEFAULT_TRACK_ID",
    "DAY_MS",
    "Cluster",
    "ClusterType",
    "Interval",
    "Orientation",
    "RangeSelection",
    "Segment",
    "SelectionGeometry",
    "SelectionHandle",
    "TimelineConfig",
    "TimelineEvent",
    "TimelineLayout",
    "Track",
    "TrackLayout",
    "ViewWindow",
    "coerce_track",
    "to_epoch_ms",
]
