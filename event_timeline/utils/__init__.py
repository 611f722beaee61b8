"""Layout engines: viewport, range sync, segments, clustering and selection."""

from .clustering import ClusterResult, build_clusters, finalize_cluster, visible_events
from .range_selection import RangeSelectionManager
from .range_sync import EMPTY_RANGE_HALF_WIDTH_MS, compute_time_bounds, now_ms
from .segments import auto_split_times, build_segments, collect_splits
from .viewport_state import (
    SLIDER_MAX,
    SetCenter,
    SetZoom,
    SyncRange,
    ViewportSnapshot,
    ViewportState,
    transition,
)

__all__ = [
    "ClusterResult",
    "EMPTY_RANGE_HALF_WIDTH_MS",
    "RangeSelectionManager",
    "SLIDER_MAX",
    "SetCenter",
    "SetZoom",
    "SyncRange",
    "ViewportSnapshot",
    "ViewportState",
    "auto_split_times",
    "build_clusters",
    "build_segments",
    "collect_splits",
    "compute_time_bounds",
    "finalize_cluster",
    "now_ms",
    "transition",
    "visible_events",
]
