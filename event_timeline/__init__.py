"""Layout and clustering engine for pannable, zoomable event timelines."""

from .app import FixedSurface, NotificationKind, TimelineEngine
from .config_loader import load_timeline_config
from .models import (
    Cluster,
    ClusterType,
    Orientation,
    SelectionHandle,
    TimelineConfig,
    TimelineEvent,
    TimelineLayout,
    Track,
)

__all__ = [
    "Cluster",
    "ClusterType",
    "FixedSurface",
    "NotificationKind",
    "Orientation",
    "SelectionHandle",
    "TimelineConfig",
    "TimelineEngine",
    "TimelineEvent",
    "TimelineLayout",
    "Track",
    "load_timeline_config",
]
