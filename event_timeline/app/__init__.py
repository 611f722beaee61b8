"""Engine facade and host surface adaptors."""

from .surface import FixedSurface, is_surface, surface_extent
from .timeline_engine import NotificationKind, TimelineEngine

__all__ = [
    "FixedSurface",
    "NotificationKind",
    "TimelineEngine",
    "is_surface",
    "surface_extent",
]
