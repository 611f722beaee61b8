"""Timeline engine configuration."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Callable, Mapping, Optional

from .data_types import Cluster, Orientation, Track, to_epoch_ms

DAY_MS = 1000 * 60 * 60 * 24

# Original option names accepted alongside the snake_case field names
_OPTION_ALIASES = {
    "minZoom": "min_zoom",
    "maxZoom": "max_zoom",
    "clusterRadiusPx": "cluster_radius_px",
    "enableAutoSplits": "enable_auto_splits",
    "manualSplits": "manual_splits",
    "splitThresholdMs": "split_threshold_ms",
    "defaultIcon": "default_icon",
    "rangeSelection": "range_selection",
    "zoomStep": "zoom_step",
    "wheelZoomStep": "wheel_zoom_step",
    "panDivisor": "pan_divisor",
    "onEventRender": "on_cluster_render",
    "onClusterRender": "on_cluster_render",
}

ClusterRenderHook = Callable[[Cluster, Track], Optional[Cluster]]


@dataclass(frozen=True)
class TimelineConfig:
    """Options controlling viewport limits, clustering and splitting.

    Attributes:
        orientation: Axis used for surface extent and output mapping
        min_zoom: Lowest allowed zoom level (most zoomed out)
        max_zoom: Highest allowed zoom level (most zoomed in)
        zoom: Initial zoom level
        cluster_radius_px: Max pixel gap between consecutive cluster members
        enable_auto_splits: Split the axis across large gaps between events
        manual_splits: Times (ms or datetime) at which the axis is always split
        split_threshold_ms: Gap above which an automatic split is inserted
        tracks: Track partitions; empty means one implicit default track
        default_icon: Icon for events that carry none
        range_selection: Enable the draggable range selection
        zoom_step: Zoom increment for buttons and aggregate-marker clicks
        wheel_zoom_step: Zoom increment for a modified wheel gesture
        pan_divisor: Wheel delta that pans by one full data range
        on_cluster_render: Hook receiving (cluster, track), may return a replacement
    """
    orientation: Orientation = Orientation.HORIZONTAL
    min_zoom: float = 0.5
    max_zoom: float = 6.0
    zoom: float = 1.0
    cluster_radius_px: float = 24.0
    enable_auto_splits: bool = False
    manual_splits: tuple[float, ...] = ()
    split_threshold_ms: float = 30 * DAY_MS
    tracks: tuple[Track, ...] = ()
    default_icon: str = "●"
    range_selection: bool = False
    zoom_step: float = 0.5
    wheel_zoom_step: float = 0.2
    pan_divisor: float = 500.0
    on_cluster_render: Optional[ClusterRenderHook] = field(default=None, compare=False)

    def __post_init__(self):
        if not isinstance(self.orientation, Orientation):
            try:
                object.__setattr__(self, "orientation", Orientation(self.orientation))
            except ValueError:
                raise ValueError(f"Unknown orientation: {self.orientation!r}") from None

        object.__setattr__(self, "manual_splits", tuple(to_epoch_ms(t) for t in (self.manual_splits or ())))
        object.__setattr__(self, "tracks", tuple(coerce_track(t) for t in (self.tracks or ())))

        if self.min_zoom <= 0:
            raise ValueError("min_zoom must be positive")
        if self.min_zoom > self.max_zoom:
            raise ValueError("min_zoom must not exceed max_zoom")
        if self.cluster_radius_px < 0:
            raise ValueError("cluster_radius_px must not be negative")
        if self.pan_divisor <= 0:
            raise ValueError("pan_divisor must be positive")

    @property
    def initial_zoom(self) -> float:
        """Configured zoom clamped to the allowed range."""
        return max(self.min_zoom, min(self.max_zoom, self.zoom))

    @classmethod
    def from_dict(cls, options: Mapping[str, Any]) -> "TimelineConfig":
        """Build a config from a mapping of option names.

        Unknown keys raise ``ValueError`` so typos do not pass silently.
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in options.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in known:
                raise ValueError(f"Unknown timeline option: {key}")
            kwargs[name] = value
        return cls(**kwargs)


def coerce_track(track: Any) -> Track:
    if isinstance(track, Track):
        return track
    if isinstance(track, Mapping):
        if track.get("id") is None:
            raise ValueError(f"Track is missing an id: {track!r}")
        return Track(id=str(track["id"]), label=str(track.get("label") or ""))
    return Track(id=str(track))
