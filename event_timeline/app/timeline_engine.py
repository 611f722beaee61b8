"""Timeline engine: owns the viewport and selection and recomputes layout."""

from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from PySide6.QtCore import QObject, Signal

from event_timeline.models import (
    DEFAULT_TRACK_ID,
    Cluster,
    RangeSelection,
    SelectionHandle,
    TimelineConfig,
    TimelineEvent,
    TimelineLayout,
    Track,
    TrackLayout,
    ViewWindow,
    coerce_track,
)
from event_timeline.utils import (
    RangeSelectionManager,
    ViewportState,
    build_clusters,
    build_segments,
    collect_splits,
    now_ms,
)

from .surface import is_surface, surface_extent

logger = logging.getLogger(__name__)

EventRecord = Union[TimelineEvent, Mapping[str, Any]]


class NotificationKind(Enum):
    """Notifications a host can subscribe to."""
    ZOOM = "zoom"
    MOVE = "move"
    SELECT = "select"


def _coerce_kind(kind: Union[NotificationKind, str]) -> NotificationKind:
    if isinstance(kind, NotificationKind):
        return kind
    try:
        return NotificationKind(kind)
    except ValueError:
        raise ValueError(f"Unknown notification kind: {kind!r}") from None


class TimelineEngine(QObject):
    """Lays out events on a pannable, zoomable axis.

    Every mutating call (ingestion, zoom, center, drag) recomputes the whole
    layout synchronously before it returns. The engine is not thread-safe;
    hosts must serialize calls.

    Signals:
        zoom_changed: New zoom level after an effective zoom change
        center_moved: New center time after every center change
        event_selected: Host record of an activated single-event marker
        layout_changed: TimelineLayout after every recomputation
    """

    zoom_changed = Signal(float)
    center_moved = Signal(float)
    event_selected = Signal(object)
    layout_changed = Signal(object)

    def __init__(
        self,
        surface,
        config: Optional[TimelineConfig] = None,
        events: Iterable[EventRecord] = (),
        clock: Optional[Callable[[], float]] = None,
        parent=None,
    ):
        super().__init__(parent)
        if surface is None or not is_surface(surface):
            raise ValueError("TimelineEngine requires a surface with width() and height().")

        self._surface = surface
        self._config = config or TimelineConfig()
        self._clock = clock or now_ms
        self._events: tuple[TimelineEvent, ...] = tuple(TimelineEvent.from_record(e) for e in events)
        self._tracks: tuple[Track, ...] = self._config.tracks
        self._layout: Optional[TimelineLayout] = None

        self._subscriptions: dict[NotificationKind, list[Callable]] = {kind: [] for kind in NotificationKind}
        self._selection = RangeSelectionManager()

        self._viewport = ViewportState(
            zoom=self._config.initial_zoom,
            min_zoom=self._config.min_zoom,
            max_zoom=self._config.max_zoom,
            parent=self,
        )
        self._viewport.zoom_changed.connect(self._on_zoom_changed)
        self._viewport.center_changed.connect(self._on_center_changed)

        self._sync_range()
        self.recompute()

    # ------------------------------------------------------------------ Properties
    @property
    def config(self) -> TimelineConfig:
        return self._config

    @property
    def events(self) -> tuple[TimelineEvent, ...]:
        return self._events

    @property
    def tracks(self) -> tuple[Track, ...]:
        """Configured tracks, or the implicit default track."""
        return self._tracks or (Track(DEFAULT_TRACK_ID),)

    @property
    def viewport(self) -> ViewportState:
        return self._viewport

    @property
    def zoom_level(self) -> float:
        return self._viewport.zoom_level

    @property
    def center_time(self) -> Optional[float]:
        return self._viewport.center_time

    @property
    def time_bounds(self) -> tuple[float, float]:
        return self._viewport.time_bounds

    @property
    def slider_position(self) -> int:
        return self._viewport.slider_position

    @property
    def selection(self) -> RangeSelection:
        return self._selection.selection

    @property
    def layout(self) -> TimelineLayout:
        """Layout from the most recent recomputation."""
        return self._layout

    # ------------------------------------------------------------------ Notifications
    def subscribe(self, kind: Union[NotificationKind, str], callback: Callable):
        """Register ``callback`` for a notification kind; duplicates are ignored."""
        kind = _coerce_kind(kind)
        registered = self._subscriptions[kind]
        if callback in registered:
            return
        self._signal_for(kind).connect(callback)
        registered.append(callback)

    def unsubscribe(self, kind: Union[NotificationKind, str], callback: Callable):
        """Remove a callback registered with ``subscribe``; unknown ones are ignored."""
        kind = _coerce_kind(kind)
        registered = self._subscriptions[kind]
        if callback not in registered:
            return
        self._signal_for(kind).disconnect(callback)
        registered.remove(callback)

    def destroy(self):
        """Drop every subscription made through ``subscribe``."""
        for kind, registered in self._subscriptions.items():
            signal = self._signal_for(kind)
            for callback in registered:
                signal.disconnect(callback)
            registered.clear()

    def _signal_for(self, kind: NotificationKind):
        if kind is NotificationKind.ZOOM:
            return self.zoom_changed
        if kind is NotificationKind.MOVE:
            return self.center_moved
        return self.event_selected

    # ------------------------------------------------------------------ Ingestion
    def set_events(self, records: Iterable[EventRecord]):
        """Replace all events."""
        self._events = tuple(TimelineEvent.from_record(r) for r in records)
        self._on_events_changed()

    def add_events(self, records: Iterable[EventRecord]):
        """Append events to the current set."""
        added = tuple(TimelineEvent.from_record(r) for r in records)
        self._events = self._events + added
        self._on_events_changed()

    def remove_events(self, ids: Iterable[Any]):
        """Remove every event whose id is in ``ids``."""
        id_set = set(ids)
        self._events = tuple(e for e in self._events if e.id not in id_set)
        self._on_events_changed()

    def set_tracks(self, tracks: Iterable[Union[Track, Mapping[str, Any], str]]):
        """Replace the track list used to partition events."""
        self._tracks = tuple(coerce_track(t) for t in tracks)
        self.recompute()

    def _on_events_changed(self):
        logger.debug("Event set changed: %d events", len(self._events))
        self._sync_range()
        self.recompute()

    def _sync_range(self):
        self._viewport.sync_range(self._events, now=self._clock())

    # ------------------------------------------------------------------ Viewport
    def view_window(self) -> ViewWindow:
        return self._viewport.view_window()

    def set_zoom(self, zoom: float) -> bool:
        """Set the zoom level, clamped; returns False if nothing changed."""
        return self._viewport.set_zoom(zoom)

    def set_center_time(self, time: float):
        """Center the visible window on ``time``; not clamped to the data."""
        self._viewport.set_center_time(time)

    def zoom_in(self) -> bool:
        return self.set_zoom(self.zoom_level + self._config.zoom_step)

    def zoom_out(self) -> bool:
        return self.set_zoom(self.zoom_level - self._config.zoom_step)

    def zoom_by_delta(self, delta: float) -> bool:
        """Zoom for a modified wheel gesture: positive delta zooms out, otherwise in."""
        if not math.isfinite(delta):
            return False
        step = self._config.wheel_zoom_step
        return self.set_zoom(self.zoom_level + (-step if delta > 0 else step))

    def pan_by_delta(self, delta: float):
        """Pan for a wheel/drag delta.

        A delta of ``pan_divisor`` shifts the center by one full data range.
        """
        if not math.isfinite(delta):
            logger.warning("Ignoring non-finite pan delta %r", delta)
            return
        snapshot = self._viewport.snapshot
        shift = (delta / self._config.pan_divisor) * snapshot.full_range
        self.set_center_time(snapshot.effective_center + shift)

    def set_slider_position(self, position: float):
        """Center on the time at ``position`` of a 0..1000 slider."""
        self.set_center_time(self._viewport.time_for_slider(position))

    def _on_zoom_changed(self, zoom: float):
        self.recompute()
        self.zoom_changed.emit(zoom)

    def _on_center_changed(self, time: float):
        self.recompute()
        self.center_moved.emit(time)

    # ------------------------------------------------------------------ Interaction
    def activate_cluster(self, cluster: Cluster):
        """Handle a click on a marker.

        Aggregates zoom in one step and re-center on their mean time;
        single-event markers publish their host record.
        """
        if cluster.is_aggregate:
            self.set_zoom(self.zoom_level + self._config.zoom_step)
            self.set_center_time(cluster.center_time)
            return
        self.event_selected.emit(cluster.events[0].record)

    def drag_selection_handle(
        self,
        handle: Union[SelectionHandle, str],
        offset_px: float,
    ) -> Optional[RangeSelection]:
        """Move a selection handle to a surface-relative pixel offset.

        Returns:
            The updated selection, or None if the drag was ignored
        """
        if not self._config.range_selection:
            logger.warning("Ignoring selection drag: range selection is disabled")
            return None

        window = self.view_window()
        scale = self._scale_for(window)
        if scale is None:
            logger.debug("Ignoring selection drag: no usable scale for window %s", window)
            return None

        selection = self._selection.drag(handle, offset_px, window, scale)
        if selection is not None:
            self.recompute()
        return selection

    # ------------------------------------------------------------------ Layout
    def recompute(self) -> TimelineLayout:
        """Recompute segments, clusters and selection from the latest state."""
        self._layout = self.compute_layout()
        self.layout_changed.emit(self._layout)
        return self._layout

    def compute_layout(self) -> TimelineLayout:
        """Build a layout for the current state without storing it."""
        config = self._config
        window = self.view_window()
        extent = surface_extent(self._surface, config.orientation)
        scale = self._scale_for(window, extent)

        if scale is None:
            logger.debug("No layout possible for window %s on extent %r", window, extent)
            return TimelineLayout(
                orientation=config.orientation,
                window=window,
                scale=0.0,
                extent=extent,
                tracks=tuple(TrackLayout(track) for track in self.tracks),
            )

        splits = collect_splits(
            self._events,
            config.manual_splits,
            config.enable_auto_splits,
            config.split_threshold_ms,
        )
        segments = build_segments(window.start, window.end, splits)

        track_layouts = []
        for track in self.tracks:
            track_events = [e for e in self._events if e.track_id == track.id]
            result = build_clusters(
                track_events,
                scale,
                window.start,
                window.end,
                config.cluster_radius_px,
                config.default_icon,
            )
            clusters = tuple(self._customize(cluster, track) for cluster in result.clusters)
            track_layouts.append(TrackLayout(track, clusters, tuple(result.intervals)))

        selection = None
        if config.range_selection:
            self._selection.ensure_initialized(window)
            selection = self._selection.geometry(window, scale)

        return TimelineLayout(
            orientation=config.orientation,
            window=window,
            scale=scale,
            extent=extent,
            segments=tuple(segments),
            tracks=tuple(track_layouts),
            selection=selection,
        )

    def _scale_for(self, window: ViewWindow, extent: Optional[float] = None) -> Optional[float]:
        """Pixels per millisecond, or None when the mapping is degenerate."""
        if extent is None:
            extent = surface_extent(self._surface, self._config.orientation)
        if not (math.isfinite(window.range) and window.range > 0):
            return None
        if not (math.isfinite(extent) and extent > 0):
            return None
        scale = extent / window.range
        if not (math.isfinite(scale) and scale > 0):
            return None
        return scale

    def _customize(self, cluster: Cluster, track: Track) -> Cluster:
        hook = self._config.on_cluster_render
        if hook is None:
            return cluster
        replacement = hook(cluster, track)
        return cluster if replacement is None else replacement
