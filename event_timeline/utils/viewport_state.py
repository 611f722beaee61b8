"""Viewport state management for zoom, pan center and time bounds."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Optional, Sequence, Union

from PySide6.QtCore import QObject, Signal

from event_timeline.models import TimelineEvent, ViewWindow

from .range_sync import compute_time_bounds

SLIDER_MAX = 1000


@dataclass(frozen=True)
class ViewportSnapshot:
    """Immutable viewport state.

    ``center_time`` stays ``None`` until the first range sync; it is never
    clamped to the data bounds, so panning may leave the data entirely.
    """
    min_time: float
    max_time: float
    zoom: float
    min_zoom: float
    max_zoom: float
    center_time: Optional[float] = None

    @property
    def full_range(self) -> float:
        return self.max_time - self.min_time

    @property
    def effective_center(self) -> float:
        if self.center_time is None:
            return (self.min_time + self.max_time) / 2
        return self.center_time

    def clamp_zoom(self, zoom: float) -> float:
        return max(self.min_zoom, min(self.max_zoom, zoom))

    def view_window(self) -> ViewWindow:
        """Visible window: ``full_range / zoom`` wide, centered on the center time."""
        view_range = self.full_range / self.zoom
        center = self.effective_center
        return ViewWindow(
            start=center - view_range / 2,
            end=center + view_range / 2,
            range=view_range,
        )

    def slider_fraction(self) -> Optional[float]:
        """Center position within the data bounds, or None when undefined."""
        total = self.full_range
        if not math.isfinite(total) or total == 0:
            return None
        return (self.effective_center - self.min_time) / total


@dataclass(frozen=True)
class SetZoom:
    zoom: float


@dataclass(frozen=True)
class SetCenter:
    time: float


@dataclass(frozen=True)
class SyncRange:
    events: Sequence[TimelineEvent]
    now: Optional[float] = None


ViewportCommand = Union[SetZoom, SetCenter, SyncRange]


def transition(state: ViewportSnapshot, command: ViewportCommand) -> ViewportSnapshot:
    """Apply a command to a snapshot and return the resulting snapshot.

    Returns the same object when the command has no effect.
    """
    if isinstance(command, SetZoom):
        zoom = state.clamp_zoom(command.zoom)
        if zoom == state.zoom:
            return state
        return replace(state, zoom=zoom)

    if isinstance(command, SetCenter):
        return replace(state, center_time=command.time)

    if isinstance(command, SyncRange):
        min_time, max_time, synthetic = compute_time_bounds(command.events, command.now)
        if synthetic:
            # Empty data always re-centers on "now"
            center = (min_time + max_time) / 2
        elif state.center_time is None:
            center = (min_time + max_time) / 2
        else:
            center = state.center_time
        return replace(state, min_time=min_time, max_time=max_time, center_time=center)

    raise TypeError(f"Unknown viewport command: {command!r}")


class ViewportState(QObject):
    """Holds the current viewport snapshot and signals effective changes.

    Signals:
        zoom_changed: Emitted with the new zoom level after a real change
        center_changed: Emitted with the new center time after every set
        bounds_changed: Emitted with (min_time, max_time) after a range sync
    """

    zoom_changed = Signal(float)
    center_changed = Signal(float)
    bounds_changed = Signal(float, float)

    def __init__(self, zoom: float = 1.0, min_zoom: float = 0.5, max_zoom: float = 6.0, parent=None):
        super().__init__(parent)
        initial = ViewportSnapshot(
            min_time=0.0,
            max_time=0.0,
            zoom=zoom,
            min_zoom=min_zoom,
            max_zoom=max_zoom,
        )
        self._snapshot = replace(initial, zoom=initial.clamp_zoom(zoom))
        self._slider_position = SLIDER_MAX // 2

    # ------------------------------------------------------------------ Properties
    @property
    def snapshot(self) -> ViewportSnapshot:
        return self._snapshot

    @property
    def zoom_level(self) -> float:
        return self._snapshot.zoom

    @property
    def center_time(self) -> Optional[float]:
        return self._snapshot.center_time

    @property
    def time_bounds(self) -> tuple[float, float]:
        return (self._snapshot.min_time, self._snapshot.max_time)

    @property
    def slider_position(self) -> int:
        """Center position on a 0..1000 scale, kept from the last defined value."""
        return self._slider_position

    # ------------------------------------------------------------------ Public API
    def view_window(self) -> ViewWindow:
        return self._snapshot.view_window()

    def set_zoom(self, zoom: float) -> bool:
        """Set the zoom level, clamped to the limits.

        Returns:
            True if the zoom actually changed
        """
        new_state = transition(self._snapshot, SetZoom(zoom))
        if new_state is self._snapshot:
            return False
        self._snapshot = new_state
        self._update_slider()
        self.zoom_changed.emit(new_state.zoom)
        return True

    def set_center_time(self, time: float):
        """Move the center of the visible window, without bounds clamping."""
        self._snapshot = transition(self._snapshot, SetCenter(time))
        self._update_slider()
        self.center_changed.emit(time)

    def sync_range(self, events: Sequence[TimelineEvent], now: Optional[float] = None):
        """Recompute data bounds from ``events``; keeps an initialized center."""
        self._snapshot = transition(self._snapshot, SyncRange(tuple(events), now))
        self._update_slider()
        self.bounds_changed.emit(self._snapshot.min_time, self._snapshot.max_time)

    def time_for_slider(self, position: float) -> float:
        """Center time corresponding to a slider position."""
        position = max(0.0, min(float(SLIDER_MAX), float(position)))
        state = self._snapshot
        return state.min_time + (position / SLIDER_MAX) * state.full_range

    def _update_slider(self):
        fraction = self._snapshot.slider_fraction()
        if fraction is None:
            return
        value = fraction * SLIDER_MAX
        self._slider_position = int(round(min(float(SLIDER_MAX), max(0.0, value))))
