"""Draggable time-range selection over the visible window."""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Optional, Union

from event_timeline.models import RangeSelection, SelectionGeometry, SelectionHandle, ViewWindow

# Fractions of the visible window used for a fresh selection
INITIAL_START_FRACTION = 0.25
INITIAL_END_FRACTION = 0.60


def _clamp(time: float, window: ViewWindow) -> float:
    return max(window.start, min(window.end, time))


def _coerce_handle(handle: Union[SelectionHandle, str]) -> SelectionHandle:
    if isinstance(handle, SelectionHandle):
        return handle
    try:
        return SelectionHandle(handle)
    except ValueError:
        raise ValueError(f"Unknown selection handle: {handle!r}") from None


class RangeSelectionManager:
    """Keeps the selection times and converts handle drags into them.

    The two handles are independent, so the stored start may end up after
    the stored end; geometry always spans min..max of the pair.
    """

    def __init__(self):
        self._selection = RangeSelection()

    @property
    def selection(self) -> RangeSelection:
        return self._selection

    def reset(self):
        self._selection = RangeSelection()

    def ensure_initialized(self, window: ViewWindow) -> RangeSelection:
        """Seed the selection at 25%..60% of ``window`` if not yet set."""
        if not self._selection.is_initialized:
            self._selection = RangeSelection(
                start=window.start + window.range * INITIAL_START_FRACTION,
                end=window.start + window.range * INITIAL_END_FRACTION,
            )
        return self._selection

    def drag(
        self,
        handle: Union[SelectionHandle, str],
        offset_px: float,
        window: ViewWindow,
        scale: float,
    ) -> Optional[RangeSelection]:
        """Move ``handle`` to a surface-relative pixel offset.

        The resulting time is clamped to the window, and so is the other
        handle, which may lie outside it after a pan or zoom. Returns the
        new selection, or None if the scale cannot be inverted.
        """
        handle = _coerce_handle(handle)
        if not math.isfinite(scale) or scale <= 0:
            return None
        time = window.start + offset_px / scale
        if not math.isfinite(time):
            return None

        selection = replace(self.ensure_initialized(window), **{handle.value: time})
        self._selection = RangeSelection(
            start=_clamp(selection.start, window),
            end=_clamp(selection.end, window),
        )
        return self._selection

    def geometry(self, window: ViewWindow, scale: float) -> Optional[SelectionGeometry]:
        """Pixel geometry for the current selection, or None if unset."""
        selection = self._selection
        if not selection.is_initialized or not math.isfinite(scale):
            return None
        return SelectionGeometry(
            start_time=selection.start,
            end_time=selection.end,
            start_handle=(selection.start - window.start) * scale,
            end_handle=(selection.end - window.start) * scale,
        )
