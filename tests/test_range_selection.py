"""Tests for the draggable range selection."""

from __future__ import annotations

import math

import pytest

from event_timeline.models import SelectionHandle, ViewWindow
from event_timeline.utils import RangeSelectionManager


@pytest.fixture
def window() -> ViewWindow:
    return ViewWindow(start=100.0, end=200.0, range=100.0)


@pytest.fixture
def manager() -> RangeSelectionManager:
    return RangeSelectionManager()


class TestRangeSelectionManager:

    def test_starts_uninitialized(self, manager: RangeSelectionManager, window: ViewWindow):
        assert not manager.selection.is_initialized
        assert manager.geometry(window, 2.0) is None

    def test_initializes_from_current_window(self, manager: RangeSelectionManager, window: ViewWindow):
        selection = manager.ensure_initialized(window)
        assert selection.start == pytest.approx(125.0)
        assert selection.end == pytest.approx(160.0)

    def test_initialization_happens_once(self, manager: RangeSelectionManager, window: ViewWindow):
        manager.ensure_initialized(window)
        moved = ViewWindow(start=1000.0, end=2000.0, range=1000.0)
        assert manager.ensure_initialized(moved).start == pytest.approx(125.0)

    def test_drag_converts_pixels_to_time(self, manager: RangeSelectionManager, window: ViewWindow):
        selection = manager.drag(SelectionHandle.START, 50.0, window, scale=2.0)
        assert selection.start == pytest.approx(125.0)
        assert selection.end == pytest.approx(160.0)

        selection = manager.drag("end", 180.0, window, scale=2.0)
        assert selection.end == pytest.approx(190.0)

    @pytest.mark.parametrize("offset, expected", [(-400.0, 100.0), (10_000.0, 200.0)])
    def test_drag_clamps_to_window(self, manager: RangeSelectionManager, window: ViewWindow, offset, expected):
        selection = manager.drag(SelectionHandle.END, offset, window, scale=2.0)
        assert selection.end == expected
        assert window.start <= selection.start <= window.end

    def test_handles_may_cross(self, manager: RangeSelectionManager, window: ViewWindow):
        manager.drag(SelectionHandle.START, 180.0, window, scale=2.0)
        manager.drag(SelectionHandle.END, 20.0, window, scale=2.0)

        selection = manager.selection
        assert selection.start > selection.end

        geometry = manager.geometry(window, 2.0)
        assert geometry.start_handle == pytest.approx(180.0)
        assert geometry.end_handle == pytest.approx(20.0)
        assert geometry.bar_start == pytest.approx(20.0)
        assert geometry.bar_end == pytest.approx(180.0)
        assert geometry.bar_length == pytest.approx(160.0)

    def test_drag_clamps_stale_other_bound(self, manager: RangeSelectionManager, window: ViewWindow):
        manager.ensure_initialized(ViewWindow(start=0.0, end=100.0, range=100.0))

        selection = manager.drag(SelectionHandle.END, 150.0, window, scale=2.0)

        assert selection.end == pytest.approx(175.0)
        assert selection.start == window.start

    @pytest.mark.parametrize("scale", [0.0, -1.0, math.inf, math.nan])
    def test_unusable_scale_ignored(self, manager: RangeSelectionManager, window: ViewWindow, scale):
        assert manager.drag(SelectionHandle.START, 10.0, window, scale) is None
        assert not manager.selection.is_initialized

    def test_unknown_handle_rejected(self, manager: RangeSelectionManager, window: ViewWindow):
        with pytest.raises(ValueError, match="Unknown selection handle"):
            manager.drag("middle", 10.0, window, scale=1.0)

    def test_reset(self, manager: RangeSelectionManager, window: ViewWindow):
        manager.ensure_initialized(window)
        manager.reset()
        assert not manager.selection.is_initialized
