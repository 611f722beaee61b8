"""Pytest configuration for tests."""

import sys
from pathlib import Path

import pytest

# Add the project root to the path so we can import event_timeline
parent_dir = Path(__file__).parent.parent
if str(parent_dir) not in sys.path:
    sys.path.insert(0, str(parent_dir))

from event_timeline.app import FixedSurface, TimelineEngine
from event_timeline.models import TimelineConfig, TimelineEvent

# Fixed "now" for deterministic range syncs: 2023-11-14T22:13:20Z
FIXED_NOW_MS = 1_700_000_000_000.0


def make_events(*times, track_id="default"):
    """Point events with ids e0, e1, ... at the given millisecond times."""
    return [
        TimelineEvent.from_record({"id": f"e{i}", "time": t, "trackId": track_id})
        for i, t in enumerate(times)
    ]


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW_MS


@pytest.fixture
def surface() -> FixedSurface:
    return FixedSurface(width=200, height=40)


@pytest.fixture
def make_engine(surface, fixed_clock):
    """Factory building an engine on the shared surface with a fixed clock."""

    def _make(events=(), **options) -> TimelineEngine:
        config = TimelineConfig(**options) if options else None
        return TimelineEngine(surface, config=config, events=events, clock=fixed_clock)

    return _make
