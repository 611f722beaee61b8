"""Tests for event normalization and configuration models."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from event_timeline.models import (
    DEFAULT_TRACK_ID,
    Orientation,
    TimelineConfig,
    TimelineEvent,
    Track,
)


class TestTimelineEvent:

    def test_point_event(self):
        event = TimelineEvent.from_record({"id": 1, "time": 42})
        assert (event.start_time, event.end_time) == (42.0, 42.0)
        assert event.track_id == DEFAULT_TRACK_ID
        assert not event.is_range

    def test_start_without_end(self):
        event = TimelineEvent.from_record({"id": 1, "start": 10})
        assert (event.start_time, event.end_time) == (10.0, 10.0)

    def test_start_takes_precedence_over_time(self):
        event = TimelineEvent.from_record({"id": 1, "time": 99, "start": 10, "end": 20})
        assert (event.start_time, event.end_time) == (10.0, 20.0)
        assert event.is_range

    def test_inverted_interval_is_swapped(self):
        event = TimelineEvent.from_record({"id": 1, "start": 30, "end": 10})
        assert (event.start_time, event.end_time) == (10.0, 30.0)

    def test_datetimes_become_epoch_ms(self):
        moment = datetime(2024, 1, 1, tzinfo=timezone.utc)
        event = TimelineEvent.from_record({"id": 1, "time": moment})
        assert event.start_time == moment.timestamp() * 1000

    def test_naive_datetime_treated_as_utc(self):
        naive = TimelineEvent.from_record({"id": 1, "time": datetime(2024, 1, 1)})
        aware = TimelineEvent.from_record({"id": 1, "time": datetime(2024, 1, 1, tzinfo=timezone.utc)})
        assert naive.start_time == aware.start_time

    def test_record_and_track_preserved(self):
        record = {"id": "x", "time": 1, "trackId": "net", "icon": "!", "extra": {"k": 1}}
        event = TimelineEvent.from_record(record)
        assert event.track_id == "net"
        assert event.icon == "!"
        assert event.record == record

    @pytest.mark.parametrize("record, message", [
        ({"time": 1}, "missing an id"),
        ({"id": 1}, "neither"),
        ({"id": 1, "time": True}, "Invalid time value"),
        ("not a mapping", "must be a mapping"),
    ])
    def test_invalid_records(self, record, message):
        with pytest.raises(ValueError, match=message):
            TimelineEvent.from_record(record)

    def test_instances_pass_through(self):
        event = TimelineEvent(id=1, start_time=1.0, end_time=2.0)
        assert TimelineEvent.from_record(event) is event


class TestTimelineConfig:

    def test_defaults(self):
        config = TimelineConfig()
        assert config.orientation is Orientation.HORIZONTAL
        assert (config.min_zoom, config.max_zoom, config.zoom) == (0.5, 6.0, 1.0)
        assert config.cluster_radius_px == 24.0
        assert config.split_threshold_ms == 1000 * 60 * 60 * 24 * 30
        assert config.default_icon == "●"
        assert not config.range_selection

    def test_from_dict_accepts_original_option_names(self):
        config = TimelineConfig.from_dict({
            "orientation": "vertical",
            "minZoom": 1,
            "maxZoom": 4,
            "clusterRadiusPx": 10,
            "enableAutoSplits": True,
            "manualSplits": [5, 1],
            "tracks": [{"id": "a", "label": "Alpha"}, "b"],
            "rangeSelection": True,
        })
        assert config.orientation is Orientation.VERTICAL
        assert (config.min_zoom, config.max_zoom) == (1, 4)
        assert config.cluster_radius_px == 10
        assert config.enable_auto_splits
        assert config.manual_splits == (5.0, 1.0)
        assert config.tracks == (Track("a", "Alpha"), Track("b"))
        assert config.range_selection

    def test_manual_splits_accept_datetimes(self):
        moment = datetime(2024, 1, 1, tzinfo=timezone.utc)
        config = TimelineConfig(manual_splits=[moment, 5])
        assert config.manual_splits == (moment.timestamp() * 1000, 5.0)

    def test_unknown_option_rejected(self):
        with pytest.raises(ValueError, match="Unknown timeline option"):
            TimelineConfig.from_dict({"clusterRadius": 3})

    @pytest.mark.parametrize("options", [
        {"min_zoom": 0},
        {"min_zoom": 3, "max_zoom": 2},
        {"cluster_radius_px": -1},
        {"pan_divisor": 0},
        {"orientation": "diagonal"},
        {"tracks": [{"label": "no id"}]},
    ])
    def test_invalid_options(self, options):
        with pytest.raises(ValueError):
            TimelineConfig(**options)

    def test_initial_zoom_clamped(self):
        assert TimelineConfig(zoom=100).initial_zoom == 6.0
        assert TimelineConfig(zoom=0.1).initial_zoom == 0.5
