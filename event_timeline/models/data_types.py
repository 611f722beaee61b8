"""Core data types for timeline events and computed layout."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping, Optional, Union

DEFAULT_TRACK_ID = "default"

TimeValue = Union[int, float, datetime]


def to_epoch_ms(value: TimeValue) -> float:
    """Convert a time value to milliseconds since the epoch.

    Naive datetimes are interpreted as UTC.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.timestamp() * 1000.0
    if isinstance(value, bool):
        raise ValueError(f"Invalid time value: {value!r}")
    return float(value)


class Orientation(Enum):
    """Axis along which the timeline is laid out."""
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class ClusterType(Enum):
    """Whether a cluster covers an interval or only points in time."""
    POINT = "point"
    RANGE = "range"


class SelectionHandle(Enum):
    """The two independently draggable range-selection handles."""
    START = "start"
    END = "end"


@dataclass(frozen=True)
class TimelineEvent:
    """A normalized, immutable timeline event."""
    id: Any
    start_time: float
    end_time: float
    track_id: str = DEFAULT_TRACK_ID
    icon: Optional[str] = None
    record: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def is_range(self) -> bool:
        return self.start_time != self.end_time

    @classmethod
    def from_record(cls, record: Union["TimelineEvent", Mapping[str, Any]]) -> "TimelineEvent":
        """Build an event from a host record.

        ``start`` takes precedence over ``time``; a missing ``end`` equals the
        start. Inverted intervals are swapped.
        """
        if isinstance(record, TimelineEvent):
            return record
        if not isinstance(record, Mapping):
            raise ValueError(f"Event record must be a mapping, got {type(record).__name__}")
        if record.get("id") is None:
            raise ValueError(f"Event record is missing an id: {record!r}")

        raw_start = record.get("start")
        if raw_start is None:
            raw_start = record.get("time")
        if raw_start is None:
            raise ValueError(f"Event {record['id']!r} has neither 'time' nor 'start'")

        start_time = to_epoch_ms(raw_start)
        raw_end = record.get("end")
        end_time = start_time if raw_end is None else to_epoch_ms(raw_end)
        if end_time < start_time:
            start_time, end_time = end_time, start_time

        track_id = record.get("trackId", record.get("track_id"))
        return cls(
            id=record["id"],
            start_time=start_time,
            end_time=end_time,
            track_id=DEFAULT_TRACK_ID if track_id is None else str(track_id),
            icon=record.get("icon"),
            record=dict(record),
        )


@dataclass(frozen=True)
class Track:
    """A layout partition for events; order follows the configured list."""
    id: str
    label: str = ""


@dataclass(frozen=True)
class ViewWindow:
    """The time interval currently mapped onto the drawable surface."""
    start: float
    end: float
    range: float

    def contains(self, time: float) -> bool:
        return self.start <= time <= self.end


@dataclass(frozen=True)
class Segment:
    """One drawable stretch of the axis as fractions of the window."""
    start: float
    end: float

    @property
    def length(self) -> float:
        return self.end - self.start


@dataclass(frozen=True)
class Interval:
    """Pixel interval for drawing a range-type cluster bar."""
    start: float
    end: float


@dataclass(frozen=True)
class Cluster:
    """A marker aggregating one or more nearby events."""
    events: tuple[TimelineEvent, ...]
    count: int
    center_time: float
    position: float
    type: ClusterType
    icon: str
    range_start: Optional[float] = None
    range_end: Optional[float] = None

    @property
    def is_aggregate(self) -> bool:
        """Aggregates render with a count badge instead of an icon."""
        return self.count > 1

    @property
    def label(self) -> str:
        return str(self.count) if self.is_aggregate else self.icon


@dataclass(frozen=True)
class RangeSelection:
    """Stored selection times; either bound may be unset until first layout."""
    start: Optional[float] = None
    end: Optional[float] = None

    @property
    def is_initialized(self) -> bool:
        return self.start is not None and self.end is not None

    def get(self, handle: SelectionHandle) -> Optional[float]:
        return self.start if handle is SelectionHandle.START else self.end


@dataclass(frozen=True)
class SelectionGeometry:
    """Pixel geometry of the selection bar and its handles."""
    start_time: float
    end_time: float
    start_handle: float
    end_handle: float

    @property
    def bar_start(self) -> float:
        return min(self.start_handle, self.end_handle)

    @property
    def bar_end(self) -> float:
        return max(self.start_handle, self.end_handle)

    @property
    def bar_length(self) -> float:
        return self.bar_end - self.bar_start


@dataclass(frozen=True)
class TrackLayout:
    """Clusters and interval bars computed for one track."""
    track: Track
    clusters: tuple[Cluster, ...] = ()
    intervals: tuple[Interval, ...] = ()

    @property
    def event_count(self) -> int:
        return sum(cluster.count for cluster in self.clusters)


@dataclass(frozen=True)
class TimelineLayout:
    """Renderer-agnostic result of one layout pass."""
    orientation: Orientation
    window: ViewWindow
    scale: float
    extent: float
    segments: tuple[Segment, ...] = ()
    tracks: tuple[TrackLayout, ...] = ()
    selection: Optional[SelectionGeometry] = None

    @property
    def is_empty(self) -> bool:
        """True when nothing could be laid out for this pass."""
        return not self.segments

    def track_layout(self, track_id: str) -> Optional[TrackLayout]:
        for track_layout in self.tracks:
            if track_layout.track.id == track_id:
                return track_layout
        return None
