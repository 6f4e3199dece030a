"""Conversion of span forests to the speedscope file format."""

from enum import Enum
from typing import Iterable, Literal, TextIO

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..models import Span
from ..profiler import get_profiler

JSON_SCHEMA_URL = "https://www.speedscope.app/file-format-schema.json"


class ValueUnit(str, Enum):
    """Unit of the at/startValue/endValue fields."""

    BYTES = "bytes"
    MICROSECONDS = "microseconds"
    MILLISECONDS = "milliseconds"
    NANOSECONDS = "nanoseconds"
    NONE = "none"
    SECONDS = "seconds"


class EventType(str, Enum):
    """Evented profile event kinds."""

    OPEN_FRAME = "O"
    CLOSE_FRAME = "C"


class SpeedscopeFrame(BaseModel):
    """Entry of the shared frame table."""

    name: str
    file: str | None = None
    line: int | None = None
    col: int | None = None


class SpeedscopeEvent(BaseModel):
    """Open or close of a frame at a point in time."""

    type: EventType
    at: int
    frame: int


class EventedProfile(BaseModel):
    """One evented profile; flamespan emits one per top-level span."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    type: Literal["evented"] = "evented"
    name: str
    unit: ValueUnit = ValueUnit.NANOSECONDS
    start_value: int
    end_value: int
    events: list[SpeedscopeEvent] = []


class Shared(BaseModel):
    frames: list[SpeedscopeFrame] = []


class SpeedscopeFile(BaseModel):
    """Top-level speedscope document."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    schema_url: str = Field(default=JSON_SCHEMA_URL, alias="$schema")
    profiles: list[EventedProfile] = []
    shared: Shared = Field(default_factory=Shared)
    active_profile_index: int | None = None
    exporter: str | None = None
    name: str | None = None

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


class _FrameTable:
    """Frames interned by name in first-seen order."""

    def __init__(self):
        self._index: dict[str, int] = {}
        self.frames: list[SpeedscopeFrame] = []

    def intern(self, name: str) -> int:
        index = self._index.get(name)
        if index is None:
            index = len(self.frames)
            self._index[name] = index
            self.frames.append(SpeedscopeFrame(name=name))
        return index


def _span_events(span: Span, frames: _FrameTable) -> list[SpeedscopeEvent]:
    """Pre-order open/close events for span and its subtree."""
    events: list[SpeedscopeEvent] = []
    # Spans still to open, interleaved with the close events owed to their parents
    pending: list[Span | SpeedscopeEvent] = [span]
    while pending:
        item = pending.pop()
        if isinstance(item, SpeedscopeEvent):
            events.append(item)
            continue

        frame = frames.intern(item.name)
        events.append(SpeedscopeEvent(type=EventType.OPEN_FRAME, at=item.start_ns, frame=frame))
        pending.append(SpeedscopeEvent(type=EventType.CLOSE_FRAME, at=item.end_ns, frame=frame))
        pending.extend(reversed(item.children))
    return events


def spans_to_speedscope(
    spans: Iterable[Span],
    name: str | None = None,
    exporter: str | None = None,
) -> SpeedscopeFile:
    """
    Convert a span forest to a speedscope document.

    Every top-level span becomes its own evented profile bounded by its
    start_ns and end_ns. Frame names are shared across profiles.
    """
    frames = _FrameTable()
    profiles = [
        EventedProfile(
            name=span.name,
            unit=ValueUnit.NANOSECONDS,
            start_value=span.start_ns,
            end_value=span.end_ns,
            events=_span_events(span, frames),
        )
        for span in spans
    ]
    return SpeedscopeFile(
        profiles=profiles,
        shared=Shared(frames=frames.frames),
        exporter=exporter,
        name=name,
    )


def write_spans(out: TextIO, spans: Iterable[Span]) -> None:
    """Write spans as a speedscope document. Write errors propagate."""
    out.write(spans_to_speedscope(spans).to_json())


def dump(out: TextIO) -> None:
    """Write the calling thread's spans as a speedscope document."""
    write_spans(out, get_profiler().spans())
