"""Flat recording data models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Note:
    """A point-in-time annotation attached to the span open when it was made."""

    name: str
    description: str | None
    instant: int  # ns since the thread epoch


@dataclass
class Event:
    """One start/end pair in a thread's append-only log."""

    id: int
    parent: int | None
    name: str
    start_ns: int
    end_ns: int | None = None
    delta: int | None = None
    collapse: bool = False
    notes: list[Note] = field(default_factory=list)

    @property
    def closed(self) -> bool:
        """True once end() has stamped both end_ns and delta."""
        return self.end_ns is not None and self.delta is not None


@dataclass
class EventFrame:
    """The mutable recording state of one thread between retirements."""

    next_id: int = 0
    events: list[Event] = field(default_factory=list)
    open_stack: list[int] = field(default_factory=list)

    def is_empty(self) -> bool:
        """True if nothing was ever recorded into this frame."""
        return not self.events
