"""Per-thread recording state."""

import sys
import threading
from typing import Protocol

from ..clock import IClock, MonotonicClock
from ..errors import NoOpenSpanError, SpanNameMismatchError
from ..logging_config import get_logger
from ..models import Event, EventFrame, Note, Span
from ..tree import build_spans

logger = get_logger(__name__)


def is_unwinding() -> bool:
    """True while the calling thread is handling an exception."""
    return sys.exc_info()[1] is not None


class IRecorder(Protocol):
    """Event log and open-span stack owned by exactly one thread."""

    def start(self, name: str) -> None:
        """Open a span nested in the innermost open one."""
        ...

    def end(self, name: str, collapse: bool = False) -> int:
        """Close the innermost open span and return its duration in ns."""
        ...

    def abandon(self, name: str) -> bool:
        """Pop the innermost open span without closing it."""
        ...

    def note(self, name: str, description: str | None = None) -> None:
        """Annotate the innermost open span."""
        ...

    def clear(self) -> None:
        """Drop everything recorded and restart the epoch."""
        ...

    def spans(self) -> list[Span]:
        """Tree of the spans closed so far."""
        ...


class Recorder:
    """
    Mutable recording state of a single thread.

    Not thread-safe: a Recorder must only be used by the thread that owns
    it. Profiler hands one out per thread.
    """

    def __init__(
        self,
        clock: IClock | None = None,
        thread_id: int | None = None,
        thread_name: str | None = None,
    ):
        current = threading.current_thread()
        self._clock = clock or MonotonicClock()
        self.thread_id = threading.get_ident() if thread_id is None else thread_id
        self.thread_name = current.name if thread_name is None else thread_name
        self._frame = EventFrame()

    @property
    def events(self) -> list[Event]:
        """The live event log (do not mutate)."""
        return self._frame.events

    @property
    def open_names(self) -> list[str]:
        """Names of the open spans, outermost first."""
        events = self._frame.events
        return [events[event_id].name for event_id in self._frame.open_stack]

    def start(self, name: str) -> None:
        frame = self._frame
        event_id = frame.next_id
        frame.next_id += 1

        parent = frame.open_stack[-1] if frame.open_stack else None
        frame.events.append(
            Event(
                id=event_id,
                parent=parent,
                name=name,
                start_ns=self._clock.now_ns(),
            )
        )
        frame.open_stack.append(event_id)

    def end(self, name: str, collapse: bool = False) -> int:
        """
        Close the innermost open span.

        Args:
            name: Must equal the name the span was started with
            collapse: Allow folding into an identical preceding sibling

        Returns:
            Duration of the span in nanoseconds, or 0 if nothing was open
            while the thread is handling an exception

        Raises:
            NoOpenSpanError: Nothing is open (outside exception handling)
            SpanNameMismatchError: The innermost open span has another name
        """
        frame = self._frame
        if not frame.open_stack:
            if is_unwinding():
                logger.debug("Ignoring end(%r) with no open span during unwinding", name)
                return 0
            raise NoOpenSpanError("end", name)

        # Events are indexed by id since ids are allocated densely from 0
        event = frame.events[frame.open_stack.pop()]
        if event.name != name:
            raise SpanNameMismatchError(name, event.name)

        timestamp = self._clock.now_ns()
        event.end_ns = timestamp
        event.collapse = collapse
        event.delta = timestamp - event.start_ns
        return event.delta

    def abandon(self, name: str) -> bool:
        """
        Pop the innermost open span without closing it.

        The event stays unclosed and is left out of every tree. Used when a
        scope exits through an exception. Never raises.

        Returns:
            True if the innermost open span was named name and was popped
        """
        frame = self._frame
        if not frame.open_stack:
            return False
        if frame.events[frame.open_stack[-1]].name != name:
            logger.warning(
                "Not abandoning %r: innermost open span is %r",
                name,
                frame.events[frame.open_stack[-1]].name,
            )
            return False
        frame.open_stack.pop()
        return True

    def note(self, name: str, description: str | None = None) -> None:
        frame = self._frame
        if not frame.open_stack:
            raise NoOpenSpanError("note", name)

        event = frame.events[frame.open_stack[-1]]
        event.notes.append(
            Note(name=name, description=description, instant=self._clock.now_ns())
        )

    def clear(self) -> None:
        self._frame = EventFrame()
        self._clock.reset()

    def take_frame(self) -> EventFrame:
        """Hand over the current frame and continue with an empty one."""
        frame, self._frame = self._frame, EventFrame()
        return frame

    def spans(self) -> list[Span]:
        return build_spans(self._frame.events)

    def debug_string(self) -> str:
        """Human-readable dump of the raw recording state."""
        frame = self._frame
        lines = [
            f"Recorder(thread_id={self.thread_id}, thread_name={self.thread_name!r}, "
            f"next_id={frame.next_id}, open_stack={frame.open_stack})"
        ]
        lines.extend(f"  {event!r}" for event in frame.events)
        return "\n".join(lines)
