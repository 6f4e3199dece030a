"""Thread-local recorder ownership and the public recording API."""

import threading
import weakref
from typing import Any, Callable, Protocol, TextIO, TypeVar

from .clock import IClock, MonotonicClock
from .guard import SpanGuard
from .logging_config import get_logger
from .models import Span, Thread
from .recorder import Recorder, is_unwinding
from .registry import IRegistry, Registry

logger = get_logger(__name__)

R = TypeVar("R")


class IProfiler(Protocol):
    """Recording entry points for the calling thread plus cross-thread views."""

    def start(self, name: str) -> None:
        """Start a span on the calling thread."""
        ...

    def end(self, name: str) -> int:
        """End the innermost span on the calling thread."""
        ...

    def end_collapse(self, name: str) -> int:
        """End the innermost span, allowing it to fold into its previous sibling."""
        ...

    def note(self, name: str, description: str | None = None) -> None:
        """Annotate the innermost span on the calling thread."""
        ...

    def start_guard(self, name: str) -> SpanGuard:
        """Start a span ended by the guard's scope exit."""
        ...

    def span_of(self, name: str, fn: Callable[..., R], *args: Any, **kwargs: Any) -> R:
        """Run fn inside a span."""
        ...

    def commit_thread(self) -> None:
        """Retire the calling thread's recording into the registry."""
        ...

    def spans(self) -> list[Span]:
        """Spans recorded so far on the calling thread."""
        ...

    def threads(self) -> list[Thread]:
        """Calling thread first, then every retired thread."""
        ...

    def clear(self) -> None:
        """Reset the calling thread and empty the registry."""
        ...


def _retire(registry: IRegistry, recorder: Recorder) -> None:
    frame = recorder.take_frame()
    registry.retire(recorder.thread_id, recorder.thread_name, frame)


class _RecorderSlot:
    """Thread-local holder whose collection marks the end of its thread."""

    __slots__ = ("recorder", "__weakref__")

    def __init__(self, recorder: Recorder):
        self.recorder = recorder


class Profiler:
    """
    Owns one Recorder per thread and the Registry they retire into.

    A thread's recorder is created on its first recording call. When the
    thread ends (its thread-local storage is released) or calls
    commit_thread(), the recorded events are moved into the registry.
    """

    def __init__(
        self,
        registry: IRegistry | None = None,
        clock_factory: Callable[[], IClock] | None = None,
    ):
        self._registry = registry or Registry()
        self._clock_factory = clock_factory or MonotonicClock
        self._local = threading.local()

    @property
    def registry(self) -> IRegistry:
        return self._registry

    def recorder(self) -> Recorder:
        """The calling thread's recorder, created on first use."""
        slot = getattr(self._local, "slot", None)
        if slot is None:
            recorder = Recorder(clock=self._clock_factory())
            slot = _RecorderSlot(recorder)
            finalizer = weakref.finalize(slot, _retire, self._registry, recorder)
            finalizer.atexit = False
            self._local.slot = slot
            logger.debug(
                "Created recorder for thread %s (%s)",
                recorder.thread_id,
                recorder.thread_name,
                extra={"context": {"thread_id": recorder.thread_id}},
            )
        return slot.recorder

    def _existing_recorder(self) -> Recorder | None:
        slot = getattr(self._local, "slot", None)
        return slot.recorder if slot is not None else None

    # Recording

    def start(self, name: str) -> None:
        self.recorder().start(name)

    def end(self, name: str) -> int:
        """End the innermost span and return its duration in ns."""
        return self.recorder().end(name, collapse=False)

    def end_collapse(self, name: str) -> int:
        """
        End the innermost span and return its duration in ns.

        If the span is a leaf and the previous sibling has the same name and
        depth, the two are merged when the tree is built: the sibling keeps
        its start_ns, takes this span's end_ns, and its delta becomes the
        sum of both deltas. end_ns - start_ns can then differ from delta.
        """
        return self.recorder().end(name, collapse=True)

    def end_with(self, name: str, result: R) -> R:
        """End the innermost span and pass result through."""
        self.recorder().end(name, collapse=False)
        return result

    def note(self, name: str, description: str | None = None) -> None:
        """Record a note on the innermost open span."""
        self.recorder().note(name, description)

    def start_guard(self, name: str) -> SpanGuard:
        """Start a span that ends when the returned guard's scope exits."""
        return SpanGuard(self.recorder(), name)

    def span_of(self, name: str, fn: Callable[..., R], *args: Any, **kwargs: Any) -> R:
        """Run fn inside a span named name and return its result."""
        with self.start_guard(name):
            return fn(*args, **kwargs)

    def commit_thread(self) -> None:
        """Move the calling thread's events into the registry now."""
        if is_unwinding():
            logger.debug("Ignoring commit_thread() while handling an exception")
            return

        recorder = self._existing_recorder()
        if recorder is not None:
            _retire(self._registry, recorder)

    def clear(self) -> None:
        """Drop the calling thread's events, restart its epoch and empty the registry."""
        if is_unwinding():
            logger.debug("Ignoring clear() while handling an exception")
            return

        recorder = self._existing_recorder()
        if recorder is not None:
            recorder.clear()
        self._registry.clear_all()

    # Views

    def spans(self) -> list[Span]:
        recorder = self._existing_recorder()
        return recorder.spans() if recorder is not None else []

    def current_thread(self) -> Thread:
        """Live view of the calling thread."""
        return Thread(
            id=threading.get_ident(),
            name=threading.current_thread().name,
            spans=tuple(self.spans()),
        )

    def threads(self) -> list[Thread]:
        return self._registry.snapshot_all(self.current_thread())

    def debug(self, out: TextIO | None = None) -> None:
        """Print the calling thread's raw recording state."""
        recorder = self._existing_recorder()
        text = recorder.debug_string() if recorder is not None else "Recorder(<unused>)"
        print(text, file=out)


_profiler: Profiler | None = None
_profiler_lock = threading.Lock()


def get_profiler() -> Profiler:
    """Get the process-wide default profiler."""
    global _profiler
    if _profiler is None:
        with _profiler_lock:
            if _profiler is None:
                _profiler = Profiler()
    return _profiler


def start(name: str) -> None:
    """Start a new span on the calling thread."""
    get_profiler().start(name)


def end(name: str) -> int:
    """End the current span and return the number of nanoseconds that passed."""
    return get_profiler().end(name)


def end_collapse(name: str) -> int:
    """End the current span as collapsible. See Profiler.end_collapse."""
    return get_profiler().end_collapse(name)


def end_with(name: str, result: R) -> R:
    """End the current span and return result."""
    return get_profiler().end_with(name, result)


def note(name: str, description: str | None = None) -> None:
    """Record a note on the current span."""
    get_profiler().note(name, description)


def start_guard(name: str) -> SpanGuard:
    """Start a span and return a guard that ends it on scope exit."""
    return get_profiler().start_guard(name)


def span_of(name: str, fn: Callable[..., R], *args: Any, **kwargs: Any) -> R:
    """Time fn(*args, **kwargs) as a span and return its result."""
    return get_profiler().span_of(name, fn, *args, **kwargs)


def commit_thread() -> None:
    """Retire the calling thread's recording now rather than at thread exit."""
    get_profiler().commit_thread()


def clear() -> None:
    """Clear everything recorded on this thread and in the registry."""
    get_profiler().clear()


def spans() -> list[Span]:
    """Spans recorded on the calling thread."""
    return get_profiler().spans()


def threads() -> list[Thread]:
    """The calling thread followed by every retired thread."""
    return get_profiler().threads()


def debug() -> None:
    """Print the calling thread's raw recording state to stdout."""
    get_profiler().debug()
