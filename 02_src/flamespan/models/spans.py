"""Reconstructed tree data models."""

from dataclasses import dataclass, field

from .events import Note


@dataclass(frozen=True)
class Span:
    """
    A named, closed timespan with its sub-spans and notes.

    For collapsed spans delta is the sum of the merged durations, so
    end_ns - start_ns may be larger than delta.
    """

    name: str
    start_ns: int
    end_ns: int
    delta: int
    depth: int
    children: tuple["Span", ...] = ()
    notes: tuple[Note, ...] = ()

    def walk(self):
        """Yield this span and all descendants in pre-order."""
        stack = [self]
        while stack:
            span = stack.pop()
            yield span
            stack.extend(reversed(span.children))


@dataclass(frozen=True)
class Thread:
    """The span forest recorded on a single thread."""

    id: int
    name: str | None
    spans: tuple[Span, ...] = field(default_factory=tuple)
