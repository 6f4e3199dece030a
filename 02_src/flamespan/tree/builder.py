"""Reconstruction of span trees from a flat event log."""

from typing import Iterable

from ..models import Event, Note, Span


class _Node:
    """Mutable span under construction."""

    __slots__ = (
        "event_id",
        "name",
        "start_ns",
        "end_ns",
        "delta",
        "depth",
        "collapse",
        "notes",
        "children",
        "sealed",
    )

    def __init__(self, event: Event, depth: int):
        self.event_id = event.id
        self.name = event.name
        self.start_ns = event.start_ns
        self.end_ns = event.end_ns
        self.delta = event.delta
        self.depth = depth
        self.collapse = event.collapse
        self.notes = tuple(event.notes)
        self.children: list[_Node] = []
        self.sealed: tuple[Span, ...] = ()

    def seal(self) -> None:
        # No more children can arrive, and each child's own timing is final.
        self.sealed = tuple(child.to_span() for child in self.children)

    def to_span(self) -> Span:
        return Span(
            name=self.name,
            start_ns=self.start_ns,
            end_ns=self.end_ns,
            delta=self.delta,
            depth=self.depth,
            children=self.sealed,
            notes=self.notes,
        )


def _attach(parent: _Node, child: _Node) -> None:
    """Append child to parent, or fold it into the preceding sibling."""
    siblings = parent.children
    if siblings and child.collapse and not child.children:
        last = siblings[-1]
        if last.name == child.name and last.depth == child.depth:
            last.end_ns = child.end_ns
            last.delta += child.delta
            return
    siblings.append(child)


def build_spans(events: Iterable[Event]) -> list[Span]:
    """
    Convert an ordered event log into an ordered forest of spans.

    Children always follow their parent contiguously in the log, so one
    forward pass with a stack of unfinished ancestors is enough. An event
    is finished (and attached to its parent) once the next event no longer
    belongs to it.

    Events that were never closed are dropped. Their closed descendants do
    not attach to any remaining ancestor and surface as roots instead.

    Args:
        events: Events in log order

    Returns:
        Top-level spans in log order
    """
    roots: list[_Node] = []
    stack: list[_Node] = []

    def finish(node: _Node) -> None:
        node.seal()
        if stack:
            _attach(stack[-1], node)
        else:
            roots.append(node)

    for event in events:
        while stack and stack[-1].event_id != event.parent:
            finish(stack.pop())

        if not event.closed:
            continue

        stack.append(_Node(event, depth=len(stack)))

    while stack:
        finish(stack.pop())

    return [node.to_span() for node in roots]


def count_spans(spans: Iterable[Span]) -> int:
    """Total number of nodes in a forest."""
    return sum(1 for root in spans for _ in root.walk())


def collect_notes(spans: Iterable[Span]) -> list[Note]:
    """All notes in a forest, in pre-order of their spans."""
    return [note for root in spans for span in root.walk() for note in span.notes]
