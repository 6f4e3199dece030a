"""JSON encoding of threads and spans."""

from typing import Iterable, TextIO

from pydantic import BaseModel, ConfigDict, TypeAdapter

from ..models import Span, Thread
from ..profiler import get_profiler


class NoteModel(BaseModel):
    """Serialized note."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    description: str | None = None
    instant: int


class SpanModel(BaseModel):
    """Serialized span with its subtree."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    start_ns: int
    end_ns: int
    delta: int
    depth: int
    children: list["SpanModel"] = []
    notes: list[NoteModel] = []


class ThreadModel(BaseModel):
    """Serialized thread."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str | None = None
    spans: list[SpanModel] = []


_threads_adapter = TypeAdapter(list[ThreadModel])


def span_to_json(span: Span) -> str:
    """Pretty-printed JSON for one span and its subtree."""
    return SpanModel.model_validate(span).model_dump_json(indent=2)


def thread_to_json(thread: Thread) -> str:
    """Pretty-printed JSON for one thread."""
    return ThreadModel.model_validate(thread).model_dump_json(indent=2)


def threads_to_models(threads: Iterable[Thread]) -> list[ThreadModel]:
    return [ThreadModel.model_validate(thread) for thread in threads]


def threads_to_json(threads: Iterable[Thread]) -> str:
    """Pretty-printed JSON list of threads."""
    return _threads_adapter.dump_json(threads_to_models(threads), indent=2).decode("utf-8")


def dump_json(out: TextIO, threads: Iterable[Thread] | None = None) -> None:
    """Write every thread as a JSON list. Write errors propagate."""
    if threads is None:
        threads = get_profiler().threads()
    out.write(threads_to_json(threads))
