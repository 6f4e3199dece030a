"""Exporters for finished span trees."""

from .json_export import (
    NoteModel,
    SpanModel,
    ThreadModel,
    dump_json,
    span_to_json,
    thread_to_json,
    threads_to_json,
    threads_to_models,
)
from .speedscope import (
    JSON_SCHEMA_URL,
    SpeedscopeFile,
    spans_to_speedscope,
    write_spans,
)
from .speedscope import dump as dump_speedscope
from .text import dump_stdout, dump_text_to_writer

__all__ = [
    # Text
    "dump_text_to_writer",
    "dump_stdout",
    # JSON
    "NoteModel",
    "SpanModel",
    "ThreadModel",
    "span_to_json",
    "thread_to_json",
    "threads_to_json",
    "threads_to_models",
    "dump_json",
    # Speedscope
    "JSON_SCHEMA_URL",
    "SpeedscopeFile",
    "spans_to_speedscope",
    "write_spans",
    "dump_speedscope",
]
