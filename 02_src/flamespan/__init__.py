"""
flamespan: nested timing spans, per-thread call trees and flame graph export.

Usage:
    import flamespan

    # Manual start and end
    flamespan.start("read file")
    data = read_a_file()
    flamespan.end("read file")

    # Time a callable; its result is returned
    rows = flamespan.span_of("database query", query_database)

    # Time a block with a guard
    with flamespan.start_guard("cpu-heavy calculation"):
        step_one()
        flamespan.note("something interesting happened")
        step_two()

    # Inspect or export
    spans = flamespan.spans()
    flamespan.dump_stdout()
"""

from .errors import (
    GuardConsumedError,
    NoOpenSpanError,
    SpanNameMismatchError,
    SpanStackError,
)
from .exporters import (
    dump_json,
    dump_speedscope,
    dump_stdout,
    dump_text_to_writer,
    spans_to_speedscope,
)
from .guard import SpanGuard
from .models import Note, Span, Thread
from .profiler import (
    IProfiler,
    Profiler,
    clear,
    commit_thread,
    debug,
    end,
    end_collapse,
    end_with,
    get_profiler,
    note,
    span_of,
    spans,
    start,
    start_guard,
    threads,
)

__all__ = [
    # Recording
    "start",
    "end",
    "end_collapse",
    "end_with",
    "note",
    "start_guard",
    "span_of",
    "commit_thread",
    "clear",
    # Views
    "spans",
    "threads",
    "debug",
    # Export
    "dump_text_to_writer",
    "dump_stdout",
    "dump_json",
    "dump_speedscope",
    "spans_to_speedscope",
    # Types
    "IProfiler",
    "Profiler",
    "get_profiler",
    "SpanGuard",
    "Span",
    "Note",
    "Thread",
    # Errors
    "SpanStackError",
    "NoOpenSpanError",
    "SpanNameMismatchError",
    "GuardConsumedError",
]
