"""Indented plain-text report."""

import sys
from typing import Iterable, TextIO

from ..models import Span, Thread
from ..profiler import get_profiler


def _format_ms(ms: float) -> str:
    # Whole values print without a fraction: 3ms, 2.5ms
    return str(int(ms)) if ms.is_integer() else repr(ms)


def _write_span(span: Span, out: TextIO) -> float:
    ms = span.delta / 1_000_000
    out.write(f"{'  ' * span.depth}| {span.name}: {_format_ms(ms)}ms\n")

    missing = ms
    for child in span.children:
        missing -= _write_span(child, out)

    if span.children:
        out.write(f"{'  ' * (span.depth + 1)}+ {_format_ms(missing)}ms\n")

    return ms


def dump_text_to_writer(out: TextIO, threads: Iterable[Thread] | None = None) -> None:
    """
    Write an indented report of every thread's spans.

    Each span shows its elapsed milliseconds; a span with children is
    followed by a "+" line with the time not covered by any child.

    Args:
        out: Text stream to write to. Write errors propagate.
        threads: Threads to report. Defaults to the default profiler's threads().
    """
    if threads is None:
        threads = get_profiler().threads()

    for thread in threads:
        out.write(f"THREAD: {thread.id}\n")
        for span in thread.spans:
            _write_span(span, out)
        out.write("\n")


def dump_stdout(threads: Iterable[Thread] | None = None) -> None:
    """Write the text report to stdout."""
    dump_text_to_writer(sys.stdout, threads)
