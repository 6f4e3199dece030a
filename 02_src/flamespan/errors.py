"""Errors raised on misuse of the span stack."""


class SpanStackError(RuntimeError):
    """Base class for start/end/note calls that break LIFO discipline."""


class NoOpenSpanError(SpanStackError):
    """end() or note() was called while no span was open on this thread."""

    def __init__(self, operation: str, name: str):
        self.operation = operation
        self.name = name
        super().__init__(
            f"flamespan.{operation}({name!r}) called without a currently running span"
        )


class SpanNameMismatchError(SpanStackError):
    """end() named a span other than the innermost open one."""

    def __init__(self, name: str, open_name: str):
        self.name = name
        self.open_name = open_name
        super().__init__(f"flamespan.end({name!r}) attempted to end {open_name!r}")


class GuardConsumedError(SpanStackError):
    """A SpanGuard was explicitly ended more than once."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"span guard for {name!r} was already ended")
