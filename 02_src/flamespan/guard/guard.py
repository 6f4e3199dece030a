"""Scoped span handle."""

from ..errors import GuardConsumedError
from ..logging_config import get_logger
from ..recorder import IRecorder

logger = get_logger(__name__)


class SpanGuard:
    """
    Starts a span on construction and ends it when the scope exits.

    Usage:
        with profiler.start_guard("load"):
            ...

    If the scope is left through an exception the span is abandoned rather
    than closed, so no duration is recorded for it and the original
    exception propagates untouched. end() and end_collapse() close the
    span early and consume the guard.
    """

    def __init__(self, recorder: IRecorder, name: str):
        self._recorder = recorder
        self._name = name
        self._consumed = False
        recorder.start(name)

    @property
    def name(self) -> str:
        return self._name

    @property
    def consumed(self) -> bool:
        return self._consumed

    def __enter__(self) -> "SpanGuard":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._consumed:
            return False
        self._consumed = True

        if exc_type is not None:
            if not self._recorder.abandon(self._name):
                logger.debug("Span %r was not open at abnormal scope exit", self._name)
            return False

        self._recorder.end(self._name)
        return False

    def _close(self, collapse: bool) -> int:
        if self._consumed:
            raise GuardConsumedError(self._name)
        self._consumed = True
        return self._recorder.end(self._name, collapse=collapse)

    def end(self) -> int:
        """End the span now. Returns its duration in ns."""
        return self._close(collapse=False)

    def end_collapse(self) -> int:
        """End the span now, allowing it to fold into an identical previous sibling."""
        return self._close(collapse=True)
