"""Process-wide store of retired thread recordings."""

import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Protocol

from ..config import resolve_lock_timeout
from ..logging_config import get_logger
from ..models import EventFrame, Thread
from ..tree import build_spans

logger = get_logger(__name__)


@dataclass(frozen=True)
class RetiredFrame:
    """One thread's event log, moved here when its recorder was retired."""

    thread_id: int
    thread_name: str | None
    frame: EventFrame


class IRegistry(Protocol):
    """Append log of retired frames shared by all threads."""

    def retire(self, thread_id: int, thread_name: str | None, frame: EventFrame) -> None:
        """Append a retired frame. Empty frames are ignored."""
        ...

    def snapshot_all(self, current: Thread) -> list[Thread]:
        """current first, then one Thread per retired frame in retirement order."""
        ...

    def clear_all(self) -> None:
        """Forget every retired frame."""
        ...


class Registry:
    """
    Lock-protected append log of retired frames.

    The lock is only held to append, copy or empty the list; trees are built
    outside of it. If the lock cannot be taken within lock_timeout seconds
    the registry degrades: reads see nothing and writes are dropped.
    """

    def __init__(self, lock_timeout: float | None = None):
        self._lock = threading.Lock()
        self._lock_timeout = resolve_lock_timeout() if lock_timeout is None else lock_timeout
        self._entries: list[RetiredFrame] = []

    @contextmanager
    def _locked(self, operation: str) -> Iterator[bool]:
        acquired = self._lock.acquire(timeout=self._lock_timeout)
        if not acquired:
            logger.warning(
                "Registry lock unavailable for %s after %.3fs, continuing without it",
                operation,
                self._lock_timeout,
                extra={"context": {"operation": operation, "lock_timeout": self._lock_timeout}},
            )
        try:
            yield acquired
        finally:
            if acquired:
                self._lock.release()

    def retire(self, thread_id: int, thread_name: str | None, frame: EventFrame) -> None:
        if frame.is_empty():
            return

        with self._locked("retire") as acquired:
            if not acquired:
                return
            self._entries.append(RetiredFrame(thread_id, thread_name, frame))

        logger.debug(
            "Retired %d events from thread %s (%s)",
            len(frame.events),
            thread_id,
            thread_name,
            extra={
                "context": {
                    "thread_id": thread_id,
                    "thread_name": thread_name,
                    "events": len(frame.events),
                }
            },
        )

    def entries(self) -> list[RetiredFrame]:
        """Copy of the retired frames in retirement order."""
        with self._locked("read") as acquired:
            if not acquired:
                return []
            return list(self._entries)

    def snapshot_all(self, current: Thread) -> list[Thread]:
        threads = [current]
        for entry in self.entries():
            threads.append(
                Thread(
                    id=entry.thread_id,
                    name=entry.thread_name,
                    spans=tuple(build_spans(entry.frame.events)),
                )
            )
        return threads

    def clear_all(self) -> None:
        with self._locked("clear") as acquired:
            if acquired:
                self._entries = []

    def __len__(self) -> int:
        return len(self.entries())
