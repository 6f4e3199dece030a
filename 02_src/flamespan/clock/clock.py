"""Monotonic clock relative to a resettable epoch."""

import time
from typing import Protocol


class IClock(Protocol):
    """Source of nanosecond timestamps relative to an epoch."""

    def now_ns(self) -> int:
        """Nanoseconds elapsed since the epoch."""
        ...

    def reset(self) -> None:
        """Move the epoch to the current instant."""
        ...


class MonotonicClock:
    """IClock backed by time.perf_counter_ns."""

    def __init__(self):
        self._epoch = time.perf_counter_ns()

    def now_ns(self) -> int:
        return time.perf_counter_ns() - self._epoch

    def reset(self) -> None:
        self._epoch = time.perf_counter_ns()
