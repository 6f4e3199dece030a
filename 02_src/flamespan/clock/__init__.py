"""Clock module."""

from .clock import IClock, MonotonicClock

__all__ = ["IClock", "MonotonicClock"]
