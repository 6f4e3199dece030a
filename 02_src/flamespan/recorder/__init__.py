"""Recorder module."""

from .recorder import IRecorder, Recorder, is_unwinding

__all__ = ["IRecorder", "Recorder", "is_unwinding"]
