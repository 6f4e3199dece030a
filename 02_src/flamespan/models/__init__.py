"""Core data models for flamespan."""

from .events import Event, EventFrame, Note
from .spans import Span, Thread

__all__ = [
    # Recording
    "Event",
    "EventFrame",
    "Note",
    # Trees
    "Span",
    "Thread",
]
