"""Guard module."""

from .guard import SpanGuard

__all__ = ["SpanGuard"]
