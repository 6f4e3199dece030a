"""API routes."""

from . import control, observability

__all__ = ["control", "observability"]
