"""Registry module."""

from .registry import IRegistry, Registry, RetiredFrame

__all__ = ["IRegistry", "Registry", "RetiredFrame"]
