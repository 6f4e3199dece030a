"""Tree builder module."""

from .builder import build_spans, collect_notes, count_spans

__all__ = ["build_spans", "collect_notes", "count_spans"]
