"""Tests for data models."""

import dataclasses

import pytest

from flamespan.models import Event, EventFrame, Note, Span, Thread


class TestEvent:
    """Tests for Event model."""

    def test_new_event_is_open(self):
        """Test that an event without end stamps is not closed."""
        event = Event(id=0, parent=None, name="a", start_ns=5)
        assert event.closed is False
        assert event.end_ns is None
        assert event.delta is None
        assert event.collapse is False
        assert event.notes == []

    def test_closed_requires_end_and_delta(self):
        """Test that closed needs both end_ns and delta."""
        event = Event(id=0, parent=None, name="a", start_ns=5, end_ns=9)
        assert event.closed is False
        event.delta = 4
        assert event.closed is True


class TestEventFrame:
    """Tests for EventFrame model."""

    def test_empty_frame(self):
        """Test default frame state."""
        frame = EventFrame()
        assert frame.next_id == 0
        assert frame.events == []
        assert frame.open_stack == []
        assert frame.is_empty()

    def test_frames_do_not_share_lists(self):
        """Test that default lists are per instance."""
        first = EventFrame()
        second = EventFrame()
        first.events.append(Event(id=0, parent=None, name="a", start_ns=0))
        assert second.is_empty()


class TestSpan:
    """Tests for Span model."""

    def test_span_is_immutable(self):
        """Test that spans cannot be modified by callers."""
        span = Span(name="a", start_ns=0, end_ns=10, delta=10, depth=0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            span.delta = 5  # type: ignore[misc]

    def test_walk_is_pre_order(self):
        """Test that walk() yields parents before children, in order."""
        leaf_b = Span(name="b", start_ns=1, end_ns=2, delta=1, depth=1)
        leaf_d = Span(name="d", start_ns=4, end_ns=5, delta=1, depth=2)
        c = Span(name="c", start_ns=3, end_ns=6, delta=3, depth=1, children=(leaf_d,))
        root = Span(name="a", start_ns=0, end_ns=7, delta=7, depth=0, children=(leaf_b, c))

        assert [s.name for s in root.walk()] == ["a", "b", "c", "d"]


class TestThread:
    """Tests for Thread and Note models."""

    def test_create_thread(self):
        """Test creating a Thread."""
        span = Span(
            name="a",
            start_ns=0,
            end_ns=1,
            delta=1,
            depth=0,
            notes=(Note(name="n", description=None, instant=0),),
        )
        thread = Thread(id=42, name="MainThread", spans=(span,))
        assert thread.id == 42
        assert thread.name == "MainThread"
        assert thread.spans[0].notes[0].name == "n"

    def test_thread_without_name(self):
        """Test that a Thread name is optional."""
        thread = Thread(id=1, name=None)
        assert thread.spans == ()
