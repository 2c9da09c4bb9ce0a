"""
Unit tests for the priority-ordered event bus.
"""

import pytest

from flow_editor_core.event_bus import DEFAULT_PRIORITY, Event, EventBus


class TestEvent:
    """Test cases for Event."""

    def test_flags_start_cleared(self):
        event = Event("connect.start", {'source': None})

        assert not event.propagation_stopped
        assert not event.default_prevented
        assert not event.cancelled()

    def test_stop_and_prevent(self):
        event = Event("connect.start")
        event.stop_propagation()
        assert not event.cancelled()

        event.prevent_default()
        assert event.cancelled()


class TestEventBus:
    """Test cases for EventBus."""

    def test_priority_order(self):
        """Test that higher priorities run first and ties keep subscription order."""
        bus = EventBus()
        calls = []
        bus.on("e", lambda event: calls.append("low"), 500)
        bus.on("e", lambda event: calls.append("default-1"))
        bus.on("e", lambda event: calls.append("high"), 1500)
        bus.on("e", lambda event: calls.append("default-2"), DEFAULT_PRIORITY)

        bus.fire("e")

        assert calls == ["high", "default-1", "default-2", "low"]

    def test_stop_propagation_halts_chain(self):
        bus = EventBus()
        calls = []

        def veto(event):
            calls.append("veto")
            event.stop_propagation()

        bus.on("e", veto, 2000)
        bus.on("e", lambda event: calls.append("commit"))

        event = bus.fire("e")

        assert calls == ["veto"]
        assert event.propagation_stopped

    def test_prevent_default_alone_keeps_propagating(self):
        bus = EventBus()
        seen = []
        bus.on("e", lambda event: event.prevent_default(), 2000)
        bus.on("e", lambda event: seen.append(event.default_prevented))

        bus.fire("e")

        assert seen == [True]

    def test_context_and_return_value(self):
        bus = EventBus()
        bus.on("e", lambda event: event.context['x'] * 2)

        event = bus.fire("e", x=21)

        assert event.context == {'x': 21}
        assert event.return_value == 42

    def test_off(self):
        bus = EventBus()

        def listener(event):
            pass

        bus.on("e", listener)
        assert bus.off("e", listener)
        assert not bus.off("e", listener)
        assert bus.listeners("e") == []

    def test_fire_without_listeners(self):
        event = EventBus().fire("nothing")
        assert event.name == "nothing"
        assert event.return_value is None

    def test_listener_errors_propagate(self):
        bus = EventBus()

        def broken(event):
            raise RuntimeError("boom")

        bus.on("e", broken)
        with pytest.raises(RuntimeError):
            bus.fire("e")
