"""
Priority-ordered event bus for the flow editor.

Listeners subscribe to an event name with a priority; higher priorities run
first and listeners with equal priority run in subscription order. A listener
can stop propagation (no later listener sees the event) and/or prevent the
default action (the engine must not commit what the event announced).
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional


DEFAULT_PRIORITY = 1000

CONNECT_START = "connect.start"


class Event:
    """An event travelling through the bus."""

    def __init__(self, name: str, context: Optional[Dict[str, Any]] = None):
        self.name = name
        self.context: Dict[str, Any] = context or {}
        self.propagation_stopped = False
        self.default_prevented = False
        self.return_value: Any = None

    def stop_propagation(self):
        """Stop later listeners from observing this event."""
        self.propagation_stopped = True

    def prevent_default(self):
        """Mark the default action as cancelled."""
        self.default_prevented = True

    def cancelled(self) -> bool:
        return self.propagation_stopped and self.default_prevented

    def __repr__(self) -> str:
        return (f"Event({self.name!r}, stopped={self.propagation_stopped}, "
                f"prevented={self.default_prevented})")


@dataclass
class _Listener:
    priority: int
    sequence: int
    callback: Callable[[Event], Any]


class EventBus:
    """Dispatches events to listeners in priority order, synchronously."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self._listeners: Dict[str, List[_Listener]] = {}
        self._sequence = 0

    def on(self, name: str, callback: Callable[[Event], Any],
           priority: int = DEFAULT_PRIORITY) -> Callable[[Event], Any]:
        """Subscribe a callback to an event name."""
        self._sequence += 1
        listeners = self._listeners.setdefault(name, [])
        listeners.append(_Listener(priority, self._sequence, callback))
        listeners.sort(key=lambda listener: (-listener.priority, listener.sequence))
        return callback

    def off(self, name: str, callback: Callable[[Event], Any]) -> bool:
        """Unsubscribe a callback; returns False if it was not subscribed."""
        listeners = self._listeners.get(name, [])
        for i, listener in enumerate(listeners):
            if listener.callback == callback:
                del listeners[i]
                return True
        return False

    def listeners(self, name: str) -> List[Callable[[Event], Any]]:
        """Return the callbacks for an event name in dispatch order."""
        return [listener.callback for listener in self._listeners.get(name, [])]

    def fire(self, name: str, **context) -> Event:
        """Dispatch an event and return it so the caller can inspect its flags."""
        event = Event(name, context)
        for listener in list(self._listeners.get(name, [])):
            result = listener.callback(event)
            if result is not None:
                event.return_value = result
            if event.propagation_stopped:
                self.logger.debug("Propagation of %s stopped at priority %d",
                                  name, listener.priority)
                break
        return event
