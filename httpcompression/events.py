"""Minimal synchronous event emitter shared by transports and codec streams."""
from collections import defaultdict
from typing import Any, Callable, Dict, List

Listener = Callable[..., Any]


class EventEmitter:
    """
    Register listeners per event name and call them in registration order.

    Emitting iterates over a snapshot of the listener list, so listeners
    added or removed during an emit take effect from the next emit.
    """

    def __init__(self) -> None:
        self._events: Dict[str, List[Listener]] = defaultdict(list)

    def on(self, event: str, listener: Listener) -> 'EventEmitter':
        """Subscribe ``listener`` to ``event``."""
        self._events[event].append(listener)
        return self

    def once(self, event: str, listener: Listener) -> 'EventEmitter':
        """Subscribe ``listener`` for the next ``event`` only."""
        def wrapper(*args):
            self.remove_listener(event, wrapper)
            return listener(*args)

        wrapper.listener = listener
        return self.on(event, wrapper)

    def remove_listener(self, event: str, listener: Listener) -> 'EventEmitter':
        listeners = self._events.get(event)
        if not listeners:
            return self

        for i, registered in enumerate(listeners):
            if registered is listener or getattr(registered, 'listener', None) is listener:
                del listeners[i]
                break
        return self

    def listeners(self, event: str) -> List[Listener]:
        return list(self._events.get(event, ()))

    def emit(self, event: str, *args) -> bool:
        """Call every listener of ``event``. Returns False if there were none."""
        listeners = self._events.get(event)
        if not listeners:
            return False

        for listener in list(listeners):
            listener(*args)
        return True
