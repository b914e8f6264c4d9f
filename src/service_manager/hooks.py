"""Event hooks fired around service lifecycle operations."""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Union

logger = logging.getLogger(__name__)

Handler = Callable[..., Optional[int]]


@dataclass
class _Listener:
    handler: Handler
    priority: int
    one_time: bool = False


class EventManager:
    """Publish/subscribe registry for named events.

    Handlers receive the trigger arguments. A handler approves by returning
    None or 0; returning any other value, or raising, vetoes the event and
    stops the dispatch. The veto message is kept until read with
    ``pop_last_error()``.
    """

    def __init__(self):
        self._listeners: dict[str, list[_Listener]] = {}
        self._last_error: Optional[str] = None

    def register(self, events: Union[str, list[str]], handler: Handler,
                 priority: int = 1, one_time: bool = False) -> None:
        """Register a handler for one or several events.

        Higher priority handlers run first; ties run in registration order.
        """
        if not callable(handler):
            raise TypeError("Event handler must be callable")
        if isinstance(events, str):
            events = [events]
        for event in events:
            listeners = self._listeners.setdefault(event, [])
            listeners.append(_Listener(handler, priority, one_time))
            listeners.sort(key=lambda listener: listener.priority, reverse=True)

    def register_one_time(self, events: Union[str, list[str]], handler: Handler,
                          priority: int = 1) -> None:
        """Register a handler that is dropped after its first run."""
        self.register(events, handler, priority, one_time=True)

    def unregister(self, event: str, handler: Optional[Handler] = None) -> None:
        """Remove one handler, or all of them when handler is None."""
        if handler is None:
            self._listeners.pop(event, None)
            return
        listeners = self._listeners.get(event, [])
        self._listeners[event] = [listener for listener in listeners if listener.handler != handler]

    def has_listener(self, event: str, handler: Optional[Handler] = None) -> bool:
        listeners = self._listeners.get(event, [])
        if handler is None:
            return bool(listeners)
        return any(listener.handler == handler for listener in listeners)

    def clear(self) -> None:
        self._listeners.clear()

    def pop_last_error(self) -> Optional[str]:
        """Return and forget the message of the last veto."""
        error, self._last_error = self._last_error, None
        return error

    def trigger(self, event: str, *args) -> int:
        """Run the handlers of an event. Returns 0 when all of them approved."""
        listeners = list(self._listeners.get(event, []))
        if not listeners:
            return 0

        logger.debug("Triggering %s event", event)
        for listener in listeners:
            if listener.one_time:
                # Same handler may also be registered persistently
                self._listeners[event] = [
                    other for other in self._listeners.get(event, []) if other is not listener
                ]
            try:
                ret = listener.handler(*args)
            except Exception as e:
                self._last_error = f"{event} handler failed: {e}"
                logger.error(self._last_error)
                return 1

            if ret:
                self._last_error = f"{event} handler returned {ret}"
                logger.debug(self._last_error)
                return ret if isinstance(ret, int) else 1

        return 0
