"""
Synchronous event notification for backend instances.

Listeners are plain callables, called in subscription order on emit().
"""

from typing import Any, Callable, Dict, List, Optional


class EventEmitter:
    """Minimal subscribe/emit mixin inherited by every backend instance."""

    def __init__(self):
        self._listeners: Dict[str, List[Callable]] = {}

    def _listener_map(self) -> Dict[str, List[Callable]]:
        # Subclasses may skip EventEmitter.__init__ when overriding __init__
        if not hasattr(self, '_listeners'):
            self._listeners = {}
        return self._listeners

    def on(self, event: str, listener: Callable) -> 'EventEmitter':
        """Subscribe listener to event."""
        self._listener_map().setdefault(event, []).append(listener)
        return self

    def once(self, event: str, listener: Callable) -> 'EventEmitter':
        """Subscribe listener for a single emit of event."""
        def wrapper(*args, **kwargs):
            self.off(event, wrapper)
            return listener(*args, **kwargs)

        wrapper.listener = listener
        return self.on(event, wrapper)

    def off(self, event: str, listener: Optional[Callable] = None) -> 'EventEmitter':
        """
        Unsubscribe listener from event.

        Without a listener every subscription of the event is removed.
        """
        listeners = self._listener_map()
        if listener is None:
            listeners.pop(event, None)
            return self

        registered = listeners.get(event, [])
        for item in list(registered):
            if item is listener or getattr(item, 'listener', None) is listener:
                registered.remove(item)
                break
        if not registered:
            listeners.pop(event, None)
        return self

    def emit(self, event: str, *args: Any, **kwargs: Any) -> bool:
        """
        Call every listener of event with the given arguments.

        Returns:
            True if at least one listener was called
        """
        listeners = list(self._listener_map().get(event, []))
        for listener in listeners:
            listener(*args, **kwargs)
        return bool(listeners)

    def listeners(self, event: str) -> List[Callable]:
        """Get the listeners currently subscribed to event."""
        return [
            getattr(item, 'listener', item)
            for item in self._listener_map().get(event, [])
        ]
