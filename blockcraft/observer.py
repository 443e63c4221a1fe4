"""A minimal subject that forwards events to registered listeners."""

from __future__ import annotations

from typing import Any


class ObserverSubject:
    """Keeps an ordered list of listeners and calls them by method name."""

    def __init__(self) -> None:
        self._listeners: list[Any] = []

    @property
    def listeners(self) -> tuple[Any, ...]:
        return tuple(self._listeners)

    def register_listener(self, listener: Any) -> None:
        self._listeners.append(listener)

    def unregister_listener(self, listener: Any) -> None:
        """Remove a listener; raises ValueError if it was never registered."""
        self._listeners.remove(listener)

    def notify_listeners(self, method_name: str, *args: Any) -> None:
        """Call ``method_name`` with ``args`` on every listener in order."""
        for listener in list(self._listeners):
            getattr(listener, method_name)(*args)