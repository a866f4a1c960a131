"""Synchronous event bus for conversion progress."""

from __future__ import annotations

import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)

Listener = Callable[[Any], None]


class EventBus:
    """Publish-subscribe bus; listeners run synchronously in registration order.

    ``subscribe`` and ``on_all`` return a callable that removes the listener.
    """

    def __init__(self) -> None:
        self._listeners: dict[type, list[Listener]] = {}
        self._global_listeners: list[Listener] = []

    def subscribe(self, event_type: type, callback: Listener) -> Callable[[], None]:
        """Register *callback* for events of exactly *event_type*."""
        listeners = self._listeners.setdefault(event_type, [])
        listeners.append(callback)
        return lambda: listeners.remove(callback)

    def on_all(self, callback: Listener) -> Callable[[], None]:
        self._global_listeners.append(callback)
        return lambda: self._global_listeners.remove(callback)

    def emit(self, event: Any) -> None:
        logger.debug("event %r", event)
        for cb in list(self._global_listeners):
            cb(event)
        for cb in list(self._listeners.get(type(event), [])):
            cb(event)
