"""In-process notification bus for desktop state changes."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable
from typing import Any

EventHandler = Callable[[dict[str, Any]], None]

WINDOW_SPAWNED = "window_spawned"
WINDOW_CLOSED = "window_closed"
WINDOW_MOVED = "window_moved"
FOCUS_CHANGED = "focus_changed"
WORKSPACE_CHANGED = "workspace_changed"
LAYOUT_CHANGED = "layout_changed"

logger = logging.getLogger("hl.event_bus")


class EventBus:
    """Delivers window-manager notifications to subscribers, synchronously and in order."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)

    def subscribe(self, event_name: str, handler: EventHandler) -> None:
        """Register a callback for an event."""
        self._handlers[event_name].append(handler)

    def unsubscribe(self, event_name: str, handler: EventHandler) -> None:
        handlers = self._handlers.get(event_name, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event_name: str, payload: dict[str, Any]) -> None:
        """Call every subscriber of ``event_name`` with ``payload``."""
        handlers = list(self._handlers.get(event_name, []))
        logger.debug("emit %s -> %d handler(s): %s", event_name, len(handlers), payload)
        for handler in handlers:
            handler(payload)
