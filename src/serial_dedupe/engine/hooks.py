"""Synchronous event hooks for partition changes.

Lets consumers react to representative elections and group teardown,
which is where the shared computation for a serial starts or goes stale.

Usage:
    registry = HookRegistry()
    registry.on(HookEvent.REPRESENTATIVE_ELECTED, start_render)
    index = DedupIndex(hooks=registry)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)


class HookEvent(StrEnum):
    """Events emitted while a DedupIndex drains its queue."""

    ITEM_ADDED = "item_added"
    ITEM_REMOVED = "item_removed"
    REPRESENTATIVE_ELECTED = "representative_elected"
    GROUP_DISSOLVED = "group_dissolved"


@dataclass(frozen=True)
class HookPayload:
    """Immutable payload delivered to hook listeners.

    Attributes:
        event: The event that triggered this payload
        data: Event-specific data dictionary
    """

    event: HookEvent
    data: dict[str, Any] = field(default_factory=dict)


HookListener = Callable[[HookPayload], None]


class HookRegistry:
    """Event bus for partition changes.

    Listeners are plain callables run inline with the drain. Errors in
    listeners are logged but never propagate, so a failing listener cannot
    leave the index half-applied.
    """

    def __init__(self) -> None:
        self._listeners: dict[HookEvent, list[HookListener]] = {}

    def on(self, event: HookEvent, listener: HookListener) -> None:
        """Register a listener for an event."""
        self._listeners.setdefault(event, []).append(listener)

    def off(self, event: HookEvent, listener: HookListener) -> None:
        """Remove a listener for an event."""
        if event in self._listeners:
            self._listeners[event] = [
                existing for existing in self._listeners[event] if existing is not listener
            ]

    def has_listeners(self, event: HookEvent) -> bool:
        """Check if an event has any registered listeners."""
        return bool(self._listeners.get(event))

    def listener_count(self, event: HookEvent) -> int:
        """Return the number of listeners for an event."""
        return len(self._listeners.get(event, []))

    def emit(self, event: HookEvent, data: dict[str, Any] | None = None) -> None:
        """Emit an event to all registered listeners, in registration order."""
        listeners = self._listeners.get(event)
        if not listeners:
            return

        payload = HookPayload(event=event, data=data or {})
        for listener in list(listeners):
            try:
                listener(payload)
            except Exception:
                logger.error(
                    "Hook listener %s failed for %s",
                    getattr(listener, "__name__", repr(listener)),
                    event,
                    exc_info=True,
                )

    def clear(self, event: HookEvent | None = None) -> None:
        """Remove all listeners, or all listeners for a specific event."""
        if event is None:
            self._listeners.clear()
        elif event in self._listeners:
            del self._listeners[event]
