"""
Scan notifications.

`MusicLibrary` announces every root it scans on an `EventBus`. Front ends
subscribe by topic and never import the scanner.

Topics:
- library.scan: `LibraryScanEvent` with status started, completed or failed

Subscriptions may name a topic exactly, a family ("library.*") or everything ("*"):

    from encore.core.events import event_bus

    async def on_scan(event: LibraryScanEvent) -> None:
        print(event.status, event.root)

    await event_bus.subscribe("library.*", on_scan)
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Literal

logger = logging.getLogger(__name__)

ScanStatus = Literal["started", "completed", "failed"]

EventHandler = Callable[["Event"], Awaitable[None]]


@dataclass
class Event:
    event_type: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.event_type}


@dataclass
class LibraryScanEvent(Event):
    """One root's scan lifecycle. `errors` counts skipped files; `error` is the fatal message."""

    event_type: str = field(default="library.scan", init=False)
    status: ScanStatus | Literal[""] = ""
    root: str = ""
    tracks_added: int = 0
    errors: int = 0
    error: str = ""

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload.update(status=self.status, tracks_added=self.tracks_added, errors=self.errors)
        if self.root:
            payload["root"] = self.root
        if self.error:
            payload["error"] = self.error
        return payload


def _topic_matches(pattern: str, topic: str) -> bool:
    if pattern == "*" or pattern == topic:
        return True
    return pattern.endswith(".*") and topic.startswith(pattern[:-1])


class EventBus:
    """
    In-process async pub/sub.

    Handlers run one after another in subscription order. A handler that raises
    is logged and skipped; the remaining handlers still see the event.
    """

    def __init__(self) -> None:
        self._subscriptions: list[tuple[str, EventHandler]] = []
        self._lock = asyncio.Lock()

    async def subscribe(self, pattern: str, handler: EventHandler) -> None:
        async with self._lock:
            self._subscriptions.append((pattern, handler))
        logger.debug("Handler %r subscribed to %s", handler, pattern)

    async def unsubscribe(self, pattern: str, handler: EventHandler) -> bool:
        """Drop one subscription. Returns False if it was not registered."""
        async with self._lock:
            try:
                self._subscriptions.remove((pattern, handler))
            except ValueError:
                return False
        logger.debug("Handler %r unsubscribed from %s", handler, pattern)
        return True

    async def publish(self, event: Event) -> int:
        """Deliver `event` and return how many handlers completed without raising."""
        async with self._lock:
            handlers = [h for p, h in self._subscriptions if _topic_matches(p, event.event_type)]

        delivered = 0
        for handler in handlers:
            try:
                await handler(event)
            except Exception:
                logger.exception("Event handler %r failed on %s", handler, event.event_type)
            else:
                delivered += 1
        return delivered

    async def clear(self) -> None:
        async with self._lock:
            self._subscriptions.clear()


event_bus = EventBus()
