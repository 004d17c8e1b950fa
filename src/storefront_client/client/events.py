"""
storefront_client.client.events

Minimal synchronous event bus.

Responsibilities:
- Let the request layer announce "unauthenticated" without knowing who reacts.
- Let stores subscribe explicitly (wired in the composition root).
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from typing import Any

from storefront_client.observability.logging import get_logger

log = get_logger(__name__)

UNAUTHENTICATED = "unauthenticated"

Handler = Callable[..., None]


class EventBus:
    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = defaultdict(list)

    def subscribe(self, event: str, handler: Handler) -> Callable[[], None]:
        self._handlers[event].append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers[event]:
                self._handlers[event].remove(handler)

        return unsubscribe

    def emit(self, event: str, **payload: Any) -> None:
        handlers = list(self._handlers.get(event, ()))
        log.info("event.emit", event_name=event, handlers=len(handlers))
        # Handlers run inline: no suspension point between emit and the reactions.
        failure: Exception | None = None
        for handler in handlers:
            try:
                handler(**payload)
            except Exception as e:
                log.exception("event.handler_failed", event_name=event)
                failure = failure or e
        # Every subscriber sees the event before the first failure propagates.
        if failure is not None:
            raise failure

    def subscriber_count(self, event: str) -> int:
        return len(self._handlers.get(event, ()))


# --- Module Notes -----------------------------------------------------------
# Handlers are synchronous: the 401 reaction completes before the failing call
# returns to its caller.
