"""In-memory, synchronous event dispatcher.

Delivers each published event to every handler subscribed to its type
(or to a base class of it, so subscribing to ``DomainEvent`` receives
everything). Events are delivered one at a time in publication order.
A failing subscriber stops delivery and surfaces as ``EventDispatchError``.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Callable

import structlog

from shopcart.application.event_publisher import EventPublisher
from shopcart.domain.model.events import DomainEvent

logger = structlog.get_logger(__name__)

EventHandler = Callable[[DomainEvent], None]


class EventDispatchError(Exception):
    """A subscriber failed while handling a published event."""

    def __init__(self, event: DomainEvent, cause: Exception) -> None:
        super().__init__(f"Handling {event.event_type} failed: {cause}")
        self.event = event


class InMemoryEventDispatcher(EventPublisher):

    def __init__(self) -> None:
        self._subscribers: dict[type[DomainEvent], list[EventHandler]] = defaultdict(list)

    def subscribe(self, event_type: type[DomainEvent], handler: EventHandler) -> None:
        self._subscribers[event_type].append(handler)

    def publish(self, events: list[DomainEvent]) -> None:
        for event in events:
            self._dispatch(event)

    def _dispatch(self, event: DomainEvent) -> None:
        handlers = [
            handler
            for event_type in type(event).__mro__
            for handler in self._subscribers.get(event_type, [])
        ]
        if not handlers:
            logger.debug("No handlers for event", event_type=event.event_type)
            return

        for handler in handlers:
            try:
                handler(event)
            except Exception as exc:
                logger.exception(
                    "Event handler failed",
                    event_type=event.event_type,
                    event_id=str(event.event_id),
                )
                raise EventDispatchError(event, exc) from exc
