"""Domain events and the staging buffer aggregates use to record them.

Events are immutable facts. Aggregates only *stage* them; the application
layer drains the buffer after a successful operation and hands the events
to a publisher. Nothing in the domain performs I/O or dispatch.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import UUID, uuid4


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    event_id: UUID = field(default_factory=uuid4)
    occurred_on: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def event_type(self) -> str:
        return type(self).__name__


@dataclass(frozen=True, kw_only=True)
class CartCreated(DomainEvent):
    user_id: str
    created_at: datetime


@dataclass(frozen=True, kw_only=True)
class ItemAddedToCart(DomainEvent):
    user_id: str
    product_id: int
    product_name: str
    quantity: int
    unit_price: Decimal
    subtotal: Decimal


@dataclass(frozen=True, kw_only=True)
class CartItemQuantityUpdated(DomainEvent):
    user_id: str
    product_id: int
    product_name: str
    previous_quantity: int
    new_quantity: int
    previous_subtotal: Decimal
    new_subtotal: Decimal


@dataclass(frozen=True, kw_only=True)
class ItemRemovedFromCart(DomainEvent):
    user_id: str
    product_id: int
    product_name: str
    quantity: int
    lost_subtotal: Decimal


@dataclass(frozen=True, kw_only=True)
class CartCleared(DomainEvent):
    """Single summary event for ``Cart.clear()``; no per-item events."""

    user_id: str
    items_removed: int
    lost_total: Decimal


@dataclass(frozen=True, kw_only=True)
class CartTotalUpdated(DomainEvent):
    user_id: str
    previous_total: Decimal
    new_total: Decimal
    item_count: int


@dataclass(frozen=True, kw_only=True)
class CartAbandoned(DomainEvent):
    user_id: str
    item_count: int
    total: Decimal
    last_activity: datetime
    idle_for: timedelta


@dataclass(frozen=True, kw_only=True)
class InsufficientStockRequested(DomainEvent):
    """A rejected add: staged before ``InsufficientStockError`` is raised."""

    user_id: str
    product_id: int
    product_name: str
    requested_quantity: int
    available_stock: int


class AggregateRoot:
    """Base for entities that stage domain events.

    Staged events keep the order in which they were raised.
    """

    def __init__(self) -> None:
        self._pending_events: list[DomainEvent] = []

    def _raise_event(self, event: DomainEvent) -> None:
        self._pending_events.append(event)

    @property
    def pending_events(self) -> tuple[DomainEvent, ...]:
        return tuple(self._pending_events)

    @property
    def has_pending_events(self) -> bool:
        return bool(self._pending_events)

    def drain_events(self) -> list[DomainEvent]:
        """Return every staged event and empty the buffer."""
        events, self._pending_events = self._pending_events, []
        return events
