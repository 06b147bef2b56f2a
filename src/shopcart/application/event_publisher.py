"""Port through which application handlers hand off drained domain events."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shopcart.domain.model.events import DomainEvent


class EventPublisher(ABC):

    @abstractmethod
    def publish(self, events: list[DomainEvent]) -> None:
        """Deliver events in the order given."""
