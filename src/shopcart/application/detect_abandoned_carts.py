"""Application service: Detect Abandoned Carts use case.

Meant to be triggered periodically by an external scheduler (cron, a
systemd timer) through ``shopcart cart sweep-abandoned``. Carts are only
inspected, never modified, so nothing is saved; the resulting
CartAbandoned events are published for downstream consumers.
"""

from __future__ import annotations

from datetime import datetime, timedelta

import structlog

from shopcart.application.event_publisher import EventPublisher
from shopcart.domain.repository.cart_repository import CartRepository

logger = structlog.get_logger(__name__)


class DetectAbandonedCartsHandler:

    def __init__(self, cart_repo: CartRepository, publisher: EventPublisher) -> None:
        self._cart_repo = cart_repo
        self._publisher = publisher

    def handle(self, idle_threshold: timedelta, now: datetime | None = None) -> int:
        """Flag every non-empty cart idle longer than ``idle_threshold``.

        Returns the number of carts flagged.
        """
        logger.info("Checking for abandoned carts", idle_threshold=str(idle_threshold))

        flagged = 0
        for cart in self._cart_repo.list_all():
            if cart.check_abandoned(idle_threshold, now=now):
                flagged += 1
                self._publisher.publish(cart.drain_events())

        if not flagged:
            logger.info("No abandoned carts found")
        return flagged
