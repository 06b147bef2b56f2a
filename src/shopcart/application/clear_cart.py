"""Application service: Clear Cart use case."""

from __future__ import annotations

import structlog

from shopcart.application.event_publisher import EventPublisher
from shopcart.domain.repository.cart_repository import CartRepository

logger = structlog.get_logger(__name__)


class ClearCartHandler:

    def __init__(self, cart_repo: CartRepository, publisher: EventPublisher) -> None:
        self._cart_repo = cart_repo
        self._publisher = publisher

    def handle(self, user_id: str) -> bool:
        cart = self._cart_repo.get_by_user(user_id)
        if cart is None:
            logger.info("No cart to clear", user_id=user_id)
            return False

        cart.clear()
        self._cart_repo.save(cart)
        self._publisher.publish(cart.drain_events())
        return True
