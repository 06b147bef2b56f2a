"""Application service: Remove Item use case."""

from __future__ import annotations

import structlog

from shopcart.application.event_publisher import EventPublisher
from shopcart.domain.repository.cart_repository import CartRepository

logger = structlog.get_logger(__name__)


class RemoveItemHandler:

    def __init__(self, cart_repo: CartRepository, publisher: EventPublisher) -> None:
        self._cart_repo = cart_repo
        self._publisher = publisher

    def handle(self, user_id: str, product_id: int) -> bool:
        """Remove a product from the user's cart.

        Returns False when the user has no cart at all. Removing a product
        that is not in the cart is not an error.
        """
        cart = self._cart_repo.get_by_user(user_id)
        if cart is None:
            logger.info("No cart to remove item from", user_id=user_id, product_id=product_id)
            return False

        cart.remove_item(product_id)
        self._cart_repo.save(cart)
        self._publisher.publish(cart.drain_events())
        logger.info("Item removed from cart", user_id=user_id, product_id=product_id)
        return True
