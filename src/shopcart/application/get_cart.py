"""Application service: Get Cart use case (query).

A user without a cart gets a fresh one, the same way the storefront
shows an empty cart on first visit.
"""

from __future__ import annotations

import structlog

from shopcart.application.dto import CartDTO, cart_to_dto
from shopcart.application.event_publisher import EventPublisher
from shopcart.domain.model.cart import Cart
from shopcart.domain.repository.cart_repository import CartRepository

logger = structlog.get_logger(__name__)


def get_or_create_cart(
    cart_repo: CartRepository,
    publisher: EventPublisher,
    user_id: str,
) -> Cart:
    """Load the user's cart, creating and saving a new one if needed."""
    cart = cart_repo.get_by_user(user_id)
    if cart is not None:
        return cart

    logger.info("Cart not found, creating a new one", user_id=user_id)
    cart = Cart.create(user_id)
    cart_repo.save(cart)
    publisher.publish(cart.drain_events())
    return cart


class GetCartHandler:

    def __init__(self, cart_repo: CartRepository, publisher: EventPublisher) -> None:
        self._cart_repo = cart_repo
        self._publisher = publisher

    def handle(self, user_id: str) -> CartDTO:
        cart = get_or_create_cart(self._cart_repo, self._publisher, user_id)
        logger.debug("Cart loaded", user_id=user_id, item_count=cart.item_count)
        return cart_to_dto(cart)
