"""Application service: Update Item Quantity use case.

A quantity of zero or less removes the item, exactly like Remove Item.
"""

from __future__ import annotations

import structlog

from shopcart.application.dto import CartDTO, cart_to_dto
from shopcart.application.event_publisher import EventPublisher
from shopcart.domain.exceptions import EntityNotFoundError, InsufficientStockError
from shopcart.domain.repository.cart_repository import CartRepository
from shopcart.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class UpdateItemQuantityHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
        publisher: EventPublisher,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo
        self._publisher = publisher

    def handle(self, user_id: str, product_id: int, quantity: int) -> CartDTO:
        logger.info(
            "Updating item quantity", user_id=user_id, product_id=product_id, quantity=quantity
        )

        cart = self._cart_repo.get_by_user(user_id)
        if cart is None:
            raise EntityNotFoundError(f"No cart found for user '{user_id}'")

        if quantity > 0:
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product #{product_id} not found")
            if not product.has_stock(quantity):
                raise InsufficientStockError(
                    f"Insufficient stock for {product.name} "
                    f"(requested {quantity}, {product.stock.value} available)",
                    product_id=product_id,
                    requested=quantity,
                    available=product.stock.value,
                )

        cart.update_item_quantity(product_id, quantity)
        self._cart_repo.save(cart)
        self._publisher.publish(cart.drain_events())
        return cart_to_dto(cart)
