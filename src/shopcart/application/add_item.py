"""Application service: Add Item To Cart use case.

Orchestrates the flow between the catalog and the Cart aggregate.
This is the only place that coordinates both (Product lookup + Cart
mutation).
"""

from __future__ import annotations

import structlog

from shopcart.application.dto import CartDTO, cart_to_dto
from shopcart.application.event_publisher import EventPublisher
from shopcart.application.get_cart import get_or_create_cart
from shopcart.domain.exceptions import EntityNotFoundError, InsufficientStockError
from shopcart.domain.repository.cart_repository import CartRepository
from shopcart.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class AddItemToCartHandler:

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
        """Add units of a product to the user's cart.

        Steps:
        1. Resolve the product (fail if not found).
        2. Load or create the cart.
        3. When the product is already in the cart, check the *combined*
           quantity against stock; the aggregate itself only checks the
           units being added.
        4. Let the Cart aggregate validate and mutate.
        5. Persist, then publish the staged events.
        """
        logger.info(
            "Adding item to cart", user_id=user_id, product_id=product_id, quantity=quantity
        )

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product #{product_id} not found")

        cart = get_or_create_cart(self._cart_repo, self._publisher, user_id)

        existing = cart.get_item(product_id)
        if existing is not None and quantity > 0:
            combined = existing.quantity.value + quantity
            if not product.has_stock(combined):
                raise InsufficientStockError(
                    f"Insufficient stock for {product.name} "
                    f"({existing.quantity.value} in cart, {quantity} requested, "
                    f"{product.stock.value} available)",
                    product_id=product_id,
                    requested=combined,
                    available=product.stock.value,
                )

        try:
            cart.add_item(product, quantity)
        except InsufficientStockError:
            # The rejected attempt is still reported to subscribers.
            self._publisher.publish(cart.drain_events())
            raise

        self._cart_repo.save(cart)
        self._publisher.publish(cart.drain_events())

        logger.info(
            "Item added to cart",
            user_id=user_id,
            product_id=product_id,
            item_count=cart.item_count,
        )
        return cart_to_dto(cart)
