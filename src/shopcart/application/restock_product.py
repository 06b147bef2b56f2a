"""Application service: Restock Product use case."""

from __future__ import annotations

import structlog

from shopcart.domain.exceptions import EntityNotFoundError
from shopcart.domain.model.product import Product
from shopcart.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class RestockProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: int, quantity: int) -> Product:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product #{product_id} not found")

        previous = product.stock.value
        product.increase_stock(quantity)
        self._product_repo.save(product)
        logger.info(
            "Product restocked",
            product_id=product_id,
            previous_stock=previous,
            new_stock=product.stock.value,
        )
        return product
