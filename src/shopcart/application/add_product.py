"""Application service: Add Product use case."""

from __future__ import annotations

import structlog

from shopcart.domain.exceptions import ValidationError
from shopcart.domain.model.product import Product
from shopcart.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        price: str,
        stock: int,
        category: str,
        description: str = "",
    ) -> Product:
        """Add a new product to the catalog."""
        if name and self._product_repo.get_by_name(name.strip()) is not None:
            raise ValidationError(f"Product '{name.strip()}' already exists")

        # Auto-assign ID based on existing products
        all_products = self._product_repo.list_all()
        next_id = max((p.id for p in all_products), default=0) + 1

        product = Product.create(
            id=next_id,
            name=name,
            price=price,
            stock=stock,
            category=category,
            description=description,
        )
        self._product_repo.save(product)
        logger.info("Product added", product_id=product.id, name=product.name.value)
        return product
