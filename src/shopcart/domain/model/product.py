"""Product aggregate.

Products live independently of carts. They have their own lifecycle:
prices change, stock is received and sold. A cart only *reads* a product's
price and stock at the moment an item is added.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from shopcart.domain.exceptions import InvalidArgumentError
from shopcart.domain.model.value_objects import (
    Category,
    Price,
    ProductName,
    Stock,
)


@dataclass
class Product:
    """A product in the catalog.

    Kept as a mutable dataclass because price and stock updates are
    legitimate mutations on the aggregate. Each update swaps in a new
    value object rather than editing one in place.
    """

    id: int
    name: ProductName
    price: Price
    stock: Stock
    category: Category
    description: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        id: int,
        name: str,
        price: str | int | Decimal,
        stock: int,
        category: str,
        description: str = "",
    ) -> Product:
        """Create a new product, validating every field through its value object."""
        return Product(
            id=id,
            name=ProductName.create(name),
            price=Price.create(price),
            stock=Stock.create(stock),
            category=Category.create(category),
            description=(description or "").strip(),
        )

    def has_stock(self, quantity: int = 1) -> bool:
        return self.stock.has_at_least(quantity)

    def update_price(self, new_price: Price) -> None:
        """Change the product price.

        This does NOT affect any cart items already holding this product
        because they capture a price snapshot when added.
        """
        self.price = new_price

    def increase_stock(self, quantity: int) -> None:
        if quantity <= 0:
            raise InvalidArgumentError("Quantity must be greater than zero")
        self.stock = self.stock.increase(quantity)

    def reduce_stock(self, quantity: int) -> None:
        if quantity <= 0:
            raise InvalidArgumentError("Quantity must be greater than zero")
        self.stock = self.stock.reduce(quantity)
