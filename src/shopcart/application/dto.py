"""Data Transfer Objects - plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from shopcart.domain.model.cart import Cart


@dataclass(frozen=True)
class CartItemDTO:
    """Output: a single cart line as displayed to the user."""

    product_id: int
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    subtotal: str


@dataclass(frozen=True)
class CartDTO:
    """Output: a complete cart as displayed to the user."""

    id: int
    user_id: str
    items: list[CartItemDTO]
    item_count: int
    product_count: int
    total: str
    created_at: str
    updated_at: str


def format_money(amount: Decimal) -> str:
    return f"${amount:.2f}"


def cart_to_dto(cart: Cart) -> CartDTO:
    return CartDTO(
        id=cart.id,  # type: ignore[arg-type]
        user_id=cart.user_id.value,
        items=[
            CartItemDTO(
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                subtotal=format_money(item.subtotal),
            )
            for item in cart.items
        ],
        item_count=cart.item_count,
        product_count=cart.product_count,
        total=format_money(cart.total),
        created_at=cart.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        updated_at=cart.updated_at.strftime("%Y-%m-%d %H:%M UTC"),
    )
