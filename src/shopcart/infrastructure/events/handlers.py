"""Subscribers that write every cart event to the application log."""

from __future__ import annotations

import structlog

from shopcart.domain.model.events import (
    CartAbandoned,
    CartCleared,
    CartCreated,
    CartItemQuantityUpdated,
    CartTotalUpdated,
    InsufficientStockRequested,
    ItemAddedToCart,
    ItemRemovedFromCart,
)
from shopcart.infrastructure.events.dispatcher import InMemoryEventDispatcher

logger = structlog.get_logger("shopcart.events")


def log_cart_created(event: CartCreated) -> None:
    logger.info("Cart created", user_id=event.user_id, created_at=event.created_at.isoformat())


def log_item_added(event: ItemAddedToCart) -> None:
    logger.info(
        "Item added to cart",
        user_id=event.user_id,
        product=event.product_name,
        quantity=event.quantity,
        unit_price=str(event.unit_price),
        subtotal=str(event.subtotal),
    )


def log_quantity_updated(event: CartItemQuantityUpdated) -> None:
    logger.info(
        "Cart item quantity updated",
        user_id=event.user_id,
        product=event.product_name,
        previous_quantity=event.previous_quantity,
        new_quantity=event.new_quantity,
    )


def log_item_removed(event: ItemRemovedFromCart) -> None:
    logger.info(
        "Item removed from cart",
        user_id=event.user_id,
        product=event.product_name,
        quantity=event.quantity,
        lost_subtotal=str(event.lost_subtotal),
    )


def log_cart_cleared(event: CartCleared) -> None:
    logger.info(
        "Cart cleared",
        user_id=event.user_id,
        items_removed=event.items_removed,
        lost_total=str(event.lost_total),
    )


def log_total_updated(event: CartTotalUpdated) -> None:
    logger.info(
        "Cart total updated",
        user_id=event.user_id,
        previous_total=str(event.previous_total),
        new_total=str(event.new_total),
        item_count=event.item_count,
    )


def log_cart_abandoned(event: CartAbandoned) -> None:
    logger.warning(
        "Cart abandoned",
        user_id=event.user_id,
        item_count=event.item_count,
        total=str(event.total),
        last_activity=event.last_activity.isoformat(),
    )


def log_insufficient_stock(event: InsufficientStockRequested) -> None:
    logger.warning(
        "Insufficient stock for requested quantity",
        user_id=event.user_id,
        product=event.product_name,
        requested=event.requested_quantity,
        available=event.available_stock,
    )


def register_logging_handlers(dispatcher: InMemoryEventDispatcher) -> None:
    dispatcher.subscribe(CartCreated, log_cart_created)
    dispatcher.subscribe(ItemAddedToCart, log_item_added)
    dispatcher.subscribe(CartItemQuantityUpdated, log_quantity_updated)
    dispatcher.subscribe(ItemRemovedFromCart, log_item_removed)
    dispatcher.subscribe(CartCleared, log_cart_cleared)
    dispatcher.subscribe(CartTotalUpdated, log_total_updated)
    dispatcher.subscribe(CartAbandoned, log_cart_abandoned)
    dispatcher.subscribe(InsufficientStockRequested, log_insufficient_stock)
