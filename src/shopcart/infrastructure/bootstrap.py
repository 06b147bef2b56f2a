"""Composition root - wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from shopcart.infrastructure.config import load_settings
from shopcart.infrastructure.events.dispatcher import InMemoryEventDispatcher
from shopcart.infrastructure.events.handlers import register_logging_handlers
from shopcart.infrastructure.persistence.json_cart_repository import (
    JsonCartRepository,
)
from shopcart.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(load_settings().data_dir / "products.json")


def cart_repository() -> JsonCartRepository:
    return JsonCartRepository(load_settings().data_dir / "carts.json")


def event_publisher() -> InMemoryEventDispatcher:
    dispatcher = InMemoryEventDispatcher()
    register_logging_handlers(dispatcher)
    return dispatcher
