"""Integration tests for the AddItemToCart use case.

Uses in-memory fake repositories and a recording publisher - no file I/O.
"""

import pytest

from shopcart.application.add_item import AddItemToCartHandler
from shopcart.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    InvalidArgumentError,
)
from shopcart.domain.model.cart import Cart
from shopcart.domain.model.product import Product
from tests.fakes import FakeCartRepository, FakeProductRepository, RecordingPublisher


def _setup(
    products: list[Product] | None = None,
    carts: list[Cart] | None = None,
) -> tuple[AddItemToCartHandler, FakeCartRepository, RecordingPublisher]:
    if products is None:
        products = [
            Product.create(id=1, name="Widget", price="15.00", stock=10, category="Tools"),
            Product.create(id=2, name="Gadget", price="25.00", stock=2, category="Tools"),
        ]
    cart_repo = FakeCartRepository(carts)
    publisher = RecordingPublisher()
    handler = AddItemToCartHandler(cart_repo, FakeProductRepository(products), publisher)
    return handler, cart_repo, publisher


class TestAddItemHappyPath:

    def test_creates_cart_on_first_add(self):
        handler, cart_repo, publisher = _setup()
        dto = handler.handle("alice", 1, 3)

        assert dto.user_id == "alice"
        assert dto.total == "$45.00"
        assert dto.item_count == 1
        assert dto.product_count == 3
        assert cart_repo.get_by_user("alice") is not None
        assert publisher.event_types == [
            "CartCreated",
            "ItemAddedToCart",
            "CartTotalUpdated",
        ]

    def test_reuses_existing_cart(self):
        handler, cart_repo, _ = _setup()
        first = handler.handle("alice", 1, 1)
        second = handler.handle("alice", 2, 1)

        assert first.id == second.id
        assert len(cart_repo.list_all()) == 1
        assert second.item_count == 2
        assert second.total == "$40.00"

    def test_merges_same_product(self):
        handler, _, publisher = _setup()
        handler.handle("alice", 1, 2)
        dto = handler.handle("alice", 1, 3)

        assert dto.item_count == 1
        assert dto.items[0].quantity == 5
        assert publisher.event_types[-2:] == ["CartItemQuantityUpdated", "CartTotalUpdated"]

    def test_item_dto_is_formatted(self):
        handler, _, _ = _setup()
        dto = handler.handle("alice", 1, 2)
        item = dto.items[0]
        assert item.product_name == "Widget"
        assert item.unit_price == "$15.00"
        assert item.subtotal == "$30.00"

    def test_drains_cart_after_publishing(self):
        handler, cart_repo, publisher = _setup()
        handler.handle("alice", 1, 1)
        cart = cart_repo.get_by_user("alice")
        assert not cart.has_pending_events
        assert len(publisher.events) == 3


class TestAddItemFailures:

    def test_unknown_product(self):
        handler, cart_repo, publisher = _setup()
        with pytest.raises(EntityNotFoundError, match="not found"):
            handler.handle("alice", 99, 1)
        assert cart_repo.list_all() == []
        assert publisher.events == []

    def test_insufficient_stock_publishes_rejection(self):
        handler, _, publisher = _setup()
        with pytest.raises(InsufficientStockError) as exc_info:
            handler.handle("alice", 2, 5)

        assert exc_info.value.requested == 5
        assert exc_info.value.available == 2
        assert publisher.event_types == ["CartCreated", "InsufficientStockRequested"]

    def test_insufficient_stock_leaves_cart_empty(self):
        handler, cart_repo, _ = _setup()
        with pytest.raises(InsufficientStockError):
            handler.handle("alice", 2, 5)
        assert not cart_repo.get_by_user("alice").has_items()

    def test_merge_checks_combined_quantity(self):
        handler, cart_repo, publisher = _setup()
        handler.handle("alice", 2, 2)
        published_before = len(publisher.events)

        with pytest.raises(InsufficientStockError) as exc_info:
            handler.handle("alice", 2, 1)

        assert exc_info.value.requested == 3
        assert cart_repo.get_by_user("alice").get_item(2).quantity.value == 2
        assert len(publisher.events) == published_before

    def test_zero_quantity_rejected(self):
        handler, _, _ = _setup()
        with pytest.raises(InvalidArgumentError):
            handler.handle("alice", 1, 0)

    def test_blank_user_rejected(self):
        handler, cart_repo, _ = _setup()
        with pytest.raises(InvalidArgumentError):
            handler.handle("   ", 1, 1)
        assert cart_repo.list_all() == []
