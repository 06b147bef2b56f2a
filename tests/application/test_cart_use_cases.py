"""Integration tests for the GetCart, UpdateItemQuantity, RemoveItem and ClearCart use cases."""

import pytest

from shopcart.application.add_item import AddItemToCartHandler
from shopcart.application.clear_cart import ClearCartHandler
from shopcart.application.get_cart import GetCartHandler
from shopcart.application.remove_item import RemoveItemHandler
from shopcart.application.update_item_quantity import UpdateItemQuantityHandler
from shopcart.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ItemNotFoundError,
    ValidationError,
)
from shopcart.domain.model.product import Product
from tests.fakes import FakeCartRepository, FakeProductRepository, RecordingPublisher


@pytest.fixture
def cart_repo():
    return FakeCartRepository()


@pytest.fixture
def product_repo():
    return FakeProductRepository([
        Product.create(id=1, name="Widget", price="15.00", stock=10, category="Tools"),
        Product.create(id=2, name="Gadget", price="25.00", stock=3, category="Tools"),
    ])


@pytest.fixture
def publisher():
    return RecordingPublisher()


@pytest.fixture
def filled(cart_repo, product_repo, publisher):
    """alice holds 2 Widgets and 1 Gadget; the publisher starts empty."""
    add = AddItemToCartHandler(cart_repo, product_repo, publisher)
    add.handle("alice", 1, 2)
    add.handle("alice", 2, 1)
    publisher.events.clear()
    return cart_repo.get_by_user("alice")


class TestGetCart:

    def test_creates_empty_cart_for_new_user(self, cart_repo, publisher):
        dto = GetCartHandler(cart_repo, publisher).handle("bob")
        assert dto.user_id == "bob"
        assert dto.items == []
        assert dto.total == "$0.00"
        assert publisher.event_types == ["CartCreated"]
        assert cart_repo.get_by_user("bob") is not None

    def test_returns_existing_cart_without_events(self, filled, cart_repo, publisher):
        dto = GetCartHandler(cart_repo, publisher).handle("alice")
        assert dto.id == filled.id
        assert dto.total == "$55.00"
        assert publisher.events == []

    def test_user_id_is_trimmed(self, filled, cart_repo, publisher):
        dto = GetCartHandler(cart_repo, publisher).handle("  alice ")
        assert dto.id == filled.id


class TestUpdateItemQuantity:

    def _handler(self, cart_repo, product_repo, publisher):
        return UpdateItemQuantityHandler(cart_repo, product_repo, publisher)

    def test_sets_quantity(self, filled, cart_repo, product_repo, publisher):
        dto = self._handler(cart_repo, product_repo, publisher).handle("alice", 1, 5)
        assert dto.product_count == 6
        assert dto.total == "$100.00"
        assert publisher.event_types == ["CartItemQuantityUpdated", "CartTotalUpdated"]

    def test_zero_removes(self, filled, cart_repo, product_repo, publisher):
        dto = self._handler(cart_repo, product_repo, publisher).handle("alice", 1, 0)
        assert [i.product_id for i in dto.items] == [2]
        assert publisher.event_types == ["ItemRemovedFromCart", "CartTotalUpdated"]

    def test_stock_checked_against_new_quantity(self, filled, cart_repo, product_repo, publisher):
        with pytest.raises(InsufficientStockError):
            self._handler(cart_repo, product_repo, publisher).handle("alice", 2, 4)
        assert filled.get_item(2).quantity.value == 1
        assert publisher.events == []

    def test_above_maximum_rejected(self, filled, cart_repo, publisher):
        product_repo = FakeProductRepository([
            Product.create(id=1, name="Widget", price="15.00", stock=5000, category="Tools"),
        ])
        with pytest.raises(ValidationError):
            self._handler(cart_repo, product_repo, publisher).handle("alice", 1, 1001)
        assert filled.get_item(1).quantity.value == 2

    def test_no_cart(self, cart_repo, product_repo, publisher):
        with pytest.raises(EntityNotFoundError, match="No cart found"):
            self._handler(cart_repo, product_repo, publisher).handle("nobody", 1, 1)

    def test_item_not_in_cart(self, filled, cart_repo, publisher):
        product_repo = FakeProductRepository([
            Product.create(id=1, name="Widget", price="15.00", stock=10, category="Tools"),
            Product.create(id=3, name="Gizmo", price="1.00", stock=10, category="Tools"),
        ])
        with pytest.raises(ItemNotFoundError):
            self._handler(cart_repo, product_repo, publisher).handle("alice", 3, 1)

    def test_unknown_product(self, filled, cart_repo, product_repo, publisher):
        with pytest.raises(EntityNotFoundError):
            self._handler(cart_repo, product_repo, publisher).handle("alice", 42, 1)


class TestRemoveItem:

    def test_removes_line(self, filled, cart_repo, publisher):
        assert RemoveItemHandler(cart_repo, publisher).handle("alice", 1) is True
        assert filled.get_item(1) is None
        assert filled.total == filled.items[0].subtotal
        assert publisher.event_types == ["ItemRemovedFromCart", "CartTotalUpdated"]

    def test_absent_product_is_not_an_error(self, filled, cart_repo, publisher):
        assert RemoveItemHandler(cart_repo, publisher).handle("alice", 42) is True
        assert filled.item_count == 2
        assert publisher.events == []

    def test_no_cart(self, cart_repo, publisher):
        assert RemoveItemHandler(cart_repo, publisher).handle("nobody", 1) is False
        assert publisher.events == []


class TestClearCart:

    def test_clears_everything(self, filled, cart_repo, publisher):
        assert ClearCartHandler(cart_repo, publisher).handle("alice") is True
        assert not filled.has_items()
        assert publisher.event_types == ["CartCleared"]

    def test_clearing_empty_cart_publishes_nothing(self, filled, cart_repo, publisher):
        handler = ClearCartHandler(cart_repo, publisher)
        handler.handle("alice")
        handler.handle("alice")
        assert publisher.event_types == ["CartCleared"]

    def test_no_cart(self, cart_repo, publisher):
        assert ClearCartHandler(cart_repo, publisher).handle("nobody") is False
