"""Unit tests for the Product aggregate."""

from decimal import Decimal

import pytest

from shopcart.domain.exceptions import InvalidArgumentError, ValidationError
from shopcart.domain.model.product import Product
from shopcart.domain.model.value_objects import Price, Stock


def _make_product(stock: int = 5, price: str = "10.00") -> Product:
    return Product.create(id=1, name="Widget", price=price, stock=stock, category="Tools")


class TestProductCreation:

    def test_happy_path(self):
        product = Product.create(
            id=7,
            name="  Laptop ",
            price="999.99",
            stock=3,
            category="Electronics",
            description="  Fast  ",
        )
        assert product.id == 7
        assert product.name.value == "Laptop"
        assert product.price.value == Decimal("999.99")
        assert product.stock.value == 3
        assert product.category.value == "Electronics"
        assert product.description == "Fast"

    def test_invalid_price_rejected(self):
        with pytest.raises(ValidationError):
            Product.create(id=1, name="Widget", price="0", stock=1, category="Tools")

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError):
            Product.create(id=1, name="Widget", price="1", stock=-1, category="Tools")

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            Product.create(id=1, name="", price="1", stock=1, category="Tools")


class TestProductStock:

    def test_has_stock_delegates_to_stock(self):
        product = _make_product(stock=5)
        assert product.has_stock(5)
        assert not product.has_stock(6)

    def test_has_stock_defaults_to_one_unit(self):
        assert _make_product(stock=1).has_stock()
        assert not _make_product(stock=0).has_stock()

    def test_increase_stock_swaps_value_object(self):
        product = _make_product(stock=5)
        before = product.stock
        product.increase_stock(3)
        assert product.stock == Stock(8)
        assert before == Stock(5)

    def test_reduce_stock(self):
        product = _make_product(stock=5)
        product.reduce_stock(5)
        assert product.stock.value == 0

    def test_reduce_stock_below_zero_rejected(self):
        product = _make_product(stock=2)
        with pytest.raises(ValidationError):
            product.reduce_stock(3)
        assert product.stock.value == 2

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_non_positive_stock_change_rejected(self, quantity):
        product = _make_product()
        with pytest.raises(InvalidArgumentError):
            product.increase_stock(quantity)
        with pytest.raises(InvalidArgumentError):
            product.reduce_stock(quantity)


class TestProductPrice:

    def test_update_price(self):
        product = _make_product(price="10.00")
        product.update_price(Price.create("12.50"))
        assert product.price == Price(Decimal("12.50"))
