"""Cart aggregate - the core of the domain.

The Cart is an aggregate root that owns its items.
All business invariants are enforced here:

- at most one item per product (adding an existing product merges)
- no item ever holds a zero or negative quantity
- ``total``, ``item_count`` and ``product_count`` are always computed
  from the current items

Every successful mutation stages domain events in order; callers drain
them with ``drain_events()`` once the new state has been persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from shopcart.domain.exceptions import (
    InsufficientStockError,
    InvalidArgumentError,
    ItemNotFoundError,
)
from shopcart.domain.model.events import (
    AggregateRoot,
    CartAbandoned,
    CartCleared,
    CartCreated,
    CartItemQuantityUpdated,
    CartTotalUpdated,
    InsufficientStockRequested,
    ItemAddedToCart,
    ItemRemovedFromCart,
)
from shopcart.domain.model.product import Product
from shopcart.domain.model.value_objects import Price, Quantity, UserId


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CartItem:
    """One line in a cart.

    ``unit_price`` is a snapshot taken when the product was first added;
    later catalog price changes never reach it. Lines are immutable: the
    owning Cart changes a quantity by replacing the whole line.
    """

    id: int
    product_id: int
    product_name: str
    quantity: Quantity
    unit_price: Price
    added_at: datetime = field(default_factory=_utcnow)
    product: Product | None = field(default=None, repr=False, compare=False)

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity.value


class Cart(AggregateRoot):
    """Aggregate root for shopping carts.

    Use the ``Cart.create()`` factory for new carts - it validates the
    owner and stages ``CartCreated``. The ``__init__`` is intentionally
    simple so the repository can reconstitute persisted carts without
    re-validating or re-emitting anything.
    """

    def __init__(
        self,
        id: int | None,
        user_id: UserId,
        items: list[CartItem] | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> None:
        super().__init__()
        self.id = id
        self._user_id = user_id
        self._items: list[CartItem] = list(items or [])
        self._created_at = created_at or _utcnow()
        self._updated_at = updated_at or self._created_at

    # --- Factory (used for NEW carts only) ------------------------------------

    @staticmethod
    def create(user_id: str) -> Cart:
        if user_id is None or not str(user_id).strip():
            raise InvalidArgumentError("User ID is required")

        now = _utcnow()
        cart = Cart(id=None, user_id=UserId.create(user_id), created_at=now, updated_at=now)
        cart._raise_event(CartCreated(user_id=cart.user_id.value, created_at=now))
        return cart

    # --- Commands -------------------------------------------------------------

    def add_item(self, product: Product, quantity: int) -> None:
        """Add ``quantity`` units of ``product``, merging into an existing line.

        The stock check compares ``quantity`` alone against the product's
        stock, also when merging: units already in the cart are not counted.
        """
        if product is None:
            raise InvalidArgumentError("Product is required")
        if quantity <= 0:
            raise InvalidArgumentError("Quantity must be greater than zero")

        if not product.has_stock(quantity):
            self._raise_event(
                InsufficientStockRequested(
                    user_id=self.user_id.value,
                    product_id=product.id,
                    product_name=product.name.value,
                    requested_quantity=quantity,
                    available_stock=product.stock.value,
                )
            )
            raise InsufficientStockError(
                f"Insufficient stock for {product.name} "
                f"(requested {quantity}, {product.stock.value} available)",
                product_id=product.id,
                requested=quantity,
                available=product.stock.value,
            )

        now = _utcnow()
        previous_total = self.total
        existing = self.get_item(product.id)

        if existing is not None:
            previous_quantity = existing.quantity.value
            previous_subtotal = existing.subtotal
            existing = self._replace_quantity(existing, existing.quantity.increase(quantity))
            self._raise_event(
                CartItemQuantityUpdated(
                    user_id=self.user_id.value,
                    product_id=product.id,
                    product_name=product.name.value,
                    previous_quantity=previous_quantity,
                    new_quantity=existing.quantity.value,
                    previous_subtotal=previous_subtotal,
                    new_subtotal=existing.subtotal,
                )
            )
        else:
            item = CartItem(
                id=self._next_item_id(),
                product_id=product.id,
                product_name=product.name.value,
                quantity=Quantity.create(quantity),
                unit_price=product.price,  # <-- price snapshot
                added_at=now,
                product=product,
            )
            self._items.append(item)
            self._raise_event(
                ItemAddedToCart(
                    user_id=self.user_id.value,
                    product_id=product.id,
                    product_name=item.product_name,
                    quantity=item.quantity.value,
                    unit_price=item.unit_price.value,
                    subtotal=item.subtotal,
                )
            )

        self._updated_at = now
        self._raise_total_updated(previous_total)

    def update_item_quantity(self, product_id: int, new_quantity: int) -> None:
        """Replace the quantity of an existing line; zero or less removes it."""
        item = self.get_item(product_id)
        if item is None:
            raise ItemNotFoundError(product_id)

        if new_quantity <= 0:
            self.remove_item(product_id)
            return

        previous_total = self.total
        previous_quantity = item.quantity.value
        previous_subtotal = item.subtotal
        item = self._replace_quantity(item, Quantity.create(new_quantity))
        self._updated_at = _utcnow()

        self._raise_event(
            CartItemQuantityUpdated(
                user_id=self.user_id.value,
                product_id=product_id,
                product_name=item.product_name,
                previous_quantity=previous_quantity,
                new_quantity=item.quantity.value,
                previous_subtotal=previous_subtotal,
                new_subtotal=item.subtotal,
            )
        )
        self._raise_total_updated(previous_total)

    def remove_item(self, product_id: int) -> None:
        """Remove the line for ``product_id``; does nothing if it is absent."""
        item = self.get_item(product_id)
        if item is None:
            return

        previous_total = self.total
        self._items.remove(item)
        self._updated_at = _utcnow()

        self._raise_event(
            ItemRemovedFromCart(
                user_id=self.user_id.value,
                product_id=product_id,
                product_name=item.product_name,
                quantity=item.quantity.value,
                lost_subtotal=item.subtotal,
            )
        )
        self._raise_total_updated(previous_total)

    def clear(self) -> None:
        """Remove every item at once, staging one ``CartCleared`` event."""
        if not self._items:
            return

        items_removed = self.item_count
        lost_total = self.total
        self._items = []
        self._updated_at = _utcnow()

        self._raise_event(
            CartCleared(
                user_id=self.user_id.value,
                items_removed=items_removed,
                lost_total=lost_total,
            )
        )

    # --- Queries --------------------------------------------------------------

    def has_items(self) -> bool:
        return bool(self._items)

    def get_item(self, product_id: int) -> CartItem | None:
        for item in self._items:
            if item.product_id == product_id:
                return item
        return None

    def check_abandoned(
        self, idle_threshold: timedelta, now: datetime | None = None
    ) -> bool:
        """Stage ``CartAbandoned`` if the cart has items and has been idle too long.

        Never changes the cart itself, so calling it again stages another
        event. Returns True when an event was staged. A naive ``now`` is
        taken to be UTC.
        """
        now = now or _utcnow()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        idle_for = now - self._updated_at
        if idle_for <= idle_threshold or not self.has_items():
            return False

        self._raise_event(
            CartAbandoned(
                user_id=self.user_id.value,
                item_count=self.item_count,
                total=self.total,
                last_activity=self._updated_at,
                idle_for=idle_for,
            )
        )
        return True

    # --- Read-only properties -------------------------------------------------

    @property
    def user_id(self) -> UserId:
        return self._user_id

    @property
    def items(self) -> tuple[CartItem, ...]:
        return tuple(self._items)

    @property
    def total(self) -> Decimal:
        return sum((item.subtotal for item in self._items), Decimal("0"))

    @property
    def item_count(self) -> int:
        return len(self._items)

    @property
    def product_count(self) -> int:
        return sum(item.quantity.value for item in self._items)

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    # --- Internal helpers -----------------------------------------------------

    def _replace_quantity(self, item: CartItem, quantity: Quantity) -> CartItem:
        updated = replace(item, quantity=quantity)
        self._items[self._items.index(item)] = updated
        return updated

    def _next_item_id(self) -> int:
        return max((item.id for item in self._items), default=0) + 1

    def _raise_total_updated(self, previous_total: Decimal) -> None:
        self._raise_event(
            CartTotalUpdated(
                user_id=self.user_id.value,
                previous_total=previous_total,
                new_total=self.total,
                item_count=self.item_count,
            )
        )
