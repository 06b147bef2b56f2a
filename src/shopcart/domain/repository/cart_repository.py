"""Abstract repository for Cart aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shopcart.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def next_id(self) -> int:
        """Generate the next unique cart ID."""

    @abstractmethod
    def get_by_user(self, user_id: str) -> Cart | None:
        """Return the cart owned by a user, or None if they have none."""

    @abstractmethod
    def list_all(self) -> list[Cart]:
        """Return every stored cart."""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Persist a new or updated cart, assigning an ID to new ones."""
