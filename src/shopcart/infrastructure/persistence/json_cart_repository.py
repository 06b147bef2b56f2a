"""JSON-file-backed implementation of CartRepository."""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from shopcart.domain.model.cart import Cart, CartItem
from shopcart.domain.model.value_objects import Price, Quantity, UserId
from shopcart.domain.repository.cart_repository import CartRepository


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- CartRepository interface ---------------------------------------------

    def next_id(self) -> int:
        carts = self._load_raw()
        if not carts:
            return 1
        return max(c["id"] for c in carts) + 1

    def get_by_user(self, user_id: str) -> Cart | None:
        wanted = (user_id or "").strip()
        for raw in self._load_raw():
            if raw["user_id"] == wanted:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Cart]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def save(self, cart: Cart) -> None:
        carts = self._load_raw()

        if cart.id is None:
            cart.id = self.next_id()

        # Upsert: replace if exists, otherwise append
        replaced = False
        for i, raw in enumerate(carts):
            if raw["id"] == cart.id:
                carts[i] = self._to_raw(cart)
                replaced = True
                break
        if not replaced:
            carts.append(self._to_raw(cart))

        self._persist_raw(carts)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(cart: Cart) -> dict:
        return {
            "id": cart.id,
            "user_id": cart.user_id.value,
            "created_at": cart.created_at.isoformat(),
            "updated_at": cart.updated_at.isoformat(),
            "items": [
                {
                    "id": item.id,
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.value),
                    "added_at": item.added_at.isoformat(),
                }
                for item in cart.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Cart:
        items = [
            CartItem(
                id=i["id"],
                product_id=i["product_id"],
                product_name=i["product_name"],
                quantity=Quantity(i["quantity"]),
                unit_price=Price(Decimal(i["unit_price"])),
                added_at=datetime.fromisoformat(i["added_at"]),
            )
            for i in raw["items"]
        ]
        return Cart(
            id=raw["id"],
            user_id=UserId(raw["user_id"]),
            items=items,
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, carts: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(carts, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
