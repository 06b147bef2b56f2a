"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
Each one has a ``create()`` factory that coerces raw input; the dataclass
constructor re-checks the same rules, so even direct construction cannot
produce an invalid instance.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from shopcart.domain.exceptions import ValidationError

# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
MIN_QUANTITY = 1
MAX_QUANTITY = 1000
USER_ID_MAX_LENGTH = 100
PRODUCT_NAME_MAX_LENGTH = 100
CATEGORY_MAX_LENGTH = 50


def _require_int(value: object, label: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{label} must be an integer, got {type(value).__name__}")


def _clean_text(value: object, label: str, max_length: int) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{label} must be a string, got {type(value).__name__}")
    cleaned = value.strip()
    if not cleaned:
        raise ValidationError(f"{label} is required")
    if len(cleaned) > max_length:
        raise ValidationError(f"{label} cannot exceed {max_length} characters")
    return cleaned


def _require_positive_amount(amount: object) -> None:
    _require_int(amount, "Amount")
    if amount <= 0:
        raise ValidationError(f"Amount must be greater than zero, got {amount}")


@dataclass(frozen=True)
class Quantity:
    """Number of units of one product in a cart line, between 1 and 1000."""

    value: int

    def __post_init__(self) -> None:
        _require_int(self.value, "Quantity")
        if not MIN_QUANTITY <= self.value <= MAX_QUANTITY:
            raise ValidationError(
                f"Quantity must be between {MIN_QUANTITY} and {MAX_QUANTITY}, got {self.value}"
            )

    @staticmethod
    def create(value: int) -> Quantity:
        return Quantity(value)

    def increase(self, amount: int) -> Quantity:
        _require_positive_amount(amount)
        return Quantity(self.value + amount)

    def decrease(self, amount: int) -> Quantity:
        _require_positive_amount(amount)
        return Quantity(self.value - amount)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Price:
    """Unit price of a product.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations.
    """

    value: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.value, Decimal):
            raise ValidationError(
                f"Price must be a Decimal, got {type(self.value).__name__}"
            )
        if not self.value.is_finite() or self.value <= Decimal("0"):
            raise ValidationError(f"Price must be greater than zero, got {self.value}")

    @staticmethod
    def create(value: str | float | int | Decimal) -> Price:
        """Coerce to Decimal safely, then validate."""
        try:
            return Price(Decimal(str(value)))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid price: {value!r}") from exc

    def __mul__(self, factor: int) -> Decimal:
        if isinstance(factor, bool) or not isinstance(factor, int):
            raise TypeError(f"Can only multiply Price by int, got {type(factor).__name__}")
        return self.value * factor

    def __str__(self) -> str:
        return f"${self.value:.2f}"


@dataclass(frozen=True)
class Stock:
    """Units of a product available for sale; never negative."""

    value: int

    def __post_init__(self) -> None:
        _require_int(self.value, "Stock")
        if self.value < 0:
            raise ValidationError(f"Stock cannot be negative, got {self.value}")

    @staticmethod
    def create(value: int) -> Stock:
        return Stock(value)

    def has_at_least(self, amount: int) -> bool:
        return self.value >= amount

    def reduce(self, amount: int) -> Stock:
        _require_positive_amount(amount)
        if self.value - amount < 0:
            raise ValidationError(
                f"Cannot reduce stock by {amount} - only {self.value} available"
            )
        return Stock(self.value - amount)

    def increase(self, amount: int) -> Stock:
        _require_positive_amount(amount)
        return Stock(self.value + amount)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class UserId:
    """Identifier of the cart owner, trimmed, 1-100 characters."""

    value: str

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "value", _clean_text(self.value, "User ID", USER_ID_MAX_LENGTH)
        )

    @staticmethod
    def create(value: str) -> UserId:
        return UserId(value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ProductName:
    value: str

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "value", _clean_text(self.value, "Product name", PRODUCT_NAME_MAX_LENGTH)
        )

    @staticmethod
    def create(value: str) -> ProductName:
        return ProductName(value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Category:
    value: str

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "value", _clean_text(self.value, "Category", CATEGORY_MAX_LENGTH)
        )

    @staticmethod
    def create(value: str) -> Category:
        return Category(value)

    def __str__(self) -> str:
        return self.value
