"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A value was out of range or malformed."""


class InvalidArgumentError(ValidationError):
    """A required argument was missing or a quantity was not positive."""


class InsufficientStockError(DomainException):
    """More units were requested than the product has in stock."""

    def __init__(self, message: str, product_id: int, requested: int, available: int) -> None:
        super().__init__(message)
        self.product_id = product_id
        self.requested = requested
        self.available = available


class ItemNotFoundError(DomainException):
    """The cart has no line for the referenced product."""

    def __init__(self, product_id: int) -> None:
        super().__init__(f"Product ID {product_id} is not in the cart")
        self.product_id = product_id


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""
