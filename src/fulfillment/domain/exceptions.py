"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so outer layers (CLI today, any transport tomorrow) can catch them
uniformly.  ``status_code`` is the category a boundary maps the error to.
"""

from __future__ import annotations

from dataclasses import dataclass


class DomainException(Exception):
    """Base class for all domain errors."""

    status_code = 500


class ResourceNotFoundError(DomainException):
    """A requested entity does not exist."""

    status_code = 404

    @classmethod
    def of(cls, resource: str, field: str, value: object) -> ResourceNotFoundError:
        return cls(f"{resource} not found with {field}: '{value}'")


class DuplicateResourceError(DomainException):
    """A unique key (SKU, code, inventory location...) is already taken."""

    status_code = 409


class InvalidOperationError(DomainException):
    """Illegal state transition, capacity or ownership violation."""

    status_code = 409


class InvalidArgumentError(DomainException):
    """A value violates an invariant (negative quantity, reserved > on hand)."""

    status_code = 400


class AccessDeniedError(DomainException):
    """The caller's role does not allow the operation."""

    status_code = 403


@dataclass(frozen=True)
class StockShortage:
    """One line that could not be covered by available stock."""

    warehouse_id: int
    product_id: int
    requested: int
    available: int

    def __str__(self) -> str:
        return (
            f"product {self.product_id} in warehouse {self.warehouse_id} "
            f"(requested: {self.requested}, available: {self.available})"
        )


class InsufficientStockError(DomainException):
    """A reservation cannot be satisfied by available stock."""

    status_code = 409

    def __init__(self, message: str, shortages: list[StockShortage] | None = None) -> None:
        super().__init__(message)
        self.shortages = list(shortages or [])
