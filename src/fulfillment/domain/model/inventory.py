"""Inventory aggregate: stock and reservations per (warehouse, product).

Each warehouse/product pair has at most one Inventory row that knows how
much is physically on hand and how much of it is earmarked for
not-yet-shipped sales orders.  Every change to the on-hand quantity is
recorded as an immutable InventoryMovement.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from fulfillment.domain.exceptions import (
    InsufficientStockError,
    InvalidArgumentError,
    InvalidOperationError,
    StockShortage,
)


class MovementType(Enum):
    INBOUND = "INBOUND"
    OUTBOUND = "OUTBOUND"
    ADJUSTMENT = "ADJUSTMENT"


@dataclass
class Inventory:
    """Aggregate root for stock tracking at one location.

    Invariants:
    - ``0 <= qty_reserved <= qty_on_hand``
    - ``available_quantity`` is always >= 0
    """

    id: int | None
    warehouse_id: int
    product_id: int
    qty_on_hand: int = 0
    qty_reserved: int = 0

    def __post_init__(self) -> None:
        _check_quantities(self.qty_on_hand, self.qty_reserved)

    @property
    def available_quantity(self) -> int:
        return self.qty_on_hand - self.qty_reserved

    @property
    def location(self) -> tuple[int, int]:
        return self.warehouse_id, self.product_id

    def reserve(self, quantity: int) -> None:
        """Earmark stock for a sales order.

        Raises InsufficientStockError if not enough stock is available.
        """
        _require_positive(quantity, "Reservation")
        if quantity > self.available_quantity:
            raise InsufficientStockError(
                f"Insufficient stock for product {self.product_id} in warehouse "
                f"{self.warehouse_id} (requested: {quantity}, "
                f"available: {self.available_quantity})",
                [
                    StockShortage(
                        self.warehouse_id, self.product_id, quantity, self.available_quantity
                    )
                ],
            )
        self.qty_reserved += quantity

    def release(self, quantity: int) -> None:
        """Give previously reserved stock back (e.g. on order cancellation)."""
        _require_positive(quantity, "Release")
        if quantity > self.qty_reserved:
            raise InvalidOperationError(
                f"Cannot release {quantity} of product {self.product_id} "
                f"- only {self.qty_reserved} currently reserved"
            )
        self.qty_reserved -= quantity

    def consume(self, quantity: int) -> None:
        """Ship reserved stock.

        Both ``qty_on_hand`` and ``qty_reserved`` decrease by the same
        amount, so availability is unchanged.
        """
        _require_positive(quantity, "Consume")
        if quantity > self.qty_reserved:
            raise InvalidOperationError(
                f"Cannot ship {quantity} of product {self.product_id} "
                f"- only {self.qty_reserved} currently reserved"
            )
        self.qty_reserved -= quantity
        self.qty_on_hand -= quantity

    def credit(self, quantity: int) -> None:
        """Add received goods to the on-hand quantity."""
        _require_positive(quantity, "Credit")
        self.qty_on_hand += quantity

    def adjust(self, qty_on_hand: int | None = None, qty_reserved: int | None = None) -> int:
        """Overwrite quantities after a manual count.

        Returns the signed change of the on-hand quantity.
        """
        new_on_hand = self.qty_on_hand if qty_on_hand is None else qty_on_hand
        new_reserved = self.qty_reserved if qty_reserved is None else qty_reserved
        _check_quantities(new_on_hand, new_reserved)
        delta = new_on_hand - self.qty_on_hand
        self.qty_on_hand = new_on_hand
        self.qty_reserved = new_reserved
        return delta


@dataclass(frozen=True)
class InventoryMovement:
    """Append-only ledger entry for one change of an on-hand quantity."""

    id: int | None
    inventory_id: int
    type: MovementType
    quantity: int
    occurred_at: datetime
    reference_document: str
    description: str = ""


def _require_positive(quantity: int, what: str) -> None:
    if quantity <= 0:
        raise InvalidArgumentError(f"{what} quantity must be positive")


def _check_quantities(on_hand: int, reserved: int) -> None:
    if on_hand < 0 or reserved < 0:
        raise InvalidArgumentError("Inventory quantities cannot be negative")
    if reserved > on_hand:
        raise InvalidArgumentError(
            f"Reserved quantity ({reserved}) cannot exceed quantity on hand ({on_hand})"
        )
