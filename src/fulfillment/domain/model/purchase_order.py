"""PurchaseOrder aggregate: replenishment orders placed with suppliers.

    CREATED ──> APPROVED ──> RECEIVED
       │            │
       └──> CANCELED <┘

Receiving credits the inventory ledger; canceling has no stock effect
because the goods never arrived.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from fulfillment.domain.clock import utc_now
from fulfillment.domain.exceptions import InvalidArgumentError, InvalidOperationError
from fulfillment.domain.model.value_objects import Money, Quantity


class PurchaseOrderStatus(Enum):
    CREATED = "CREATED"
    APPROVED = "APPROVED"
    RECEIVED = "RECEIVED"
    CANCELED = "CANCELED"


@dataclass(frozen=True)
class PurchaseOrderLine:
    product_id: int
    quantity: Quantity
    unit_price: Money

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class PurchaseOrder:
    """Aggregate root for supplier orders."""

    id: int | None
    supplier_id: int
    lines: list[PurchaseOrderLine]
    status: PurchaseOrderStatus = PurchaseOrderStatus.CREATED
    created_at: datetime = field(default_factory=utc_now)
    expected_delivery: date | None = None
    approved_at: datetime | None = None
    received_at: datetime | None = None
    canceled_at: datetime | None = None
    received_warehouse_id: int | None = None

    @staticmethod
    def create(
        supplier_id: int,
        lines: list[PurchaseOrderLine],
        expected_delivery: date | None,
        created_at: datetime,
    ) -> PurchaseOrder:
        _require_lines(lines)
        return PurchaseOrder(
            id=None,
            supplier_id=supplier_id,
            lines=list(lines),
            created_at=created_at,
            expected_delivery=expected_delivery,
        )

    # --- Editing --------------------------------------------------------------

    def revise(
        self,
        supplier_id: int,
        lines: list[PurchaseOrderLine],
        expected_delivery: date | None,
    ) -> None:
        """Replace supplier, lines and expected delivery of an open order."""
        if self.status in (PurchaseOrderStatus.RECEIVED, PurchaseOrderStatus.CANCELED):
            raise InvalidOperationError(
                f"Cannot update purchase order with status: {self.status.value}"
            )
        _require_lines(lines)
        self.supplier_id = supplier_id
        self.lines = list(lines)
        self.expected_delivery = expected_delivery

    # --- State transitions ----------------------------------------------------

    def approve(self, at: datetime) -> None:
        if self.status != PurchaseOrderStatus.CREATED:
            raise InvalidOperationError(
                "Can only approve purchase orders with CREATED status. "
                f"Current status: {self.status.value}"
            )
        self.status = PurchaseOrderStatus.APPROVED
        self.approved_at = at

    def check_receivable(self) -> None:
        if self.status != PurchaseOrderStatus.APPROVED:
            raise InvalidOperationError(
                "Can only receive purchase orders with APPROVED status. "
                f"Current status: {self.status.value}"
            )

    def mark_received(self, at: datetime, warehouse_id: int) -> None:
        """Record receipt; the ledger must already have been credited."""
        self.check_receivable()
        self.status = PurchaseOrderStatus.RECEIVED
        self.received_at = at
        self.received_warehouse_id = warehouse_id

    def cancel(self, at: datetime) -> None:
        if self.status == PurchaseOrderStatus.RECEIVED:
            raise InvalidOperationError(
                "Cannot cancel a purchase order that has already been received"
            )
        if self.status == PurchaseOrderStatus.CANCELED:
            raise InvalidOperationError("Purchase order is already canceled")
        self.status = PurchaseOrderStatus.CANCELED
        self.canceled_at = at

    def check_deletable(self) -> None:
        if self.status in (PurchaseOrderStatus.APPROVED, PurchaseOrderStatus.RECEIVED):
            raise InvalidOperationError(
                f"Cannot delete purchase order with status: {self.status.value}"
            )

    # --- Computed properties --------------------------------------------------

    @property
    def reference(self) -> str:
        return f"PO-{self.id}"

    @property
    def total(self) -> Money:
        result = Money.zero()
        for line in self.lines:
            result = result + line.line_total
        return result


def _require_lines(lines: list[PurchaseOrderLine]) -> None:
    if not lines:
        raise InvalidArgumentError("Purchase order must contain at least one line")
