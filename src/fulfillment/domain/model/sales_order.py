"""SalesOrder aggregate: the client-side fulfilment state machine.

    CREATED ──> RESERVED ──> SHIPPED ──> DELIVERED
       │            │
       └──> CANCELED <┘

The aggregate owns its lines.  Lines reference product and warehouse by
id only; they never point back to the order.  Stock effects of each
transition (reserve, consume, release) are applied by the application
handler through the InventoryLedger *after* the matching ``check_*``
guard has passed, then the ``mark_*`` method records the new state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from fulfillment.domain.clock import utc_now
from fulfillment.domain.exceptions import InvalidArgumentError, InvalidOperationError
from fulfillment.domain.model.value_objects import Money, Quantity


class SalesOrderStatus(Enum):
    CREATED = "CREATED"
    RESERVED = "RESERVED"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELED = "CANCELED"


CANCELABLE_STATUSES = (SalesOrderStatus.CREATED, SalesOrderStatus.RESERVED)


@dataclass(frozen=True)
class SalesOrderLine:
    """One product taken from one warehouse, price locked at order time."""

    product_id: int
    warehouse_id: int
    quantity: Quantity
    unit_price: Money

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class SalesOrder:
    """Aggregate root for client orders.

    Use ``SalesOrder.create()`` for new orders.  The ``__init__`` stays
    simple so repositories can reconstitute persisted orders as-is.
    """

    id: int | None
    client_id: int
    lines: list[SalesOrderLine]
    status: SalesOrderStatus = SalesOrderStatus.CREATED
    created_at: datetime = field(default_factory=utc_now)
    reserved_at: datetime | None = None
    shipped_at: datetime | None = None
    delivered_at: datetime | None = None

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(client_id: int, lines: list[SalesOrderLine], created_at: datetime) -> SalesOrder:
        if not lines:
            raise InvalidArgumentError("Sales order must contain at least one line")
        return SalesOrder(id=None, client_id=client_id, lines=list(lines), created_at=created_at)

    # --- State transitions ----------------------------------------------------

    def check_reservable(self) -> None:
        if self.status != SalesOrderStatus.CREATED:
            raise InvalidOperationError(
                "Can only reserve stock for CREATED orders. "
                f"Current status: {self.status.value}"
            )

    def mark_reserved(self, at: datetime) -> None:
        self.check_reservable()
        self.status = SalesOrderStatus.RESERVED
        self.reserved_at = at

    def check_shippable(self) -> None:
        if self.status != SalesOrderStatus.RESERVED:
            raise InvalidOperationError(
                f"Can only ship RESERVED orders. Current status: {self.status.value}"
            )

    def mark_shipped(self, at: datetime) -> None:
        self.check_shippable()
        self.status = SalesOrderStatus.SHIPPED
        self.shipped_at = at

    def deliver(self, at: datetime) -> None:
        """Transition SHIPPED -> DELIVERED.  Stock was consumed at ship time."""
        if self.status != SalesOrderStatus.SHIPPED:
            raise InvalidOperationError(
                f"Can only deliver SHIPPED orders. Current status: {self.status.value}"
            )
        self.status = SalesOrderStatus.DELIVERED
        self.delivered_at = at

    def check_cancelable(self) -> None:
        if self.status not in CANCELABLE_STATUSES:
            raise InvalidOperationError(
                f"Cannot cancel order in status {self.status.value}"
            )

    def cancel(self) -> None:
        """Transition CREATED|RESERVED -> CANCELED.

        Reserved stock must be released *before* calling this.
        """
        self.check_cancelable()
        self.status = SalesOrderStatus.CANCELED

    # --- Computed properties --------------------------------------------------

    @property
    def holds_reservation(self) -> bool:
        return self.status == SalesOrderStatus.RESERVED

    @property
    def reference(self) -> str:
        """Document reference used on ledger movements."""
        return f"SO-{self.id}"

    @property
    def total(self) -> Money:
        result = Money.zero()
        for line in self.lines:
            result = result + line.line_total
        return result
