"""Shipment aggregate: the physical move of one sales order to its client.

    PLANNED ──> IN_TRANSIT ──> DELIVERED

Exactly one shipment exists per sales order.  A carrier may be assigned
(and re-assigned) only while the shipment is still PLANNED.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from fulfillment.domain.clock import utc_now
from fulfillment.domain.exceptions import InvalidOperationError


class ShipmentStatus(Enum):
    PLANNED = "PLANNED"
    IN_TRANSIT = "IN_TRANSIT"
    DELIVERED = "DELIVERED"


@dataclass
class Shipment:
    id: int | None
    sales_order_id: int
    tracking_number: str
    planned_date: date
    status: ShipmentStatus = ShipmentStatus.PLANNED
    carrier_id: int | None = None
    shipped_date: datetime | None = None
    delivered_date: datetime | None = None
    created_at: datetime = field(default_factory=utc_now)

    def check_assignable(self) -> None:
        if self.status != ShipmentStatus.PLANNED:
            raise InvalidOperationError(
                "Can only assign a carrier to PLANNED shipments. "
                f"Current status: {self.status.value}"
            )

    def assign_carrier(self, carrier_id: int) -> None:
        self.check_assignable()
        self.carrier_id = carrier_id

    def mark_in_transit(self, at: datetime) -> None:
        if self.status != ShipmentStatus.PLANNED:
            raise InvalidOperationError(
                "Can only mark PLANNED shipments as IN_TRANSIT. "
                f"Current status: {self.status.value}"
            )
        self.status = ShipmentStatus.IN_TRANSIT
        self.shipped_date = at

    def mark_delivered(self, at: datetime) -> None:
        if self.status != ShipmentStatus.IN_TRANSIT:
            raise InvalidOperationError(
                "Can only deliver IN_TRANSIT shipments. "
                f"Current status: {self.status.value}"
            )
        self.status = ShipmentStatus.DELIVERED
        self.delivered_date = at

    def reschedule(self, planned_date: date) -> None:
        if self.status == ShipmentStatus.DELIVERED:
            raise InvalidOperationError("Cannot update planned date for delivered shipments")
        self.planned_date = planned_date

    def check_deletable(self) -> None:
        if self.status != ShipmentStatus.PLANNED:
            raise InvalidOperationError(
                f"Can only delete PLANNED shipments. Current status: {self.status.value}"
            )
