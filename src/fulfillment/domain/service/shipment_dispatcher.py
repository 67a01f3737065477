"""Domain service: Shipment Dispatcher.

Creates the single shipment of a shipped sales order, assigns it to a
carrier under that carrier's daily capacity, and tracks it to delivery.
Every assignment takes a capacity slot through the allocator; every
delivery gives it back.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date, datetime, time, timedelta
from typing import Callable

from fulfillment.domain.clock import Clock, utc_now
from fulfillment.domain.exceptions import (
    InvalidArgumentError,
    InvalidOperationError,
    ResourceNotFoundError,
)
from fulfillment.domain.model.carrier import Carrier
from fulfillment.domain.model.sales_order import SalesOrder
from fulfillment.domain.model.shipment import Shipment
from fulfillment.domain.repository.carrier_repository import CarrierRepository
from fulfillment.domain.repository.shipment_repository import ShipmentRepository
from fulfillment.domain.service.capacity_allocator import CarrierCapacityAllocator

logger = logging.getLogger(__name__)

DEFAULT_CUTOFF = time(17, 0)


def planned_dispatch_date(ordered_at: datetime, cutoff: time = DEFAULT_CUTOFF) -> date:
    """Same-day dispatch before the cut-off, next day from the cut-off on."""
    if ordered_at.time() < cutoff:
        return ordered_at.date()
    return ordered_at.date() + timedelta(days=1)


def generate_tracking_number(sales_order_id: int) -> str:
    return f"TRK-SO-{sales_order_id}-{uuid.uuid4().hex[:10].upper()}"


class ShipmentDispatcher:

    def __init__(
        self,
        shipment_repo: ShipmentRepository,
        carrier_repo: CarrierRepository,
        cutoff: time = DEFAULT_CUTOFF,
        clock: Clock = utc_now,
        tracking_numbers: Callable[[int], str] = generate_tracking_number,
    ) -> None:
        self._shipment_repo = shipment_repo
        self._carrier_repo = carrier_repo
        self._allocator = CarrierCapacityAllocator(carrier_repo)
        self._cutoff = cutoff
        self._clock = clock
        self._tracking_numbers = tracking_numbers

    # --- Lookups --------------------------------------------------------------

    def get_shipment(self, shipment_id: int) -> Shipment:
        shipment = self._shipment_repo.get_by_id(shipment_id)
        if shipment is None:
            raise ResourceNotFoundError.of("Shipment", "id", shipment_id)
        return shipment

    def get_carrier(self, carrier_id: int) -> Carrier:
        carrier = self._carrier_repo.get_by_id(carrier_id)
        if carrier is None:
            raise ResourceNotFoundError.of("Carrier", "id", carrier_id)
        return carrier

    # --- Creation -------------------------------------------------------------

    def auto_create_shipment(self, order: SalesOrder) -> Shipment:
        """Return the order's shipment, creating it on first call."""
        existing = self._shipment_repo.get_by_sales_order(order.id)  # type: ignore[arg-type]
        if existing is not None:
            return existing

        shipment = Shipment(
            id=None,
            sales_order_id=order.id,  # type: ignore[arg-type]
            tracking_number=self._unique_tracking_number(order.id),  # type: ignore[arg-type]
            planned_date=planned_dispatch_date(order.created_at, self._cutoff),
            created_at=self._clock(),
        )
        self._shipment_repo.save(shipment)
        logger.info(
            "Shipment #%s planned for %s (order #%s, tracking %s)",
            shipment.id, shipment.planned_date, order.id, shipment.tracking_number,
        )
        return shipment

    # --- Carrier assignment ---------------------------------------------------

    def assign_carrier(self, shipment_id: int, carrier_id: int) -> Shipment:
        shipment = self.get_shipment(shipment_id)
        shipment.check_assignable()
        carrier = self.get_carrier(carrier_id)

        if shipment.carrier_id == carrier.id:
            return shipment

        self._check_active(carrier)
        if not carrier.has_room_for(1):
            logger.warning(
                "Carrier %s rejected shipment #%s: %s/%s slots used",
                carrier.code, shipment.id,
                carrier.current_daily_shipments, carrier.max_daily_capacity,
            )
            raise InvalidOperationError(
                f"Carrier {carrier.code} has reached its max daily capacity "
                f"({carrier.max_daily_capacity})"
            )

        self._move(shipment, carrier)
        self._allocator.increment(carrier.id)  # type: ignore[arg-type]
        logger.info("Shipment #%s assigned to carrier %s", shipment.id, carrier.code)
        return shipment

    def assign_multiple(self, carrier_id: int, shipment_ids: list[int]) -> list[Shipment]:
        """Assign a batch of shipments to one carrier, all or none."""
        if len(set(shipment_ids)) != len(shipment_ids):
            raise InvalidArgumentError("Shipment ids in a batch must be distinct")

        carrier = self.get_carrier(carrier_id)
        self._check_active(carrier)

        shipments = [self.get_shipment(sid) for sid in shipment_ids]
        for shipment in shipments:
            shipment.check_assignable()
        pending = [s for s in shipments if s.carrier_id != carrier.id]

        available = carrier.available_capacity
        if len(pending) > available:
            logger.warning(
                "Carrier %s rejected batch of %d shipment(s): %d slot(s) left",
                carrier.code, len(pending), available,
            )
            raise InvalidOperationError(
                f"Available capacity exceeded for carrier {carrier.code}: "
                f"requested {len(pending)}, available {available}"
            )

        for shipment in pending:
            self._move(shipment, carrier)
        if pending:
            self._allocator.increment(carrier.id, len(pending))  # type: ignore[arg-type]
        logger.info("%d shipment(s) assigned to carrier %s", len(pending), carrier.code)
        return shipments

    # --- Tracking -------------------------------------------------------------

    def mark_in_transit(self, shipment_id: int) -> Shipment:
        shipment = self.get_shipment(shipment_id)
        shipment.mark_in_transit(self._clock())
        self._shipment_repo.save(shipment)
        return shipment

    def mark_delivered(self, shipment_id: int) -> Shipment:
        """Close the shipment and give its carrier slot back for the day."""
        shipment = self.get_shipment(shipment_id)
        shipment.mark_delivered(self._clock())
        self._shipment_repo.save(shipment)
        if shipment.carrier_id is not None:
            self._allocator.decrement(shipment.carrier_id)
        logger.info("Shipment #%s delivered", shipment.id)
        return shipment

    def reschedule(self, shipment_id: int, planned_date: date) -> Shipment:
        shipment = self.get_shipment(shipment_id)
        shipment.reschedule(planned_date)
        self._shipment_repo.save(shipment)
        return shipment

    def delete(self, shipment_id: int) -> None:
        shipment = self.get_shipment(shipment_id)
        shipment.check_deletable()
        if shipment.carrier_id is not None:
            self._allocator.decrement(shipment.carrier_id)
        self._shipment_repo.delete(shipment_id)

    # --- Internal helpers -----------------------------------------------------

    def _move(self, shipment: Shipment, carrier: Carrier) -> None:
        if shipment.carrier_id is not None:
            self._allocator.decrement(shipment.carrier_id)
        shipment.assign_carrier(carrier.id)  # type: ignore[arg-type]
        self._shipment_repo.save(shipment)

    @staticmethod
    def _check_active(carrier: Carrier) -> None:
        if not carrier.is_active:
            raise InvalidOperationError(
                f"Carrier {carrier.code} is not ACTIVE (status: {carrier.status.value})"
            )

    def _unique_tracking_number(self, sales_order_id: int) -> str:
        while True:
            candidate = self._tracking_numbers(sales_order_id)
            if self._shipment_repo.get_by_tracking_number(candidate) is None:
                return candidate
