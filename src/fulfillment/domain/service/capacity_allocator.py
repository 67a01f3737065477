"""Domain service: Carrier Capacity Allocator.

Keeps each carrier's daily shipment counter.  Callers check capacity and
increment inside the same unit of work, which holds the lock that makes
the pair a single step.
"""

from __future__ import annotations

import logging

from fulfillment.domain.exceptions import ResourceNotFoundError
from fulfillment.domain.model.carrier import Carrier
from fulfillment.domain.repository.carrier_repository import CarrierRepository

logger = logging.getLogger(__name__)


class CarrierCapacityAllocator:

    def __init__(self, carrier_repo: CarrierRepository) -> None:
        self._carrier_repo = carrier_repo

    def increment(self, carrier_id: int, count: int = 1) -> Carrier:
        carrier = self._get(carrier_id)
        carrier.take_slots(count)
        self._carrier_repo.save(carrier)
        return carrier

    def decrement(self, carrier_id: int) -> Carrier:
        """Free one slot; the counter never goes below zero."""
        carrier = self._get(carrier_id)
        carrier.free_slot()
        self._carrier_repo.save(carrier)
        return carrier

    def reset_all(self) -> int:
        """Start a new operational day.  Returns the number of carriers reset."""
        carriers = self._carrier_repo.list_all()
        for carrier in carriers:
            carrier.reset_daily_shipments()
            self._carrier_repo.save(carrier)
        logger.info("Daily shipment counters reset for %d carrier(s)", len(carriers))
        return len(carriers)

    def _get(self, carrier_id: int) -> Carrier:
        carrier = self._carrier_repo.get_by_id(carrier_id)
        if carrier is None:
            raise ResourceNotFoundError.of("Carrier", "id", carrier_id)
        return carrier
