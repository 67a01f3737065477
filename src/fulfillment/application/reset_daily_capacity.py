"""Application service: Reset Daily Capacity use case.

Starts a new operational day for every carrier.  Invoked once per day
by an external scheduler.
"""

from __future__ import annotations

from fulfillment.domain.repository.unit_of_work import UnitOfWork
from fulfillment.domain.service.capacity_allocator import CarrierCapacityAllocator


class ResetDailyCapacityHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> int:
        with self._uow as uow:
            return CarrierCapacityAllocator(uow.carriers).reset_all()
