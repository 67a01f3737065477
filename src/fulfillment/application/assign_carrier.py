"""Application service: Assign Carrier use cases.

Single and batch assignment both check the carrier's remaining daily
capacity and take the slots inside the same transaction, so two
concurrent assignments can never overbook a carrier.
"""

from __future__ import annotations

from fulfillment.application.dto import ShipmentDTO, shipment_to_dto
from fulfillment.domain.clock import Clock, utc_now
from fulfillment.domain.repository.unit_of_work import UnitOfWork
from fulfillment.domain.service.shipment_dispatcher import ShipmentDispatcher


class AssignCarrierHandler:

    def __init__(self, uow: UnitOfWork, clock: Clock = utc_now) -> None:
        self._uow = uow
        self._clock = clock

    def handle(self, shipment_id: int, carrier_id: int) -> ShipmentDTO:
        with self._uow as uow:
            dispatcher = ShipmentDispatcher(uow.shipments, uow.carriers, clock=self._clock)
            return shipment_to_dto(dispatcher.assign_carrier(shipment_id, carrier_id))


class AssignMultipleShipmentsHandler:

    def __init__(self, uow: UnitOfWork, clock: Clock = utc_now) -> None:
        self._uow = uow
        self._clock = clock

    def handle(self, carrier_id: int, shipment_ids: list[int]) -> list[ShipmentDTO]:
        """Assign every shipment or none of them."""
        with self._uow as uow:
            dispatcher = ShipmentDispatcher(uow.shipments, uow.carriers, clock=self._clock)
            shipments = dispatcher.assign_multiple(carrier_id, shipment_ids)
            return [shipment_to_dto(s) for s in shipments]
