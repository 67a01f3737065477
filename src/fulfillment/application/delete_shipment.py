"""Application service: Delete Shipment use case (PLANNED shipments only)."""

from __future__ import annotations

from fulfillment.domain.repository.unit_of_work import UnitOfWork
from fulfillment.domain.service.shipment_dispatcher import ShipmentDispatcher


class DeleteShipmentHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, shipment_id: int) -> None:
        with self._uow as uow:
            ShipmentDispatcher(uow.shipments, uow.carriers).delete(shipment_id)
