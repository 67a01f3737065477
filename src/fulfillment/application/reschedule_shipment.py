"""Application service: Reschedule Shipment use case."""

from __future__ import annotations

from datetime import date

from fulfillment.application.dto import ShipmentDTO, shipment_to_dto
from fulfillment.domain.repository.unit_of_work import UnitOfWork
from fulfillment.domain.service.shipment_dispatcher import ShipmentDispatcher


class RescheduleShipmentHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, shipment_id: int, planned_date: date) -> ShipmentDTO:
        with self._uow as uow:
            dispatcher = ShipmentDispatcher(uow.shipments, uow.carriers)
            return shipment_to_dto(dispatcher.reschedule(shipment_id, planned_date))
