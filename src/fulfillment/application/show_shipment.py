"""Application service: Show Shipment use case (queries)."""

from __future__ import annotations

from fulfillment.application.dto import ShipmentDTO, shipment_to_dto
from fulfillment.domain.exceptions import ResourceNotFoundError
from fulfillment.domain.model.shipment import ShipmentStatus
from fulfillment.domain.repository.unit_of_work import UnitOfWork


class ShowShipmentHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, shipment_id: int) -> ShipmentDTO:
        with self._uow as uow:
            shipment = uow.shipments.get_by_id(shipment_id)
            if shipment is None:
                raise ResourceNotFoundError.of("Shipment", "id", shipment_id)
            return shipment_to_dto(shipment)

    def by_sales_order(self, sales_order_id: int) -> ShipmentDTO:
        with self._uow as uow:
            shipment = uow.shipments.get_by_sales_order(sales_order_id)
            if shipment is None:
                raise ResourceNotFoundError.of("Shipment", "sales order id", sales_order_id)
            return shipment_to_dto(shipment)

    def by_tracking_number(self, tracking_number: str) -> ShipmentDTO:
        with self._uow as uow:
            shipment = uow.shipments.get_by_tracking_number(tracking_number)
            if shipment is None:
                raise ResourceNotFoundError.of("Shipment", "tracking number", tracking_number)
            return shipment_to_dto(shipment)

    def list(self, status: ShipmentStatus | None = None) -> list[ShipmentDTO]:
        with self._uow as uow:
            shipments = (
                uow.shipments.list_by_status(status) if status is not None
                else uow.shipments.list_all()
            )
            return [shipment_to_dto(s) for s in sorted(shipments, key=lambda s: s.id)]  # type: ignore[arg-type, return-value]
