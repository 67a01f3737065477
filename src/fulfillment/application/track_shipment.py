"""Application service: shipment tracking use cases.

Delivering a shipment frees its carrier's capacity slot and also closes
the sales order it carries when that order is still SHIPPED.
"""

from __future__ import annotations

from fulfillment.application.dto import ShipmentDTO, shipment_to_dto
from fulfillment.domain.clock import Clock, utc_now
from fulfillment.domain.model.sales_order import SalesOrderStatus
from fulfillment.domain.repository.unit_of_work import UnitOfWork
from fulfillment.domain.service.shipment_dispatcher import ShipmentDispatcher


class MarkInTransitHandler:

    def __init__(self, uow: UnitOfWork, clock: Clock = utc_now) -> None:
        self._uow = uow
        self._clock = clock

    def handle(self, shipment_id: int) -> ShipmentDTO:
        with self._uow as uow:
            dispatcher = ShipmentDispatcher(uow.shipments, uow.carriers, clock=self._clock)
            return shipment_to_dto(dispatcher.mark_in_transit(shipment_id))


class MarkDeliveredHandler:

    def __init__(self, uow: UnitOfWork, clock: Clock = utc_now) -> None:
        self._uow = uow
        self._clock = clock

    def handle(self, shipment_id: int) -> ShipmentDTO:
        with self._uow as uow:
            dispatcher = ShipmentDispatcher(uow.shipments, uow.carriers, clock=self._clock)
            shipment = dispatcher.mark_delivered(shipment_id)

            order = uow.sales_orders.get_by_id(shipment.sales_order_id)
            if order is not None and order.status == SalesOrderStatus.SHIPPED:
                order.deliver(self._clock())
                uow.sales_orders.save(order)
            return shipment_to_dto(shipment)
