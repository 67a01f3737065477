"""Application service: Deliver Order use case (no stock effect)."""

from __future__ import annotations

from fulfillment.application.dto import SalesOrderDTO, sales_order_to_dto
from fulfillment.domain.clock import Clock, utc_now
from fulfillment.domain.exceptions import ResourceNotFoundError
from fulfillment.domain.repository.unit_of_work import UnitOfWork


class DeliverOrderHandler:

    def __init__(self, uow: UnitOfWork, clock: Clock = utc_now) -> None:
        self._uow = uow
        self._clock = clock

    def handle(self, order_id: int) -> SalesOrderDTO:
        with self._uow as uow:
            order = uow.sales_orders.get_by_id(order_id)
            if order is None:
                raise ResourceNotFoundError.of("Sales order", "id", order_id)

            order.deliver(self._clock())
            uow.sales_orders.save(order)
            return sales_order_to_dto(order, uow.shipments.get_by_sales_order(order_id))
