"""Application service: Approve Purchase Order use case."""

from __future__ import annotations

from fulfillment.application.dto import PurchaseOrderDTO, purchase_order_to_dto
from fulfillment.domain.clock import Clock, utc_now
from fulfillment.domain.exceptions import ResourceNotFoundError
from fulfillment.domain.repository.unit_of_work import UnitOfWork


class ApprovePurchaseOrderHandler:

    def __init__(self, uow: UnitOfWork, clock: Clock = utc_now) -> None:
        self._uow = uow
        self._clock = clock

    def handle(self, order_id: int) -> PurchaseOrderDTO:
        with self._uow as uow:
            order = uow.purchase_orders.get_by_id(order_id)
            if order is None:
                raise ResourceNotFoundError.of("Purchase order", "id", order_id)
            order.approve(self._clock())
            uow.purchase_orders.save(order)
            return purchase_order_to_dto(order)
