"""Application service: Cancel Order use case.

If the order was RESERVED, its reserved quantities go back to the
ledger before cancelling.  CREATED orders are cancelled without any
inventory change; SHIPPED and DELIVERED orders cannot be cancelled.
"""

from __future__ import annotations

from fulfillment.application.dto import SalesOrderDTO, sales_order_to_dto
from fulfillment.domain.clock import Clock, utc_now
from fulfillment.domain.exceptions import ResourceNotFoundError
from fulfillment.domain.repository.unit_of_work import UnitOfWork
from fulfillment.domain.service.inventory_ledger import InventoryLedger


class CancelOrderHandler:

    def __init__(self, uow: UnitOfWork, clock: Clock = utc_now) -> None:
        self._uow = uow
        self._clock = clock

    def handle(self, order_id: int) -> SalesOrderDTO:
        with self._uow as uow:
            order = uow.sales_orders.get_by_id(order_id)
            if order is None:
                raise ResourceNotFoundError.of("Sales order", "id", order_id)

            order.check_cancelable()
            if order.holds_reservation:
                InventoryLedger(uow.inventory, uow.movements, self._clock).release_lines(order.lines)

            order.cancel()
            uow.sales_orders.save(order)
            return sales_order_to_dto(order)
