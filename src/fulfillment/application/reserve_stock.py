"""Application service: Reserve Stock use case.

Retries the reservation of a CREATED (backordered) sales order.  Either
every line is reserved or none is.
"""

from __future__ import annotations

from fulfillment.application.dto import SalesOrderDTO, sales_order_to_dto
from fulfillment.domain.clock import Clock, utc_now
from fulfillment.domain.exceptions import ResourceNotFoundError
from fulfillment.domain.repository.unit_of_work import UnitOfWork
from fulfillment.domain.service.inventory_ledger import InventoryLedger


class ReserveStockHandler:

    def __init__(self, uow: UnitOfWork, clock: Clock = utc_now) -> None:
        self._uow = uow
        self._clock = clock

    def handle(self, order_id: int) -> SalesOrderDTO:
        with self._uow as uow:
            order = uow.sales_orders.get_by_id(order_id)
            if order is None:
                raise ResourceNotFoundError.of("Sales order", "id", order_id)

            # Guard first, then touch stock, then transition
            order.check_reservable()
            InventoryLedger(uow.inventory, uow.movements, self._clock).reserve_lines(order.lines)
            order.mark_reserved(self._clock())
            uow.sales_orders.save(order)
            return sales_order_to_dto(order)
