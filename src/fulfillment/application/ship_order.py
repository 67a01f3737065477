"""Application service: Ship Order use case.

Consumes the reserved stock of every line (one OUTBOUND movement per
line, referenced ``SO-{id}``), obtains the order's shipment from the
dispatcher and moves the order to SHIPPED, all in one transaction.
"""

from __future__ import annotations

from datetime import time

from fulfillment.application.dto import SalesOrderDTO, sales_order_to_dto
from fulfillment.domain.clock import Clock, utc_now
from fulfillment.domain.exceptions import ResourceNotFoundError
from fulfillment.domain.repository.unit_of_work import UnitOfWork
from fulfillment.domain.service.inventory_ledger import InventoryLedger
from fulfillment.domain.service.shipment_dispatcher import DEFAULT_CUTOFF, ShipmentDispatcher


class ShipOrderHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        cutoff: time = DEFAULT_CUTOFF,
        clock: Clock = utc_now,
    ) -> None:
        self._uow = uow
        self._cutoff = cutoff
        self._clock = clock

    def handle(self, order_id: int) -> SalesOrderDTO:
        with self._uow as uow:
            order = uow.sales_orders.get_by_id(order_id)
            if order is None:
                raise ResourceNotFoundError.of("Sales order", "id", order_id)

            order.check_shippable()
            ledger = InventoryLedger(uow.inventory, uow.movements, self._clock)
            ledger.consume_lines(
                order.lines, order.reference, f"Shipped for sales order #{order.id}"
            )

            dispatcher = ShipmentDispatcher(
                uow.shipments, uow.carriers, cutoff=self._cutoff, clock=self._clock
            )
            shipment = dispatcher.auto_create_shipment(order)

            order.mark_shipped(self._clock())
            uow.sales_orders.save(order)
            return sales_order_to_dto(order, shipment)
