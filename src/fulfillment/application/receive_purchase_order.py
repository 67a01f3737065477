"""Application service: Receive Purchase Order use case.

Credits every line into the receiving warehouse (creating inventory
rows on first stocking) with one INBOUND movement per line referenced
``PO-{id}``, then marks the order RECEIVED.  A failure on any line
rolls back the credits already applied.
"""

from __future__ import annotations

from fulfillment.application.dto import PurchaseOrderDTO, purchase_order_to_dto
from fulfillment.domain.clock import Clock, utc_now
from fulfillment.domain.exceptions import ResourceNotFoundError
from fulfillment.domain.repository.unit_of_work import UnitOfWork
from fulfillment.domain.service.inventory_ledger import InventoryLedger


class ReceivePurchaseOrderHandler:

    def __init__(self, uow: UnitOfWork, clock: Clock = utc_now) -> None:
        self._uow = uow
        self._clock = clock

    def handle(self, order_id: int, warehouse_id: int) -> PurchaseOrderDTO:
        with self._uow as uow:
            order = uow.purchase_orders.get_by_id(order_id)
            if order is None:
                raise ResourceNotFoundError.of("Purchase order", "id", order_id)
            if uow.warehouses.get_by_id(warehouse_id) is None:
                raise ResourceNotFoundError.of("Warehouse", "id", warehouse_id)

            order.check_receivable()
            ledger = InventoryLedger(uow.inventory, uow.movements, self._clock)
            for line in order.lines:
                ledger.credit(
                    warehouse_id,
                    line.product_id,
                    line.quantity.value,
                    order.reference,
                    f"Received from purchase order #{order.id}",
                )

            order.mark_received(self._clock(), warehouse_id)
            uow.purchase_orders.save(order)
            return purchase_order_to_dto(order)
