"""Application service: Stock Inventory use case.

Opens the inventory row of a warehouse/product pair with its initial
quantities.  A pair can only be stocked once; later changes go through
adjustments, receipts and shipments.
"""

from __future__ import annotations

from fulfillment.application.dto import InventoryDTO, inventory_to_dto
from fulfillment.domain.clock import Clock, utc_now
from fulfillment.domain.exceptions import ResourceNotFoundError
from fulfillment.domain.repository.unit_of_work import UnitOfWork
from fulfillment.domain.service.inventory_ledger import InventoryLedger


class StockInventoryHandler:

    def __init__(self, uow: UnitOfWork, clock: Clock = utc_now) -> None:
        self._uow = uow
        self._clock = clock

    def handle(
        self,
        warehouse_id: int,
        product_id: int,
        qty_on_hand: int,
        qty_reserved: int = 0,
    ) -> InventoryDTO:
        with self._uow as uow:
            if uow.warehouses.get_by_id(warehouse_id) is None:
                raise ResourceNotFoundError.of("Warehouse", "id", warehouse_id)
            if uow.products.get_by_id(product_id) is None:
                raise ResourceNotFoundError.of("Product", "id", product_id)

            ledger = InventoryLedger(uow.inventory, uow.movements, self._clock)
            inv = ledger.open_row(warehouse_id, product_id, qty_on_hand, qty_reserved)
            return inventory_to_dto(inv)
