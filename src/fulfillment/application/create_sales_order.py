"""Application service: Create Sales Order use case.

Resolves every requested line (product, warehouse, price snapshot),
persists the order as CREATED and immediately tries to reserve its
stock.  A shortage is not an error here: the order simply stays CREATED
as a backorder and the shortages are reported back to the caller.
"""

from __future__ import annotations

import logging

from fulfillment.application.dto import (
    OrderPlacementDTO,
    SalesOrderLineSpec,
    sales_order_to_dto,
    shortage_to_dto,
)
from fulfillment.domain.clock import Clock, utc_now
from fulfillment.domain.exceptions import (
    InsufficientStockError,
    InvalidOperationError,
    ResourceNotFoundError,
    StockShortage,
)
from fulfillment.domain.model.sales_order import SalesOrder, SalesOrderLine
from fulfillment.domain.model.value_objects import Money, Quantity
from fulfillment.domain.repository.unit_of_work import UnitOfWork
from fulfillment.domain.service.inventory_ledger import InventoryLedger

logger = logging.getLogger(__name__)


class CreateSalesOrderHandler:

    def __init__(self, uow: UnitOfWork, clock: Clock = utc_now) -> None:
        self._uow = uow
        self._clock = clock

    def handle(self, client_id: int, line_specs: list[SalesOrderLineSpec]) -> OrderPlacementDTO:
        with self._uow as uow:
            if uow.clients.get_by_id(client_id) is None:
                raise ResourceNotFoundError.of("Client", "id", client_id)

            lines = [self._resolve_line(uow, spec) for spec in line_specs]
            order = SalesOrder.create(client_id, lines, created_at=self._clock())
            uow.sales_orders.save(order)

            ledger = InventoryLedger(uow.inventory, uow.movements, self._clock)
            shortages: list[StockShortage] = []
            try:
                ledger.reserve_lines(order.lines)
            except InsufficientStockError as exc:
                # Nothing was reserved: reserve_lines validates every line first.
                shortages = exc.shortages
                logger.info("Sales order #%s kept as backorder: %s", order.id, exc)
            else:
                order.mark_reserved(self._clock())
                uow.sales_orders.save(order)
                logger.info("Sales order #%s created and reserved", order.id)

            return OrderPlacementDTO(
                order=sales_order_to_dto(order),
                reserved=not shortages,
                shortages=[shortage_to_dto(s) for s in shortages],
            )

    # --- Line resolution ------------------------------------------------------

    @staticmethod
    def _resolve_line(uow: UnitOfWork, spec: SalesOrderLineSpec) -> SalesOrderLine:
        product = uow.products.get_by_id(spec.product_id)
        if product is None:
            raise ResourceNotFoundError.of("Product", "id", spec.product_id)
        if not product.active:
            raise InvalidOperationError(f"Product {product.sku} is not active")

        if spec.warehouse_id is not None:
            if uow.warehouses.get_by_id(spec.warehouse_id) is None:
                raise ResourceNotFoundError.of("Warehouse", "id", spec.warehouse_id)
            warehouse_id = spec.warehouse_id
        else:
            rows = uow.inventory.list_by_product(product.id)  # type: ignore[arg-type]
            if not rows:
                raise ResourceNotFoundError(
                    f"No warehouse holds inventory for product {product.sku}"
                )
            warehouse_id = max(rows, key=lambda inv: inv.available_quantity).warehouse_id

        unit_price = Money.of(spec.unit_price) if spec.unit_price is not None else product.price
        return SalesOrderLine(
            product_id=product.id,  # type: ignore[arg-type]
            warehouse_id=warehouse_id,
            quantity=Quantity(spec.quantity),
            unit_price=unit_price,  # <-- price snapshot
        )
