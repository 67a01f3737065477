"""Application service: Create / Update Purchase Order use cases.

Both validate that the supplier and every line's product exist before
the aggregate is built or revised.
"""

from __future__ import annotations

from datetime import date

from fulfillment.application.dto import (
    PurchaseOrderDTO,
    PurchaseOrderLineSpec,
    purchase_order_to_dto,
)
from fulfillment.domain.clock import Clock, utc_now
from fulfillment.domain.exceptions import ResourceNotFoundError
from fulfillment.domain.model.purchase_order import PurchaseOrder, PurchaseOrderLine
from fulfillment.domain.model.value_objects import Money, Quantity
from fulfillment.domain.repository.unit_of_work import UnitOfWork


class CreatePurchaseOrderHandler:

    def __init__(self, uow: UnitOfWork, clock: Clock = utc_now) -> None:
        self._uow = uow
        self._clock = clock

    def handle(
        self,
        supplier_id: int,
        line_specs: list[PurchaseOrderLineSpec],
        expected_delivery: date | None = None,
    ) -> PurchaseOrderDTO:
        with self._uow as uow:
            _require_supplier(uow, supplier_id)
            order = PurchaseOrder.create(
                supplier_id,
                _build_lines(uow, line_specs),
                expected_delivery,
                created_at=self._clock(),
            )
            uow.purchase_orders.save(order)
            return purchase_order_to_dto(order)


class UpdatePurchaseOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        order_id: int,
        supplier_id: int,
        line_specs: list[PurchaseOrderLineSpec],
        expected_delivery: date | None = None,
    ) -> PurchaseOrderDTO:
        """Replace supplier, expected delivery and lines of an open order."""
        with self._uow as uow:
            order = uow.purchase_orders.get_by_id(order_id)
            if order is None:
                raise ResourceNotFoundError.of("Purchase order", "id", order_id)
            _require_supplier(uow, supplier_id)
            order.revise(supplier_id, _build_lines(uow, line_specs), expected_delivery)
            uow.purchase_orders.save(order)
            return purchase_order_to_dto(order)


def _require_supplier(uow: UnitOfWork, supplier_id: int) -> None:
    if uow.suppliers.get_by_id(supplier_id) is None:
        raise ResourceNotFoundError.of("Supplier", "id", supplier_id)


def _build_lines(uow: UnitOfWork, specs: list[PurchaseOrderLineSpec]) -> list[PurchaseOrderLine]:
    lines: list[PurchaseOrderLine] = []
    for spec in specs:
        if uow.products.get_by_id(spec.product_id) is None:
            raise ResourceNotFoundError.of("Product", "id", spec.product_id)
        lines.append(
            PurchaseOrderLine(
                product_id=spec.product_id,
                quantity=Quantity(spec.quantity),
                unit_price=Money.of(spec.unit_price),
            )
        )
    return lines
