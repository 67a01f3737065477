"""Application service: Show Purchase Order use case (queries)."""

from __future__ import annotations

from fulfillment.application.dto import PurchaseOrderDTO, purchase_order_to_dto
from fulfillment.domain.exceptions import ResourceNotFoundError
from fulfillment.domain.model.purchase_order import PurchaseOrderStatus
from fulfillment.domain.repository.unit_of_work import UnitOfWork


class ShowPurchaseOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int) -> PurchaseOrderDTO:
        with self._uow as uow:
            order = uow.purchase_orders.get_by_id(order_id)
            if order is None:
                raise ResourceNotFoundError.of("Purchase order", "id", order_id)
            return purchase_order_to_dto(order)

    def list(
        self,
        status: PurchaseOrderStatus | None = None,
        supplier_id: int | None = None,
    ) -> list[PurchaseOrderDTO]:
        with self._uow as uow:
            if supplier_id is not None:
                orders = uow.purchase_orders.list_by_supplier(supplier_id)
            elif status is not None:
                orders = uow.purchase_orders.list_by_status(status)
            else:
                orders = uow.purchase_orders.list_all()
            if status is not None:
                orders = [o for o in orders if o.status == status]
            return [purchase_order_to_dto(o) for o in sorted(orders, key=lambda o: o.id)]  # type: ignore[arg-type, return-value]
