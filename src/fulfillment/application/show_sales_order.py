"""Application service: Show Sales Order use case (queries)."""

from __future__ import annotations

from fulfillment.application.dto import SalesOrderDTO, sales_order_to_dto
from fulfillment.domain.exceptions import ResourceNotFoundError
from fulfillment.domain.model.sales_order import SalesOrder, SalesOrderStatus
from fulfillment.domain.repository.unit_of_work import UnitOfWork


class ShowSalesOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int) -> SalesOrderDTO:
        with self._uow as uow:
            order = uow.sales_orders.get_by_id(order_id)
            if order is None:
                raise ResourceNotFoundError.of("Sales order", "id", order_id)
            return sales_order_to_dto(order, uow.shipments.get_by_sales_order(order_id))

    def list(
        self,
        status: SalesOrderStatus | None = None,
        client_id: int | None = None,
    ) -> list[SalesOrderDTO]:
        """All orders, optionally narrowed to one status and/or one client."""
        with self._uow as uow:
            return [
                sales_order_to_dto(o, uow.shipments.get_by_sales_order(o.id))  # type: ignore[arg-type]
                for o in self._select(uow, status, client_id)
            ]

    def count(
        self,
        status: SalesOrderStatus | None = None,
        client_id: int | None = None,
    ) -> int:
        with self._uow as uow:
            return len(self._select(uow, status, client_id))

    @staticmethod
    def _select(
        uow: UnitOfWork,
        status: SalesOrderStatus | None,
        client_id: int | None,
    ) -> list[SalesOrder]:
        if client_id is not None:
            orders = uow.sales_orders.list_by_client(client_id)
        elif status is not None:
            orders = uow.sales_orders.list_by_status(status)
        else:
            orders = uow.sales_orders.list_all()
        if status is not None:
            orders = [o for o in orders if o.status == status]
        return sorted(orders, key=lambda o: o.id)  # type: ignore[arg-type, return-value]
