"""Application service: Delete Purchase Order use case."""

from __future__ import annotations

from fulfillment.domain.exceptions import ResourceNotFoundError
from fulfillment.domain.repository.unit_of_work import UnitOfWork


class DeletePurchaseOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int) -> None:
        """Only CREATED or CANCELED orders can be deleted."""
        with self._uow as uow:
            order = uow.purchase_orders.get_by_id(order_id)
            if order is None:
                raise ResourceNotFoundError.of("Purchase order", "id", order_id)
            order.check_deletable()
            uow.purchase_orders.delete(order_id)
