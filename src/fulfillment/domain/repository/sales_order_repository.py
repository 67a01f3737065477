"""Abstract repository for the SalesOrder aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from fulfillment.domain.model.sales_order import SalesOrder, SalesOrderStatus


class SalesOrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> SalesOrder | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[SalesOrder]:
        """Return every sales order."""

    @abstractmethod
    def list_by_status(self, status: SalesOrderStatus) -> list[SalesOrder]:
        """Return the orders currently in ``status``."""

    @abstractmethod
    def list_by_client(self, client_id: int) -> list[SalesOrder]:
        """Return the orders placed by a client."""

    @abstractmethod
    def save(self, order: SalesOrder) -> None:
        """Persist a new or updated order, assigning an ID to new ones."""
