"""Abstract repository for the PurchaseOrder aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from fulfillment.domain.model.purchase_order import PurchaseOrder, PurchaseOrderStatus


class PurchaseOrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> PurchaseOrder | None:
        """Return a purchase order by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[PurchaseOrder]:
        """Return every purchase order."""

    @abstractmethod
    def list_by_status(self, status: PurchaseOrderStatus) -> list[PurchaseOrder]:
        """Return the purchase orders currently in ``status``."""

    @abstractmethod
    def list_by_supplier(self, supplier_id: int) -> list[PurchaseOrder]:
        """Return the purchase orders placed with a supplier."""

    @abstractmethod
    def save(self, order: PurchaseOrder) -> None:
        """Persist a new or updated purchase order."""

    @abstractmethod
    def delete(self, order_id: int) -> None:
        """Remove a purchase order."""
