"""Unit of Work: the explicit transaction boundary of every use case.

A handler does all its reads and writes inside ``with uow:``.  Leaving
the block normally commits; leaving it through an exception rolls every
repository back to the state it had on entry and re-raises, so a failed
multi-line reservation or batch assignment leaves nothing behind.

Implementations must also serialise conflicting transactions (lock,
version check...) so read-check-then-write sequences on inventory rows
and carrier counters cannot interleave.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from fulfillment.domain.repository.carrier_repository import CarrierRepository
from fulfillment.domain.repository.catalog_repository import (
    ClientRepository,
    ProductRepository,
    SupplierRepository,
    WarehouseRepository,
)
from fulfillment.domain.repository.inventory_repository import (
    InventoryMovementRepository,
    InventoryRepository,
)
from fulfillment.domain.repository.purchase_order_repository import (
    PurchaseOrderRepository,
)
from fulfillment.domain.repository.sales_order_repository import SalesOrderRepository
from fulfillment.domain.repository.shipment_repository import ShipmentRepository


class UnitOfWork(ABC):

    products: ProductRepository
    warehouses: WarehouseRepository
    clients: ClientRepository
    suppliers: SupplierRepository
    inventory: InventoryRepository
    movements: InventoryMovementRepository
    sales_orders: SalesOrderRepository
    shipments: ShipmentRepository
    carriers: CarrierRepository
    purchase_orders: PurchaseOrderRepository

    def __enter__(self) -> UnitOfWork:
        self.begin()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if exc_type is None:
                self.commit()
            else:
                self.rollback()
        finally:
            self.close()

    @abstractmethod
    def begin(self) -> None:
        """Start a transaction (acquire locks, take snapshots...)."""

    @abstractmethod
    def commit(self) -> None:
        """Make every change since ``begin`` durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every change since ``begin``."""

    @abstractmethod
    def close(self) -> None:
        """Release whatever ``begin`` acquired."""
