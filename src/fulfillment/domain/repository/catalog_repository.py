"""Abstract repositories for the reference entities.

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete implementations (in-memory, JSON) live in the
infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from fulfillment.domain.model.catalog import Client, Product, Supplier, Warehouse


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: int) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_sku(self, sku: str) -> Product | None:
        """Return a product by its SKU, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product.  SKUs are unique."""


class WarehouseRepository(ABC):

    @abstractmethod
    def get_by_id(self, warehouse_id: int) -> Warehouse | None:
        """Return a warehouse by its ID, or None if not found."""

    @abstractmethod
    def get_by_code(self, code: str) -> Warehouse | None:
        """Return a warehouse by its code, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Warehouse]:
        """Return every warehouse."""

    @abstractmethod
    def save(self, warehouse: Warehouse) -> None:
        """Persist a new or updated warehouse.  Codes are unique."""


class ClientRepository(ABC):

    @abstractmethod
    def get_by_id(self, client_id: int) -> Client | None:
        """Return a client by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Client]:
        """Return every client."""

    @abstractmethod
    def save(self, client: Client) -> None:
        """Persist a new or updated client."""


class SupplierRepository(ABC):

    @abstractmethod
    def get_by_id(self, supplier_id: int) -> Supplier | None:
        """Return a supplier by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Supplier]:
        """Return every supplier."""

    @abstractmethod
    def save(self, supplier: Supplier) -> None:
        """Persist a new or updated supplier."""
