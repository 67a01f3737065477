"""Abstract repositories for the Inventory aggregate and its ledger."""

from __future__ import annotations

from abc import ABC, abstractmethod

from fulfillment.domain.model.inventory import Inventory, InventoryMovement


class InventoryRepository(ABC):

    @abstractmethod
    def get_by_id(self, inventory_id: int) -> Inventory | None:
        """Return an inventory row by its ID, or None."""

    @abstractmethod
    def get_by_location(self, warehouse_id: int, product_id: int) -> Inventory | None:
        """Return the row for a warehouse/product pair, or None."""

    @abstractmethod
    def list_all(self) -> list[Inventory]:
        """Return every inventory row."""

    @abstractmethod
    def list_by_warehouse(self, warehouse_id: int) -> list[Inventory]:
        """Return every row stored in a warehouse."""

    @abstractmethod
    def list_by_product(self, product_id: int) -> list[Inventory]:
        """Return every row holding a product, across warehouses."""

    @abstractmethod
    def save(self, inventory: Inventory) -> None:
        """Persist a new or updated row.

        Raises DuplicateResourceError if another row already exists for
        the same warehouse/product pair.
        """

    @abstractmethod
    def delete(self, inventory_id: int) -> None:
        """Remove a row."""


class InventoryMovementRepository(ABC):
    """Append-only: movements are added, never updated or deleted."""

    @abstractmethod
    def add(self, movement: InventoryMovement) -> InventoryMovement:
        """Append a movement and return it with its assigned ID."""

    @abstractmethod
    def list_all(self) -> list[InventoryMovement]:
        """Return every movement in insertion order."""

    @abstractmethod
    def list_by_inventory(self, inventory_id: int) -> list[InventoryMovement]:
        """Return the movements of one inventory row."""

    @abstractmethod
    def list_by_reference(self, reference_document: str) -> list[InventoryMovement]:
        """Return the movements caused by one document (``SO-1``, ``PO-7``...)."""
