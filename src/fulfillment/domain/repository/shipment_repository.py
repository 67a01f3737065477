"""Abstract repository for the Shipment aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from fulfillment.domain.model.shipment import Shipment, ShipmentStatus


class ShipmentRepository(ABC):

    @abstractmethod
    def get_by_id(self, shipment_id: int) -> Shipment | None:
        """Return a shipment by its ID, or None if not found."""

    @abstractmethod
    def get_by_sales_order(self, sales_order_id: int) -> Shipment | None:
        """Return the shipment of a sales order, or None."""

    @abstractmethod
    def get_by_tracking_number(self, tracking_number: str) -> Shipment | None:
        """Return a shipment by tracking number, or None."""

    @abstractmethod
    def list_all(self) -> list[Shipment]:
        """Return every shipment."""

    @abstractmethod
    def list_by_status(self, status: ShipmentStatus) -> list[Shipment]:
        """Return the shipments currently in ``status``."""

    @abstractmethod
    def save(self, shipment: Shipment) -> None:
        """Persist a new or updated shipment.

        Raises DuplicateResourceError when the tracking number or the
        sales order is already used by another shipment.
        """

    @abstractmethod
    def delete(self, shipment_id: int) -> None:
        """Remove a shipment."""
