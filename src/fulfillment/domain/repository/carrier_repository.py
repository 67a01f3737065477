"""Abstract repository for the Carrier aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from fulfillment.domain.model.carrier import Carrier


class CarrierRepository(ABC):

    @abstractmethod
    def get_by_id(self, carrier_id: int) -> Carrier | None:
        """Return a carrier by its ID, or None if not found."""

    @abstractmethod
    def get_by_code(self, code: str) -> Carrier | None:
        """Return a carrier by its code, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Carrier]:
        """Return every carrier."""

    @abstractmethod
    def save(self, carrier: Carrier) -> None:
        """Persist a new or updated carrier.  Codes are unique."""
