"""Application service: Show Catalog use case (queries)."""

from __future__ import annotations

from fulfillment.domain.model.catalog import Client, Product, Supplier, Warehouse
from fulfillment.domain.repository.unit_of_work import UnitOfWork


class ShowCatalogHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def products(self) -> list[Product]:
        with self._uow as uow:
            return sorted(uow.products.list_all(), key=lambda p: p.id)  # type: ignore[arg-type, return-value]

    def warehouses(self) -> list[Warehouse]:
        with self._uow as uow:
            return sorted(uow.warehouses.list_all(), key=lambda w: w.id)  # type: ignore[arg-type, return-value]

    def clients(self) -> list[Client]:
        with self._uow as uow:
            return sorted(uow.clients.list_all(), key=lambda c: c.id)  # type: ignore[arg-type, return-value]

    def suppliers(self) -> list[Supplier]:
        with self._uow as uow:
            return sorted(uow.suppliers.list_all(), key=lambda s: s.id)  # type: ignore[arg-type, return-value]
