"""Application service: Add Client / Add Supplier use cases."""

from __future__ import annotations

from fulfillment.domain.exceptions import InvalidArgumentError
from fulfillment.domain.model.catalog import Client, Supplier
from fulfillment.domain.repository.unit_of_work import UnitOfWork


class AddClientHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, name: str, email: str = "") -> Client:
        _require_name(name, "Client")
        with self._uow as uow:
            client = Client(id=None, name=name.strip(), email=email.strip())
            uow.clients.save(client)
            return client


class AddSupplierHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, name: str, contact: str = "") -> Supplier:
        _require_name(name, "Supplier")
        with self._uow as uow:
            supplier = Supplier(id=None, name=name.strip(), contact=contact.strip())
            uow.suppliers.save(supplier)
            return supplier


def _require_name(name: str, what: str) -> None:
    if not name or not name.strip():
        raise InvalidArgumentError(f"{what} name is required")
