"""Application service: Add Warehouse use case."""

from __future__ import annotations

from fulfillment.domain.exceptions import DuplicateResourceError, InvalidArgumentError
from fulfillment.domain.model.catalog import Warehouse
from fulfillment.domain.repository.unit_of_work import UnitOfWork


class AddWarehouseHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        code: str,
        name: str,
        capacity: int = 0,
        manager_id: int | None = None,
    ) -> Warehouse:
        if not code or not code.strip():
            raise InvalidArgumentError("Warehouse code is required")
        if capacity < 0:
            raise InvalidArgumentError("Warehouse capacity cannot be negative")

        with self._uow as uow:
            if uow.warehouses.get_by_code(code.strip()) is not None:
                raise DuplicateResourceError(f"Warehouse already exists with code: '{code}'")

            warehouse = Warehouse(
                id=None,
                code=code.strip(),
                name=name.strip(),
                capacity=capacity,
                manager_id=manager_id,
            )
            uow.warehouses.save(warehouse)
            return warehouse
