"""Application service: Show Movements use case (ledger history)."""

from __future__ import annotations

from fulfillment.application.dto import MovementDTO, movement_to_dto
from fulfillment.domain.exceptions import ResourceNotFoundError
from fulfillment.domain.model.inventory import InventoryMovement
from fulfillment.domain.repository.unit_of_work import UnitOfWork


class ShowMovementsHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        inventory_id: int | None = None,
        reference_document: str | None = None,
        warehouse_id: int | None = None,
    ) -> list[MovementDTO]:
        """Movement history, oldest first, narrowed by at most one filter."""
        with self._uow as uow:
            if inventory_id is not None:
                if uow.inventory.get_by_id(inventory_id) is None:
                    raise ResourceNotFoundError.of("Inventory", "id", inventory_id)
                movements = uow.movements.list_by_inventory(inventory_id)
            elif reference_document is not None:
                movements = uow.movements.list_by_reference(reference_document)
            elif warehouse_id is not None:
                if uow.warehouses.get_by_id(warehouse_id) is None:
                    raise ResourceNotFoundError.of("Warehouse", "id", warehouse_id)
                row_ids = {inv.id for inv in uow.inventory.list_by_warehouse(warehouse_id)}
                movements = [m for m in uow.movements.list_all() if m.inventory_id in row_ids]
            else:
                movements = uow.movements.list_all()
            return [movement_to_dto(m) for m in _chronological(movements)]


def _chronological(movements: list[InventoryMovement]) -> list[InventoryMovement]:
    return sorted(movements, key=lambda m: (m.occurred_at, m.id))
