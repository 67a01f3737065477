"""Application service: Show Inventory use case (queries)."""

from __future__ import annotations

from fulfillment.application.dto import InventoryDTO, StockTotalsDTO, inventory_to_dto
from fulfillment.domain.exceptions import ResourceNotFoundError
from fulfillment.domain.model.inventory import Inventory
from fulfillment.domain.repository.unit_of_work import UnitOfWork


class ShowInventoryHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        warehouse_id: int | None = None,
        product_id: int | None = None,
    ) -> list[InventoryDTO]:
        with self._uow as uow:
            if warehouse_id is not None:
                _require_warehouse(uow, warehouse_id)
                rows = uow.inventory.list_by_warehouse(warehouse_id)
            elif product_id is not None:
                _require_product(uow, product_id)
                rows = uow.inventory.list_by_product(product_id)
            else:
                rows = uow.inventory.list_all()
            if warehouse_id is not None and product_id is not None:
                rows = [r for r in rows if r.product_id == product_id]
            return _to_dtos(rows)

    def get(self, warehouse_id: int, product_id: int) -> InventoryDTO:
        with self._uow as uow:
            inv = uow.inventory.get_by_location(warehouse_id, product_id)
            if inv is None:
                raise ResourceNotFoundError(
                    f"Inventory not found for warehouse {warehouse_id} and product {product_id}"
                )
            return inventory_to_dto(inv)

    def low_stock(self, warehouse_id: int, threshold: int) -> list[InventoryDTO]:
        """Rows of a warehouse whose available quantity is below ``threshold``."""
        with self._uow as uow:
            _require_warehouse(uow, warehouse_id)
            rows = [
                r for r in uow.inventory.list_by_warehouse(warehouse_id)
                if r.available_quantity < threshold
            ]
            return _to_dtos(rows)

    def totals(self, product_id: int) -> StockTotalsDTO:
        """On-hand and available stock of a product across all warehouses."""
        with self._uow as uow:
            _require_product(uow, product_id)
            rows = uow.inventory.list_by_product(product_id)
            return StockTotalsDTO(
                product_id=product_id,
                total_on_hand=sum(r.qty_on_hand for r in rows),
                total_available=sum(r.available_quantity for r in rows),
            )


def _require_warehouse(uow: UnitOfWork, warehouse_id: int) -> None:
    if uow.warehouses.get_by_id(warehouse_id) is None:
        raise ResourceNotFoundError.of("Warehouse", "id", warehouse_id)


def _require_product(uow: UnitOfWork, product_id: int) -> None:
    if uow.products.get_by_id(product_id) is None:
        raise ResourceNotFoundError.of("Product", "id", product_id)


def _to_dtos(rows: list[Inventory]) -> list[InventoryDTO]:
    return [inventory_to_dto(r) for r in sorted(rows, key=lambda r: r.id)]  # type: ignore[arg-type, return-value]
