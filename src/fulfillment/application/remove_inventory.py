"""Application service: Remove Inventory use case (admin only)."""

from __future__ import annotations

import logging

from fulfillment.domain.exceptions import InvalidOperationError, ResourceNotFoundError
from fulfillment.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class RemoveInventoryHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, inventory_id: int) -> None:
        """Delete an inventory row that holds no reservation."""
        with self._uow as uow:
            inv = uow.inventory.get_by_id(inventory_id)
            if inv is None:
                raise ResourceNotFoundError.of("Inventory", "id", inventory_id)
            if inv.qty_reserved > 0:
                raise InvalidOperationError(
                    f"Cannot remove inventory #{inventory_id}: "
                    f"{inv.qty_reserved} unit(s) are reserved"
                )
            uow.inventory.delete(inventory_id)
            logger.info(
                "Removed inventory #%s (warehouse=%s, product=%s)",
                inventory_id, inv.warehouse_id, inv.product_id,
            )
