"""Application service: Adjust Inventory use case (manual stock count)."""

from __future__ import annotations

from fulfillment.application.dto import InventoryDTO, inventory_to_dto
from fulfillment.domain.clock import Clock, utc_now
from fulfillment.domain.exceptions import InvalidArgumentError
from fulfillment.domain.repository.unit_of_work import UnitOfWork
from fulfillment.domain.service.inventory_ledger import InventoryLedger


class AdjustInventoryHandler:

    def __init__(self, uow: UnitOfWork, clock: Clock = utc_now) -> None:
        self._uow = uow
        self._clock = clock

    def handle(
        self,
        inventory_id: int,
        qty_on_hand: int | None = None,
        qty_reserved: int | None = None,
    ) -> InventoryDTO:
        if qty_on_hand is None and qty_reserved is None:
            raise InvalidArgumentError("Nothing to adjust: give an on-hand or reserved quantity")

        with self._uow as uow:
            ledger = InventoryLedger(uow.inventory, uow.movements, self._clock)
            return inventory_to_dto(ledger.adjust(inventory_id, qty_on_hand, qty_reserved))
