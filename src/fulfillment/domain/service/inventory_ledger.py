"""Domain service: Inventory Ledger.

Owns every mutation of Inventory rows and the append-only movement log.
Only changes of the on-hand quantity are ledger movements:

    consume -> OUTBOUND      credit -> INBOUND      adjust -> ADJUSTMENT

Reserve and release only move stock between "available" and "reserved"
inside a row, so they are logged but not recorded as movements.

Multi-line reservations use a two-phase approach (validate-then-mutate)
so inventory is never left partially reserved when one line falls short.
"""

from __future__ import annotations

import logging
from typing import Iterable

from fulfillment.domain.clock import Clock, utc_now
from fulfillment.domain.exceptions import (
    DuplicateResourceError,
    InsufficientStockError,
    ResourceNotFoundError,
    StockShortage,
)
from fulfillment.domain.model.inventory import Inventory, InventoryMovement, MovementType
from fulfillment.domain.model.sales_order import SalesOrderLine
from fulfillment.domain.repository.inventory_repository import (
    InventoryMovementRepository,
    InventoryRepository,
)

logger = logging.getLogger(__name__)


class InventoryLedger:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        movement_repo: InventoryMovementRepository,
        clock: Clock = utc_now,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._movement_repo = movement_repo
        self._clock = clock

    # --- Rows -----------------------------------------------------------------

    def find(self, warehouse_id: int, product_id: int) -> Inventory:
        inv = self._inventory_repo.get_by_location(warehouse_id, product_id)
        if inv is None:
            raise ResourceNotFoundError(
                f"Inventory not found for warehouse {warehouse_id} and product {product_id}"
            )
        return inv

    def get(self, inventory_id: int) -> Inventory:
        inv = self._inventory_repo.get_by_id(inventory_id)
        if inv is None:
            raise ResourceNotFoundError.of("Inventory", "id", inventory_id)
        return inv

    def open_row(
        self,
        warehouse_id: int,
        product_id: int,
        qty_on_hand: int = 0,
        qty_reserved: int = 0,
    ) -> Inventory:
        """Create the row for a warehouse/product pair (first stocking)."""
        if self._inventory_repo.get_by_location(warehouse_id, product_id) is not None:
            raise DuplicateResourceError(
                f"Inventory already exists for warehouse {warehouse_id} "
                f"and product {product_id}"
            )
        inv = Inventory(
            id=None,
            warehouse_id=warehouse_id,
            product_id=product_id,
            qty_on_hand=qty_on_hand,
            qty_reserved=qty_reserved,
        )
        self._inventory_repo.save(inv)
        logger.info(
            "Opened inventory #%s (warehouse=%s, product=%s, on_hand=%s, reserved=%s)",
            inv.id, warehouse_id, product_id, qty_on_hand, qty_reserved,
        )
        return inv

    # --- Single-row operations ------------------------------------------------

    def reserve(self, warehouse_id: int, product_id: int, quantity: int) -> Inventory:
        inv = self.find(warehouse_id, product_id)
        inv.reserve(quantity)
        self._inventory_repo.save(inv)
        self._log_change("Reserved", inv, quantity)
        return inv

    def release(self, warehouse_id: int, product_id: int, quantity: int) -> Inventory:
        inv = self.find(warehouse_id, product_id)
        inv.release(quantity)
        self._inventory_repo.save(inv)
        self._log_change("Released", inv, quantity)
        return inv

    def consume(
        self,
        warehouse_id: int,
        product_id: int,
        quantity: int,
        reference: str,
        description: str = "",
    ) -> InventoryMovement:
        """Ship reserved stock out of the warehouse (OUTBOUND)."""
        inv = self.find(warehouse_id, product_id)
        inv.consume(quantity)
        self._inventory_repo.save(inv)
        self._log_change("Consumed", inv, quantity)
        return self._record(inv, MovementType.OUTBOUND, quantity, reference, description)

    def credit(
        self,
        warehouse_id: int,
        product_id: int,
        quantity: int,
        reference: str,
        description: str = "",
    ) -> InventoryMovement:
        """Add received goods (INBOUND), creating the row on first stocking."""
        inv = self._inventory_repo.get_by_location(warehouse_id, product_id)
        if inv is None:
            inv = Inventory(id=None, warehouse_id=warehouse_id, product_id=product_id)
        inv.credit(quantity)
        self._inventory_repo.save(inv)
        self._log_change("Credited", inv, quantity)
        return self._record(inv, MovementType.INBOUND, quantity, reference, description)

    def adjust(
        self,
        inventory_id: int,
        qty_on_hand: int | None = None,
        qty_reserved: int | None = None,
    ) -> Inventory:
        """Overwrite quantities after a manual count (ADJUSTMENT).

        A movement is written only when the on-hand quantity changes; its
        quantity is the absolute difference.
        """
        inv = self.get(inventory_id)
        delta = inv.adjust(qty_on_hand, qty_reserved)
        self._inventory_repo.save(inv)
        self._log_change("Adjusted", inv, delta)
        if delta != 0:
            now = self._clock()
            verb = "Added" if delta > 0 else "Removed"
            self._record(
                inv,
                MovementType.ADJUSTMENT,
                abs(delta),
                f"ADJ-{int(now.timestamp() * 1000)}",
                f"Inventory adjustment - {verb} {abs(delta)} units",
            )
        return inv

    # --- Order-level operations -----------------------------------------------

    def reserve_lines(self, lines: Iterable[SalesOrderLine]) -> None:
        """Reserve stock for every line, or for none of them.

        Phase 1: load and validate: every location must have enough
                  available stock for the sum of the lines drawing on it.
                  Fails before any mutation, listing every shortage.
        Phase 2: mutate and persist.
        """
        requested = _group_by_location(lines)

        # Phase 1: load all rows and validate
        to_reserve: list[tuple[Inventory, int]] = []
        shortages: list[StockShortage] = []
        for (warehouse_id, product_id), qty in requested.items():
            inv = self._inventory_repo.get_by_location(warehouse_id, product_id)
            available = inv.available_quantity if inv is not None else 0
            if inv is None or qty > available:
                shortages.append(StockShortage(warehouse_id, product_id, qty, available))
                continue
            to_reserve.append((inv, qty))

        if shortages:
            raise InsufficientStockError(
                "Cannot reserve stock. Insufficient quantity for: "
                + ", ".join(str(s) for s in shortages),
                shortages,
            )

        # Phase 2: mutate and persist
        for inv, qty in to_reserve:
            inv.reserve(qty)
            self._inventory_repo.save(inv)
            self._log_change("Reserved", inv, qty)

    def release_lines(self, lines: Iterable[SalesOrderLine]) -> None:
        for (warehouse_id, product_id), qty in _group_by_location(lines).items():
            self.release(warehouse_id, product_id, qty)

    def consume_lines(
        self,
        lines: Iterable[SalesOrderLine],
        reference: str,
        description: str = "",
    ) -> list[InventoryMovement]:
        return [
            self.consume(line.warehouse_id, line.product_id, line.quantity.value, reference, description)
            for line in lines
        ]

    # --- Internal helpers -----------------------------------------------------

    def _record(
        self,
        inv: Inventory,
        type_: MovementType,
        quantity: int,
        reference: str,
        description: str,
    ) -> InventoryMovement:
        movement = InventoryMovement(
            id=None,
            inventory_id=inv.id,  # type: ignore[arg-type]
            type=type_,
            quantity=quantity,
            occurred_at=self._clock(),
            reference_document=reference,
            description=description,
        )
        return self._movement_repo.add(movement)

    @staticmethod
    def _log_change(action: str, inv: Inventory, quantity: int) -> None:
        logger.info(
            "%s %s of product %s in warehouse %s (on_hand=%s, reserved=%s)",
            action, quantity, inv.product_id, inv.warehouse_id,
            inv.qty_on_hand, inv.qty_reserved,
        )


def _group_by_location(lines: Iterable[SalesOrderLine]) -> dict[tuple[int, int], int]:
    """Sum line quantities per (warehouse, product), keeping first-seen order."""
    totals: dict[tuple[int, int], int] = {}
    for line in lines:
        key = (line.warehouse_id, line.product_id)
        totals[key] = totals.get(key, 0) + line.quantity.value
    return totals
