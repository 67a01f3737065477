"""Unit tests for the InventoryLedger domain service."""

import pytest

from fulfillment.domain.exceptions import (
    DuplicateResourceError,
    InsufficientStockError,
    InvalidArgumentError,
    ResourceNotFoundError,
)
from fulfillment.domain.model.inventory import MovementType
from fulfillment.domain.model.sales_order import SalesOrderLine
from fulfillment.domain.model.value_objects import Money, Quantity
from fulfillment.domain.service.inventory_ledger import InventoryLedger
from fulfillment.infrastructure.persistence.unit_of_work import InMemoryUnitOfWork
from tests.fakes import NOW, FixedClock, add_inventory


def _line(warehouse_id: int, product_id: int, qty: int) -> SalesOrderLine:
    return SalesOrderLine(
        product_id=product_id,
        warehouse_id=warehouse_id,
        quantity=Quantity(qty),
        unit_price=Money.of("1.00"),
    )


def _setup(*rows: tuple[int, int, int, int]):
    """Create (warehouse, product, on_hand, reserved) rows and a ledger over them."""
    uow = InMemoryUnitOfWork()
    for warehouse_id, product_id, on_hand, reserved in rows:
        add_inventory(uow, warehouse_id, product_id, on_hand, reserved)
    return uow, InventoryLedger(uow.inventory, uow.movements, FixedClock())


class TestSingleRowOperations:

    def test_reserve_and_release_write_no_movements(self):
        uow, ledger = _setup((1, 1, 100, 0))
        ledger.reserve(1, 1, 40)
        ledger.release(1, 1, 15)
        inv = uow.inventory.get_by_location(1, 1)
        assert inv.qty_reserved == 25
        assert uow.movements.list_all() == []

    def test_consume_writes_outbound_movement(self):
        uow, ledger = _setup((1, 1, 100, 50))
        movement = ledger.consume(1, 1, 50, "SO-1", "Shipped")
        inv = uow.inventory.get_by_location(1, 1)
        assert (inv.qty_on_hand, inv.qty_reserved) == (50, 0)
        assert movement.type == MovementType.OUTBOUND
        assert movement.quantity == 50
        assert movement.reference_document == "SO-1"
        assert movement.occurred_at == NOW
        assert movement.id is not None

    def test_credit_creates_missing_row(self):
        uow, ledger = _setup()
        movement = ledger.credit(2, 9, 10, "PO-1")
        inv = uow.inventory.get_by_location(2, 9)
        assert inv.qty_on_hand == 10
        assert movement.type == MovementType.INBOUND
        assert movement.inventory_id == inv.id

    def test_missing_row_raises_not_found(self):
        _, ledger = _setup()
        with pytest.raises(ResourceNotFoundError, match="warehouse 1 and product 1"):
            ledger.reserve(1, 1, 1)

    def test_open_row_twice_rejected(self):
        _, ledger = _setup((1, 1, 5, 0))
        with pytest.raises(DuplicateResourceError, match="already exists"):
            ledger.open_row(1, 1)


class TestAdjust:

    def test_adjust_down_records_absolute_delta(self):
        uow, ledger = _setup((1, 1, 100, 0))
        inv = uow.inventory.get_by_location(1, 1)
        ledger.adjust(inv.id, qty_on_hand=70)
        [movement] = uow.movements.list_all()
        assert movement.type == MovementType.ADJUSTMENT
        assert movement.quantity == 30
        assert movement.reference_document == f"ADJ-{int(NOW.timestamp() * 1000)}"
        assert movement.description == "Inventory adjustment - Removed 30 units"

    def test_adjust_reserved_only_records_nothing(self):
        uow, ledger = _setup((1, 1, 100, 0))
        inv = uow.inventory.get_by_location(1, 1)
        ledger.adjust(inv.id, qty_reserved=20)
        assert uow.movements.list_all() == []

    def test_adjust_breaking_invariant_rejected(self):
        uow, ledger = _setup((1, 1, 100, 50))
        inv = uow.inventory.get_by_location(1, 1)
        with pytest.raises(InvalidArgumentError, match="cannot exceed quantity on hand"):
            ledger.adjust(inv.id, qty_on_hand=40)


class TestReserveLines:

    def test_reserves_every_line(self):
        uow, ledger = _setup((1, 1, 100, 0), (1, 2, 50, 0))
        ledger.reserve_lines([_line(1, 1, 10), _line(1, 2, 5)])
        assert uow.inventory.get_by_location(1, 1).qty_reserved == 10
        assert uow.inventory.get_by_location(1, 2).qty_reserved == 5

    def test_one_short_line_reserves_nothing(self):
        uow, ledger = _setup((1, 1, 100, 0), (1, 2, 3, 0))
        with pytest.raises(InsufficientStockError, match="Cannot reserve stock") as excinfo:
            ledger.reserve_lines([_line(1, 1, 10), _line(1, 2, 5)])

        assert uow.inventory.get_by_location(1, 1).qty_reserved == 0
        assert uow.inventory.get_by_location(1, 2).qty_reserved == 0
        [shortage] = excinfo.value.shortages
        assert (shortage.product_id, shortage.requested, shortage.available) == (2, 5, 3)

    def test_lines_on_same_location_are_summed(self):
        uow, ledger = _setup((1, 1, 10, 0))
        with pytest.raises(InsufficientStockError):
            ledger.reserve_lines([_line(1, 1, 6), _line(1, 1, 6)])
        assert uow.inventory.get_by_location(1, 1).qty_reserved == 0

    def test_missing_row_is_a_shortage(self):
        _, ledger = _setup()
        with pytest.raises(InsufficientStockError) as excinfo:
            ledger.reserve_lines([_line(4, 4, 1)])
        assert excinfo.value.shortages[0].available == 0

    def test_consume_lines_one_movement_per_line(self):
        uow, ledger = _setup((1, 1, 100, 10), (1, 2, 50, 5))
        ledger.consume_lines([_line(1, 1, 10), _line(1, 2, 5)], "SO-3")
        assert len(uow.movements.list_by_reference("SO-3")) == 2
