"""Integration tests for stocking, adjusting and querying inventory."""

import pytest

from fulfillment.application.adjust_inventory import AdjustInventoryHandler
from fulfillment.application.remove_inventory import RemoveInventoryHandler
from fulfillment.application.show_inventory import ShowInventoryHandler
from fulfillment.application.show_movements import ShowMovementsHandler
from fulfillment.application.stock_inventory import StockInventoryHandler
from fulfillment.domain.exceptions import (
    DuplicateResourceError,
    InvalidArgumentError,
    InvalidOperationError,
    ResourceNotFoundError,
)
from fulfillment.infrastructure.persistence.unit_of_work import InMemoryUnitOfWork
from tests.fakes import FixedClock, add_inventory, add_product, add_warehouse


def _setup():
    uow = InMemoryUnitOfWork()
    product = add_product(uow)
    warehouse = add_warehouse(uow)
    return uow, FixedClock(), product, warehouse


class TestStockInventory:

    def test_stock_new_location(self):
        uow, clock, product, warehouse = _setup()

        dto = StockInventoryHandler(uow, clock=clock).handle(warehouse.id, product.id, 40, 5)

        assert (dto.qty_on_hand, dto.qty_reserved, dto.available) == (40, 5, 35)
        assert uow.movements.list_all() == []

    def test_location_can_only_be_stocked_once(self):
        uow, clock, product, warehouse = _setup()
        add_inventory(uow, warehouse.id, product.id, 1)
        with pytest.raises(DuplicateResourceError, match="already exists"):
            StockInventoryHandler(uow, clock=clock).handle(warehouse.id, product.id, 5)

    def test_reserved_above_on_hand_rejected(self):
        uow, clock, product, warehouse = _setup()
        with pytest.raises(InvalidArgumentError, match="cannot exceed"):
            StockInventoryHandler(uow, clock=clock).handle(warehouse.id, product.id, 5, 6)
        assert uow.inventory.list_all() == []

    def test_unknown_warehouse(self):
        uow, clock, product, _ = _setup()
        with pytest.raises(ResourceNotFoundError, match="Warehouse not found"):
            StockInventoryHandler(uow, clock=clock).handle(99, product.id, 5)


class TestAdjustInventory:

    def test_counted_more_than_expected(self):
        uow, clock, product, warehouse = _setup()
        inv = add_inventory(uow, warehouse.id, product.id, 10)

        dto = AdjustInventoryHandler(uow, clock=clock).handle(inv.id, qty_on_hand=14)

        assert dto.qty_on_hand == 14
        [movement] = ShowMovementsHandler(uow).handle(inventory_id=inv.id)
        assert (movement.type, movement.quantity) == ("ADJUSTMENT", 4)
        assert movement.description == "Inventory adjustment - Added 4 units"

    def test_reserved_only_change_writes_no_movement(self):
        uow, clock, product, warehouse = _setup()
        inv = add_inventory(uow, warehouse.id, product.id, 10, reserved=4)

        dto = AdjustInventoryHandler(uow, clock=clock).handle(inv.id, qty_reserved=1)

        assert (dto.qty_on_hand, dto.qty_reserved) == (10, 1)
        assert uow.movements.list_all() == []

    def test_nothing_to_adjust(self):
        uow, clock, product, warehouse = _setup()
        inv = add_inventory(uow, warehouse.id, product.id, 10)
        with pytest.raises(InvalidArgumentError, match="Nothing to adjust"):
            AdjustInventoryHandler(uow, clock=clock).handle(inv.id)

    def test_adjust_below_reserved_rejected(self):
        uow, clock, product, warehouse = _setup()
        inv = add_inventory(uow, warehouse.id, product.id, 10, reserved=8)
        with pytest.raises(InvalidArgumentError, match="cannot exceed"):
            AdjustInventoryHandler(uow, clock=clock).handle(inv.id, qty_on_hand=5)
        assert uow.inventory.get_by_id(inv.id).qty_on_hand == 10


class TestRemoveInventory:

    def test_remove(self):
        uow, _, product, warehouse = _setup()
        inv = add_inventory(uow, warehouse.id, product.id, 10)

        RemoveInventoryHandler(uow).handle(inv.id)

        assert uow.inventory.get_by_id(inv.id) is None

    def test_remove_with_reservation_rejected(self):
        uow, _, product, warehouse = _setup()
        inv = add_inventory(uow, warehouse.id, product.id, 10, reserved=1)
        with pytest.raises(InvalidOperationError, match="reserved"):
            RemoveInventoryHandler(uow).handle(inv.id)

    def test_remove_unknown(self):
        with pytest.raises(ResourceNotFoundError, match="Inventory not found"):
            RemoveInventoryHandler(InMemoryUnitOfWork()).handle(3)


class TestInventoryQueries:

    def _stocked(self):
        uow, clock, product, main = _setup()
        annex = add_warehouse(uow, "WH-2")
        other = add_product(uow, "SKU-2")
        add_inventory(uow, main.id, product.id, 100, reserved=95)
        add_inventory(uow, main.id, other.id, 50)
        add_inventory(uow, annex.id, product.id, 20, reserved=5)
        return uow, product, other, main, annex

    def test_by_warehouse_and_product(self):
        uow, product, other, main, annex = self._stocked()
        queries = ShowInventoryHandler(uow)

        assert [r.product_id for r in queries.handle(warehouse_id=main.id)] == [product.id, other.id]
        assert [r.warehouse_id for r in queries.handle(product_id=product.id)] == [main.id, annex.id]
        [row] = queries.handle(warehouse_id=main.id, product_id=other.id)
        assert row.available == 50
        assert len(queries.handle()) == 3

    def test_get_missing_location(self):
        uow, _, other, _, annex = self._stocked()
        with pytest.raises(ResourceNotFoundError, match="Inventory not found"):
            ShowInventoryHandler(uow).get(annex.id, other.id)

    def test_low_stock_is_strictly_below_threshold(self):
        uow, product, other, main, _ = self._stocked()
        queries = ShowInventoryHandler(uow)

        assert [r.product_id for r in queries.low_stock(main.id, 10)] == [product.id]
        assert queries.low_stock(main.id, 5) == []

    def test_totals_across_warehouses(self):
        uow, product, *_ = self._stocked()

        totals = ShowInventoryHandler(uow).totals(product.id)

        assert (totals.total_on_hand, totals.total_available) == (120, 20)

    def test_totals_of_unknown_product(self):
        uow, *_ = self._stocked()
        with pytest.raises(ResourceNotFoundError, match="Product not found"):
            ShowInventoryHandler(uow).totals(99)

    def test_movements_by_warehouse_are_chronological(self):
        uow, product, other, main, annex = self._stocked()
        clock = FixedClock()
        main_row = uow.inventory.get_by_location(main.id, other.id)
        annex_row = uow.inventory.get_by_location(annex.id, product.id)
        AdjustInventoryHandler(uow, clock=clock).handle(main_row.id, qty_on_hand=60)
        clock.advance(minutes=5)
        AdjustInventoryHandler(uow, clock=clock).handle(annex_row.id, qty_on_hand=25)
        clock.advance(minutes=5)
        AdjustInventoryHandler(uow, clock=clock).handle(main_row.id, qty_on_hand=55)

        history = ShowMovementsHandler(uow).handle(warehouse_id=main.id)

        assert [m.quantity for m in history] == [10, 5]
        assert history[1].description == "Inventory adjustment - Removed 5 units"
        assert len(ShowMovementsHandler(uow).handle()) == 3
