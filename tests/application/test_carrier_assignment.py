"""Integration tests for carrier registration, assignment and tracking."""

from datetime import date

import pytest

from fulfillment.application.assign_carrier import (
    AssignCarrierHandler,
    AssignMultipleShipmentsHandler,
)
from fulfillment.application.create_sales_order import CreateSalesOrderHandler
from fulfillment.application.delete_shipment import DeleteShipmentHandler
from fulfillment.application.dto import SalesOrderLineSpec
from fulfillment.application.register_carrier import RegisterCarrierHandler
from fulfillment.application.reschedule_shipment import RescheduleShipmentHandler
from fulfillment.application.reset_daily_capacity import ResetDailyCapacityHandler
from fulfillment.application.ship_order import ShipOrderHandler
from fulfillment.application.show_carriers import ShowCarriersHandler
from fulfillment.application.show_shipment import ShowShipmentHandler
from fulfillment.application.track_shipment import MarkDeliveredHandler, MarkInTransitHandler
from fulfillment.application.update_carrier_status import UpdateCarrierStatusHandler
from fulfillment.domain.exceptions import (
    DuplicateResourceError,
    InvalidArgumentError,
    InvalidOperationError,
    ResourceNotFoundError,
)
from fulfillment.domain.model.carrier import CarrierStatus
from fulfillment.domain.model.sales_order import SalesOrderStatus
from fulfillment.domain.model.shipment import Shipment, ShipmentStatus
from fulfillment.infrastructure.persistence.unit_of_work import InMemoryUnitOfWork
from tests.fakes import (
    NOW,
    FixedClock,
    add_carrier,
    add_client,
    add_inventory,
    add_product,
    add_warehouse,
)


def _planned(uow: InMemoryUnitOfWork, count: int) -> list[int]:
    ids = []
    with uow:
        for n in range(count):
            shipment = Shipment(
                id=None,
                sales_order_id=100 + n,
                tracking_number=f"TRK-{n}",
                planned_date=NOW.date(),
            )
            uow.shipments.save(shipment)
            ids.append(shipment.id)
    return ids


def _carrier(uow, carrier_id):
    return uow.carriers.get_by_id(carrier_id)


class TestRegisterCarrier:

    def test_register(self):
        uow = InMemoryUnitOfWork()

        dto = RegisterCarrierHandler(uow).handle(" UPS ", "United Parcel", 20)

        assert (dto.code, dto.status, dto.available_capacity) == ("UPS", "ACTIVE", 20)

    def test_duplicate_code(self):
        uow = InMemoryUnitOfWork()
        add_carrier(uow, "UPS")
        with pytest.raises(DuplicateResourceError, match="UPS"):
            RegisterCarrierHandler(uow).handle("UPS", "Again", 5)

    def test_blank_code(self):
        with pytest.raises(InvalidArgumentError, match="code is required"):
            RegisterCarrierHandler(InMemoryUnitOfWork()).handle("  ", "Nameless", 5)

    def test_negative_capacity(self):
        with pytest.raises(InvalidArgumentError, match="cannot be negative"):
            RegisterCarrierHandler(InMemoryUnitOfWork()).handle("UPS", "UPS", -1)


class TestBatchAssignment:

    def test_batch_over_capacity_is_rejected_as_a_whole(self):
        uow = InMemoryUnitOfWork()
        carrier = add_carrier(uow, max_daily=10, current=8)
        ids = _planned(uow, 5)

        with pytest.raises(InvalidOperationError, match="requested 5, available 2"):
            AssignMultipleShipmentsHandler(uow).handle(carrier.id, ids)

        assert _carrier(uow, carrier.id).current_daily_shipments == 8
        assert all(uow.shipments.get_by_id(i).carrier_id is None for i in ids)

    def test_batch_within_capacity(self):
        uow = InMemoryUnitOfWork()
        carrier = add_carrier(uow, max_daily=10, current=8)
        ids = _planned(uow, 2)

        dtos = AssignMultipleShipmentsHandler(uow).handle(carrier.id, ids)

        assert [d.carrier_id for d in dtos] == [carrier.id, carrier.id]
        assert _carrier(uow, carrier.id).current_daily_shipments == 10

    def test_batch_with_unknown_shipment_changes_nothing(self):
        uow = InMemoryUnitOfWork()
        carrier = add_carrier(uow)
        [sid] = _planned(uow, 1)

        with pytest.raises(ResourceNotFoundError, match="Shipment not found"):
            AssignMultipleShipmentsHandler(uow).handle(carrier.id, [sid, 999])

        assert _carrier(uow, carrier.id).current_daily_shipments == 0
        assert uow.shipments.get_by_id(sid).carrier_id is None

    def test_duplicate_ids_rejected(self):
        uow = InMemoryUnitOfWork()
        carrier = add_carrier(uow)
        [sid] = _planned(uow, 1)
        with pytest.raises(InvalidArgumentError, match="distinct"):
            AssignMultipleShipmentsHandler(uow).handle(carrier.id, [sid, sid])


class TestSingleAssignment:

    def test_last_slot_is_taken_then_next_rejected(self):
        uow = InMemoryUnitOfWork()
        carrier = add_carrier(uow, max_daily=10, current=9)
        first, second = _planned(uow, 2)
        handler = AssignCarrierHandler(uow)

        handler.handle(first, carrier.id)
        assert _carrier(uow, carrier.id).current_daily_shipments == 10

        with pytest.raises(InvalidOperationError, match="max daily capacity"):
            handler.handle(second, carrier.id)
        assert _carrier(uow, carrier.id).current_daily_shipments == 10
        assert uow.shipments.get_by_id(second).carrier_id is None

    def test_delivery_gives_the_slot_back(self):
        uow = InMemoryUnitOfWork()
        clock = FixedClock()
        carrier = add_carrier(uow, max_daily=10, current=5)
        [sid] = _planned(uow, 1)

        AssignCarrierHandler(uow).handle(sid, carrier.id)
        assert _carrier(uow, carrier.id).current_daily_shipments == 6

        MarkInTransitHandler(uow, clock=clock).handle(sid)
        MarkDeliveredHandler(uow, clock=clock).handle(sid)
        assert _carrier(uow, carrier.id).current_daily_shipments == 5

    def test_suspended_carrier_rejected(self):
        uow = InMemoryUnitOfWork()
        carrier = add_carrier(uow)
        [sid] = _planned(uow, 1)
        UpdateCarrierStatusHandler(uow).handle(carrier.id, CarrierStatus.SUSPENDED)

        with pytest.raises(InvalidOperationError, match="not ACTIVE"):
            AssignCarrierHandler(uow).handle(sid, carrier.id)

    def test_reassignment_moves_the_slot(self):
        uow = InMemoryUnitOfWork()
        dhl = add_carrier(uow, "DHL")
        ups = add_carrier(uow, "UPS")
        [sid] = _planned(uow, 1)
        handler = AssignCarrierHandler(uow)

        handler.handle(sid, dhl.id)
        handler.handle(sid, ups.id)

        assert _carrier(uow, dhl.id).current_daily_shipments == 0
        assert _carrier(uow, ups.id).current_daily_shipments == 1

    def test_assigning_in_transit_shipment_rejected(self):
        uow = InMemoryUnitOfWork()
        carrier = add_carrier(uow)
        [sid] = _planned(uow, 1)
        MarkInTransitHandler(uow, clock=FixedClock()).handle(sid)

        with pytest.raises(InvalidOperationError, match="PLANNED"):
            AssignCarrierHandler(uow).handle(sid, carrier.id)


class TestShipmentLifecycle:

    def _shipped_order(self):
        uow = InMemoryUnitOfWork()
        clock = FixedClock()
        client = add_client(uow)
        product = add_product(uow)
        warehouse = add_warehouse(uow)
        add_inventory(uow, warehouse.id, product.id, 10)
        order = CreateSalesOrderHandler(uow, clock=clock).handle(
            client.id, [SalesOrderLineSpec(product.id, 2, warehouse.id)]
        ).order
        ShipOrderHandler(uow, clock=clock).handle(order.id)
        shipment = ShowShipmentHandler(uow).by_sales_order(order.id)
        return uow, clock, order, shipment

    def test_delivery_closes_order_and_frees_slot(self):
        uow, clock, order, shipment = self._shipped_order()
        carrier = add_carrier(uow, max_daily=5)
        AssignCarrierHandler(uow).handle(shipment.id, carrier.id)
        MarkInTransitHandler(uow, clock=clock).handle(shipment.id)
        clock.advance(days=2)

        dto = MarkDeliveredHandler(uow, clock=clock).handle(shipment.id)

        assert dto.status == "DELIVERED"
        assert dto.delivered_date == clock.now
        assert _carrier(uow, carrier.id).current_daily_shipments == 0
        order_row = uow.sales_orders.get_by_id(order.id)
        assert order_row.status == SalesOrderStatus.DELIVERED
        assert order_row.delivered_at == clock.now

    def test_deliver_planned_shipment_rejected(self):
        uow, clock, order, shipment = self._shipped_order()
        with pytest.raises(InvalidOperationError, match="IN_TRANSIT"):
            MarkDeliveredHandler(uow, clock=clock).handle(shipment.id)
        assert uow.sales_orders.get_by_id(order.id).status == SalesOrderStatus.SHIPPED

    def test_lookup_by_tracking_number(self):
        uow, _, _, shipment = self._shipped_order()
        found = ShowShipmentHandler(uow).by_tracking_number(shipment.tracking_number)
        assert found.id == shipment.id

    def test_reschedule(self):
        uow, _, _, shipment = self._shipped_order()
        dto = RescheduleShipmentHandler(uow).handle(shipment.id, date(2024, 3, 5))
        assert dto.planned_date == date(2024, 3, 5)

    def test_delete_planned_shipment_frees_slot(self):
        uow, _, order, shipment = self._shipped_order()
        carrier = add_carrier(uow)
        AssignCarrierHandler(uow).handle(shipment.id, carrier.id)

        DeleteShipmentHandler(uow).handle(shipment.id)

        assert _carrier(uow, carrier.id).current_daily_shipments == 0
        with pytest.raises(ResourceNotFoundError, match="sales order id"):
            ShowShipmentHandler(uow).by_sales_order(order.id)

    def test_list_by_status(self):
        uow, clock, _, shipment = self._shipped_order()
        MarkInTransitHandler(uow, clock=clock).handle(shipment.id)
        queries = ShowShipmentHandler(uow)

        assert [s.id for s in queries.list(ShipmentStatus.IN_TRANSIT)] == [shipment.id]
        assert queries.list(ShipmentStatus.PLANNED) == []


class TestCarrierQueriesAndReset:

    def test_available_only(self):
        uow = InMemoryUnitOfWork()
        add_carrier(uow, "FULL", max_daily=2, current=2)
        add_carrier(uow, "OFF", status=CarrierStatus.SUSPENDED)
        open_ = add_carrier(uow, "OPEN")

        codes = [c.code for c in ShowCarriersHandler(uow).handle(available_only=True)]

        assert codes == [open_.code]
        assert len(ShowCarriersHandler(uow).handle()) == 3

    def test_reset_daily_capacity(self):
        uow = InMemoryUnitOfWork()
        a = add_carrier(uow, "A", current=4)
        b = add_carrier(uow, "B", current=7)

        ResetDailyCapacityHandler(uow).handle()

        assert ShowCarriersHandler(uow).get(a.id).current_daily_shipments == 0
        assert ShowCarriersHandler(uow).get(b.id).available_capacity == 10

    def test_unknown_carrier(self):
        with pytest.raises(ResourceNotFoundError, match="Carrier not found"):
            UpdateCarrierStatusHandler(InMemoryUnitOfWork()).handle(7, CarrierStatus.ACTIVE)
