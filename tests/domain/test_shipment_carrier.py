"""Unit tests for the Shipment and Carrier aggregates."""

from datetime import date, datetime, timezone

import pytest

from fulfillment.domain.exceptions import InvalidArgumentError, InvalidOperationError
from fulfillment.domain.model.carrier import Carrier, CarrierStatus
from fulfillment.domain.model.shipment import Shipment, ShipmentStatus

AT = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


def _shipment() -> Shipment:
    return Shipment(id=1, sales_order_id=1, tracking_number="TRK-1", planned_date=date(2024, 3, 1))


class TestShipment:

    def test_lifecycle(self):
        s = _shipment()
        s.assign_carrier(3)
        s.mark_in_transit(AT)
        s.mark_delivered(AT)
        assert s.status == ShipmentStatus.DELIVERED
        assert s.carrier_id == 3
        assert s.shipped_date == s.delivered_date == AT

    def test_assign_after_planned_rejected(self):
        s = _shipment()
        s.mark_in_transit(AT)
        with pytest.raises(InvalidOperationError, match="PLANNED shipments"):
            s.assign_carrier(1)

    def test_deliver_requires_in_transit(self):
        with pytest.raises(InvalidOperationError, match="IN_TRANSIT"):
            _shipment().mark_delivered(AT)

    def test_reschedule_delivered_rejected(self):
        s = _shipment()
        s.mark_in_transit(AT)
        s.mark_delivered(AT)
        with pytest.raises(InvalidOperationError, match="delivered shipments"):
            s.reschedule(date(2024, 3, 5))

    def test_delete_only_planned(self):
        s = _shipment()
        s.check_deletable()
        s.mark_in_transit(AT)
        with pytest.raises(InvalidOperationError, match="Can only delete PLANNED"):
            s.check_deletable()


class TestCarrier:

    def test_counter_above_capacity_rejected(self):
        with pytest.raises(InvalidArgumentError, match="must be between 0"):
            Carrier(id=1, code="X", name="X", max_daily_capacity=2, current_daily_shipments=3)

    def test_take_slots_within_capacity(self):
        c = Carrier(id=1, code="X", name="X", max_daily_capacity=3)
        c.take_slots(3)
        assert c.available_capacity == 0
        assert not c.has_room_for(1)

    def test_take_slots_over_capacity_rejected(self):
        c = Carrier(id=1, code="X", name="X", max_daily_capacity=3, current_daily_shipments=2)
        with pytest.raises(InvalidOperationError, match="cannot take 2 more"):
            c.take_slots(2)
        assert c.current_daily_shipments == 2

    def test_free_slot_never_goes_negative(self):
        c = Carrier(id=1, code="X", name="X", max_daily_capacity=3)
        c.free_slot()
        assert c.current_daily_shipments == 0

    def test_reset_and_status(self):
        c = Carrier(id=1, code="X", name="X", max_daily_capacity=3, current_daily_shipments=3)
        c.reset_daily_shipments()
        c.change_status(CarrierStatus.SUSPENDED)
        assert c.current_daily_shipments == 0
        assert not c.is_active
