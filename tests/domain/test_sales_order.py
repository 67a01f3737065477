"""Unit tests for the SalesOrder aggregate."""

from datetime import datetime, timezone

import pytest

from fulfillment.domain.exceptions import InvalidArgumentError, InvalidOperationError
from fulfillment.domain.model.sales_order import SalesOrder, SalesOrderLine, SalesOrderStatus
from fulfillment.domain.model.value_objects import Money, Quantity

AT = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


def _line(product_id: int = 1, qty: int = 2, price: str = "10.00") -> SalesOrderLine:
    return SalesOrderLine(
        product_id=product_id, warehouse_id=1, quantity=Quantity(qty), unit_price=Money.of(price)
    )


def _order(status: SalesOrderStatus = SalesOrderStatus.CREATED) -> SalesOrder:
    order = SalesOrder.create(client_id=1, lines=[_line()], created_at=AT)
    order.id = 7
    order.status = status
    return order


class TestSalesOrderCreate:

    def test_new_order_is_created(self):
        order = SalesOrder.create(client_id=1, lines=[_line()], created_at=AT)
        assert order.status == SalesOrderStatus.CREATED
        assert order.created_at == AT
        assert order.id is None

    def test_order_without_lines_rejected(self):
        with pytest.raises(InvalidArgumentError, match="at least one line"):
            SalesOrder.create(client_id=1, lines=[], created_at=AT)

    def test_total_sums_line_totals(self):
        order = SalesOrder.create(
            client_id=1, lines=[_line(1, 2, "10.00"), _line(2, 3, "1.50")], created_at=AT
        )
        assert order.total == Money.of("24.50")

    def test_reference_is_derived_from_id(self):
        assert _order().reference == "SO-7"


class TestSalesOrderTransitions:

    def test_full_happy_path(self):
        order = _order()
        order.mark_reserved(AT)
        assert order.holds_reservation
        order.mark_shipped(AT)
        order.deliver(AT)
        assert order.status == SalesOrderStatus.DELIVERED
        assert order.reserved_at == order.shipped_at == order.delivered_at == AT

    def test_reserve_only_from_created(self):
        with pytest.raises(InvalidOperationError, match="Can only reserve stock for CREATED"):
            _order(SalesOrderStatus.RESERVED).mark_reserved(AT)

    def test_ship_only_from_reserved(self):
        with pytest.raises(InvalidOperationError, match="Can only ship RESERVED orders"):
            _order(SalesOrderStatus.CREATED).mark_shipped(AT)

    def test_deliver_only_from_shipped(self):
        with pytest.raises(InvalidOperationError, match="Can only deliver SHIPPED orders"):
            _order(SalesOrderStatus.RESERVED).deliver(AT)

    @pytest.mark.parametrize("status", [SalesOrderStatus.CREATED, SalesOrderStatus.RESERVED])
    def test_cancel_allowed_before_shipping(self, status):
        order = _order(status)
        order.cancel()
        assert order.status == SalesOrderStatus.CANCELED

    @pytest.mark.parametrize(
        "status",
        [SalesOrderStatus.SHIPPED, SalesOrderStatus.DELIVERED, SalesOrderStatus.CANCELED],
    )
    def test_cancel_rejected_after_shipping(self, status):
        order = _order(status)
        with pytest.raises(InvalidOperationError, match=f"Cannot cancel order in status {status.value}"):
            order.cancel()
        assert order.status == status
