"""Data Transfer Objects: plain containers that cross layer boundaries.

Input specs describe what a caller asked for; output DTOs are built
inside the unit of work from the aggregates and handed to the CLI, so
no live domain object escapes a transaction.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from fulfillment.domain.exceptions import StockShortage
from fulfillment.domain.model.carrier import Carrier
from fulfillment.domain.model.inventory import Inventory, InventoryMovement
from fulfillment.domain.model.purchase_order import PurchaseOrder
from fulfillment.domain.model.sales_order import SalesOrder
from fulfillment.domain.model.shipment import Shipment

# --- Inputs -------------------------------------------------------------------


@dataclass(frozen=True)
class SalesOrderLineSpec:
    """Input: one requested product.

    Without ``warehouse_id`` the warehouse holding the most available
    stock is picked; without ``unit_price`` the product's current price
    is used.
    """

    product_id: int
    quantity: int
    warehouse_id: int | None = None
    unit_price: str | None = None


@dataclass(frozen=True)
class PurchaseOrderLineSpec:
    product_id: int
    quantity: int
    unit_price: str


# --- Outputs ------------------------------------------------------------------


@dataclass(frozen=True)
class SalesOrderLineDTO:
    product_id: int
    warehouse_id: int
    quantity: int
    unit_price: str  # formatted, e.g. "15.00"
    line_total: str


@dataclass(frozen=True)
class SalesOrderDTO:
    id: int
    client_id: int
    status: str
    lines: list[SalesOrderLineDTO]
    total: str
    created_at: datetime
    reserved_at: datetime | None = None
    shipped_at: datetime | None = None
    delivered_at: datetime | None = None
    shipment_id: int | None = None
    tracking_number: str | None = None


@dataclass(frozen=True)
class ShortageDTO:
    warehouse_id: int
    product_id: int
    requested: int
    available: int


@dataclass(frozen=True)
class OrderPlacementDTO:
    """Output of order creation.

    ``reserved`` is False when the order was kept as a backorder; the
    shortages then say which lines could not be covered.
    """

    order: SalesOrderDTO
    reserved: bool
    shortages: list[ShortageDTO]


@dataclass(frozen=True)
class ShipmentDTO:
    id: int
    sales_order_id: int
    tracking_number: str
    status: str
    planned_date: date
    carrier_id: int | None
    shipped_date: datetime | None
    delivered_date: datetime | None


@dataclass(frozen=True)
class CarrierDTO:
    id: int
    code: str
    name: str
    status: str
    max_daily_capacity: int
    current_daily_shipments: int
    available_capacity: int


@dataclass(frozen=True)
class InventoryDTO:
    id: int
    warehouse_id: int
    product_id: int
    qty_on_hand: int
    qty_reserved: int
    available: int


@dataclass(frozen=True)
class MovementDTO:
    id: int
    inventory_id: int
    type: str
    quantity: int
    occurred_at: datetime
    reference_document: str
    description: str


@dataclass(frozen=True)
class StockTotalsDTO:
    product_id: int
    total_on_hand: int
    total_available: int


@dataclass(frozen=True)
class PurchaseOrderLineDTO:
    product_id: int
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class PurchaseOrderDTO:
    id: int
    supplier_id: int
    status: str
    lines: list[PurchaseOrderLineDTO]
    total: str
    created_at: datetime
    expected_delivery: date | None
    approved_at: datetime | None
    received_at: datetime | None
    canceled_at: datetime | None
    received_warehouse_id: int | None


# --- Mapping ------------------------------------------------------------------


def sales_order_to_dto(order: SalesOrder, shipment: Shipment | None = None) -> SalesOrderDTO:
    return SalesOrderDTO(
        id=order.id,  # type: ignore[arg-type]
        client_id=order.client_id,
        status=order.status.value,
        lines=[
            SalesOrderLineDTO(
                product_id=line.product_id,
                warehouse_id=line.warehouse_id,
                quantity=line.quantity.value,
                unit_price=str(line.unit_price),
                line_total=str(line.line_total),
            )
            for line in order.lines
        ],
        total=str(order.total),
        created_at=order.created_at,
        reserved_at=order.reserved_at,
        shipped_at=order.shipped_at,
        delivered_at=order.delivered_at,
        shipment_id=shipment.id if shipment is not None else None,
        tracking_number=shipment.tracking_number if shipment is not None else None,
    )


def shortage_to_dto(shortage: StockShortage) -> ShortageDTO:
    return ShortageDTO(
        warehouse_id=shortage.warehouse_id,
        product_id=shortage.product_id,
        requested=shortage.requested,
        available=shortage.available,
    )


def shipment_to_dto(shipment: Shipment) -> ShipmentDTO:
    return ShipmentDTO(
        id=shipment.id,  # type: ignore[arg-type]
        sales_order_id=shipment.sales_order_id,
        tracking_number=shipment.tracking_number,
        status=shipment.status.value,
        planned_date=shipment.planned_date,
        carrier_id=shipment.carrier_id,
        shipped_date=shipment.shipped_date,
        delivered_date=shipment.delivered_date,
    )


def carrier_to_dto(carrier: Carrier) -> CarrierDTO:
    return CarrierDTO(
        id=carrier.id,  # type: ignore[arg-type]
        code=carrier.code,
        name=carrier.name,
        status=carrier.status.value,
        max_daily_capacity=carrier.max_daily_capacity,
        current_daily_shipments=carrier.current_daily_shipments,
        available_capacity=carrier.available_capacity,
    )


def inventory_to_dto(inv: Inventory) -> InventoryDTO:
    return InventoryDTO(
        id=inv.id,  # type: ignore[arg-type]
        warehouse_id=inv.warehouse_id,
        product_id=inv.product_id,
        qty_on_hand=inv.qty_on_hand,
        qty_reserved=inv.qty_reserved,
        available=inv.available_quantity,
    )


def movement_to_dto(movement: InventoryMovement) -> MovementDTO:
    return MovementDTO(
        id=movement.id,  # type: ignore[arg-type]
        inventory_id=movement.inventory_id,
        type=movement.type.value,
        quantity=movement.quantity,
        occurred_at=movement.occurred_at,
        reference_document=movement.reference_document,
        description=movement.description,
    )


def purchase_order_to_dto(order: PurchaseOrder) -> PurchaseOrderDTO:
    return PurchaseOrderDTO(
        id=order.id,  # type: ignore[arg-type]
        supplier_id=order.supplier_id,
        status=order.status.value,
        lines=[
            PurchaseOrderLineDTO(
                product_id=line.product_id,
                quantity=line.quantity.value,
                unit_price=str(line.unit_price),
                line_total=str(line.line_total),
            )
            for line in order.lines
        ],
        total=str(order.total),
        created_at=order.created_at,
        expected_delivery=order.expected_delivery,
        approved_at=order.approved_at,
        received_at=order.received_at,
        canceled_at=order.canceled_at,
        received_warehouse_id=order.received_warehouse_id,
    )
