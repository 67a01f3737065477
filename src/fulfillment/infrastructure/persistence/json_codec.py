"""JSON (de)serialisation of the whole store.

The document is one object with a key per table; each table holds its
``next_id`` and a list of rows.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable

from fulfillment.domain.model.carrier import Carrier, CarrierStatus
from fulfillment.domain.model.catalog import Client, Product, Supplier, Warehouse
from fulfillment.domain.model.inventory import Inventory, InventoryMovement, MovementType
from fulfillment.domain.model.purchase_order import (
    PurchaseOrder,
    PurchaseOrderLine,
    PurchaseOrderStatus,
)
from fulfillment.domain.model.sales_order import (
    SalesOrder,
    SalesOrderLine,
    SalesOrderStatus,
)
from fulfillment.domain.model.shipment import Shipment, ShipmentStatus
from fulfillment.domain.model.value_objects import Money, Quantity
from fulfillment.infrastructure.persistence.memory_repositories import (
    TABLE_NAMES,
    InMemoryStore,
)


def dump_store(store: InMemoryStore) -> dict:
    document: dict[str, Any] = {}
    for name in TABLE_NAMES:
        table = store.table(name)
        encode = _ENCODERS[name]
        document[name] = {
            "next_id": table.next_id,
            "rows": [encode(row) for row in table.all()],
        }
    return document


def load_into(store: InMemoryStore, document: dict) -> None:
    """Replace the content of ``store`` with the tables in ``document``."""
    for name in TABLE_NAMES:
        table = store.table(name)
        raw = document.get(name, {"next_id": 1, "rows": []})
        decode = _DECODERS[name]
        table.rows = {}
        table.next_id = 1
        for row in raw["rows"]:
            entity = decode(row)
            table.put(entity.id, entity)
        table.next_id = max(table.next_id, raw.get("next_id", 1))


# --- Scalars ------------------------------------------------------------------


def _dt(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _parse_dt(raw: str | None) -> datetime | None:
    return datetime.fromisoformat(raw) if raw is not None else None


def _day(value: date | None) -> str | None:
    return value.isoformat() if value is not None else None


def _parse_day(raw: str | None) -> date | None:
    return date.fromisoformat(raw) if raw is not None else None


def _money(raw: str) -> Money:
    return Money(Decimal(raw))


# --- Catalog ------------------------------------------------------------------


def _product_to_raw(p: Product) -> dict:
    return {
        "id": p.id,
        "sku": p.sku,
        "name": p.name,
        "price": str(p.price.amount),
        "category": p.category,
        "active": p.active,
    }


def _product_from_raw(raw: dict) -> Product:
    return Product(
        id=raw["id"],
        sku=raw["sku"],
        name=raw["name"],
        price=_money(raw["price"]),
        category=raw.get("category", ""),
        active=raw.get("active", True),
    )


def _warehouse_to_raw(w: Warehouse) -> dict:
    return {
        "id": w.id,
        "code": w.code,
        "name": w.name,
        "capacity": w.capacity,
        "active": w.active,
        "manager_id": w.manager_id,
    }


def _warehouse_from_raw(raw: dict) -> Warehouse:
    return Warehouse(
        id=raw["id"],
        code=raw["code"],
        name=raw["name"],
        capacity=raw.get("capacity", 0),
        active=raw.get("active", True),
        manager_id=raw.get("manager_id"),
    )


def _client_to_raw(c: Client) -> dict:
    return {"id": c.id, "name": c.name, "email": c.email}


def _client_from_raw(raw: dict) -> Client:
    return Client(id=raw["id"], name=raw["name"], email=raw.get("email", ""))


def _supplier_to_raw(s: Supplier) -> dict:
    return {"id": s.id, "name": s.name, "contact": s.contact}


def _supplier_from_raw(raw: dict) -> Supplier:
    return Supplier(id=raw["id"], name=raw["name"], contact=raw.get("contact", ""))


# --- Inventory ----------------------------------------------------------------


def _inventory_to_raw(i: Inventory) -> dict:
    return {
        "id": i.id,
        "warehouse_id": i.warehouse_id,
        "product_id": i.product_id,
        "qty_on_hand": i.qty_on_hand,
        "qty_reserved": i.qty_reserved,
    }


def _inventory_from_raw(raw: dict) -> Inventory:
    return Inventory(
        id=raw["id"],
        warehouse_id=raw["warehouse_id"],
        product_id=raw["product_id"],
        qty_on_hand=raw["qty_on_hand"],
        qty_reserved=raw.get("qty_reserved", 0),
    )


def _movement_to_raw(m: InventoryMovement) -> dict:
    return {
        "id": m.id,
        "inventory_id": m.inventory_id,
        "type": m.type.value,
        "quantity": m.quantity,
        "occurred_at": _dt(m.occurred_at),
        "reference_document": m.reference_document,
        "description": m.description,
    }


def _movement_from_raw(raw: dict) -> InventoryMovement:
    return InventoryMovement(
        id=raw["id"],
        inventory_id=raw["inventory_id"],
        type=MovementType(raw["type"]),
        quantity=raw["quantity"],
        occurred_at=datetime.fromisoformat(raw["occurred_at"]),
        reference_document=raw["reference_document"],
        description=raw.get("description", ""),
    )


# --- Orders and shipping ------------------------------------------------------


def _sales_order_to_raw(o: SalesOrder) -> dict:
    return {
        "id": o.id,
        "client_id": o.client_id,
        "status": o.status.value,
        "created_at": _dt(o.created_at),
        "reserved_at": _dt(o.reserved_at),
        "shipped_at": _dt(o.shipped_at),
        "delivered_at": _dt(o.delivered_at),
        "lines": [
            {
                "product_id": line.product_id,
                "warehouse_id": line.warehouse_id,
                "quantity": line.quantity.value,
                "unit_price": str(line.unit_price.amount),
            }
            for line in o.lines
        ],
    }


def _sales_order_from_raw(raw: dict) -> SalesOrder:
    return SalesOrder(
        id=raw["id"],
        client_id=raw["client_id"],
        lines=[
            SalesOrderLine(
                product_id=line["product_id"],
                warehouse_id=line["warehouse_id"],
                quantity=Quantity(line["quantity"]),
                unit_price=_money(line["unit_price"]),
            )
            for line in raw["lines"]
        ],
        status=SalesOrderStatus(raw["status"]),
        created_at=datetime.fromisoformat(raw["created_at"]),
        reserved_at=_parse_dt(raw.get("reserved_at")),
        shipped_at=_parse_dt(raw.get("shipped_at")),
        delivered_at=_parse_dt(raw.get("delivered_at")),
    )


def _shipment_to_raw(s: Shipment) -> dict:
    return {
        "id": s.id,
        "sales_order_id": s.sales_order_id,
        "tracking_number": s.tracking_number,
        "planned_date": _day(s.planned_date),
        "status": s.status.value,
        "carrier_id": s.carrier_id,
        "shipped_date": _dt(s.shipped_date),
        "delivered_date": _dt(s.delivered_date),
        "created_at": _dt(s.created_at),
    }


def _shipment_from_raw(raw: dict) -> Shipment:
    return Shipment(
        id=raw["id"],
        sales_order_id=raw["sales_order_id"],
        tracking_number=raw["tracking_number"],
        planned_date=date.fromisoformat(raw["planned_date"]),
        status=ShipmentStatus(raw["status"]),
        carrier_id=raw.get("carrier_id"),
        shipped_date=_parse_dt(raw.get("shipped_date")),
        delivered_date=_parse_dt(raw.get("delivered_date")),
        created_at=datetime.fromisoformat(raw["created_at"]),
    )


def _carrier_to_raw(c: Carrier) -> dict:
    return {
        "id": c.id,
        "code": c.code,
        "name": c.name,
        "max_daily_capacity": c.max_daily_capacity,
        "current_daily_shipments": c.current_daily_shipments,
        "status": c.status.value,
    }


def _carrier_from_raw(raw: dict) -> Carrier:
    return Carrier(
        id=raw["id"],
        code=raw["code"],
        name=raw["name"],
        max_daily_capacity=raw["max_daily_capacity"],
        current_daily_shipments=raw.get("current_daily_shipments", 0),
        status=CarrierStatus(raw.get("status", "ACTIVE")),
    )


def _purchase_order_to_raw(o: PurchaseOrder) -> dict:
    return {
        "id": o.id,
        "supplier_id": o.supplier_id,
        "status": o.status.value,
        "created_at": _dt(o.created_at),
        "expected_delivery": _day(o.expected_delivery),
        "approved_at": _dt(o.approved_at),
        "received_at": _dt(o.received_at),
        "canceled_at": _dt(o.canceled_at),
        "received_warehouse_id": o.received_warehouse_id,
        "lines": [
            {
                "product_id": line.product_id,
                "quantity": line.quantity.value,
                "unit_price": str(line.unit_price.amount),
            }
            for line in o.lines
        ],
    }


def _purchase_order_from_raw(raw: dict) -> PurchaseOrder:
    return PurchaseOrder(
        id=raw["id"],
        supplier_id=raw["supplier_id"],
        lines=[
            PurchaseOrderLine(
                product_id=line["product_id"],
                quantity=Quantity(line["quantity"]),
                unit_price=_money(line["unit_price"]),
            )
            for line in raw["lines"]
        ],
        status=PurchaseOrderStatus(raw["status"]),
        created_at=datetime.fromisoformat(raw["created_at"]),
        expected_delivery=_parse_day(raw.get("expected_delivery")),
        approved_at=_parse_dt(raw.get("approved_at")),
        received_at=_parse_dt(raw.get("received_at")),
        canceled_at=_parse_dt(raw.get("canceled_at")),
        received_warehouse_id=raw.get("received_warehouse_id"),
    )


_ENCODERS: dict[str, Callable[[Any], dict]] = {
    "products": _product_to_raw,
    "warehouses": _warehouse_to_raw,
    "clients": _client_to_raw,
    "suppliers": _supplier_to_raw,
    "inventory": _inventory_to_raw,
    "movements": _movement_to_raw,
    "sales_orders": _sales_order_to_raw,
    "shipments": _shipment_to_raw,
    "carriers": _carrier_to_raw,
    "purchase_orders": _purchase_order_to_raw,
}

_DECODERS: dict[str, Callable[[dict], Any]] = {
    "products": _product_from_raw,
    "warehouses": _warehouse_from_raw,
    "clients": _client_from_raw,
    "suppliers": _supplier_from_raw,
    "inventory": _inventory_from_raw,
    "movements": _movement_from_raw,
    "sales_orders": _sales_order_from_raw,
    "shipments": _shipment_from_raw,
    "carriers": _carrier_from_raw,
    "purchase_orders": _purchase_order_from_raw,
}
