"""In-memory implementations of every repository.

All rows live in an ``InMemoryStore``: one ``Table`` (id -> entity dict
plus id sequence) per aggregate.  The unit of work snapshots and
restores the whole store, so repositories themselves stay plain dict
wrappers that only enforce unique keys.
"""

from __future__ import annotations

import copy
import threading
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Generic, TypeVar

from fulfillment.domain.exceptions import DuplicateResourceError
from fulfillment.domain.model.carrier import Carrier
from fulfillment.domain.model.catalog import Client, Product, Supplier, Warehouse
from fulfillment.domain.model.inventory import Inventory, InventoryMovement
from fulfillment.domain.model.purchase_order import PurchaseOrder, PurchaseOrderStatus
from fulfillment.domain.model.sales_order import SalesOrder, SalesOrderStatus
from fulfillment.domain.model.shipment import Shipment, ShipmentStatus
from fulfillment.domain.repository.carrier_repository import CarrierRepository
from fulfillment.domain.repository.catalog_repository import (
    ClientRepository,
    ProductRepository,
    SupplierRepository,
    WarehouseRepository,
)
from fulfillment.domain.repository.inventory_repository import (
    InventoryMovementRepository,
    InventoryRepository,
)
from fulfillment.domain.repository.purchase_order_repository import (
    PurchaseOrderRepository,
)
from fulfillment.domain.repository.sales_order_repository import SalesOrderRepository
from fulfillment.domain.repository.shipment_repository import ShipmentRepository

T = TypeVar("T")


@dataclass
class Table(Generic[T]):
    rows: dict[int, T] = field(default_factory=dict)
    next_id: int = 1

    def get(self, entity_id: int) -> T | None:
        return self.rows.get(entity_id)

    def all(self) -> list[T]:
        return list(self.rows.values())

    def where(self, predicate: Callable[[T], bool]) -> list[T]:
        return [row for row in self.rows.values() if predicate(row)]

    def first(self, predicate: Callable[[T], bool]) -> T | None:
        for row in self.rows.values():
            if predicate(row):
                return row
        return None

    def allocate_id(self) -> int:
        entity_id = self.next_id
        self.next_id += 1
        return entity_id

    def put(self, entity_id: int, entity: T) -> None:
        self.rows[entity_id] = entity
        self.next_id = max(self.next_id, entity_id + 1)

    def remove(self, entity_id: int) -> None:
        self.rows.pop(entity_id, None)


TABLE_NAMES = (
    "products",
    "warehouses",
    "clients",
    "suppliers",
    "inventory",
    "movements",
    "sales_orders",
    "shipments",
    "carriers",
    "purchase_orders",
)


class InMemoryStore:
    """Every table of the system plus the lock that serialises transactions."""

    def __init__(self) -> None:
        self.lock = threading.RLock()
        for name in TABLE_NAMES:
            setattr(self, name, Table())

    def table(self, name: str) -> Table[Any]:
        return getattr(self, name)

    def snapshot(self) -> dict[str, Table[Any]]:
        return {name: copy.deepcopy(self.table(name)) for name in TABLE_NAMES}

    def restore(self, snapshot: dict[str, Table[Any]]) -> None:
        for name in TABLE_NAMES:
            current = self.table(name)
            saved = snapshot[name]
            current.rows = saved.rows
            current.next_id = saved.next_id


def _save(table: Table[Any], entity: Any) -> None:
    if entity.id is None:
        entity.id = table.allocate_id()
    table.put(entity.id, entity)


def _ensure_unique(
    table: Table[Any], entity: Any, clash: Callable[[Any], bool], message: str
) -> None:
    other = table.first(lambda row: row.id != entity.id and clash(row))
    if other is not None:
        raise DuplicateResourceError(message)


# --- Catalog ------------------------------------------------------------------


class InMemoryProductRepository(ProductRepository):

    def __init__(self, table: Table[Product]) -> None:
        self._table = table

    def get_by_id(self, product_id: int) -> Product | None:
        return self._table.get(product_id)

    def get_by_sku(self, sku: str) -> Product | None:
        return self._table.first(lambda p: p.sku.lower() == sku.lower())

    def list_all(self) -> list[Product]:
        return self._table.all()

    def save(self, product: Product) -> None:
        _ensure_unique(
            self._table, product,
            lambda p: p.sku.lower() == product.sku.lower(),
            f"Product already exists with sku: '{product.sku}'",
        )
        _save(self._table, product)


class InMemoryWarehouseRepository(WarehouseRepository):

    def __init__(self, table: Table[Warehouse]) -> None:
        self._table = table

    def get_by_id(self, warehouse_id: int) -> Warehouse | None:
        return self._table.get(warehouse_id)

    def get_by_code(self, code: str) -> Warehouse | None:
        return self._table.first(lambda w: w.code == code)

    def list_all(self) -> list[Warehouse]:
        return self._table.all()

    def save(self, warehouse: Warehouse) -> None:
        _ensure_unique(
            self._table, warehouse,
            lambda w: w.code == warehouse.code,
            f"Warehouse already exists with code: '{warehouse.code}'",
        )
        _save(self._table, warehouse)


class InMemoryClientRepository(ClientRepository):

    def __init__(self, table: Table[Client]) -> None:
        self._table = table

    def get_by_id(self, client_id: int) -> Client | None:
        return self._table.get(client_id)

    def list_all(self) -> list[Client]:
        return self._table.all()

    def save(self, client: Client) -> None:
        _save(self._table, client)


class InMemorySupplierRepository(SupplierRepository):

    def __init__(self, table: Table[Supplier]) -> None:
        self._table = table

    def get_by_id(self, supplier_id: int) -> Supplier | None:
        return self._table.get(supplier_id)

    def list_all(self) -> list[Supplier]:
        return self._table.all()

    def save(self, supplier: Supplier) -> None:
        _save(self._table, supplier)


# --- Inventory ----------------------------------------------------------------


class InMemoryInventoryRepository(InventoryRepository):

    def __init__(self, table: Table[Inventory]) -> None:
        self._table = table

    def get_by_id(self, inventory_id: int) -> Inventory | None:
        return self._table.get(inventory_id)

    def get_by_location(self, warehouse_id: int, product_id: int) -> Inventory | None:
        return self._table.first(lambda i: i.location == (warehouse_id, product_id))

    def list_all(self) -> list[Inventory]:
        return self._table.all()

    def list_by_warehouse(self, warehouse_id: int) -> list[Inventory]:
        return self._table.where(lambda i: i.warehouse_id == warehouse_id)

    def list_by_product(self, product_id: int) -> list[Inventory]:
        return self._table.where(lambda i: i.product_id == product_id)

    def save(self, inventory: Inventory) -> None:
        _ensure_unique(
            self._table, inventory,
            lambda i: i.location == inventory.location,
            f"Inventory already exists for warehouse {inventory.warehouse_id} "
            f"and product {inventory.product_id}",
        )
        _save(self._table, inventory)

    def delete(self, inventory_id: int) -> None:
        self._table.remove(inventory_id)


class InMemoryInventoryMovementRepository(InventoryMovementRepository):

    def __init__(self, table: Table[InventoryMovement]) -> None:
        self._table = table

    def add(self, movement: InventoryMovement) -> InventoryMovement:
        stored = replace(movement, id=self._table.allocate_id())
        self._table.put(stored.id, stored)  # type: ignore[arg-type]
        return stored

    def list_all(self) -> list[InventoryMovement]:
        return self._table.all()

    def list_by_inventory(self, inventory_id: int) -> list[InventoryMovement]:
        return self._table.where(lambda m: m.inventory_id == inventory_id)

    def list_by_reference(self, reference_document: str) -> list[InventoryMovement]:
        return self._table.where(lambda m: m.reference_document == reference_document)


# --- Orders and shipping ------------------------------------------------------


class InMemorySalesOrderRepository(SalesOrderRepository):

    def __init__(self, table: Table[SalesOrder]) -> None:
        self._table = table

    def get_by_id(self, order_id: int) -> SalesOrder | None:
        return self._table.get(order_id)

    def list_all(self) -> list[SalesOrder]:
        return self._table.all()

    def list_by_status(self, status: SalesOrderStatus) -> list[SalesOrder]:
        return self._table.where(lambda o: o.status == status)

    def list_by_client(self, client_id: int) -> list[SalesOrder]:
        return self._table.where(lambda o: o.client_id == client_id)

    def save(self, order: SalesOrder) -> None:
        _save(self._table, order)


class InMemoryShipmentRepository(ShipmentRepository):

    def __init__(self, table: Table[Shipment]) -> None:
        self._table = table

    def get_by_id(self, shipment_id: int) -> Shipment | None:
        return self._table.get(shipment_id)

    def get_by_sales_order(self, sales_order_id: int) -> Shipment | None:
        return self._table.first(lambda s: s.sales_order_id == sales_order_id)

    def get_by_tracking_number(self, tracking_number: str) -> Shipment | None:
        return self._table.first(lambda s: s.tracking_number == tracking_number)

    def list_all(self) -> list[Shipment]:
        return self._table.all()

    def list_by_status(self, status: ShipmentStatus) -> list[Shipment]:
        return self._table.where(lambda s: s.status == status)

    def save(self, shipment: Shipment) -> None:
        _ensure_unique(
            self._table, shipment,
            lambda s: s.tracking_number == shipment.tracking_number,
            f"Shipment already exists with tracking number: '{shipment.tracking_number}'",
        )
        _ensure_unique(
            self._table, shipment,
            lambda s: s.sales_order_id == shipment.sales_order_id,
            f"Sales order #{shipment.sales_order_id} already has a shipment",
        )
        _save(self._table, shipment)

    def delete(self, shipment_id: int) -> None:
        self._table.remove(shipment_id)


class InMemoryCarrierRepository(CarrierRepository):

    def __init__(self, table: Table[Carrier]) -> None:
        self._table = table

    def get_by_id(self, carrier_id: int) -> Carrier | None:
        return self._table.get(carrier_id)

    def get_by_code(self, code: str) -> Carrier | None:
        return self._table.first(lambda c: c.code == code)

    def list_all(self) -> list[Carrier]:
        return self._table.all()

    def save(self, carrier: Carrier) -> None:
        _ensure_unique(
            self._table, carrier,
            lambda c: c.code == carrier.code,
            f"Carrier already exists with code: '{carrier.code}'",
        )
        _save(self._table, carrier)


class InMemoryPurchaseOrderRepository(PurchaseOrderRepository):

    def __init__(self, table: Table[PurchaseOrder]) -> None:
        self._table = table

    def get_by_id(self, order_id: int) -> PurchaseOrder | None:
        return self._table.get(order_id)

    def list_all(self) -> list[PurchaseOrder]:
        return self._table.all()

    def list_by_status(self, status: PurchaseOrderStatus) -> list[PurchaseOrder]:
        return self._table.where(lambda o: o.status == status)

    def list_by_supplier(self, supplier_id: int) -> list[PurchaseOrder]:
        return self._table.where(lambda o: o.supplier_id == supplier_id)

    def save(self, order: PurchaseOrder) -> None:
        _save(self._table, order)

    def delete(self, order_id: int) -> None:
        self._table.remove(order_id)
