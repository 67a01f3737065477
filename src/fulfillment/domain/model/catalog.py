"""Reference entities the fulfilment core looks up but does not own.

Products, warehouses, clients and suppliers have their own CRUD
lifecycle elsewhere; here they are identity targets for inventory rows
and order lines.
"""

from __future__ import annotations

from dataclasses import dataclass

from fulfillment.domain.exceptions import InvalidArgumentError
from fulfillment.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog, identified by its unique SKU.

    ``price`` is the current selling price.  Sales-order lines capture a
    snapshot of it at creation time, so later price updates never touch
    existing orders.
    """

    id: int | None
    sku: str
    name: str
    price: Money
    category: str = ""
    active: bool = True

    def update_price(self, new_price: Money) -> None:
        if new_price.amount <= 0:
            raise InvalidArgumentError("Product price must be greater than zero")
        self.price = new_price


@dataclass
class Warehouse:
    id: int | None
    code: str
    name: str
    capacity: int = 0
    active: bool = True
    manager_id: int | None = None


@dataclass
class Client:
    id: int | None
    name: str
    email: str = ""


@dataclass
class Supplier:
    id: int | None
    name: str
    contact: str = ""
