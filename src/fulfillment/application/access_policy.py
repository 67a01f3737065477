"""Central permission layer.

Every entry point asks ``AccessPolicy.authorize`` before running a use
case, so role rules live in one table instead of being repeated inside
handlers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from fulfillment.domain.exceptions import AccessDeniedError


class Role(Enum):
    ADMIN = "ADMIN"
    WAREHOUSE_MANAGER = "WAREHOUSE_MANAGER"
    CLIENT = "CLIENT"


@dataclass(frozen=True)
class Caller:
    role: Role
    client_id: int | None = None


_STAFF = frozenset({Role.ADMIN, Role.WAREHOUSE_MANAGER})
_ADMIN = frozenset({Role.ADMIN})
_EVERYONE = frozenset(Role)

# Operations a client may run only on sales orders they own.
OWNED_BY_CLIENT = frozenset({"order.create", "order.show", "order.list", "order.cancel"})

OPERATIONS: dict[str, frozenset[Role]] = {
    # Catalog
    "catalog.add_product": _ADMIN,
    "catalog.add_warehouse": _ADMIN,
    "catalog.add_client": _ADMIN,
    "catalog.add_supplier": _ADMIN,
    "catalog.list": _EVERYONE,
    # Inventory
    "inventory.stock": _STAFF,
    "inventory.adjust": _STAFF,
    "inventory.remove": _ADMIN,
    "inventory.show": _STAFF,
    "inventory.movements": _STAFF,
    # Sales orders
    "order.create": _EVERYONE,
    "order.show": _EVERYONE,
    "order.list": _EVERYONE,
    "order.cancel": _EVERYONE,
    "order.reserve": _STAFF,
    "order.ship": _STAFF,
    "order.deliver": _STAFF,
    "order.expire": _STAFF,
    # Shipments
    "shipment.show": _STAFF,
    "shipment.assign": _STAFF,
    "shipment.transit": _STAFF,
    "shipment.deliver": _STAFF,
    "shipment.reschedule": _STAFF,
    "shipment.delete": _STAFF,
    # Carriers
    "carrier.register": _ADMIN,
    "carrier.status": _ADMIN,
    "carrier.reset": _ADMIN,
    "carrier.list": _STAFF,
    # Purchase orders
    "purchase.create": _STAFF,
    "purchase.update": _STAFF,
    "purchase.approve": _STAFF,
    "purchase.receive": _STAFF,
    "purchase.cancel": _STAFF,
    "purchase.delete": _STAFF,
    "purchase.show": _STAFF,
}


class AccessPolicy:

    def __init__(self, operations: dict[str, frozenset[Role]] | None = None) -> None:
        self._operations = operations if operations is not None else OPERATIONS

    def authorize(
        self,
        caller: Caller,
        operation: str,
        owner_client_id: int | None = None,
    ) -> None:
        """Raise AccessDeniedError unless ``caller`` may run ``operation``.

        For client callers, ``owner_client_id`` is the client owning the
        target sales order(s); it must be the caller's own id.
        """
        allowed = self._operations.get(operation)
        if allowed is None:
            raise AccessDeniedError(f"Unknown operation: '{operation}'")
        if caller.role not in allowed:
            raise AccessDeniedError(
                f"Role {caller.role.value} is not allowed to perform {operation}"
            )
        if caller.role == Role.CLIENT and operation in OWNED_BY_CLIENT:
            if caller.client_id is None:
                raise AccessDeniedError("A client caller must identify itself")
            if owner_client_id != caller.client_id:
                raise AccessDeniedError(
                    "Clients may only access their own sales orders"
                )
