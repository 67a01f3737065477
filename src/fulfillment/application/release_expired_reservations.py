"""Application service: Release Expired Reservations use case.

Meant to be triggered periodically by an external scheduler.  Every
RESERVED order whose reservation is older than the configured TTL gets
its stock released and is cancelled.  Each order is released in its own
transaction, so an order that cannot be released is logged and skipped
while the rest of the sweep goes on.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from fulfillment.domain.clock import Clock, utc_now
from fulfillment.domain.exceptions import DomainException
from fulfillment.domain.model.sales_order import SalesOrder, SalesOrderStatus
from fulfillment.domain.repository.unit_of_work import UnitOfWork
from fulfillment.domain.service.inventory_ledger import InventoryLedger

logger = logging.getLogger(__name__)


def _is_expired(order: SalesOrder, expires_before: datetime) -> bool:
    return (
        order.status == SalesOrderStatus.RESERVED
        and order.reserved_at is not None
        and order.reserved_at < expires_before
    )


class ReleaseExpiredReservationsHandler:

    def __init__(self, uow: UnitOfWork, ttl: timedelta, clock: Clock = utc_now) -> None:
        self._uow = uow
        self._ttl = ttl
        self._clock = clock

    def handle(self) -> list[int]:
        """Return the ids of the orders that were cancelled."""
        expires_before = self._clock() - self._ttl
        with self._uow as uow:
            candidates = [
                order.id
                for order in uow.sales_orders.list_by_status(SalesOrderStatus.RESERVED)
                if _is_expired(order, expires_before)
            ]

        released: list[int] = []
        for order_id in candidates:
            try:
                if self._release(order_id, expires_before):  # type: ignore[arg-type]
                    released.append(order_id)  # type: ignore[arg-type]
            except DomainException as exc:
                logger.error("Could not release expired sales order #%s: %s", order_id, exc)

        logger.info("Released %d expired reservation(s)", len(released))
        return released

    def _release(self, order_id: int, expires_before: datetime) -> bool:
        with self._uow as uow:
            order = uow.sales_orders.get_by_id(order_id)
            if order is None or not _is_expired(order, expires_before):
                return False
            InventoryLedger(uow.inventory, uow.movements, self._clock).release_lines(order.lines)
            order.cancel()
            uow.sales_orders.save(order)
            return True
