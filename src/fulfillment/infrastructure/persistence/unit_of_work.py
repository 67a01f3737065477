"""Unit of Work implementations.

``InMemoryUnitOfWork`` holds the store's lock for the whole transaction
and restores a snapshot on rollback.  Because every handler reads and
writes inside one transaction, the availability / capacity check and
the mutation that depends on it can never interleave with another
request.

``JsonUnitOfWork`` adds durability: the store is loaded from one JSON
document when a transaction starts and written back atomically on commit.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from fulfillment.domain.repository.unit_of_work import UnitOfWork
from fulfillment.infrastructure.persistence.json_codec import dump_store, load_into
from fulfillment.infrastructure.persistence.memory_repositories import (
    InMemoryCarrierRepository,
    InMemoryClientRepository,
    InMemoryInventoryMovementRepository,
    InMemoryInventoryRepository,
    InMemoryProductRepository,
    InMemoryPurchaseOrderRepository,
    InMemorySalesOrderRepository,
    InMemoryShipmentRepository,
    InMemoryStore,
    InMemorySupplierRepository,
    InMemoryWarehouseRepository,
    Table,
)

logger = logging.getLogger(__name__)


class InMemoryUnitOfWork(UnitOfWork):

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self.store = store if store is not None else InMemoryStore()
        self._snapshot: dict[str, Table[Any]] | None = None
        self._depth = 0

        self.products = InMemoryProductRepository(self.store.products)
        self.warehouses = InMemoryWarehouseRepository(self.store.warehouses)
        self.clients = InMemoryClientRepository(self.store.clients)
        self.suppliers = InMemorySupplierRepository(self.store.suppliers)
        self.inventory = InMemoryInventoryRepository(self.store.inventory)
        self.movements = InMemoryInventoryMovementRepository(self.store.movements)
        self.sales_orders = InMemorySalesOrderRepository(self.store.sales_orders)
        self.shipments = InMemoryShipmentRepository(self.store.shipments)
        self.carriers = InMemoryCarrierRepository(self.store.carriers)
        self.purchase_orders = InMemoryPurchaseOrderRepository(self.store.purchase_orders)

    # Nested ``with`` blocks join the outer transaction: only the outermost
    # level snapshots, commits and rolls back.

    def begin(self) -> None:
        self.store.lock.acquire()
        self._depth += 1
        if self._depth == 1:
            self._load()
            self._snapshot = self.store.snapshot()

    def commit(self) -> None:
        if self._depth == 1:
            try:
                self._persist()
            except Exception:
                self.rollback()
                raise
            self._snapshot = None

    def rollback(self) -> None:
        if self._depth == 1 and self._snapshot is not None:
            self.store.restore(self._snapshot)
            self._snapshot = None
            logger.debug("Transaction rolled back")

    def close(self) -> None:
        self._depth -= 1
        self.store.lock.release()

    # --- Durability hooks -----------------------------------------------------

    def _load(self) -> None:
        """Refresh the store from durable storage (nothing to do in memory)."""

    def _persist(self) -> None:
        """Write the store to durable storage (nothing to do in memory)."""


class JsonUnitOfWork(InMemoryUnitOfWork):

    def __init__(self, file_path: Path, store: InMemoryStore | None = None) -> None:
        super().__init__(store)
        self._file_path = file_path

    def _load(self) -> None:
        if not self._file_path.exists():
            return
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        load_into(self.store, raw)

    def _persist(self) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(dump_store(self.store), indent=2) + "\n"
        fd, tmp_name = tempfile.mkstemp(
            dir=self._file_path.parent, prefix=self._file_path.name, suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_name, self._file_path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
