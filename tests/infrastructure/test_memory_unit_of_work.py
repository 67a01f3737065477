import threading

import pytest

from fulfillment.domain.model.catalog import Client
from fulfillment.infrastructure.persistence.unit_of_work import InMemoryUnitOfWork
from tests.fakes import add_client, add_inventory, add_product, add_warehouse


class TestInMemoryUnitOfWork:

    def test_commit_keeps_changes(self):
        uow = InMemoryUnitOfWork()
        with uow:
            uow.clients.save(Client(id=None, name="Acme"))
        assert [c.name for c in uow.clients.list_all()] == ["Acme"]

    def test_error_rolls_back_every_table(self):
        uow = InMemoryUnitOfWork()
        product = add_product(uow)
        warehouse = add_warehouse(uow)
        inv = add_inventory(uow, warehouse.id, product.id, 10)

        with pytest.raises(RuntimeError):
            with uow:
                row = uow.inventory.get_by_id(inv.id)
                row.reserve(4)
                uow.inventory.save(row)
                uow.clients.save(Client(id=None, name="Ghost"))
                raise RuntimeError("boom")

        assert uow.inventory.get_by_id(inv.id).qty_reserved == 0
        assert uow.clients.list_all() == []

    def test_rolled_back_ids_are_reused(self):
        uow = InMemoryUnitOfWork()
        with pytest.raises(RuntimeError):
            with uow:
                uow.clients.save(Client(id=None, name="Ghost"))
                raise RuntimeError("boom")

        assert add_client(uow).id == 1

    def test_nested_block_joins_outer_transaction(self):
        uow = InMemoryUnitOfWork()
        with pytest.raises(RuntimeError):
            with uow:
                with uow:
                    uow.clients.save(Client(id=None, name="Inner"))
                uow.clients.save(Client(id=None, name="Outer"))
                raise RuntimeError("boom")

        assert uow.clients.list_all() == []

    def test_lock_is_released_after_failure(self):
        uow = InMemoryUnitOfWork()
        with pytest.raises(RuntimeError):
            with uow:
                raise RuntimeError("boom")

        acquired = []
        contender = threading.Thread(
            target=lambda: acquired.append(uow.store.lock.acquire(blocking=False))
        )
        contender.start()
        contender.join()
        assert acquired == [True]
