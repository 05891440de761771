"""
Transaction Tests

Sequential execution in append order, first-failure-wins, partial commit and
the open -> ended lifecycle.
"""

from unittest.mock import AsyncMock

import pytest

from setstore.core.errors import StorageFault, TransactionClosedError
from setstore.infra_layer.adapters.out.persistence.repository.transaction import (
    AddOperation,
    DeleteOperation,
    RemoveOperation,
    Transaction,
    TransactionState,
    run_transaction,
)


class TestTransactionLifecycle:
    """Transaction object state"""

    def test_new_transaction_is_open_and_empty(self):
        txn = Transaction()

        assert txn.state is TransactionState.OPEN
        assert txn.is_open
        assert len(txn) == 0
        assert txn.operations == ()

    def test_append_preserves_order(self):
        txn = Transaction()
        ops = [
            AddOperation("b", "k", ("x",)),
            RemoveOperation("b", "k", ("x",)),
            DeleteOperation("b", ("k",)),
        ]
        for op in ops:
            txn.append(op)

        assert txn.operations == tuple(ops)

    def test_close_ends_transaction(self):
        txn = Transaction()
        txn.append(DeleteOperation("b", ("k",)))

        operations = txn.close()

        assert operations == [DeleteOperation("b", ("k",))]
        assert txn.state is TransactionState.ENDED

    def test_append_after_close_rejected(self):
        txn = Transaction()
        txn.close()

        with pytest.raises(TransactionClosedError):
            txn.append(DeleteOperation("b", ("k",)))

    def test_close_twice_rejected(self):
        txn = Transaction()
        txn.close()

        with pytest.raises(TransactionClosedError):
            txn.close()


@pytest.mark.asyncio
class TestTransactionExecution:
    """end() / run_transaction() behaviour"""

    async def test_empty_transaction_succeeds(self, repository):
        txn = repository.begin()

        assert await repository.end(txn) is None
        assert txn.state is TransactionState.ENDED

    async def test_add_then_delete_observes_add(self, repository, bucket):
        txn = repository.begin()
        repository.add(txn, bucket, "k", "x")
        repository.delete(txn, bucket, "k")
        await repository.end(txn)

        assert await repository.get(bucket, "k") == set()

    async def test_delete_then_add_keeps_value(self, repository, bucket):
        txn = repository.begin()
        repository.add(txn, bucket, "k", "old")
        repository.delete(txn, bucket, "k")
        repository.add(txn, bucket, "k", "new")
        await repository.end(txn)

        assert await repository.get(bucket, "k") == {"new"}

    async def test_operations_run_in_append_order(self, document_store):
        calls = []

        async def record_add(*args):
            calls.append(("add",) + args)

        async def record_pull(*args):
            calls.append(("pull",) + args)

        async def record_delete(*args):
            calls.append(("delete",) + args)
            return 0

        document_store.add_values = AsyncMock(side_effect=record_add)
        document_store.pull_values = AsyncMock(side_effect=record_pull)
        document_store.delete_keys = AsyncMock(side_effect=record_delete)

        txn = Transaction()
        txn.append(AddOperation("b", "k1", ("x",)))
        txn.append(RemoveOperation("b", "k1", ("x",)))
        txn.append(DeleteOperation("b", ("k1", "k2")))
        await run_transaction(txn, document_store)

        assert calls == [
            ("add", "b", "k1", ["x"]),
            ("pull", "b", "k1", ["x"]),
            ("delete", "b", ["k1", "k2"]),
        ]

    async def test_first_failure_stops_and_is_reported(self, repository, document_store, bucket):
        document_store.pull_values = AsyncMock(side_effect=StorageFault("write conflict"))
        document_store.delete_keys = AsyncMock(return_value=0)

        txn = repository.begin()
        repository.add(txn, bucket, "k", ["a", "b"])
        repository.remove(txn, bucket, "k", "a")
        repository.delete(txn, bucket, "k")

        with pytest.raises(StorageFault, match="write conflict") as exc_info:
            await repository.end(txn)

        assert exc_info.value.index == 1
        assert exc_info.value.operation == RemoveOperation(bucket, "k", ("a",))
        document_store.delete_keys.assert_not_awaited()

    async def test_earlier_operations_stay_committed(self, repository, document_store, bucket):
        document_store.delete_keys = AsyncMock(side_effect=StorageFault("disk full"))

        txn = repository.begin()
        repository.add(txn, bucket, "k", "a")
        repository.delete(txn, bucket, "k")

        with pytest.raises(StorageFault):
            await repository.end(txn)

        assert await repository.get(bucket, "k") == {"a"}

    async def test_unexpected_store_error_reported_as_storage_fault(self, repository, document_store, bucket):
        document_store.add_values = AsyncMock(side_effect=ConnectionError("reset by peer"))

        txn = repository.begin()
        repository.add(txn, bucket, "k", "a")

        with pytest.raises(StorageFault, match="reset by peer") as exc_info:
            await repository.end(txn)

        assert isinstance(exc_info.value.__cause__, ConnectionError)
        assert exc_info.value.index == 0

    async def test_end_twice_rejected(self, repository, bucket):
        txn = repository.begin()
        repository.add(txn, bucket, "k", "a")
        await repository.end(txn)

        with pytest.raises(TransactionClosedError):
            await repository.end(txn)

    async def test_add_after_end_rejected(self, repository, bucket):
        txn = repository.begin()
        await repository.end(txn)

        with pytest.raises(TransactionClosedError):
            repository.add(txn, bucket, "k", "a")

    async def test_failed_transaction_cannot_be_retried(self, repository, document_store, bucket):
        document_store.add_values = AsyncMock(side_effect=StorageFault("timeout"))

        txn = repository.begin()
        repository.add(txn, bucket, "k", "a")
        with pytest.raises(StorageFault):
            await repository.end(txn)

        with pytest.raises(TransactionClosedError):
            await repository.end(txn)


@pytest.mark.asyncio
class TestTransactionContextManager:
    """repository.transaction() async context manager"""

    async def test_commits_on_clean_exit(self, repository, bucket):
        async with repository.transaction() as txn:
            repository.add(txn, bucket, "k", ["a", "b"])
            assert await repository.get(bucket, "k") == set()

        assert txn.state is TransactionState.ENDED
        assert await repository.get(bucket, "k") == {"a", "b"}

    async def test_discards_on_error(self, repository, bucket):
        with pytest.raises(RuntimeError):
            async with repository.transaction() as txn:
                repository.add(txn, bucket, "k", "a")
                raise RuntimeError("caller failure")

        assert txn.state is TransactionState.ENDED
        assert await repository.get(bucket, "k") == set()

    async def test_storage_fault_raised_from_exit(self, repository, document_store, bucket):
        document_store.add_values = AsyncMock(side_effect=StorageFault("down"))

        with pytest.raises(StorageFault):
            async with repository.transaction() as txn:
                repository.add(txn, bucket, "k", "a")

    async def test_end_inside_block_is_not_repeated(self, repository, bucket):
        async with repository.transaction() as txn:
            repository.add(txn, bucket, "k", "a")
            await repository.end(txn)

        assert txn.state is TransactionState.ENDED
        assert await repository.get(bucket, "k") == {"a"}
