"""
Set Store Repository

Maps (bucket, key) pairs to sets of strings on top of a document store.

Reads (get, union) run immediately against committed state. Mutations (add,
remove, delete) are appended to a Transaction and only run when the
transaction is passed to end().

Example:
    txn = repo.begin()
    repo.add(txn, "roles", "admin", ["alice", "bob"])
    repo.delete(txn, "roles", "guest")
    await repo.end(txn)
    members = await repo.get("roles", "admin")
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Set

from setstore.core.contract import (
    StrOrList,
    ensure_key_allowed,
    ensure_str,
    ensure_str_list,
    unwrap_single_key,
)
from setstore.core.errors import StorageFault, ValidationError
from setstore.core.observation.logger import get_logger
from setstore.infra_layer.adapters.out.persistence.document_store.document_store_interface import (
    DocumentStoreInterface,
)
from setstore.infra_layer.adapters.out.persistence.repository.transaction import (
    AddOperation,
    DeleteOperation,
    RemoveOperation,
    Transaction,
    run_transaction,
)

logger = get_logger(__name__)


def _ensure_transaction(transaction: Transaction) -> Transaction:
    if not isinstance(transaction, Transaction):
        raise ValidationError(
            f"Parameter 'transaction' must be a Transaction, "
            f"got {type(transaction).__name__}"
        )
    return transaction


class SetStoreRepository:
    """
    Set-valued key-value repository

    Provides:
    - begin() -> Transaction
    - end(transaction)
    - get(bucket, key) -> set
    - union(bucket, keys) -> set
    - add / remove / delete (deferred, appended to a transaction)
    - clean()

    Validation errors are raised at call time, before anything is appended or
    read. Document store failures surface as StorageFault.
    """

    def __init__(self, store: DocumentStoreInterface):
        self._store = store

    @property
    def store(self) -> DocumentStoreInterface:
        return self._store

    # ==================== Transactions ====================

    def begin(self) -> Transaction:
        """Begin a transaction."""
        return Transaction()

    async def end(self, transaction: Transaction) -> None:
        """
        End a transaction and execute its operations in append order

        Raises:
            TransactionClosedError: If the transaction was already ended
            StorageFault: First failing operation; later ones are skipped and
                earlier ones stay committed
        """
        _ensure_transaction(transaction)
        await run_transaction(transaction, self._store)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[Transaction]:
        """
        Open a transaction that is ended when the block exits cleanly

        If the block raises, the pending operations are discarded. A block
        that already ended the transaction itself is left as is.
        """
        txn = self.begin()
        try:
            yield txn
        except BaseException:
            if txn.is_open:
                txn.close()
                logger.warning(
                    f"⚠️  Discarded {len(txn)} pending operations after an error"
                )
            raise
        if txn.is_open:
            await self.end(txn)

    # ==================== Reads ====================

    async def get(self, bucket: str, key: str) -> Set[str]:
        """
        Get the value set at the bucket's key

        Returns:
            The members, or an empty set if no entry exists
        """
        ensure_str("bucket", bucket)
        ensure_str("key", key)
        try:
            values = await self._store.find_values(bucket, key)
        except StorageFault:
            raise
        except Exception as e:
            logger.error(f"❌ Failed to get {bucket}/{key}: {e}")
            raise StorageFault(f"Failed to get {bucket}/{key}: {e}") from e
        return set(values) if values else set()

    async def union(self, bucket: str, keys: StrOrList) -> Set[str]:
        """
        Union of the value sets of the given keys in a bucket

        Returns:
            The merged members, or an empty set if no key has an entry
        """
        ensure_str("bucket", bucket)
        keys = ensure_str_list("keys", keys)
        try:
            values = await self._store.union_values(bucket, keys)
        except StorageFault:
            raise
        except Exception as e:
            logger.error(f"❌ Failed to compute union in {bucket}: {e}")
            raise StorageFault(f"Failed to compute union in {bucket}: {e}") from e
        return set(values)

    # ==================== Deferred mutations ====================

    def add(
        self, transaction: Transaction, bucket: str, key: StrOrList, values: StrOrList
    ) -> None:
        """Add values to a given key inside a bucket."""
        _ensure_transaction(transaction)
        ensure_str("bucket", bucket)
        key = ensure_key_allowed(unwrap_single_key(key))
        values = ensure_str_list("values", values)
        transaction.append(AddOperation(bucket, key, tuple(values)))

    def remove(
        self, transaction: Transaction, bucket: str, key: StrOrList, values: StrOrList
    ) -> None:
        """Remove values from a given key inside a bucket."""
        _ensure_transaction(transaction)
        ensure_str("bucket", bucket)
        key = unwrap_single_key(key)
        values = ensure_str_list("values", values)
        transaction.append(RemoveOperation(bucket, key, tuple(values)))

    def delete(self, transaction: Transaction, bucket: str, keys: StrOrList) -> None:
        """Delete the given key(s) at the bucket."""
        _ensure_transaction(transaction)
        ensure_str("bucket", bucket)
        keys = ensure_str_list("keys", keys)
        transaction.append(DeleteOperation(bucket, tuple(keys)))

    del_ = delete

    # ==================== Maintenance ====================

    async def clean(self) -> None:
        """Delete every entry in every bucket. Irreversible."""
        try:
            count = await self._store.delete_all()
        except StorageFault:
            raise
        except Exception as e:
            logger.error(f"❌ Failed to clean set storage: {e}")
            raise StorageFault(f"Failed to clean set storage: {e}") from e
        logger.info(f"✅ Set storage cleaned ({count} entries removed)")


__all__ = ["SetStoreRepository"]
