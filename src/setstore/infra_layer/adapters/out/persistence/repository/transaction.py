"""
Set Store Transactions

A Transaction is an ordered list of pending mutations. Appending an operation
never touches storage; run_transaction() applies them one after the other and
stops at the first failure. Operations that already ran stay committed.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple, Union

from setstore.core.errors import StorageFault, TransactionClosedError
from setstore.core.observation.logger import get_logger
from setstore.infra_layer.adapters.out.persistence.document_store.document_store_interface import (
    DocumentStoreInterface,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class AddOperation:
    """Upsert (bucket, key) and add each value if absent."""

    bucket: str
    key: str
    values: Tuple[str, ...]

    async def apply(self, store: DocumentStoreInterface) -> None:
        await store.add_values(self.bucket, self.key, list(self.values))


@dataclass(frozen=True)
class RemoveOperation:
    """Pull every listed value from (bucket, key)."""

    bucket: str
    key: str
    values: Tuple[str, ...]

    async def apply(self, store: DocumentStoreInterface) -> None:
        await store.pull_values(self.bucket, self.key, list(self.values))


@dataclass(frozen=True)
class DeleteOperation:
    """Delete every entry of the bucket whose key is listed."""

    bucket: str
    keys: Tuple[str, ...]

    async def apply(self, store: DocumentStoreInterface) -> None:
        await store.delete_keys(self.bucket, list(self.keys))


PendingOperation = Union[AddOperation, RemoveOperation, DeleteOperation]


class TransactionState(str, Enum):
    OPEN = "open"
    ENDED = "ended"


class Transaction:
    """Ordered batch of pending set store mutations."""

    def __init__(self):
        self._operations: List[PendingOperation] = []
        self._state = TransactionState.OPEN

    @property
    def state(self) -> TransactionState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state is TransactionState.OPEN

    @property
    def operations(self) -> Tuple[PendingOperation, ...]:
        return tuple(self._operations)

    def append(self, operation: PendingOperation) -> None:
        if not self.is_open:
            raise TransactionClosedError("Cannot append to a transaction that has ended")
        self._operations.append(operation)

    def close(self) -> List[PendingOperation]:
        """Mark the transaction ended and hand over its operations."""
        if not self.is_open:
            raise TransactionClosedError("Transaction has already ended")
        self._state = TransactionState.ENDED
        return list(self._operations)

    def __len__(self) -> int:
        return len(self._operations)

    def __repr__(self) -> str:
        return f"Transaction(state={self._state.value}, operations={len(self._operations)})"


async def run_transaction(
    transaction: Transaction, store: DocumentStoreInterface
) -> None:
    """
    Execute a transaction's operations sequentially, in append order

    Args:
        transaction: Open transaction; it is ended by this call
        store: Document store the operations are applied to

    Raises:
        TransactionClosedError: If the transaction was already ended
        StorageFault: For the first operation that fails; later operations
            are not run
    """
    operations = transaction.close()
    total = len(operations)

    for index, operation in enumerate(operations):
        try:
            await operation.apply(store)
        except StorageFault as e:
            logger.error(
                f"❌ Transaction aborted at operation {index + 1}/{total} "
                f"({operation!r}): {e}"
            )
            raise StorageFault(str(e), operation=operation, index=index) from e
        except Exception as e:
            logger.error(
                f"❌ Transaction aborted at operation {index + 1}/{total} "
                f"({operation!r}): {e}"
            )
            raise StorageFault(
                f"Operation failed: {e}", operation=operation, index=index
            ) from e
        logger.debug(f"Transaction operation {index + 1}/{total} done: {operation!r}")

    logger.debug(f"✅ Transaction committed ({total} operations)")


__all__ = [
    "AddOperation",
    "DeleteOperation",
    "PendingOperation",
    "RemoveOperation",
    "Transaction",
    "TransactionState",
    "run_transaction",
]
