"""setstore: set-valued key-value storage with batched mutations."""

from setstore.core.errors import (
    SetStoreError,
    StorageConfigError,
    StorageFault,
    TransactionClosedError,
    ValidationError,
)
from setstore.core.lifespan.set_storage_lifespan import (
    SetStorageLifespan,
    create_document_store,
)
from setstore.infra_layer.adapters.out.persistence.document_store import (
    DocumentStoreInterface,
    InMemoryDocumentStore,
    SetStorageConfig,
    get_set_storage_config,
)
from setstore.infra_layer.adapters.out.persistence.repository import (
    AddOperation,
    DeleteOperation,
    RemoveOperation,
    SetStoreRepository,
    Transaction,
    TransactionState,
)

__all__ = [
    "AddOperation",
    "DeleteOperation",
    "DocumentStoreInterface",
    "InMemoryDocumentStore",
    "RemoveOperation",
    "SetStorageConfig",
    "SetStorageLifespan",
    "SetStoreError",
    "SetStoreRepository",
    "StorageConfigError",
    "StorageFault",
    "Transaction",
    "TransactionClosedError",
    "TransactionState",
    "ValidationError",
    "create_document_store",
    "get_set_storage_config",
]
