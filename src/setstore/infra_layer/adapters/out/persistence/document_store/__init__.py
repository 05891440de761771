"""
Document Store Module

Provides the document store interface behind the set store and its
implementations (in-memory, MongoDB).
"""

from .document_store_interface import DocumentStoreInterface
from .in_memory_document_store import InMemoryDocumentStore
from .storage_config import SetStorageConfig, get_set_storage_config

__all__ = [
    "DocumentStoreInterface",
    "InMemoryDocumentStore",
    "SetStorageConfig",
    "get_set_storage_config",
]
