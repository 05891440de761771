"""
In-Memory Document Store Implementation

Dict-based implementation of the document store. Useful for development and
testing; data is lost when the process exits.
"""

from threading import Lock
from typing import Dict, List, Optional, Tuple

from setstore.core.observation.logger import get_logger
from setstore.infra_layer.adapters.out.persistence.document_store.document_store_interface import (
    DocumentStoreInterface,
)

logger = get_logger(__name__)


class InMemoryDocumentStore(DocumentStoreInterface):
    """
    In-memory implementation of the document store using a Python dict.

    Entries are keyed by (bucket, key), so there is at most one entry per
    pair. Value sets are kept as insertion-ordered lists and only grow via
    add-if-absent. Every mutation holds the lock, which gives the same
    per-entry atomicity a MongoDB update_one provides.

    Not suitable for:
    - Production environments requiring persistence
    - Multi-process deployments
    """

    def __init__(self):
        """Initialize in-memory storage with an empty dict."""
        self._entries: Dict[Tuple[str, str], List[str]] = {}
        self._lock = Lock()
        logger.info("InMemoryDocumentStore initialized (dict-based)")

    async def find_values(self, bucket: str, key: str) -> Optional[List[str]]:
        with self._lock:
            values = self._entries.get((bucket, key))
            result = list(values) if values is not None else None
        logger.debug(
            f"InMemoryDocumentStore: FIND bucket={bucket}, key={key}, "
            f"found={result is not None}"
        )
        return result

    async def union_values(self, bucket: str, keys: List[str]) -> List[str]:
        union: Dict[str, None] = {}
        with self._lock:
            for key in dict.fromkeys(keys):
                for value in self._entries.get((bucket, key), ()):
                    union[value] = None
        logger.debug(
            f"InMemoryDocumentStore: UNION bucket={bucket}, keys={len(keys)}, "
            f"members={len(union)}"
        )
        return list(union)

    async def add_values(self, bucket: str, key: str, values: List[str]) -> None:
        with self._lock:
            members = self._entries.setdefault((bucket, key), [])
            for value in values:
                if value not in members:
                    members.append(value)
        logger.debug(
            f"InMemoryDocumentStore: ADD bucket={bucket}, key={key}, values={len(values)}"
        )

    async def pull_values(self, bucket: str, key: str, values: List[str]) -> None:
        with self._lock:
            members = self._entries.get((bucket, key))
            if members is not None:
                removed = set(values)
                members[:] = [m for m in members if m not in removed]
        logger.debug(
            f"InMemoryDocumentStore: PULL bucket={bucket}, key={key}, "
            f"found={members is not None}"
        )

    async def delete_keys(self, bucket: str, keys: List[str]) -> int:
        deleted_count = 0
        with self._lock:
            for key in dict.fromkeys(keys):
                if self._entries.pop((bucket, key), None) is not None:
                    deleted_count += 1
        logger.debug(
            f"InMemoryDocumentStore: DELETE bucket={bucket}, requested={len(keys)}, "
            f"deleted={deleted_count}"
        )
        return deleted_count

    async def delete_all(self) -> int:
        with self._lock:
            size = len(self._entries)
            self._entries.clear()
        logger.info(f"InMemoryDocumentStore cleaned, removed {size} entries")
        return size

    def get_stats(self) -> Dict[str, int]:
        """
        Get storage statistics (useful for debugging).

        Returns:
            Dictionary with entry_count and member_count
        """
        with self._lock:
            entry_count = len(self._entries)
            member_count = sum(len(v) for v in self._entries.values())
        return {"entry_count": entry_count, "member_count": member_count}


__all__ = ["InMemoryDocumentStore"]
