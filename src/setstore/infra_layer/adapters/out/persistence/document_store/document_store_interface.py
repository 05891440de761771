"""
Document Store Interface

Interface for the document store backing the set store. One document per
(bucket, key) pair, holding a set-valued field.
"""

from abc import ABC, abstractmethod
from typing import List, Optional


class DocumentStoreInterface(ABC):
    """Interface for Document Store implementations"""

    @abstractmethod
    async def find_values(self, bucket: str, key: str) -> Optional[List[str]]:
        """
        Get the value set of one entry

        Args:
            bucket: Bucket name
            key: Key within the bucket

        Returns:
            List of members, or None if no entry exists
        """
        pass

    @abstractmethod
    async def union_values(self, bucket: str, keys: List[str]) -> List[str]:
        """
        Union of the value sets of all entries matching bucket and key in keys

        Args:
            bucket: Bucket name
            keys: Non-empty list of keys

        Returns:
            Deduplicated list of members (order unspecified)
        """
        pass

    @abstractmethod
    async def add_values(self, bucket: str, key: str, values: List[str]) -> None:
        """
        Upsert the entry and add each value if absent, atomically per entry

        Args:
            bucket: Bucket name
            key: Key within the bucket
            values: Members to add
        """
        pass

    @abstractmethod
    async def pull_values(self, bucket: str, key: str, values: List[str]) -> None:
        """
        Remove every listed value from the entry; no-op if the entry is absent

        Args:
            bucket: Bucket name
            key: Key within the bucket
            values: Members to remove
        """
        pass

    @abstractmethod
    async def delete_keys(self, bucket: str, keys: List[str]) -> int:
        """
        Delete all entries matching bucket and key in keys

        Returns:
            Number of entries deleted
        """
        pass

    @abstractmethod
    async def delete_all(self) -> int:
        """
        Delete every entry in every bucket

        Returns:
            Number of entries deleted
        """
        pass

    async def close(self) -> None:
        """Release resources held by the store."""


__all__ = ["DocumentStoreInterface"]
