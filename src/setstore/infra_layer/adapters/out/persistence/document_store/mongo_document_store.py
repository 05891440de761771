"""
MongoDB Document Store Implementation

Set entries live in one MongoDB collection (see collection_naming). Reads go
through the Beanie document model; mutations use the PyMongo collection
directly so each one is a single atomic update_one/delete_many.
"""

import asyncio
from typing import List, Optional, Type

from beanie import Document, init_beanie
from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from setstore.core.errors import StorageFault
from setstore.core.observation.logger import get_logger
from setstore.infra_layer.adapters.out.persistence.document.set_entry import (
    set_entry_model,
)
from setstore.infra_layer.adapters.out.persistence.document_store.document_store_interface import (
    DocumentStoreInterface,
)

logger = get_logger(__name__)

UNION_PIPELINE = [
    {"$unwind": "$valueSet"},
    {"$group": {"_id": None, "union": {"$addToSet": "$valueSet"}}},
]


class MongoDocumentStore(DocumentStoreInterface):
    """
    MongoDB-based Document Store implementation

    The Beanie model is initialised lazily on first use, which also creates
    the unique (bucket, key) index.
    """

    def __init__(
        self,
        database: AsyncDatabase,
        prefix: str = "",
        client: Optional[AsyncMongoClient] = None,
    ):
        """
        Args:
            database: PyMongo async database holding the set collection
            prefix: Collection namespace prefix
            client: Owning client, closed by close() when given
        """
        self._database = database
        self._client = client
        self._model: Type[Document] = set_entry_model(prefix)
        self._initialized = False
        self._init_lock = asyncio.Lock()

    @classmethod
    def from_uri(
        cls, uri: str, database_name: str, prefix: str = ""
    ) -> "MongoDocumentStore":
        """Create a store that owns its own client."""
        client = AsyncMongoClient(uri)
        return cls(client[database_name], prefix=prefix, client=client)

    @property
    def collection_name(self) -> str:
        return self._model.Settings.name

    async def _get_model(self) -> Type[Document]:
        """Lazy Beanie initialisation"""
        if self._initialized:
            return self._model
        async with self._init_lock:
            if not self._initialized:
                try:
                    await init_beanie(
                        database=self._database, document_models=[self._model]
                    )
                except PyMongoError as e:
                    logger.error(f"❌ Failed to initialize collection {self.collection_name}: {e}")
                    raise StorageFault(f"Failed to initialize set collection: {e}") from e
                self._initialized = True
                logger.info(
                    f"✅ MongoDocumentStore initialized: collection={self.collection_name}"
                )
        return self._model

    async def find_values(self, bucket: str, key: str) -> Optional[List[str]]:
        model = await self._get_model()
        try:
            entry = await model.find_one({"bucket": bucket, "key": key})
        except PyMongoError as e:
            logger.error(f"❌ MongoDB FIND failed: bucket={bucket}, key={key}: {e}")
            raise StorageFault(f"Failed to read {bucket}/{key}: {e}") from e
        if entry is None:
            return None
        return list(entry.value_set)

    async def union_values(self, bucket: str, keys: List[str]) -> List[str]:
        model = await self._get_model()
        try:
            data = await (
                model.find({"bucket": bucket, "key": {"$in": keys}})
                .aggregate(UNION_PIPELINE)
                .to_list()
            )
        except PyMongoError as e:
            logger.error(f"❌ MongoDB UNION failed: bucket={bucket}, keys={keys}: {e}")
            raise StorageFault(f"Failed to compute union in {bucket}: {e}") from e
        if data and data[0].get("union") is not None:
            return list(data[0]["union"])
        return []

    async def add_values(self, bucket: str, key: str, values: List[str]) -> None:
        model = await self._get_model()
        try:
            await model.get_pymongo_collection().update_one(
                {"bucket": bucket, "key": key},
                {"$addToSet": {"valueSet": {"$each": values}}},
                upsert=True,
            )
        except PyMongoError as e:
            logger.error(f"❌ MongoDB ADD failed: bucket={bucket}, key={key}: {e}")
            raise StorageFault(f"Failed to add values to {bucket}/{key}: {e}") from e
        logger.debug(f"💾 MongoDB ADD: {bucket}/{key} ({len(values)} values)")

    async def pull_values(self, bucket: str, key: str, values: List[str]) -> None:
        model = await self._get_model()
        try:
            await model.get_pymongo_collection().update_one(
                {"bucket": bucket, "key": key},
                {"$pullAll": {"valueSet": values}},
            )
        except PyMongoError as e:
            logger.error(f"❌ MongoDB PULL failed: bucket={bucket}, key={key}: {e}")
            raise StorageFault(
                f"Failed to remove values from {bucket}/{key}: {e}"
            ) from e
        logger.debug(f"💾 MongoDB PULL: {bucket}/{key} ({len(values)} values)")

    async def delete_keys(self, bucket: str, keys: List[str]) -> int:
        model = await self._get_model()
        try:
            result = await model.find({"bucket": bucket, "key": {"$in": keys}}).delete()
        except PyMongoError as e:
            logger.error(f"❌ MongoDB DELETE failed: bucket={bucket}, keys={keys}: {e}")
            raise StorageFault(f"Failed to delete keys in {bucket}: {e}") from e
        count = result.deleted_count if result else 0
        logger.debug(f"🗑️  MongoDB DELETE: {bucket} keys={len(keys)}, deleted={count}")
        return count

    async def delete_all(self) -> int:
        model = await self._get_model()
        try:
            result = await model.delete_all()
        except PyMongoError as e:
            logger.error(f"❌ MongoDB CLEAN failed: {e}")
            raise StorageFault(f"Failed to clean set collection: {e}") from e
        count = result.deleted_count if result else 0
        logger.info(f"✅ Cleaned collection {self.collection_name}, removed {count} entries")
        return count

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            logger.info("🔄 MongoDocumentStore client closed")


__all__ = ["MongoDocumentStore", "UNION_PIPELINE"]
