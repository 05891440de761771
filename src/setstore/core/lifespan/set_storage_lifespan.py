"""
Set Storage Lifespan Provider

Initializes and manages the document store lifecycle based on environment
configuration. Supports InMemoryDocumentStore (development) and
MongoDocumentStore (production).
"""

from typing import Any, Optional

from setstore.core.errors import StorageConfigError
from setstore.core.observation.logger import get_logger
from setstore.infra_layer.adapters.out.persistence.document_store.document_store_interface import (
    DocumentStoreInterface,
)
from setstore.infra_layer.adapters.out.persistence.document_store.storage_config import (
    STORAGE_TYPE_MONGODB,
    SetStorageConfig,
    get_set_storage_config,
)
from setstore.infra_layer.adapters.out.persistence.repository.set_store_repository import (
    SetStoreRepository,
)

logger = get_logger(__name__)


def create_document_store(
    config: Optional[SetStorageConfig] = None,
) -> DocumentStoreInterface:
    """
    Build the document store selected by the configuration

    Args:
        config: Storage configuration, the global one if omitted

    Returns:
        InMemoryDocumentStore or MongoDocumentStore
    """
    config = config or get_set_storage_config()

    if config.storage_type == STORAGE_TYPE_MONGODB:
        logger.info("🚀 Initializing MongoDB document store...")

        if not config.database_name:
            raise StorageConfigError(
                "Missing required MongoDB configuration: MONGODB_DATABASE. "
                "Please set this environment variable or check .env file."
            )

        # Import here so in-memory setups never connect
        from setstore.infra_layer.adapters.out.persistence.document_store.mongo_document_store import (
            MongoDocumentStore,
        )

        store = MongoDocumentStore.from_uri(
            config.mongo_uri, config.database_name, prefix=config.prefix
        )
        logger.info(
            f"✅ MongoDB document store created\n"
            f"   Database: {config.database_name}\n"
            f"   Collection: {store.collection_name}"
        )
        return store

    logger.info("🚀 Initializing In-Memory document store...")

    from setstore.infra_layer.adapters.out.persistence.document_store.in_memory_document_store import (
        InMemoryDocumentStore,
    )

    store = InMemoryDocumentStore()
    logger.info("✅ In-Memory document store initialized (data will be lost on restart)")
    return store


class SetStorageLifespan:
    """
    Set storage lifecycle management

    startup() builds the document store and the repository on top of it;
    shutdown() closes the store.
    """

    def __init__(self, config: Optional[SetStorageConfig] = None):
        self.name = "set_storage_lifespan"
        self.config = config
        self.document_store: Optional[DocumentStoreInterface] = None
        self.repository: Optional[SetStoreRepository] = None

    async def startup(self, app: Any = None) -> SetStoreRepository:
        """Initialize the document store and repository"""
        try:
            self.document_store = create_document_store(self.config)
            self.repository = SetStoreRepository(self.document_store)
        except Exception as e:
            logger.error(f"❌ Failed to initialize set storage: {e}")
            raise
        logger.info(
            f"✅ Set storage ready: {type(self.document_store).__name__}"
        )
        return self.repository

    async def shutdown(self, app: Any = None) -> None:
        """Cleanup document store resources"""
        if self.document_store:
            logger.info(
                f"🔄 Shutting down set storage: {type(self.document_store).__name__}"
            )
            await self.document_store.close()
            self.document_store = None
            self.repository = None


__all__ = ["SetStorageLifespan", "create_document_store"]
