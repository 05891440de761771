from .set_storage_lifespan import SetStorageLifespan, create_document_store

__all__ = ["SetStorageLifespan", "create_document_store"]
