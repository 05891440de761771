"""
Set Storage Configuration

Global configuration for the document store backing the set store.

Environment Variables:
    SET_STORAGE_TYPE: "inmemory" or "mongodb" (default: "inmemory")
    SET_STORAGE_PREFIX: Collection namespace prefix (default: "")
    MONGODB_URI: Full connection URI (takes precedence over the parts below)
    MONGODB_HOST / MONGODB_PORT / MONGODB_USERNAME / MONGODB_PASSWORD
    MONGODB_DATABASE: Database name (default: "setstore")
"""

import os
from typing import Optional

from dotenv import load_dotenv

from setstore.core.observation.logger import get_logger

logger = get_logger(__name__)

STORAGE_TYPE_INMEMORY = "inmemory"
STORAGE_TYPE_MONGODB = "mongodb"
SUPPORTED_STORAGE_TYPES = (STORAGE_TYPE_INMEMORY, STORAGE_TYPE_MONGODB)


class SetStorageConfig:
    """
    Global set storage configuration singleton

    Values are read from the environment (and a .env file, if present) on
    first use. Call refresh() after changing the environment.
    """

    _instance: Optional['SetStorageConfig'] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        """Initialize configuration from environment variables"""
        load_dotenv()
        self.refresh()

    def refresh(self) -> "SetStorageConfig":
        """Re-read configuration from the current environment"""
        storage_type = os.getenv("SET_STORAGE_TYPE", STORAGE_TYPE_INMEMORY).lower()
        if storage_type not in SUPPORTED_STORAGE_TYPES:
            logger.warning(
                f"⚠️  Unknown SET_STORAGE_TYPE '{storage_type}', falling back to "
                f"'{STORAGE_TYPE_INMEMORY}'"
            )
            storage_type = STORAGE_TYPE_INMEMORY
        self._storage_type = storage_type
        self._prefix = os.getenv("SET_STORAGE_PREFIX", "")
        self._mongo_uri = os.getenv("MONGODB_URI", "")
        self._mongo_host = os.getenv("MONGODB_HOST", "localhost")
        self._mongo_port = os.getenv("MONGODB_PORT", "27017")
        self._mongo_username = os.getenv("MONGODB_USERNAME", "")
        self._mongo_password = os.getenv("MONGODB_PASSWORD", "")
        self._database_name = os.getenv("MONGODB_DATABASE", "setstore")
        return self

    @property
    def storage_type(self) -> str:
        return self._storage_type

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def database_name(self) -> str:
        return self._database_name

    @property
    def mongo_uri(self) -> str:
        """
        MongoDB connection URI

        Returns MONGODB_URI when set, otherwise a URI built from host, port
        and optional credentials.
        """
        if self._mongo_uri:
            return self._mongo_uri
        if self._mongo_username and self._mongo_password:
            return (
                f"mongodb://{self._mongo_username}:{self._mongo_password}"
                f"@{self._mongo_host}:{self._mongo_port}"
            )
        return f"mongodb://{self._mongo_host}:{self._mongo_port}"

    def __repr__(self) -> str:
        return (
            f"SetStorageConfig(type={self._storage_type}, prefix={self._prefix!r}, "
            f"database={self._database_name})"
        )


def get_set_storage_config() -> SetStorageConfig:
    """Get global set storage configuration instance"""
    return SetStorageConfig()


__all__ = [
    "STORAGE_TYPE_INMEMORY",
    "STORAGE_TYPE_MONGODB",
    "SUPPORTED_STORAGE_TYPES",
    "SetStorageConfig",
    "get_set_storage_config",
]
