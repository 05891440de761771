"""setstore error types."""

from typing import Any, Optional


class SetStoreError(Exception):
    """Base class for every error raised by setstore."""


class ValidationError(SetStoreError, ValueError):
    """Raised when an operation receives malformed input.

    Always raised before the document store is touched, so a validation
    failure never leaves a partial mutation behind.
    """


class StorageFault(SetStoreError):
    """Raised when the underlying document store reports a failure.

    Attributes:
        operation: The pending operation that failed, when raised from
            a transaction.
        index: Position of that operation in the transaction.
    """

    def __init__(
        self,
        message: str,
        operation: Optional[Any] = None,
        index: Optional[int] = None,
    ) -> None:
        self.operation = operation
        self.index = index
        super().__init__(message)


class TransactionClosedError(SetStoreError):
    """Raised when a transaction is used after it has been ended."""


class StorageConfigError(SetStoreError, ValueError):
    """Raised when the storage configuration is incomplete or invalid."""


__all__ = [
    "SetStoreError",
    "StorageConfigError",
    "StorageFault",
    "TransactionClosedError",
    "ValidationError",
]
