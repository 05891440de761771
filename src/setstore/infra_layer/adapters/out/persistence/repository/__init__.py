"""
Repository Module

Set store repository and its transaction model.
"""

from .set_store_repository import SetStoreRepository
from .transaction import (
    AddOperation,
    DeleteOperation,
    RemoveOperation,
    Transaction,
    TransactionState,
    run_transaction,
)

__all__ = [
    "AddOperation",
    "DeleteOperation",
    "RemoveOperation",
    "SetStoreRepository",
    "Transaction",
    "TransactionState",
    "run_transaction",
]
