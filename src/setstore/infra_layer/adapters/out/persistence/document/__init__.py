"""
Document Models

MongoDB document definitions and collection naming for set entries.
"""

from .collection_naming import collection_name_for, model_name_for
from .set_entry import SetEntry, set_entry_model

__all__ = [
    "SetEntry",
    "collection_name_for",
    "model_name_for",
    "set_entry_model",
]
