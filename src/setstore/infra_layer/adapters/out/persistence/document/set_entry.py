"""
SetEntry Document Model

One MongoDB document per (bucket, key) pair holding that key's value set.
Collection naming follows the prefix rules in collection_naming.
"""

from typing import List, Type

from beanie import Document
from pydantic import BaseModel, ConfigDict, Field, create_model
from pymongo import ASCENDING, IndexModel

from setstore.infra_layer.adapters.out.persistence.document.collection_naming import (
    collection_name_for,
    model_name_for,
)


class SetEntry(BaseModel):
    """
    Set entry fields

    Stored shape: {bucket, key, valueSet}. valueSet only ever grows through
    $addToSet, so it holds no duplicate members.
    """

    bucket: str = Field(..., description="Namespace partitioning keys")
    key: str = Field(..., description="Key within the bucket")
    value_set: List[str] = Field(
        default_factory=list,
        alias="valueSet",
        description="Set members, stored as an array without duplicates",
    )

    model_config = ConfigDict(populate_by_name=True)


def _settings_for(prefix: str) -> type:
    """Beanie settings bound to the collection of a prefix"""

    class Settings:
        name = collection_name_for(prefix)

        indexes = [
            IndexModel(
                [("bucket", ASCENDING), ("key", ASCENDING)],
                name="idx_bucket_key",
                unique=True,
            ),
        ]

    return Settings


def set_entry_model(prefix: str = "") -> Type[Document]:
    """
    Build the SetEntry document class bound to the collection for a prefix

    Beanie binds a collection (and its database) on the class, so every
    store builds its own class. Document is the only Document base, which
    keeps init_beanie from touching any other collection.

    Args:
        prefix: Collection namespace prefix, empty for the default collection

    Returns:
        Document class with the SetEntry fields
    """
    model = create_model(
        model_name_for(prefix),
        __base__=(SetEntry, Document),
        __module__=__name__,
    )
    model.Settings = _settings_for(prefix)
    return model


__all__ = ["SetEntry", "set_entry_model"]
