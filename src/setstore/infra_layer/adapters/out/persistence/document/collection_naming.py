"""
Collection naming

Derives the model and collection names of the set entry collection from an
optional namespace prefix:

    ""        -> model "Acl",      collection "acls"
    "my_app"  -> model "MyAppAcl", collection "myappacls"
"""

import re

BASE_MODEL_NAME = "Acl"

_SEPARATORS = re.compile(r"[-_\s]+(.)?")


def camelize(value: str) -> str:
    """Turn separators into camel case: "my_app-acl" -> "myAppAcl"."""
    return _SEPARATORS.sub(
        lambda match: match.group(1).upper() if match.group(1) else "",
        value.strip(),
    )


def model_name_for(prefix: str = "") -> str:
    """Model name for a prefix."""
    if not prefix:
        return BASE_MODEL_NAME
    name = camelize(f"{prefix}_acl")
    return name[:1].upper() + name[1:]


def collection_name_for(prefix: str = "") -> str:
    """Collection name for a prefix (lower-cased, pluralised model name)."""
    return f"{model_name_for(prefix).lower()}s"


__all__ = ["camelize", "collection_name_for", "model_name_for"]
