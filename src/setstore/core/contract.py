"""
Input contract helpers

Argument checks shared by the set store operations. Every helper raises
ValidationError and never touches storage.
"""

from typing import Any, List, Sequence, Union

from setstore.core.errors import ValidationError

StrOrList = Union[str, Sequence[str]]

RESERVED_KEY_NAMES = frozenset({"key"})


def make_list(value: StrOrList) -> List[str]:
    """Wrap a scalar into a one-element list, copy a list/tuple as-is."""
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def ensure_str(name: str, value: Any) -> str:
    """
    Require a string argument

    Args:
        name: Parameter name used in the error message
        value: Argument to check

    Returns:
        The value unchanged

    Raises:
        ValidationError: If the value is not a string
    """
    if not isinstance(value, str):
        raise ValidationError(
            f"Parameter '{name}' must be a string, got {type(value).__name__}"
        )
    return value


def ensure_str_list(name: str, value: Any) -> List[str]:
    """
    Normalize a scalar-or-list argument into a non-empty list of strings

    Raises:
        ValidationError: If the list is empty or holds a non-string member
    """
    if not isinstance(value, (str, list, tuple)):
        raise ValidationError(
            f"Parameter '{name}' must be a string or a list of strings, "
            f"got {type(value).__name__}"
        )
    items = make_list(value)
    if not items:
        raise ValidationError(f"Parameter '{name}' must not be empty")
    for item in items:
        if not isinstance(item, str):
            raise ValidationError(
                f"Parameter '{name}' must only contain strings, "
                f"got {type(item).__name__}"
            )
    return items


def unwrap_single_key(value: Any) -> str:
    """
    Reduce a key given as a scalar or a one-element list to a scalar

    Raises:
        ValidationError: If the list does not hold exactly one element
    """
    if isinstance(value, (list, tuple)):
        if len(value) != 1:
            raise ValidationError("Key should contain only a single value.")
        value = value[0]
    return ensure_str("key", value)


def ensure_key_allowed(key: str) -> str:
    """Reject reserved key names."""
    if key in RESERVED_KEY_NAMES:
        raise ValidationError(f"Key name '{key}' is not allowed.")
    return key


__all__ = [
    "RESERVED_KEY_NAMES",
    "StrOrList",
    "ensure_key_allowed",
    "ensure_str",
    "ensure_str_list",
    "make_list",
    "unwrap_single_key",
]
