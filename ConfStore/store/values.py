"""
Value model for the ConfStore hierarchical store.

Only a closed set of types can be stored: None, bool, str, numbers (which
only survive as numbers through JSON), lists and nested Stores. This module
classifies values, converts between Stores and plain dictionaries, performs
deep clones and implements the string-to-typed coercion used by the INI
decoder.
"""

from enum import Enum
from typing import Any, Dict, Mapping, Optional, TYPE_CHECKING

from ConfStore.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from ConfStore.store.store import Store


class ValueKind(Enum):
    """The kinds of value a Store can hold."""
    NULL = "null"
    BOOLEAN = "boolean"
    STRING = "string"
    NUMBER = "number"
    ARRAY = "array"
    STORE = "store"


# Literal tokens recognised by coerce_scalar
SCALAR_LITERALS: Dict[str, Any] = {
    "null": None,
    "true": True,
    "false": False,
}


def _store_class():
    # Deferred to avoid a circular import with ConfStore.store.store
    from ConfStore.store.store import Store
    return Store


def value_kind(value: Any) -> ValueKind:
    """
    Classify a value into its ValueKind.

    Args:
        value: Any candidate value

    Returns:
        ValueKind: The kind of the value

    Raises:
        InvalidArgumentError: If the value's type is not storable
    """
    if value is None:
        return ValueKind.NULL
    # bool must be tested before numbers, it is a subclass of int
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    if isinstance(value, (_store_class(), Mapping)):
        return ValueKind.STORE
    raise InvalidArgumentError(
        f"invalid value type: {type(value).__name__}",
        context={"value": repr(value)}
    )


def coerce_scalar(text: str) -> Any:
    """
    Convert an unquoted INI scalar to its typed value.

    Only the literals ``null``, ``true`` and ``false`` are converted; every
    other string, including numeric-looking ones, is returned unchanged.

    Examples:
        >>> coerce_scalar("true")
        True
        >>> coerce_scalar("42")
        '42'
    """
    return SCALAR_LITERALS.get(text, text)


def deep_clone(value: Any) -> Any:
    """
    Recursively copy a value.

    Stores, dicts, lists, tuples and sets are copied element by element.
    Primitives, dates and compiled regular expressions are immutable and are
    returned as they are.
    """
    Store = _store_class()
    if isinstance(value, Store):
        clone = Store()
        for key, item in value._entries():
            clone._put(key, deep_clone(item))
        return clone
    if isinstance(value, dict):
        return {key: deep_clone(item) for key, item in value.items()}
    if isinstance(value, list):
        return [deep_clone(item) for item in value]
    if isinstance(value, tuple):
        return tuple(deep_clone(item) for item in value)
    if isinstance(value, (set, frozenset)):
        return type(value)(deep_clone(item) for item in value)
    return value


def normalize_value(value: Any) -> Any:
    """
    Validate a value and turn it into its stored form.

    Mappings become Stores, tuples become lists and everything is deep
    copied, so the caller keeps no reference into the Store.

    Raises:
        InvalidArgumentError: If the value (or a nested Store entry) is not storable
    """
    kind = value_kind(value)
    if kind is ValueKind.STORE:
        return from_plain(value)
    if kind is ValueKind.ARRAY:
        return [deep_clone(item) for item in value]
    return value


def from_plain(obj: Mapping[str, Any], into: Optional['Store'] = None) -> 'Store':
    """
    Convert a (possibly nested) mapping into a Store.

    Nested mappings become nested Stores; lists pass through unchanged (but
    copied). When ``into`` is given, the top-level keys are written onto it
    and it is returned.

    Args:
        obj: The mapping (or Store) to convert
        into: Optional Store to populate instead of a new one

    Returns:
        Store: The populated Store

    Raises:
        InvalidArgumentError: If obj is not a mapping or into is not a Store
    """
    Store = _store_class()
    if into is None:
        into = Store()
    elif not isinstance(into, Store):
        raise InvalidArgumentError(f"invalid store: {type(into).__name__}")

    if isinstance(obj, Store):
        items = obj._entries()
    elif isinstance(obj, Mapping):
        items = obj.items()
    else:
        raise InvalidArgumentError(f"invalid mapping: {type(obj).__name__}")

    for key, item in items:
        if not isinstance(key, str):
            key = str(key)
        into._put(key, normalize_value(item))
    return into


def to_plain(value: Any, drop_null: bool = False) -> Any:
    """
    Convert a Store (and any nested Stores) into plain dictionaries.

    Args:
        value: A Store, or any value that may contain Stores
        drop_null: Drop None-valued keys at every Store level

    Returns:
        The plain equivalent of value; lists are copied
    """
    Store = _store_class()
    if isinstance(value, Store):
        return {
            key: to_plain(item, drop_null)
            for key, item in value._entries()
            if not (drop_null and item is None)
        }
    if isinstance(value, list):
        return [to_plain(item, drop_null) for item in value]
    return deep_clone(value)
