"""
JSON codec for ConfStore.

A thin wrapper around the standard json module: nested objects map to
nested Stores, arrays pass through unchanged and numbers stay numbers.
"""

import json
from typing import Optional, Union

from ConfStore.exceptions import InvalidArgumentError, ParseFailureError
from ConfStore.store.store import Store
from ConfStore.store.values import from_plain, to_plain
from ConfStore.utils.logging import get_logger

logger = get_logger(__name__)


def encode(store: Store, indent: Optional[int] = None, sort_keys: bool = False) -> str:
    """
    Serialize a Store to JSON text.

    None-valued keys are dropped, as they are for INI.

    Args:
        store: The Store to encode
        indent: Indentation width; compact output when None
        sort_keys: Whether to sort object keys

    Returns:
        str: The JSON text ("{}" for an empty Store)
    """
    if not isinstance(store, Store):
        raise InvalidArgumentError(f"invalid map: {type(store).__name__}")

    separators = (',', ':') if indent is None else None
    out = json.dumps(
        to_plain(store, drop_null=True),
        ensure_ascii=False,
        indent=indent,
        sort_keys=sort_keys,
        separators=separators,
    )
    logger.debug(f"encoded {len(store)} top-level keys into {len(out)} characters")
    return out


def decode(text: Union[str, bytes], into: Optional[Store] = None) -> Store:
    """
    Parse JSON text into a Store.

    Args:
        text: A JSON object as str or UTF-8 bytes
        into: Optional Store whose top-level keys are overwritten; it is returned

    Returns:
        Store: The populated Store

    Raises:
        InvalidArgumentError: If text is not str/bytes or into is not a Store
        ParseFailureError: If text is not valid JSON or not a JSON object
    """
    if isinstance(text, bytes):
        try:
            text = text.decode('utf-8')
        except UnicodeDecodeError as e:
            raise ParseFailureError(f"JSON input is not valid UTF-8: {e}", cause=e)
    if not isinstance(text, str):
        raise InvalidArgumentError(f"invalid string: {type(text).__name__}")
    if into is not None and not isinstance(into, Store):
        raise InvalidArgumentError(f"invalid store: {type(into).__name__}")

    try:
        obj = json.loads(text)
    except ValueError as e:
        raise ParseFailureError(f"invalid JSON: {e}", cause=e)

    if not isinstance(obj, dict):
        raise ParseFailureError(
            f"JSON top level must be an object, got {type(obj).__name__}"
        )

    # Convert fully before touching the caller's Store
    decoded = from_plain(obj)
    target = into if into is not None else Store()
    for key, value in decoded._entries():
        target._put(key, value)

    logger.debug(f"decoded {len(decoded)} top-level keys")
    return target
