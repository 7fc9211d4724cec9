"""
Hierarchical key/value store with dotted-path addressing.

A Store maps string keys to values, where a value may itself be a nested
Store. Paths such as ``"server.tls.port"`` address values through the
nesting. Every accessor returns copies, so callers can never mutate a Store
through a value they read from it.
"""

from typing import Any, Iterator, List, Mapping, Optional, Tuple, Union

from ConfStore.exceptions import InvalidArgumentError
from ConfStore.store.values import deep_clone, from_plain, normalize_value, to_plain
from ConfStore.utils.logging import get_logger

logger = get_logger(__name__)

PATH_SEPARATOR = '.'


def _check_path(path: Any, message: str = "invalid key") -> str:
    if not isinstance(path, str):
        raise InvalidArgumentError(
            f"{message}: {path!r}",
            context={"path_type": type(path).__name__}
        )
    return path


class Store:
    """
    An insertion-ordered mapping of string keys to values.

    Values are None, booleans, strings, numbers, lists or nested Stores.
    Plain dictionaries passed in are converted to Stores and deep copied.

    Examples:
        >>> store = Store()
        >>> store.set("server.port", "8080")
        True
        >>> store.get("server.port")
        '8080'
        >>> store.get("server")
        Store({'port': '8080'})
    """

    def __init__(self, data: Optional[Union['Store', Mapping[str, Any]]] = None) -> None:
        self._data = {}
        if data is not None:
            from_plain(data, into=self)

    # -- package-internal helpers (no cloning) ---------------------------

    def _entries(self) -> Iterator[Tuple[str, Any]]:
        return iter(list(self._data.items()))

    def _raw(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def _put(self, key: str, value: Any) -> None:
        self._data[key] = value

    def _section(self, key: str) -> 'Store':
        """Return the live child Store for key, replacing any non-Store value."""
        child = self._data.get(key)
        if not isinstance(child, Store):
            child = Store()
            self._data[key] = child
        return child

    def _walk(self, parts: List[str]) -> Optional['Store']:
        node = self
        for part in parts:
            node = node._data.get(part)
            if not isinstance(node, Store):
                return None
        return node

    # -- public API ------------------------------------------------------

    def set(self, path: str, value: Any) -> bool:
        """
        Set a value using dot notation.

        Intermediate Stores are created as needed. An intermediate segment
        that currently holds a non-Store value is replaced by an empty Store.

        Args:
            path: Dotted path (e.g. "database.sqlite.path")
            value: Value to store; dicts become Stores, everything is copied

        Returns:
            bool: Always True

        Raises:
            InvalidArgumentError: If path is not a string or value is not storable
        """
        _check_path(path)
        value = normalize_value(value)

        parts = path.split(PATH_SEPARATOR)
        node = self
        for part in parts[:-1]:
            node = node._section(part)
        node._data[parts[-1]] = value

        logger.debug(f"set {path!r}")
        return True

    def get(self, path: str, default: Any = None) -> Any:
        """
        Get a value using dot notation.

        Resolution stops at the first missing or non-Store intermediate
        segment, in which case default is returned; there is no partial match.

        Args:
            path: Dotted path (e.g. "database.sqlite.path")
            default: Value returned when the path does not resolve

        Returns:
            A deep copy of the value for Stores and lists, the value itself
            for scalars, or default

        Raises:
            InvalidArgumentError: If path is not a string
        """
        _check_path(path, "invalid parameter")

        parts = path.split(PATH_SEPARATOR)
        container = self._walk(parts[:-1])
        if container is None or parts[-1] not in container._data:
            return default
        return deep_clone(container._data[parts[-1]])

    def query(self, path: str, default: Any = None) -> Any:
        """
        Look up a path that may start with a dot.

        ``"."`` and ``""`` address the whole Store, which is returned as a
        deep copy.

        Examples:
            >>> store = Store({"fs": {"local": {"type": "local"}}})
            >>> store.query(".fs.local.type")
            'local'
        """
        _check_path(path, "invalid parameter")
        if path.startswith(PATH_SEPARATOR):
            path = path[1:]
        if not path:
            return self.clone()
        return self.get(path, default)

    def has(self, path: str) -> bool:
        """Return True if get() would resolve path."""
        _check_path(path, "invalid parameter")
        parts = path.split(PATH_SEPARATOR)
        container = self._walk(parts[:-1])
        return container is not None and parts[-1] in container._data

    def delete(self, path: str) -> bool:
        """
        Delete a value using dot notation.

        A single leading dot is ignored. Nothing is changed when the
        container of the final segment cannot be reached.

        Args:
            path: Dotted path to delete

        Returns:
            bool: True if a key was removed, False otherwise

        Raises:
            InvalidArgumentError: If path is not a string
        """
        _check_path(path)
        if path.startswith(PATH_SEPARATOR):
            path = path[1:]

        parts = path.split(PATH_SEPARATOR)
        container = self._walk(parts[:-1])
        if container is None:
            return False
        if parts[-1] not in container._data:
            return False

        del container._data[parts[-1]]
        logger.debug(f"deleted {path!r}")
        return True

    def clone(self) -> 'Store':
        """Return a deep copy of this Store."""
        return deep_clone(self)

    def clear(self) -> None:
        """Remove every key."""
        self._data.clear()

    def update(self, other: Union['Store', Mapping[str, Any]]) -> None:
        """Overwrite top-level keys with copies of the values in other."""
        from_plain(other, into=self)

    def to_dict(self, drop_null: bool = False) -> dict:
        """
        Convert to nested plain dictionaries.

        Args:
            drop_null: Leave out keys whose value is None

        Returns:
            dict: A deep copy of the Store's content
        """
        return to_plain(self, drop_null)

    def keys(self) -> List[str]:
        return list(self._data.keys())

    def items(self) -> List[Tuple[str, Any]]:
        return [(key, deep_clone(value)) for key, value in self._data.items()]

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self.has(path)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Store):
            return self._data == other._data
        if isinstance(other, Mapping):
            return self.to_dict() == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"Store({self.to_dict()!r})"
