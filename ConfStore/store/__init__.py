"""
ConfStore hierarchical store.

Usage:
    from ConfStore.store import Store

    store = Store({"server": {"host": "localhost"}})
    store.set("server.port", "8080")
    store.get("server")          # deep copy of the nested Store
    store.delete("server.host")
"""

from ConfStore.store.store import Store
from ConfStore.store.values import (
    ValueKind,
    value_kind,
    coerce_scalar,
    deep_clone,
    from_plain,
    to_plain,
)

__all__ = [
    "Store", "ValueKind", "value_kind", "coerce_scalar",
    "deep_clone", "from_plain", "to_plain",
]
