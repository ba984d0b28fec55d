"""Key lookup helpers shared by the renderer and the field tags.

Records may be mappings (the common case: decoded JSON, database rows) or
plain objects; both are read the same way. Lookups never raise for a
missing key: they return None so templates degrade to empty output.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence, Sized
from typing import Any


def get_key(obj: Any, key: Any) -> Any:
    """Read ``key`` from a mapping, sequence or object; None when absent."""
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        value = obj.get(key)
        if value is None and key == "size" and "size" not in obj:
            return len(obj)
        return value
    if isinstance(obj, Sequence) and not isinstance(obj, str):
        if isinstance(key, int):
            try:
                return obj[key]
            except IndexError:
                return None
        if key == "size":
            return len(obj)
        return None
    if isinstance(key, str):
        if key.startswith("_"):
            return None
        if key == "size" and isinstance(obj, Sized) and not hasattr(obj, "size"):
            return len(obj)
        return getattr(obj, key, None)
    return None


def dig(obj: Any, keys: Iterable[Any]) -> Any:
    """Nested lookup, one ``get_key`` per key; None as soon as a step misses.

    Example:
        >>> dig({"column": {"key": "title"}}, ["column", "key"])
        'title'
        >>> dig({"column": {}}, ["column", "key", "deeper"]) is None
        True
    """
    for key in keys:
        obj = get_key(obj, key)
        if obj is None:
            return None
    return obj
