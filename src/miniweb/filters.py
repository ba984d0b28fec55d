"""Built-in output filters.

Only the handful of Liquid filters the framework templates use. Filter
names are checked at parse time, so an unknown filter is a syntax error
rather than a render failure.
"""

from __future__ import annotations

import html
from collections.abc import Callable, Sized
from typing import Any


def _default(value: Any, fallback: Any = "") -> Any:
    if value is None or value is False or value == "":
        return fallback
    return value


def _escape(value: Any) -> str:
    return html.escape("" if value is None else str(value))


def _upcase(value: Any) -> str:
    return "" if value is None else str(value).upper()


def _downcase(value: Any) -> str:
    return "" if value is None else str(value).lower()


def _size(value: Any) -> int:
    if isinstance(value, Sized):
        return len(value)
    return 0


FILTERS: dict[str, Callable[..., Any]] = {
    "default": _default,
    "escape": _escape,
    "upcase": _upcase,
    "downcase": _downcase,
    "size": _size,
}
