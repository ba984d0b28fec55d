"""Value formatting shared by the ``get`` and ``html`` tags.

Fixed type dispatch, checked in order:

======================  ==========================================
bool                    "Yes" / "No"
str                     as is, or HTML-escaped
None                    ""
Enum                    formatted member value
int / float / Decimal   ``str()``
datetime                shifted to the display zone, "%a, %B %d %H:%M:%S"
Mapping (html only)     pretty-printed JSON, then formatted as a string
======================  ==========================================

Anything else is a render error: the tag cannot guess how to show it.
"""

from __future__ import annotations

import html
import json
from collections.abc import Mapping
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from typing import Any
from zoneinfo import ZoneInfo

from miniweb.exceptions import ErrorCode
from miniweb.render_context import runtime_error

DATETIME_FORMAT = "%a, %B %d %H:%M:%S"

HIGHLIGHT_REPLACEMENT = r"<mark>\g<0></mark>"


def format_datetime(value: datetime, timezone: str) -> str:
    """Format ``value`` in ``timezone``; naive datetimes are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(ZoneInfo(timezone)).strftime(DATETIME_FORMAT)


def format_value(
    value: Any,
    *,
    tag: str,
    escape: bool,
    timezone: str,
    allow_json: bool = False,
) -> str:
    """Format a record field for display.

    Args:
        value: Field value read from the record
        tag: Tag name, for error messages
        escape: HTML-escape string output
        timezone: Display zone for datetimes
        allow_json: Render mappings as pretty-printed JSON

    Raises:
        TemplateRuntimeError: For values outside the dispatch table
    """
    if value is True:
        return "Yes"
    if value is False:
        return "No"
    if isinstance(value, str):
        return html.escape(value) if escape else value
    if value is None:
        return ""
    if isinstance(value, Enum):
        return format_value(
            value.value, tag=tag, escape=escape, timezone=timezone, allow_json=allow_json
        )
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    if isinstance(value, datetime):
        return format_datetime(value, timezone)
    if allow_json and isinstance(value, Mapping):
        text = json.dumps(value, indent=2, ensure_ascii=False, default=str)
        return format_value(text, tag=tag, escape=escape, timezone=timezone)

    raise runtime_error(
        f"Cannot format value of type {type(value).__name__}",
        tag=tag,
        values={"value": value},
        suggestion="Fields shown with get/html must be strings, numbers, booleans or datetimes",
        code=ErrorCode.FORMAT_ERROR,
    )
