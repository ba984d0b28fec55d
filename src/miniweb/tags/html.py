"""The ``html`` tag: HTML-escaped field accessor.

Differs from ``get`` in three ways:

- strings are HTML-escaped, and mappings render as pretty-printed JSON;
- the record and the dotted-path lookup fall back to counter_vars when the
  loop scope has no such binding or binds nil or false;
- highlighting uses a precompiled pattern from the ``highlight`` counter
  var, applied after escaping.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from miniweb.exceptions import ErrorCode
from miniweb.render_context import runtime_error
from miniweb.tags.field import FieldTag
from miniweb.tags.formatting import HIGHLIGHT_REPLACEMENT, format_value
from miniweb.utils.lookup import dig

if TYPE_CHECKING:
    from miniweb.nodes import Field
    from miniweb.options import RenderOptions
    from miniweb.render_context import RenderContext


def _is_blank(value: Any) -> bool:
    return value is None or value is False


class HtmlTag(FieldTag):
    name = "html"

    def resolve_target(self, node: Field, context: RenderContext) -> Any:
        target = context.iteration_vars.get(node.at)
        if _is_blank(target) and node.at in context.counter_vars:
            return context.counter_vars[node.at]
        if node.at not in context.iteration_vars:
            raise self._missing_binding(node, context)
        return target

    def resolve_key(self, node: Field, context: RenderContext) -> Any:
        if len(node.path) == 1:
            return node.path[0]
        key = dig(context.iteration_vars, node.path)
        if _is_blank(key):
            key = dig(context.counter_vars, node.path)
        return key

    def format(self, value: Any, options: RenderOptions) -> str:
        return format_value(
            value, tag=self.name, escape=True, timezone=options.timezone, allow_json=True
        )

    def highlight(self, text: str, context: RenderContext) -> str:
        pattern = context.counter_vars.get("highlight")
        if pattern is None:
            return text
        if not isinstance(pattern, re.Pattern):
            raise runtime_error(
                f"Counter var 'highlight' must be a compiled pattern, "
                f"got {type(pattern).__name__}",
                tag=self.name,
                suggestion="Pass re.compile(re.escape(text), re.IGNORECASE)",
                code=ErrorCode.FORMAT_ERROR,
            )
        return pattern.sub(HIGHLIGHT_REPLACEMENT, text)
