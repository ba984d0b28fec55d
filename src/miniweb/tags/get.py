"""The ``get`` tag: unescaped field accessor with search highlighting.

String fields are emitted as they are. When the caller passes a non-empty
``searchText`` counter var, every case-insensitive occurrence of it in the
formatted value is wrapped in ``<mark>``.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from miniweb.tags.field import FieldTag
from miniweb.tags.formatting import HIGHLIGHT_REPLACEMENT, format_value

if TYPE_CHECKING:
    from miniweb.options import RenderOptions
    from miniweb.render_context import RenderContext


class GetTag(FieldTag):
    name = "get"

    def format(self, value: Any, options: RenderOptions) -> str:
        return format_value(value, tag=self.name, escape=False, timezone=options.timezone)

    def highlight(self, text: str, context: RenderContext) -> str:
        search_text = context.counter_vars.get("searchText")
        if not search_text:
            return text
        pattern = re.compile(re.escape(str(search_text)), re.IGNORECASE)
        return pattern.sub(HIGHLIGHT_REPLACEMENT, text)
