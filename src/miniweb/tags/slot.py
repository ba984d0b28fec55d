"""The ``slot`` tag: layouts defer to a caller-chosen template.

``{% slot "main" %}`` does not name a template. It names a counter var:

- ``counter_vars["main"] == ("posts/index", data)``: render that template
  with that data;
- ``counter_vars["main"] == "posts/index"``: render that template with the
  remaining counter vars as data;
- no ``counter_vars["main"]``: render the template literally named
  ``main`` with empty data.

Named arguments, evaluated in the current scope, become the counter vars of
the nested render: ``{% slot "main", searchText: query %}``. The nested
output is trusted HTML and spliced in as is.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from miniweb.exceptions import ErrorCode
from miniweb.nodes import Const, Slot
from miniweb.render_context import runtime_error
from miniweb.renderer import evaluate
from miniweb.tags.base import Tag

if TYPE_CHECKING:
    from miniweb._types import Token
    from miniweb.options import RenderOptions
    from miniweb.parser import Parser
    from miniweb.render_context import RenderContext


class SlotTag(Tag):
    name = "slot"

    def parse(self, parser: Parser, token: Token) -> Slot:
        args = parser.parse_tag_arguments(self.name)
        target = args.positional
        if not (isinstance(target, Const) and isinstance(target.value, str) and target.value):
            raise parser.tag_error(
                "Expected a quoted slot name",
                self.name,
                token=token,
                suggestion="Write '{% slot \"main\" %}'",
            )
        return Slot(
            lineno=token.lineno,
            col_offset=token.col_offset,
            tag=self.name,
            target=target.value,
            arguments=args.named,
        )

    def resolve(self, node: Slot, context: RenderContext) -> tuple[str, Mapping[str, Any]]:
        """Return the (template name, data) pair the slot renders."""
        counter_vars = context.counter_vars
        if node.target not in counter_vars:
            return node.target, {}

        value = counter_vars[node.target]
        if isinstance(value, str):
            rest = {key: item for key, item in counter_vars.items() if key != node.target}
            return value, rest
        if (
            isinstance(value, tuple)
            and len(value) == 2
            and isinstance(value[0], str)
            and isinstance(value[1], Mapping)
        ):
            return value[0], value[1]

        raise runtime_error(
            f"Counter var '{node.target}' must be a template name or a "
            f"(name, data) pair, got {type(value).__name__}",
            tag=self.name,
            values={node.target: value},
            code=ErrorCode.MISSING_BINDING,
        )

    def render(self, node: Slot, context: RenderContext, options: RenderOptions) -> str:
        if options.store is None:
            raise runtime_error(
                "No template store to render slot from",
                tag=self.name,
                suggestion="Render through a store, or pass RenderOptions(store=...)",
            )
        name, data = self.resolve(node, context)
        counter_vars = {key: evaluate(expr, context) for key, expr in node.arguments}
        return options.store.render_named(name, data, options, counter_vars)
