"""Shared parse and lookup logic of the ``get`` and ``html`` field tags.

Syntax::

    {% get "title", at: post %}
    {% html "column.key", at: row %}

Resolution uses a level of indirection:

1. ``target`` is the record bound under ``at`` in iteration_vars.
2. An undotted path is the field name itself. A dotted path is looked up
   in iteration_vars (not in the record) and the value found there is the
   field name. This lets a loop over column descriptors choose which field
   of each row to show::

       {% for row in rows %}{% for column in columns %}
         <td>{% get "column.key", at: row %}</td>
       {% endfor %}{% endfor %}

3. The field is read from the record, ``""`` when absent.

Subclasses decide formatting and highlighting.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from miniweb.exceptions import ErrorCode
from miniweb.nodes import Const, Field, dotted_path
from miniweb.render_context import runtime_error
from miniweb.tags.base import Tag
from miniweb.utils.lookup import dig

if TYPE_CHECKING:
    from miniweb._types import Token
    from miniweb.options import RenderOptions
    from miniweb.parser import Parser
    from miniweb.render_context import RenderContext

_ARGUMENTS = frozenset({"at"})


def read_field(record: Any, key: Any) -> Any:
    """Read ``key`` from a mapping or object record, ``""`` when absent."""
    if key is None:
        return ""
    if isinstance(record, Mapping):
        return record.get(key, "")
    if isinstance(key, str) and not key.startswith("_"):
        return getattr(record, key, "")
    return ""


class FieldTag(Tag):
    """Base for tags reading one field of a loop-bound record."""

    def parse(self, parser: Parser, token: Token) -> Field:
        args = parser.parse_tag_arguments(self.name)

        positional = args.positional
        if isinstance(positional, Const) and isinstance(positional.value, str):
            path = tuple(positional.value.split("."))
        else:
            path = dotted_path(positional) if positional is not None else None
        if not path or not all(path):
            raise parser.tag_error(
                "Expected a field path such as \"title\" or \"column.key\"",
                self.name,
                token=token,
            )

        unknown = [key for key in args.keys() if key not in _ARGUMENTS]
        if unknown:
            raise parser.tag_error(
                f"Unknown argument '{unknown[0]}'",
                self.name,
                token=token,
                suggestion="The only argument is 'at: <loop variable>'",
            )

        at_expr = args.get("at")
        if at_expr is None:
            raise parser.tag_error(
                "Missing required argument 'at'",
                self.name,
                token=token,
                suggestion=f"Write '{{% {self.name} \"{'.'.join(path)}\", at: item %}}'",
            )
        at_path = dotted_path(at_expr)
        if isinstance(at_expr, Const) and isinstance(at_expr.value, str):
            at = at_expr.value
        elif at_path is not None and len(at_path) == 1:
            at = at_path[0]
        else:
            raise parser.tag_error(
                "Argument 'at' must name a loop variable", self.name, token=token
            )

        return Field(
            lineno=token.lineno,
            col_offset=token.col_offset,
            tag=self.name,
            path=path,
            at=at,
        )

    def render(self, node: Field, context: RenderContext, options: RenderOptions) -> str:
        record = self.resolve_target(node, context)
        key = self.resolve_key(node, context)
        text = self.format(read_field(record, key), options)
        return self.highlight(text, context)

    def resolve_target(self, node: Field, context: RenderContext) -> Any:
        try:
            return context.iteration_vars[node.at]
        except KeyError:
            raise self._missing_binding(node, context) from None

    def resolve_key(self, node: Field, context: RenderContext) -> Any:
        if len(node.path) == 1:
            return node.path[0]
        return dig(context.iteration_vars, node.path)

    @abstractmethod
    def format(self, value: Any, options: RenderOptions) -> str: ...

    @abstractmethod
    def highlight(self, text: str, context: RenderContext) -> str: ...

    def _missing_binding(self, node: Field, context: RenderContext) -> Exception:
        return runtime_error(
            f"No such tag argument '{node.at}'",
            tag=self.name,
            values={"iteration_vars": sorted(context.iteration_vars)},
            suggestion=f"Bind '{node.at}' with a {{% for {node.at} in ... %}} loop around the tag",
            code=ErrorCode.MISSING_BINDING,
        )
