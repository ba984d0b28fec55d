"""Tree-walking renderer for parsed templates.

The renderer walks the immutable AST once per render, appending text
fragments to a local buffer and joining them at the end. It holds no state
beyond the buffer and its constructor arguments, so one parsed template can
be rendered concurrently from any number of threads.

Custom tag nodes are handed to the render callback registered under their
name in the template's grammar. Their output is spliced in as-is; the
renderer never escapes tag output.
"""

from __future__ import annotations

import html
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from miniweb.exceptions import TemplateError
from miniweb.filters import FILTERS
from miniweb.loop_context import LoopContext
from miniweb.nodes import (
    BoolOp,
    Compare,
    Const,
    Data,
    Expr,
    Filter,
    For,
    Getattr,
    Getitem,
    If,
    Name,
    Node,
    Not,
    Output,
    Range,
    TagNode,
)
from miniweb.render_context import RenderContext, RenderState, runtime_error
from miniweb.utils.lookup import get_key

if TYPE_CHECKING:
    from miniweb.grammar import Grammar
    from miniweb.options import RenderOptions


# =============================================================================
# Expressions
# =============================================================================


def is_truthy(value: Any) -> bool:
    """Liquid truthiness: only nil and false are falsy."""
    return value is not None and value is not False


def _contains(container: Any, item: Any) -> bool:
    if isinstance(container, str):
        return isinstance(item, str) and item in container
    if isinstance(container, (Mapping, Sequence, set, frozenset)):
        return item in container
    return False


def _compare(op: str, left: Any, right: Any) -> bool:
    if op == "==":
        return left == right
    if op == "!=":
        return left != right
    if op == "contains":
        return _contains(left, right)
    try:
        if op == "<":
            return left < right
        if op == ">":
            return left > right
        if op == "<=":
            return left <= right
        return left >= right
    except TypeError:
        # nil and mismatched types never order
        return False


def _eval_const(expr: Const, context: RenderContext) -> Any:
    return expr.value


def _eval_name(expr: Name, context: RenderContext) -> Any:
    return context.resolve(expr.name)


def _eval_getattr(expr: Getattr, context: RenderContext) -> Any:
    return get_key(evaluate(expr.obj, context), expr.attr)


def _eval_getitem(expr: Getitem, context: RenderContext) -> Any:
    return get_key(evaluate(expr.obj, context), evaluate(expr.key, context))


def _eval_range(expr: Range, context: RenderContext) -> list[int]:
    start = evaluate(expr.start, context)
    stop = evaluate(expr.stop, context)
    try:
        return list(range(int(start), int(stop) + 1))
    except (TypeError, ValueError):
        raise runtime_error(
            f"Range bounds must be integers, got {start!r}..{stop!r}",
            values={"start": start, "stop": stop},
        ) from None


def _eval_filter(expr: Filter, context: RenderContext) -> Any:
    value = evaluate(expr.value, context)
    args = [evaluate(arg, context) for arg in expr.args]
    return FILTERS[expr.name](value, *args)


def _eval_compare(expr: Compare, context: RenderContext) -> bool:
    return _compare(expr.op, evaluate(expr.left, context), evaluate(expr.right, context))


def _eval_boolop(expr: BoolOp, context: RenderContext) -> bool:
    left = is_truthy(evaluate(expr.left, context))
    if expr.op == "and":
        return left and is_truthy(evaluate(expr.right, context))
    return left or is_truthy(evaluate(expr.right, context))


def _eval_not(expr: Not, context: RenderContext) -> bool:
    return not is_truthy(evaluate(expr.operand, context))


_EVALUATORS: dict[type, Callable[[Any, RenderContext], Any]] = {
    Const: _eval_const,
    Name: _eval_name,
    Getattr: _eval_getattr,
    Getitem: _eval_getitem,
    Range: _eval_range,
    Filter: _eval_filter,
    Compare: _eval_compare,
    BoolOp: _eval_boolop,
    Not: _eval_not,
}


def evaluate(expr: Expr, context: RenderContext) -> Any:
    """Evaluate an expression node against the context's lookup scopes."""
    return _EVALUATORS[type(expr)](expr, context)


def to_text(value: Any) -> str:
    """Stringify an interpolated value the way Liquid does."""
    if value is None:
        return ""
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, (list, tuple)):
        return "".join(to_text(item) for item in value)
    return str(value)


def _as_sequence(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value else []
    if isinstance(value, Mapping):
        return [[key, item] for key, item in value.items()]
    if isinstance(value, Iterable):
        return list(value)
    return [value]


# =============================================================================
# Statements
# =============================================================================


class Renderer:
    """Render a node sequence to text.

    Args:
        grammar: Grammar the template was parsed with (tag callback lookup)
        options: Render options, forwarded to tag callbacks
        state: Current RenderState; its ``line`` follows the walk
    """

    __slots__ = ("_grammar", "_options", "_state")

    def __init__(self, grammar: Grammar, options: RenderOptions, state: RenderState):
        self._grammar = grammar
        self._options = options
        self._state = state

    def render(self, nodes: Sequence[Node], context: RenderContext) -> str:
        buf: list[str] = []
        self._render_nodes(nodes, context, buf)
        return "".join(buf)

    def _render_nodes(
        self, nodes: Sequence[Node], context: RenderContext, buf: list[str]
    ) -> None:
        for node in nodes:
            handler = self._DISPATCH.get(type(node))
            if handler is not None:
                handler(self, node, context, buf)
            elif isinstance(node, TagNode):
                self._render_tag(node, context, buf)
            else:
                raise runtime_error(f"Cannot render node {type(node).__name__}")

    def _evaluate(
        self,
        expr: Expr,
        context: RenderContext,
        convert: Callable[[Any], Any] | None = None,
    ) -> Any:
        """Evaluate ``expr``, then ``convert`` the result, located on failure."""
        try:
            value = evaluate(expr, context)
            return convert(value) if convert is not None else value
        except TemplateError:
            raise
        except Exception as exc:
            raise runtime_error(f"{type(exc).__name__}: {exc}") from exc

    def _render_data(self, node: Data, context: RenderContext, buf: list[str]) -> None:
        buf.append(node.value)

    def _render_output(self, node: Output, context: RenderContext, buf: list[str]) -> None:
        self._state.line = node.lineno
        text = self._evaluate(node.expr, context, to_text)
        if self._options.autoescape:
            text = html.escape(text)
        buf.append(text)

    def _render_if(self, node: If, context: RenderContext, buf: list[str]) -> None:
        self._state.line = node.lineno
        if is_truthy(self._evaluate(node.test, context)):
            self._render_nodes(node.body, context, buf)
            return
        for test, body in node.elif_:
            self._state.line = test.lineno
            if is_truthy(self._evaluate(test, context)):
                self._render_nodes(body, context, buf)
                return
        self._render_nodes(node.else_, context, buf)

    def _render_for(self, node: For, context: RenderContext, buf: list[str]) -> None:
        self._state.line = node.lineno
        items = self._evaluate(node.iter, context, _as_sequence)
        if not items:
            self._render_nodes(node.empty, context, buf)
            return

        loop = LoopContext(items)
        with context.scope(node.target, "forloop") as scope:
            scope["forloop"] = loop
            for item in loop:
                scope[node.target] = item
                self._render_nodes(node.body, context, buf)

    def _render_tag(self, node: TagNode, context: RenderContext, buf: list[str]) -> None:
        self._state.line = node.lineno
        tag = self._grammar.get_tag(node.tag)
        if tag is None:
            raise runtime_error(f"No render callback registered for tag '{node.tag}'")
        try:
            text = tag.render(node, context, self._options)
        except TemplateError:
            raise
        except Exception as exc:
            raise runtime_error(f"{type(exc).__name__}: {exc}", tag=node.tag) from exc
        buf.append(text)

    _DISPATCH: dict[type, Callable[..., None]] = {
        Data: _render_data,
        Output: _render_output,
        If: _render_if,
        For: _render_for,
    }
