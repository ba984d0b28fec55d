"""Render-time scoping and per-render state.

Two separate pieces live here:

``RenderContext``
    The variable scopes a template sees while rendering:

    - ``data``: global mapping passed to the render call
    - ``iteration_vars``: bindings made by ``{% for %}``, visible to the loop
      body only and shadowing ``data``
    - ``counter_vars``: bindings handed over explicitly by a calling tag
      (``{% slot %}``) or by the caller; never derived from ``data``

    Expression lookups see ``iteration_vars`` then ``data``. Custom tags read
    ``counter_vars`` explicitly. The three never merge.

``RenderState``
    Bookkeeping isolated from template variables and held in a ContextVar:
    current template and line for error messages, slot nesting depth, and
    framework metadata such as the CSRF token.

Thread Safety:
    ContextVars are thread-local by design. Each thread/async task has its
    own RenderState; RenderContext objects are created per render call.

"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from typing import Any

from miniweb.exceptions import (
    ErrorCode,
    TemplateRuntimeError,
    build_source_snippet,
)

_MISSING = object()


@dataclass
class RenderContext:
    """Variable scopes for one template render.

    Attributes:
        data: Global data passed to the render
        iteration_vars: Loop bindings, pushed and popped by ``{% for %}``
        counter_vars: Explicitly passed auxiliary bindings
    """

    data: Mapping[str, Any] = field(default_factory=dict)
    iteration_vars: dict[str, Any] = field(default_factory=dict)
    counter_vars: Mapping[str, Any] = field(default_factory=dict)

    def resolve(self, name: str) -> Any:
        """Look up ``name`` in iteration_vars, then data. Undefined is None."""
        value = self.iteration_vars.get(name, _MISSING)
        if value is _MISSING:
            value = self.data.get(name)
        return value

    @contextmanager
    def scope(self, *names: str) -> Iterator[dict[str, Any]]:
        """Open a loop scope for ``names`` in iteration_vars.

        Yields the iteration_vars dict so the loop can rebind ``names`` on
        every iteration. On exit, shadowed outer bindings are restored and
        new ones removed.

        Example:
            with context.scope("post", "forloop") as scope:
                for post in posts:
                    scope["post"] = post
                    ...
        """
        saved = {name: self.iteration_vars.get(name, _MISSING) for name in names}
        try:
            yield self.iteration_vars
        finally:
            for name, previous in saved.items():
                if previous is _MISSING:
                    self.iteration_vars.pop(name, None)
                else:
                    self.iteration_vars[name] = previous


@dataclass
class RenderState:
    """Per-render bookkeeping isolated from template variables.

    Attributes:
        template_name: Current template name for error messages
        source: Template source for runtime error snippets
        line: Current line number (updated by the renderer)
        depth: Number of enclosing template renders (slot nesting)
        max_depth: Maximum allowed depth
        template_stack: (template_name, line) of each enclosing render
    """

    template_name: str | None = None
    source: str | None = None
    line: int = 0

    # 50 is deep enough for any real layout hierarchy while catching
    # self-referencing slots early.
    depth: int = 0
    max_depth: int = 50

    template_stack: list[tuple[str, int]] = field(default_factory=list)

    # Framework metadata (CSRF token, request flags)
    _meta: dict[str, object] = field(default_factory=dict)

    def get_meta(self, key: str, default: object = None) -> object:
        """Get framework-specific metadata.

        Example:
            with render_state() as state:
                state.set_meta("csrf_token", session.csrf_token())
                html = store.render_named("posts/new", data)

            # In template:
            # {% csrf_token %}
        """
        return self._meta.get(key, default)

    def set_meta(self, key: str, value: object) -> None:
        """Set framework-specific metadata."""
        self._meta[key] = value

    def child_state(self, template_name: str, source: str | None = None) -> RenderState:
        """Create state for a nested render, sharing metadata with the parent.

        A state opened by the framework (no template_name) does not count
        towards the depth.

        Raises:
            TemplateRuntimeError: If the nested render would exceed max_depth
        """
        depth = self.depth + 1 if self.template_name else self.depth
        if depth >= self.max_depth:
            raise runtime_error(
                f"Maximum slot depth exceeded ({self.max_depth}) "
                f"when rendering '{template_name}'",
                suggestion="Check for a slot rendering its own template: A → B → A",
                code=ErrorCode.SLOT_DEPTH,
            )

        stack = self.template_stack.copy()
        if self.template_name:
            stack.append((self.template_name, self.line))

        return RenderState(
            template_name=template_name,
            source=source,
            line=0,
            depth=depth,
            max_depth=self.max_depth,
            template_stack=stack,
            _meta=self._meta,
        )


# Module-level ContextVar
_render_state: ContextVar[RenderState | None] = ContextVar("render_state", default=None)


def get_render_state() -> RenderState | None:
    """Get the current render state (None outside a render)."""
    return _render_state.get()


def set_render_state(state: RenderState) -> Token[RenderState | None]:
    """Set a RenderState and return the reset token."""
    return _render_state.set(state)


def reset_render_state(token: Token[RenderState | None]) -> None:
    """Reset render state using a token from set_render_state."""
    _render_state.reset(token)


@contextmanager
def render_state(
    template_name: str | None = None,
    source: str | None = None,
    max_depth: int = 50,
    meta: dict[str, object] | None = None,
) -> Iterator[RenderState]:
    """Context manager for render-scoped state.

    Frameworks open one around a render to pass request metadata in;
    templates rendered inside inherit it.

    Example:
        with render_state() as state:
            state.set_meta("csrf_token", token)
            html = store.render_named("posts/new", {})
    """
    state = RenderState(
        template_name=template_name,
        source=source,
        max_depth=max_depth,
        _meta=dict(meta) if meta else {},
    )
    token = _render_state.set(state)
    try:
        yield state
    finally:
        _render_state.reset(token)


def runtime_error(
    message: str,
    *,
    tag: str | None = None,
    values: dict[str, Any] | None = None,
    suggestion: str | None = None,
    code: ErrorCode | None = None,
) -> TemplateRuntimeError:
    """Build a TemplateRuntimeError located at the current render position."""
    state = _render_state.get()
    template_name = state.template_name if state else None
    lineno = state.line if state and state.line else None
    snippet = None
    if state and state.source and lineno:
        snippet = build_source_snippet(state.source, lineno)
    return TemplateRuntimeError(
        message,
        template_name=template_name,
        lineno=lineno,
        tag=tag,
        values=values,
        suggestion=suggestion,
        source_snippet=snippet,
        template_stack=state.template_stack if state else None,
        code=code,
    )
