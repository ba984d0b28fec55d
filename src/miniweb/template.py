"""Parsed templates and the top-level render API.

A ``Template`` wraps an immutable AST together with its name, its source
(for error snippets) and the grammar it was parsed with. Templates hold no
mutable state: each ``render()`` builds its own RenderContext and buffer,
so the same instance renders concurrently from many threads.

Example:
    >>> from miniweb import parse
    >>> t = parse("{% for p in posts %}{% get 'title', at: p %};{% endfor %}")
    >>> t.render({"posts": [{"title": "One"}, {"title": "Two"}]})
    'One;Two;'

"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from time import perf_counter
from typing import TYPE_CHECKING, Any

from miniweb.options import RenderOptions
from miniweb.render_context import (
    RenderContext,
    RenderState,
    get_render_state,
    reset_render_state,
    set_render_state,
)
from miniweb.renderer import Renderer
from miniweb.tags import DEFAULT_GRAMMAR

if TYPE_CHECKING:
    from miniweb.grammar import Grammar
    from miniweb.nodes import Template as TemplateNode

logger = logging.getLogger(__name__)


class Template:
    """A parsed template ready for rendering.

    Attributes:
        name: Unique name within its store (path minus extension)
        filename: Source file path, when loaded from disk
        source: Template source, kept for runtime error snippets
        ast: Immutable root node
        grammar: Grammar the template was parsed with
    """

    __slots__ = ("_ast", "_filename", "_grammar", "_name", "_source")

    def __init__(
        self,
        ast: TemplateNode,
        name: str | None = None,
        source: str | None = None,
        filename: str | None = None,
        grammar: Grammar = DEFAULT_GRAMMAR,
    ):
        self._ast = ast
        self._name = name
        self._source = source
        self._filename = filename
        self._grammar = grammar

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def filename(self) -> str | None:
        return self._filename

    @property
    def source(self) -> str | None:
        return self._source

    @property
    def ast(self) -> TemplateNode:
        return self._ast

    @property
    def grammar(self) -> Grammar:
        return self._grammar

    def render(
        self,
        data: Mapping[str, Any] | None = None,
        options: RenderOptions | None = None,
        counter_vars: Mapping[str, Any] | None = None,
    ) -> str:
        """Render the template to text.

        Args:
            data: Global variables
            options: Render options; ``options.store`` resolves slots
            counter_vars: Explicit auxiliary bindings for the custom tags
                (``searchText``, ``highlight``, slot targets)

        Returns:
            The complete output. Nothing is returned on failure.

        Raises:
            TemplateRuntimeError: On a tag contract violation
            TemplateNotFoundError: If a slot names an unknown template
        """
        options = options or RenderOptions()
        name = self._name or "<template>"

        parent = get_render_state()
        if parent is None:
            state = RenderState(
                template_name=name, source=self._source, max_depth=options.max_depth
            )
        else:
            state = parent.child_state(name, self._source)

        context = RenderContext(
            data=dict(data) if data else {},
            counter_vars=dict(counter_vars) if counter_vars else {},
        )

        token = set_render_state(state)
        try:
            start = perf_counter()
            output = Renderer(self._grammar, options, state).render(self._ast.body, context)
            logger.debug(
                "Rendered template %r in %.3fms", name, (perf_counter() - start) * 1000
            )
            return output
        finally:
            reset_render_state(token)

    def __repr__(self) -> str:
        return f"<Template {self._name or '<string>'!r}>"


def parse(
    source: str,
    name: str | None = None,
    filename: str | None = None,
    grammar: Grammar = DEFAULT_GRAMMAR,
) -> Template:
    """Parse template source.

    Raises:
        TemplateSyntaxError: If the source or a tag's arguments are malformed
    """
    return Template(
        grammar.parse(source, name),
        name=name,
        source=source,
        filename=filename,
        grammar=grammar,
    )


def render_named(
    name: str,
    data: Mapping[str, Any] | None,
    options: RenderOptions,
    counter_vars: Mapping[str, Any] | None = None,
) -> str:
    """Render a template by name through ``options.store``.

    Raises:
        ValueError: If the options carry no store
    """
    if options.store is None:
        raise ValueError("render_named requires RenderOptions(store=...)")
    return options.store.render_named(name, data, options, counter_vars)
