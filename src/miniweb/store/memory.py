"""Precompiled, immutable in-memory template store.

``MemoryStore.load(root)`` walks the root once, parses every template and
publishes the result as a read-only mapping. Renders only look templates
up: no file is touched after loading, so the directory can even go away.

Loading is all or nothing. The mapping is built in a local dict and only
wrapped into a store once every template has parsed; a single syntax error
aborts the load and no store exists.

Thread-Safety:
    The mapping is a ``MappingProxyType`` over a dict nobody else holds,
    built before the store is returned. Concurrent reads need no lock.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

from miniweb.exceptions import TemplateNotFoundError
from miniweb.grammar import Grammar
from miniweb.options import RenderOptions
from miniweb.store.base import (
    DEFAULT_EXTENSION,
    read_source,
    render_with_store,
    template_name,
)
from miniweb.tags import DEFAULT_GRAMMAR
from miniweb.template import Template, parse

logger = logging.getLogger(__name__)


class MemoryStore:
    """Render templates from an immutable name → Template mapping.

    Example:
            >>> store = MemoryStore.load("priv/templates")
            >>> store.list_templates()
            ['layouts/default', 'posts/index', 'posts/show']
            >>> store.render_named("posts/show", {"post": post})

    Raises:
        TemplateNotFoundError: For unknown names, listing the available ones
    """

    __slots__ = ("_names", "_templates")

    def __init__(self, templates: Mapping[str, Template]):
        self._templates: Mapping[str, Template] = MappingProxyType(dict(templates))
        self._names: tuple[str, ...] = tuple(sorted(self._templates))

    @classmethod
    def load(
        cls,
        root: str | Path,
        extension: str = DEFAULT_EXTENSION,
        encoding: str = "utf-8",
        grammar: Grammar = DEFAULT_GRAMMAR,
    ) -> MemoryStore:
        """Discover and parse every template under ``root``.

        Raises:
            TemplateNotFoundError: If ``root`` is not a directory
            TemplateSyntaxError: If any template fails to decode or parse; nothing
                is registered in that case
        """
        root = Path(root)
        if not root.is_dir():
            raise TemplateNotFoundError(f"Template directory '{root}' does not exist")

        templates: dict[str, Template] = {}
        for path in sorted(root.rglob(f"*{extension}")):
            if not path.is_file():
                continue
            name = template_name(path.relative_to(root).as_posix(), extension)
            source = read_source(path, name, encoding)
            templates[name] = parse(source, name=name, filename=str(path), grammar=grammar)
            logger.debug("Loaded template %r", name)

        logger.info("Loaded %d templates from %s", len(templates), root)
        return cls(templates)

    def get_template(self, name: str) -> Template:
        try:
            return self._templates[name]
        except KeyError:
            raise TemplateNotFoundError(
                f"No such template '{name}' in {list(self._names)}", name
            ) from None

    def list_templates(self) -> list[str]:
        return list(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    def render_named(
        self,
        name: str,
        data: Mapping[str, Any] | None = None,
        options: RenderOptions | None = None,
        counter_vars: Mapping[str, Any] | None = None,
    ) -> str:
        return render_with_store(self, name, data, options, counter_vars)

    def __repr__(self) -> str:
        return f"<MemoryStore templates={len(self._templates)}>"
