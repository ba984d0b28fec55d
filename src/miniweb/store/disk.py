"""Uncached store reading templates from disk on every render.

Every ``render_named`` call reads ``<root>/<name><extension>``, parses it
and renders it. Edits show up on the next request without a restart, at
the cost of repeated I/O and parsing: use it in development, and
``MemoryStore`` in production.

Thread-Safety:
    Holds only its root and extension; concurrent renders share nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
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


class DiskStore:
    """Read, parse and render templates from a directory on every call.

    Example:
            >>> store = DiskStore("priv/templates")
            >>> store.render_named("posts/index", {"posts": posts})

    Raises:
        TemplateNotFoundError: If the file does not exist, or the name
            points outside the root
    """

    __slots__ = ("_encoding", "_extension", "_grammar", "_root")

    def __init__(
        self,
        root: str | Path,
        extension: str = DEFAULT_EXTENSION,
        encoding: str = "utf-8",
        grammar: Grammar = DEFAULT_GRAMMAR,
    ):
        self._root = Path(root)
        self._extension = extension
        self._encoding = encoding
        self._grammar = grammar

    @property
    def root(self) -> Path:
        return self._root

    def _path(self, name: str) -> Path:
        root = self._root.resolve()
        path = (root / f"{name}{self._extension}").resolve()
        if not path.is_relative_to(root) or not path.is_file():
            raise TemplateNotFoundError(
                f"Template '{name}' not found in: {self._root}", name
            )
        return path

    def get_template(self, name: str) -> Template:
        path = self._path(name)
        source = read_source(path, name, self._encoding)
        logger.debug("Loaded template %r from %s", name, path)
        return parse(source, name=name, filename=str(path), grammar=self._grammar)

    def list_templates(self) -> list[str]:
        if not self._root.is_dir():
            return []
        return sorted(
            template_name(path.relative_to(self._root).as_posix(), self._extension)
            for path in self._root.rglob(f"*{self._extension}")
            if path.is_file()
        )

    def render_named(
        self,
        name: str,
        data: Mapping[str, Any] | None = None,
        options: RenderOptions | None = None,
        counter_vars: Mapping[str, Any] | None = None,
    ) -> str:
        return render_with_store(self, name, data, options, counter_vars)

    def __repr__(self) -> str:
        return f"<DiskStore root={str(self._root)!r}>"
