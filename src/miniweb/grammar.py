"""Grammar extension: the base template grammar plus a custom tag registry.

A ``Grammar`` is built once from a set of ``Tag`` instances and never
mutated afterwards. The parser consults it for any statement keyword that
is not a base construct (``if``, ``unless``, ``for``); the renderer consults
it again to find the render callback of each custom tag node.

Example:
    >>> from miniweb.tags import DEFAULT_GRAMMAR
    >>> DEFAULT_GRAMMAR.tag_names
    ['csrf_token', 'get', 'html', 'slot']
    >>> grammar = DEFAULT_GRAMMAR.extend(MyTag())  # new grammar, same tags + one
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from miniweb.lexer import tokenize
from miniweb.parser import RESERVED_KEYWORDS, Parser

if TYPE_CHECKING:
    from miniweb.nodes import Template as TemplateNode
    from miniweb.tags.base import Tag


class Grammar:
    """Immutable registry of custom tags on top of the base grammar.

    Raises:
        ValueError: If two tags share a name, or a tag claims a base keyword
    """

    __slots__ = ("_tags",)

    def __init__(self, tags: Iterable[Tag] = ()):
        registry: dict[str, Tag] = {}
        for tag in tags:
            if tag.name in RESERVED_KEYWORDS:
                raise ValueError(f"Tag name '{tag.name}' is a reserved keyword")
            if tag.name in registry:
                raise ValueError(f"Duplicate tag name '{tag.name}'")
            registry[tag.name] = tag
        self._tags: Mapping[str, Tag] = MappingProxyType(registry)

    @property
    def tags(self) -> Mapping[str, Tag]:
        return self._tags

    @property
    def tag_names(self) -> list[str]:
        return sorted(self._tags)

    def get_tag(self, name: str) -> Tag | None:
        return self._tags.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._tags

    def extend(self, *tags: Tag) -> Grammar:
        """Return a new grammar with ``tags`` added to this one's."""
        return Grammar([*self._tags.values(), *tags])

    def parse(self, source: str, name: str | None = None) -> TemplateNode:
        """Tokenize and parse ``source`` into an immutable AST.

        Raises:
            TemplateSyntaxError: On malformed source or tag arguments
        """
        tokens = tokenize(source, name)
        return Parser(tokens, self, name=name, source=source).parse()

    def __repr__(self) -> str:
        return f"<Grammar tags={self.tag_names}>"
