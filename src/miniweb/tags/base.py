"""Base class for custom framework tags.

A tag pairs a parse step, run once when the template is compiled, with a
render callback run on every render:

- ``parse(parser, token)`` consumes the tag's arguments (everything after
  the tag name up to ``%}``) and returns an immutable ``TagNode``. Argument
  problems are raised here, at compile time.
- ``render(node, context, options)`` returns the text to splice into the
  output. The renderer does not escape it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from miniweb._types import Token
    from miniweb.nodes import TagNode
    from miniweb.options import RenderOptions
    from miniweb.parser import Parser
    from miniweb.render_context import RenderContext


class Tag(ABC):
    """A custom tag: parse step plus render callback, keyed by ``name``."""

    name: ClassVar[str]

    @abstractmethod
    def parse(self, parser: Parser, token: Token) -> TagNode:
        """Parse the tag's arguments; ``token`` is the tag name token."""

    @abstractmethod
    def render(self, node: TagNode, context: RenderContext, options: RenderOptions) -> str:
        """Render one occurrence of the tag."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} '{self.name}'>"
