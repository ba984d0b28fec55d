"""Template parser: tokens → immutable AST."""

from miniweb.parser.blocks import TagArguments
from miniweb.parser.core import RESERVED_KEYWORDS, Parser
from miniweb.parser.errors import ParseError

__all__ = ["RESERVED_KEYWORDS", "ParseError", "Parser", "TagArguments"]
