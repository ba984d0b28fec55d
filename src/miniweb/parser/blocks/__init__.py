"""Block parsing mixins for the template parser."""

from miniweb.parser.blocks.control_flow import ControlFlowBlockParsingMixin
from miniweb.parser.blocks.core import BlockStackMixin
from miniweb.parser.blocks.tags import TagArgumentParsingMixin, TagArguments

__all__ = [
    "BlockStackMixin",
    "ControlFlowBlockParsingMixin",
    "TagArgumentParsingMixin",
    "TagArguments",
]
