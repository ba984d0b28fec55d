"""Template structure nodes for the template AST."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from miniweb.nodes.base import Node


@dataclass(frozen=True, slots=True)
class Template(Node):
    """Root node of a parsed template."""

    body: Sequence[Node]
    name: str | None = None
