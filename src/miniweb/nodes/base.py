"""Base node class for the template AST."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all AST nodes.

    All nodes track their source location for error reporting.
    Nodes are immutable so parsed templates can be shared across threads.

    """

    lineno: int
    col_offset: int
