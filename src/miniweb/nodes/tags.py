"""Nodes produced by the custom framework tags."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from miniweb.nodes.base import Node
from miniweb.nodes.expressions import Expr


@dataclass(frozen=True, slots=True)
class TagNode(Node):
    """Base class for custom tags; ``tag`` selects the render callback."""

    tag: str


@dataclass(frozen=True, slots=True)
class CsrfToken(TagNode):
    """Hidden anti-forgery input: {% csrf_token %}"""


@dataclass(frozen=True, slots=True)
class Field(TagNode):
    """Dynamic field accessor: {% get "column.key", at: post %}

    ``path`` is the dotted path split into keys; ``at`` names the record
    binding in iteration_vars. Shared by the get and html tags.
    """

    path: tuple[str, ...]
    at: str


@dataclass(frozen=True, slots=True)
class Slot(TagNode):
    """Layout slot: {% slot "main", searchText: q %}

    ``target`` is the counter-var key to pop. ``arguments`` become the
    nested render's counter_vars.
    """

    target: str
    arguments: Sequence[tuple[str, Expr]] = ()
