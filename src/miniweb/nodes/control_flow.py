"""Control flow nodes for the template AST."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from miniweb.nodes.base import Node
from miniweb.nodes.expressions import Expr


@dataclass(frozen=True, slots=True)
class If(Node):
    """Conditional: {% if cond %}...{% elsif cond %}...{% else %}...{% endif %}

    ``{% unless cond %}`` parses to an If whose test is wrapped in Not.
    """

    test: Expr
    body: Sequence[Node]
    elif_: Sequence[tuple[Expr, Sequence[Node]]] = ()
    else_: Sequence[Node] = ()


@dataclass(frozen=True, slots=True)
class For(Node):
    """For loop: {% for x in items %}...{% else %}...{% endfor %}

    ``target`` and ``forloop`` are bound in iteration_vars for the body only.
    """

    target: str
    iter: Expr
    body: Sequence[Node]
    empty: Sequence[Node] = ()
