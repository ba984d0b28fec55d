"""Expression nodes for the template AST."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from miniweb.nodes.base import Node


@dataclass(frozen=True, slots=True)
class Expr(Node):
    """Base class for expressions."""


@dataclass(frozen=True, slots=True)
class Const(Expr):
    """Constant value: string, number, boolean, nil."""

    value: str | int | float | bool | None


@dataclass(frozen=True, slots=True)
class Name(Expr):
    """Variable reference: {{ post }}"""

    name: str


@dataclass(frozen=True, slots=True)
class Getattr(Expr):
    """Attribute or key access: post.title"""

    obj: Expr
    attr: str


@dataclass(frozen=True, slots=True)
class Getitem(Expr):
    """Subscript access: post["title"], posts[0]"""

    obj: Expr
    key: Expr


@dataclass(frozen=True, slots=True)
class Range(Expr):
    """Inclusive integer range: (1..limit)"""

    start: Expr
    stop: Expr


@dataclass(frozen=True, slots=True)
class Filter(Expr):
    """Filter application: expr | name: arg, arg"""

    value: Expr
    name: str
    args: Sequence[Expr] = ()


@dataclass(frozen=True, slots=True)
class Compare(Expr):
    """Binary comparison: a == b, tags contains "x" """

    left: Expr
    op: Literal["==", "!=", "<", ">", "<=", ">=", "contains"]
    right: Expr


@dataclass(frozen=True, slots=True)
class BoolOp(Expr):
    """Boolean operator, right-associative as in Liquid: a and b or c"""

    op: Literal["and", "or"]
    left: Expr
    right: Expr


@dataclass(frozen=True, slots=True)
class Not(Expr):
    """Negated condition, produced by {% unless %}."""

    operand: Expr


def dotted_path(expr: Expr) -> tuple[str, ...] | None:
    """Return the key sequence of a plain ``a.b.c`` path, or None.

    Example:
        >>> dotted_path(Getattr(1, 0, Name(1, 0, "comment"), "author"))
        ('comment', 'author')
    """
    parts: list[str] = []
    while isinstance(expr, Getattr):
        parts.append(expr.attr)
        expr = expr.obj
    if not isinstance(expr, Name):
        return None
    parts.append(expr.name)
    return tuple(reversed(parts))
