"""Immutable AST nodes for miniweb templates."""

from miniweb.nodes.base import Node
from miniweb.nodes.control_flow import For, If
from miniweb.nodes.expressions import (
    BoolOp,
    Compare,
    Const,
    Expr,
    Filter,
    Getattr,
    Getitem,
    Name,
    Not,
    Range,
    dotted_path,
)
from miniweb.nodes.output import Data, Output
from miniweb.nodes.structure import Template
from miniweb.nodes.tags import CsrfToken, Field, Slot, TagNode

__all__ = [
    "BoolOp",
    "Compare",
    "Const",
    "CsrfToken",
    "Data",
    "Expr",
    "Field",
    "Filter",
    "For",
    "Getattr",
    "Getitem",
    "If",
    "Name",
    "Node",
    "Not",
    "Output",
    "Range",
    "Slot",
    "TagNode",
    "Template",
    "dotted_path",
]
