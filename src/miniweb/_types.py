"""Token types shared by the lexer and parser."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    """Kinds of tokens produced by the lexer."""

    DATA = "data"
    EOF = "eof"

    # Delimiters
    VARIABLE_BEGIN = "variable_begin"
    VARIABLE_END = "variable_end"
    BLOCK_BEGIN = "block_begin"
    BLOCK_END = "block_end"

    # Literals and names
    NAME = "name"
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"

    # Punctuation
    DOT = "dot"
    RANGE = "range"
    COMMA = "comma"
    COLON = "colon"
    PIPE = "pipe"
    LBRACKET = "lbracket"
    RBRACKET = "rbracket"
    LPAREN = "lparen"
    RPAREN = "rparen"

    # Comparison operators
    EQ = "eq"
    NE = "ne"
    LT = "lt"
    GT = "gt"
    LE = "le"
    GE = "ge"


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexed token with its source position.

    Attributes:
        type: Token kind
        value: Raw text of the token (unquoted for strings)
        lineno: 1-based line number
        col_offset: 0-based column offset
    """

    type: TokenType
    value: str
    lineno: int
    col_offset: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.lineno}:{self.col_offset})"
