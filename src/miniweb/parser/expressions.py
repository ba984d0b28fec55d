"""Expression parsing for the base grammar.

Grammar::

    condition  := comparison [ ('and' | 'or') condition ]
    comparison := primary [ op primary ]
    expression := primary ( '|' NAME [ ':' primary (',' primary)* ] )*
    primary    := STRING | INTEGER | FLOAT | 'true' | 'false' | 'nil'
                | '(' primary '..' primary ')'
                | NAME ( '.' NAME | '[' primary ']' )*

``and``/``or`` associate to the right, as in Liquid.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from miniweb._types import Token, TokenType
from miniweb.exceptions import ErrorCode
from miniweb.filters import FILTERS
from miniweb.nodes import (
    BoolOp,
    Compare,
    Const,
    Expr,
    Filter,
    Getattr,
    Getitem,
    Name,
    Range,
)

if TYPE_CHECKING:
    from miniweb.parser.errors import ParseError

_COMPARISON_OPS = {
    TokenType.EQ: "==",
    TokenType.NE: "!=",
    TokenType.LT: "<",
    TokenType.GT: ">",
    TokenType.LE: "<=",
    TokenType.GE: ">=",
}

_KEYWORD_CONSTANTS: dict[str, bool | None] = {
    "true": True,
    "false": False,
    "nil": None,
    "null": None,
}


class ExpressionParsingMixin:
    """Mixin for parsing expressions, conditions and filter chains."""

    if TYPE_CHECKING:
        _tokens: Sequence[Token]
        _pos: int

        @property
        def _current(self) -> Token: ...
        def _advance(self) -> Token: ...
        def _expect(self, token_type: TokenType) -> Token: ...
        def _match(self, *types: TokenType) -> bool: ...
        def _error(
            self,
            message: str,
            token: Token | None = None,
            suggestion: str | None = None,
            code: ErrorCode | None = None,
        ) -> ParseError: ...

    def _parse_condition(self) -> Expr:
        left = self._parse_comparison()
        token = self._current
        if token.type is TokenType.NAME and token.value in ("and", "or"):
            self._advance()
            right = self._parse_condition()
            return BoolOp(
                lineno=left.lineno,
                col_offset=left.col_offset,
                op=token.value,  # type: ignore[arg-type]
                left=left,
                right=right,
            )
        return left

    def _parse_comparison(self) -> Expr:
        left = self._parse_primary()
        token = self._current
        if token.type in _COMPARISON_OPS:
            op = _COMPARISON_OPS[token.type]
        elif token.type is TokenType.NAME and token.value == "contains":
            op = "contains"
        else:
            return left
        self._advance()
        right = self._parse_primary()
        return Compare(
            lineno=left.lineno,
            col_offset=left.col_offset,
            left=left,
            op=op,  # type: ignore[arg-type]
            right=right,
        )

    def _parse_expression(self) -> Expr:
        """Parse an output expression with an optional filter chain."""
        expr = self._parse_primary()
        while self._match(TokenType.PIPE):
            self._advance()  # consume '|'
            if self._current.type is not TokenType.NAME:
                raise self._error("Expected filter name after '|'")
            name_token = self._advance()
            if name_token.value not in FILTERS:
                raise self._error(
                    f"Unknown filter '{name_token.value}'",
                    name_token,
                    suggestion=f"Available filters: {', '.join(sorted(FILTERS))}",
                    code=ErrorCode.INVALID_FILTER,
                )
            args: list[Expr] = []
            if self._match(TokenType.COLON):
                self._advance()  # consume ':'
                args.append(self._parse_primary())
                while self._match(TokenType.COMMA):
                    self._advance()
                    args.append(self._parse_primary())
            expr = Filter(
                lineno=name_token.lineno,
                col_offset=name_token.col_offset,
                value=expr,
                name=name_token.value,
                args=tuple(args),
            )
        return expr

    def _parse_primary(self) -> Expr:
        token = self._current

        if token.type is TokenType.STRING:
            self._advance()
            return Const(lineno=token.lineno, col_offset=token.col_offset, value=token.value)

        if token.type is TokenType.INTEGER:
            self._advance()
            return Const(lineno=token.lineno, col_offset=token.col_offset, value=int(token.value))

        if token.type is TokenType.FLOAT:
            self._advance()
            return Const(
                lineno=token.lineno, col_offset=token.col_offset, value=float(token.value)
            )

        if token.type is TokenType.LPAREN:
            self._advance()  # consume '('
            start = self._parse_primary()
            self._expect(TokenType.RANGE)
            stop = self._parse_primary()
            self._expect(TokenType.RPAREN)
            return Range(lineno=token.lineno, col_offset=token.col_offset, start=start, stop=stop)

        if token.type is TokenType.NAME:
            self._advance()
            if token.value in _KEYWORD_CONSTANTS:
                return Const(
                    lineno=token.lineno,
                    col_offset=token.col_offset,
                    value=_KEYWORD_CONSTANTS[token.value],
                )
            expr: Expr = Name(lineno=token.lineno, col_offset=token.col_offset, name=token.value)
            return self._parse_postfix(expr)

        raise self._error(
            f"Expected expression, got {token.value or token.type.value!r}",
            code=ErrorCode.UNEXPECTED_TOKEN,
        )

    def _parse_postfix(self, expr: Expr) -> Expr:
        while True:
            if self._match(TokenType.DOT):
                self._advance()  # consume '.'
                if self._current.type is not TokenType.NAME:
                    raise self._error("Expected attribute name after '.'")
                attr = self._advance().value
                expr = Getattr(lineno=expr.lineno, col_offset=expr.col_offset, obj=expr, attr=attr)
            elif self._match(TokenType.LBRACKET):
                self._advance()  # consume '['
                key = self._parse_primary()
                self._expect(TokenType.RBRACKET)
                expr = Getitem(lineno=expr.lineno, col_offset=expr.col_offset, obj=expr, key=key)
            else:
                return expr
