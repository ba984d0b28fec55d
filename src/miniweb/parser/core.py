"""Recursive-descent parser producing the immutable template AST.

Base statements (``if``, ``unless``, ``for``) dispatch through a static
table; any other tag name is looked up in the grammar's tag registry and
handed to that tag's ``parse``. Names found in neither are syntax errors.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from miniweb._types import Token, TokenType
from miniweb.exceptions import ErrorCode
from miniweb.nodes import Data, Node, Output, Template
from miniweb.parser.blocks import ControlFlowBlockParsingMixin, TagArgumentParsingMixin
from miniweb.parser.errors import ParseError
from miniweb.parser.expressions import ExpressionParsingMixin

if TYPE_CHECKING:
    from miniweb.grammar import Grammar

_BLOCK_PARSERS: dict[str, str] = {
    "if": "_parse_if",
    "unless": "_parse_unless",
    "for": "_parse_for",
}

_CONTINUATION_KEYWORDS = frozenset({"elsif", "else"})

_END_KEYWORDS = frozenset({"endif", "endunless", "endfor"})

# Handled by the lexer; reserved so no custom tag can claim them
_VERBATIM_KEYWORDS = frozenset({"raw", "endraw", "comment", "endcomment"})

RESERVED_KEYWORDS = (
    frozenset(_BLOCK_PARSERS) | _CONTINUATION_KEYWORDS | _END_KEYWORDS | _VERBATIM_KEYWORDS
)


class Parser(
    ControlFlowBlockParsingMixin,
    TagArgumentParsingMixin,
    ExpressionParsingMixin,
):
    """Parse a token stream into a ``Template`` node.

    Example:
        >>> from miniweb.tags import DEFAULT_GRAMMAR
        >>> from miniweb.lexer import tokenize
        >>> Parser(tokenize("Hi {{ name }}"), DEFAULT_GRAMMAR).parse().body[0]
        Data(lineno=1, col_offset=0, value='Hi ')
    """

    def __init__(
        self,
        tokens: Sequence[Token],
        grammar: Grammar,
        name: str | None = None,
        source: str | None = None,
    ):
        self._tokens = tokens
        self._grammar = grammar
        self._name = name
        self._source = source
        self._pos = 0
        self._block_stack: list[tuple[str, int, int]] = []

    def parse(self) -> Template:
        body = self._parse_body(frozenset())
        return Template(lineno=1, col_offset=0, body=tuple(body), name=self._name)

    # ─────────────────────────────────────────────────────────────────────
    # Token navigation
    # ─────────────────────────────────────────────────────────────────────

    @property
    def _current(self) -> Token:
        return self._tokens[self._pos]

    def _peek(self, offset: int = 0) -> Token:
        index = min(self._pos + offset, len(self._tokens) - 1)
        return self._tokens[index]

    def _advance(self) -> Token:
        token = self._tokens[self._pos]
        if token.type is not TokenType.EOF:
            self._pos += 1
        return token

    def _match(self, *types: TokenType) -> bool:
        return self._current.type in types

    def _expect(self, token_type: TokenType) -> Token:
        if self._current.type is not token_type:
            got = self._current.value or self._current.type.value
            raise self._error(f"Expected {token_type.value}, got {got!r}")
        return self._advance()

    def _error(
        self,
        message: str,
        token: Token | None = None,
        suggestion: str | None = None,
        code: ErrorCode | None = None,
    ) -> ParseError:
        return ParseError(
            message,
            token or self._current,
            source=self._source,
            name=self._name,
            suggestion=suggestion,
            code=code,
        )

    def _next_keyword(self) -> str | None:
        if self._current.type is TokenType.NAME:
            return self._current.value
        return None

    # ─────────────────────────────────────────────────────────────────────
    # Statements
    # ─────────────────────────────────────────────────────────────────────

    def _parse_body(self, stop: frozenset[str]) -> list[Node]:
        """Parse nodes until EOF or a ``{% keyword %}`` whose keyword is in ``stop``.

        On a stop keyword the BLOCK_BEGIN is consumed and the keyword is left
        as the current token for the caller.
        """
        body: list[Node] = []
        while True:
            token = self._current
            if token.type is TokenType.EOF:
                if stop:
                    raise self._unclosed_block_error()
                return body
            if token.type is TokenType.DATA:
                self._advance()
                body.append(
                    Data(lineno=token.lineno, col_offset=token.col_offset, value=token.value)
                )
            elif token.type is TokenType.VARIABLE_BEGIN:
                body.append(self._parse_output())
            elif token.type is TokenType.BLOCK_BEGIN:
                keyword = self._peek(1)
                if keyword.type is TokenType.NAME and keyword.value in stop:
                    self._advance()
                    return body
                self._advance()
                body.append(self._parse_statement())
            else:
                raise self._error(f"Unexpected {token.type.value}")

    def _parse_output(self) -> Output:
        start = self._advance()  # consume '{{'
        if self._match(TokenType.VARIABLE_END):
            raise self._error("Empty expression", start)
        expr = self._parse_expression()
        if not self._match(TokenType.VARIABLE_END):
            raise self._error(
                f"Unexpected {self._current.value or self._current.type.value!r} in expression",
                suggestion="Close the expression with '}}'",
            )
        self._advance()
        return Output(lineno=start.lineno, col_offset=start.col_offset, expr=expr)

    def _parse_statement(self) -> Node:
        token = self._current
        if token.type is not TokenType.NAME:
            raise self._error("Expected tag name after '{%'")
        keyword = token.value

        method = _BLOCK_PARSERS.get(keyword)
        if method is not None:
            self._advance()
            return getattr(self, method)(token)

        tag = self._grammar.get_tag(keyword)
        if tag is not None:
            self._advance()
            return tag.parse(self, token)

        if keyword in _CONTINUATION_KEYWORDS or keyword in _END_KEYWORDS:
            suggestion = None
            if self._block_stack:
                suggestion = f"The innermost open block is '{self._block_stack[-1][0]}'"
            raise self._error(
                f"Unexpected '{{% {keyword} %}}'",
                token,
                suggestion=suggestion,
                code=ErrorCode.UNCLOSED_BLOCK,
            )

        raise self._error(
            f"Unknown tag '{keyword}'",
            token,
            suggestion=f"Available tags: {', '.join(self._grammar.tag_names)}",
            code=ErrorCode.UNKNOWN_TAG,
        )
