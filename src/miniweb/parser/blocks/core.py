"""Block stack management shared by the block parsing mixins."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from miniweb._types import Token, TokenType
from miniweb.exceptions import ErrorCode

if TYPE_CHECKING:
    from miniweb.parser.errors import ParseError


class BlockStackMixin:
    """Track open blocks so unclosed or mismatched ends get precise errors.

    Each entry is ``(keyword, lineno, col_offset)`` of the opening tag.
    """

    if TYPE_CHECKING:
        _tokens: Sequence[Token]
        _pos: int
        _block_stack: list[tuple[str, int, int]]

        @property
        def _current(self) -> Token: ...
        def _advance(self) -> Token: ...
        def _expect(self, token_type: TokenType) -> Token: ...
        def _error(
            self,
            message: str,
            token: Token | None = None,
            suggestion: str | None = None,
            code: ErrorCode | None = None,
        ) -> ParseError: ...

    def _push_block(self, keyword: str, token: Token) -> None:
        self._block_stack.append((keyword, token.lineno, token.col_offset))

    def _consume_end_tag(self, keyword: str) -> None:
        """Consume ``{% end<keyword> %}``; the BLOCK_BEGIN is already consumed."""
        expected = f"end{keyword}"
        token = self._current
        if token.type is not TokenType.NAME or token.value != expected:
            raise self._error(
                f"Expected '{{% {expected} %}}', got {token.value or token.type.value!r}",
                token,
                code=ErrorCode.UNCLOSED_BLOCK,
            )
        self._advance()
        self._expect(TokenType.BLOCK_END)
        self._block_stack.pop()

    def _unclosed_block_error(self) -> ParseError:
        keyword, lineno, col = self._block_stack[-1]
        return self._error(
            f"Unclosed '{keyword}' block opened at line {lineno}",
            suggestion=f"Add '{{% end{keyword} %}}' to close the block",
            code=ErrorCode.UNCLOSED_BLOCK,
        )
