"""Argument parsing for custom framework tags.

Every custom tag shares one argument grammar::

    {% <tag> [positional] (',' NAME ':' primary)* %}

The positional argument is a quoted string or a dotted path. Named
argument values are any primary expression.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from miniweb._types import Token, TokenType
from miniweb.exceptions import ErrorCode

if TYPE_CHECKING:
    from miniweb.nodes import Expr
    from miniweb.parser.errors import ParseError


@dataclass(frozen=True, slots=True)
class TagArguments:
    """Parsed arguments of one custom tag occurrence."""

    positional: Expr | None
    named: tuple[tuple[str, Expr], ...] = ()

    def get(self, key: str) -> Expr | None:
        for name, value in self.named:
            if name == key:
                return value
        return None

    def keys(self) -> list[str]:
        return [name for name, _ in self.named]


class TagArgumentParsingMixin:
    """Mixin exposing the shared custom-tag argument grammar to tag classes."""

    if TYPE_CHECKING:
        _tokens: Sequence[Token]
        _pos: int
        _name: str | None

        @property
        def _current(self) -> Token: ...
        def _advance(self) -> Token: ...
        def _match(self, *types: TokenType) -> bool: ...
        def _parse_primary(self) -> Expr: ...
        def _error(
            self,
            message: str,
            token: Token | None = None,
            suggestion: str | None = None,
            code: ErrorCode | None = None,
        ) -> ParseError: ...

    def parse_tag_arguments(self, tag: str, *, positional: bool = True) -> TagArguments:
        """Parse a tag's arguments up to and including the closing ``%}``.

        Args:
            tag: Tag name, for error messages
            positional: Whether the tag takes a leading positional argument.
                Tags without one accept no arguments at all.

        Raises:
            ParseError: On missing, duplicated or trailing arguments
        """
        if not positional:
            if not self._match(TokenType.BLOCK_END):
                raise self.tag_error(f"'{tag}' tag takes no arguments", tag)
            self._advance()
            return TagArguments(positional=None)

        if self._match(TokenType.BLOCK_END, TokenType.COMMA):
            raise self.tag_error(f"'{tag}' tag expects a positional argument", tag)
        first = self._parse_primary()

        named: list[tuple[str, Expr]] = []
        seen: set[str] = set()
        while self._match(TokenType.COMMA):
            self._advance()  # consume ','
            if self._current.type is not TokenType.NAME:
                raise self.tag_error(
                    "Expected argument name after ','",
                    tag,
                    suggestion="Named arguments look like 'key: value'",
                )
            key_token = self._advance()
            if not self._match(TokenType.COLON):
                raise self.tag_error(
                    f"Expected ':' after argument name '{key_token.value}'",
                    tag,
                    suggestion=f"Write '{key_token.value}: value'",
                )
            self._advance()  # consume ':'
            if key_token.value in seen:
                raise self.tag_error(
                    f"Duplicate argument '{key_token.value}'", tag, token=key_token
                )
            seen.add(key_token.value)
            named.append((key_token.value, self._parse_primary()))

        if not self._match(TokenType.BLOCK_END):
            raise self.tag_error(
                f"Unexpected {self._current.value or self._current.type.value!r} "
                "in tag arguments",
                tag,
            )
        self._advance()
        return TagArguments(positional=first, named=tuple(named))

    def tag_error(
        self,
        message: str,
        tag: str,
        *,
        token: Token | None = None,
        suggestion: str | None = None,
    ) -> ParseError:
        """Build a ParseError for a malformed custom tag."""
        return self._error(
            f"{message} (in '{tag}' tag)",
            token,
            suggestion=suggestion,
            code=ErrorCode.INVALID_TAG_ARGUMENTS,
        )
