"""Lexer for miniweb templates.

Splits template source into a flat token stream:

- ``DATA`` for literal markup between constructs
- ``VARIABLE_BEGIN`` ... ``VARIABLE_END`` around ``{{ expr }}``
- ``BLOCK_BEGIN`` ... ``BLOCK_END`` around ``{% tag args %}``

Comments (``{# ... #}`` and ``{% comment %}...{% endcomment %}``) produce no
tokens. ``{% raw %}...{% endraw %}`` produces a single ``DATA`` token with
its content untouched. A ``-`` inside a delimiter (``{%-``, ``-%}``,
``{{-``, ``-}}``) strips whitespace on that side.

Thread-Safety:
    Module-level regexes are compiled once and never mutated; ``Lexer``
    instances hold only per-call state.
"""

from __future__ import annotations

import re
from bisect import bisect_right

from miniweb._types import Token, TokenType
from miniweb.exceptions import ErrorCode, LexerError

_DELIMITER_RE = re.compile(r"\{\{-?|\{%-?|\{#")

_CLOSERS = {
    TokenType.VARIABLE_BEGIN: (re.compile(r"-?\}\}"), TokenType.VARIABLE_END, "}}"),
    TokenType.BLOCK_BEGIN: (re.compile(r"-?%\}"), TokenType.BLOCK_END, "%}"),
}

_TOKEN_RE = re.compile(
    r"""
    (?P<ws>\s+)
    |(?P<string>"(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*')
    |(?P<float>-?\d+\.\d+)
    |(?P<integer>-?\d+)
    |(?P<name>[A-Za-z_][A-Za-z0-9_]*)
    |(?P<op>==|!=|<=|>=|\.\.|[<>.,:|\[\]()])
    """,
    re.VERBOSE,
)

_OPERATORS = {
    "==": TokenType.EQ,
    "!=": TokenType.NE,
    "<=": TokenType.LE,
    ">=": TokenType.GE,
    "<": TokenType.LT,
    ">": TokenType.GT,
    "..": TokenType.RANGE,
    ".": TokenType.DOT,
    ",": TokenType.COMMA,
    ":": TokenType.COLON,
    "|": TokenType.PIPE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
}

_VERBATIM_TAGS = frozenset({"raw", "comment"})

_ESCAPE_RE = re.compile(r"\\(.)")


class Lexer:
    """Tokenize one template source.

    Example:
        >>> [t.type.name for t in Lexer("Hi {{ name }}").tokenize()]
        ['DATA', 'VARIABLE_BEGIN', 'NAME', 'VARIABLE_END', 'EOF']
    """

    __slots__ = ("_line_starts", "_name", "_pos", "_source", "_tokens", "_trim_next")

    def __init__(self, source: str, name: str | None = None):
        self._source = source
        self._name = name
        self._pos = 0
        self._tokens: list[Token] = []
        self._trim_next = False
        # Offset of the first character of each line
        self._line_starts = [0] + [m.end() for m in re.finditer("\n", source)]

    def tokenize(self) -> list[Token]:
        source = self._source
        while self._pos < len(source):
            match = _DELIMITER_RE.search(source, self._pos)
            if match is None:
                self._emit_data(source[self._pos :], self._pos, strip_right=False)
                self._pos = len(source)
                break

            delimiter = match.group()
            self._emit_data(
                source[self._pos : match.start()],
                self._pos,
                strip_right=delimiter.endswith("-"),
            )

            if delimiter == "{#":
                self._skip_comment(match.start())
            elif delimiter.startswith("{{"):
                self._lex_tag(TokenType.VARIABLE_BEGIN, match.start(), match.end())
            else:
                self._lex_tag(TokenType.BLOCK_BEGIN, match.start(), match.end())

        self._tokens.append(Token(TokenType.EOF, "", *self._position(len(source))))
        return self._tokens

    # ─────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────

    def _position(self, offset: int) -> tuple[int, int]:
        lineno = bisect_right(self._line_starts, offset)
        return lineno, offset - self._line_starts[lineno - 1]

    def _error(self, message: str, offset: int, code: ErrorCode) -> LexerError:
        lineno, col = self._position(offset)
        return LexerError(
            message,
            lineno=lineno,
            name=self._name,
            source=self._source,
            col_offset=col,
            code=code,
        )

    def _emit_data(self, text: str, offset: int, *, strip_right: bool) -> None:
        if self._trim_next:
            stripped = text.lstrip()
            offset += len(text) - len(stripped)
            text = stripped
            self._trim_next = False
        if strip_right:
            text = text.rstrip()
        if text:
            self._tokens.append(Token(TokenType.DATA, text, *self._position(offset)))

    def _skip_comment(self, start: int) -> None:
        end = self._source.find("#}", start + 2)
        if end == -1:
            raise self._error("Unclosed comment", start, ErrorCode.UNCLOSED_COMMENT)
        self._pos = end + 2

    def _lex_tag(self, begin: TokenType, start: int, pos: int) -> None:
        closer_re, end_type, closer_text = _CLOSERS[begin]
        first = len(self._tokens)
        self._tokens.append(Token(begin, self._source[start:pos], *self._position(start)))
        source = self._source

        while True:
            if pos >= len(source):
                raise self._error(
                    f"Unclosed tag, expected '{closer_text}'", start, ErrorCode.UNCLOSED_TAG
                )
            closing = closer_re.match(source, pos)
            if closing is not None:
                self._tokens.append(Token(end_type, closing.group(), *self._position(pos)))
                self._trim_next = closing.group().startswith("-")
                self._pos = closing.end()
                break

            match = _TOKEN_RE.match(source, pos)
            if match is None:
                raise self._error(
                    f"Unexpected character {source[pos]!r}",
                    pos,
                    ErrorCode.UNEXPECTED_CHARACTER,
                )
            kind = match.lastgroup
            text = match.group()
            if kind == "string":
                value = _ESCAPE_RE.sub(r"\1", text[1:-1])
                self._tokens.append(Token(TokenType.STRING, value, *self._position(pos)))
            elif kind == "float":
                self._tokens.append(Token(TokenType.FLOAT, text, *self._position(pos)))
            elif kind == "integer":
                self._tokens.append(Token(TokenType.INTEGER, text, *self._position(pos)))
            elif kind == "name":
                self._tokens.append(Token(TokenType.NAME, text, *self._position(pos)))
            elif kind == "op":
                self._tokens.append(Token(_OPERATORS[text], text, *self._position(pos)))
            pos = match.end()

        if begin is TokenType.BLOCK_BEGIN:
            self._maybe_verbatim(first, start)

    def _maybe_verbatim(self, first: int, start: int) -> None:
        """Handle ``{% raw %}`` and ``{% comment %}`` whose bodies are not lexed."""
        tag_tokens = self._tokens[first:]
        if len(tag_tokens) != 3 or tag_tokens[1].type is not TokenType.NAME:
            return
        keyword = tag_tokens[1].value
        if keyword not in _VERBATIM_TAGS:
            return

        del self._tokens[first:]
        end_re = re.compile(r"\{%-?\s*end" + keyword + r"\s*-?%\}")
        end = end_re.search(self._source, self._pos)
        if end is None:
            raise self._error(
                f"Unclosed '{keyword}' block, expected '{{% end{keyword} %}}'",
                start,
                ErrorCode.UNCLOSED_TAG,
            )
        if keyword == "raw":
            body = self._source[self._pos : end.start()]
            if body:
                self._tokens.append(Token(TokenType.DATA, body, *self._position(self._pos)))
        self._trim_next = end.group().endswith("-%}")
        self._pos = end.end()


def tokenize(source: str, name: str | None = None) -> list[Token]:
    """Tokenize template source, ending with an ``EOF`` token."""
    return Lexer(source, name).tokenize()
