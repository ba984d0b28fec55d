"""Property-based tests for the miniweb lexer.

- Plain text round-trips through tokenization unchanged
- Arbitrary input never causes an unhandled crash
- Well-formed fragments produce balanced delimiter pairs
"""

from __future__ import annotations

from hypothesis import given, settings

from miniweb._types import TokenType
from miniweb.exceptions import TemplateSyntaxError
from miniweb.lexer import tokenize

from .strategies import arbitrary_template_source, plain_text, template_fragment, variable


class TestLexerProperties:
    """Property-based lexer invariants."""

    @given(source=plain_text)
    @settings(max_examples=200)
    def test_plain_text_roundtrip(self, source: str) -> None:
        """Text without delimiters produces DATA tokens with the original content."""
        tokens = tokenize(source)
        assert "".join(t.value for t in tokens if t.type == TokenType.DATA) == source

    @given(source=arbitrary_template_source)
    @settings(max_examples=300)
    def test_no_unhandled_crash(self, source: str) -> None:
        """The lexer raises nothing but TemplateSyntaxError on malformed input."""
        try:
            tokenize(source)
        except TemplateSyntaxError:
            pass

    @given(source=template_fragment)
    @settings(max_examples=200)
    def test_fragment_delimiter_balance(self, source: str) -> None:
        tokens = tokenize(source)
        types = [t.type for t in tokens]
        assert types.count(TokenType.VARIABLE_BEGIN) == types.count(TokenType.VARIABLE_END)
        assert tokens[-1].type == TokenType.EOF

    @given(source=variable)
    @settings(max_examples=100)
    def test_variable_contains_name_token(self, source: str) -> None:
        types = [t.type for t in tokenize(source)]
        assert types == [
            TokenType.VARIABLE_BEGIN,
            TokenType.NAME,
            TokenType.VARIABLE_END,
            TokenType.EOF,
        ]
