"""Control flow block parsing: if, unless, for."""

from __future__ import annotations

from typing import TYPE_CHECKING

from miniweb._types import Token, TokenType
from miniweb.nodes import For, If, Not
from miniweb.parser.blocks.core import BlockStackMixin

if TYPE_CHECKING:
    from miniweb.nodes import Expr, Node


class ControlFlowBlockParsingMixin(BlockStackMixin):
    """Mixin for parsing control flow blocks.

    Required Host Attributes:
        - All from BlockStackMixin
        - _parse_body: method
        - _parse_condition: method
        - _parse_primary: method
        - _next_keyword: method
    """

    if TYPE_CHECKING:

        def _parse_body(self, stop: frozenset[str]) -> list[Node]: ...
        def _parse_condition(self) -> Expr: ...
        def _parse_primary(self) -> Expr: ...
        def _next_keyword(self) -> str | None: ...

    def _parse_if(self, start: Token) -> If:
        """Parse {% if cond %}...{% elsif cond %}...{% else %}...{% endif %}."""
        return self._parse_conditional(start, "if", negate=False)

    def _parse_unless(self, start: Token) -> If:
        """Parse {% unless cond %}...{% else %}...{% endunless %}."""
        return self._parse_conditional(start, "unless", negate=True)

    def _parse_conditional(self, start: Token, keyword: str, *, negate: bool) -> If:
        self._push_block(keyword, start)
        test = self._parse_condition()
        if negate:
            test = Not(lineno=test.lineno, col_offset=test.col_offset, operand=test)
        self._expect(TokenType.BLOCK_END)

        stop = frozenset({"else", f"end{keyword}"})
        if not negate:
            stop |= {"elsif"}
        body = self._parse_body(stop)
        elif_: list[tuple[Expr, tuple[Node, ...]]] = []
        else_: list[Node] = []

        while True:
            keyword_now = self._next_keyword()
            if keyword_now == "elsif":
                self._advance()  # consume 'elsif'
                cond = self._parse_condition()
                self._expect(TokenType.BLOCK_END)
                elif_.append((cond, tuple(self._parse_body(stop))))
            elif keyword_now == "else":
                self._advance()  # consume 'else'
                self._expect(TokenType.BLOCK_END)
                else_ = self._parse_body(frozenset({f"end{keyword}"}))
                break
            else:
                break

        self._consume_end_tag(keyword)
        return If(
            lineno=start.lineno,
            col_offset=start.col_offset,
            test=test,
            body=tuple(body),
            elif_=tuple(elif_),
            else_=tuple(else_),
        )

    def _parse_for(self, start: Token) -> For:
        """Parse {% for x in items %}...{% else %}...{% endfor %}."""
        self._push_block("for", start)

        if self._current.type is not TokenType.NAME:
            raise self._error("Expected loop variable name after 'for'")
        target = self._advance().value

        if self._current.type is not TokenType.NAME or self._current.value != "in":
            raise self._error(
                "Expected 'in' after loop variable",
                suggestion=f"Use '{{% for {target} in items %}}'",
            )
        self._advance()  # consume 'in'
        iterable = self._parse_primary()
        self._expect(TokenType.BLOCK_END)

        stop = frozenset({"else", "endfor"})
        body = self._parse_body(stop)
        empty: list[Node] = []
        if self._next_keyword() == "else":
            self._advance()  # consume 'else'
            self._expect(TokenType.BLOCK_END)
            empty = self._parse_body(frozenset({"endfor"}))

        self._consume_end_tag("for")
        return For(
            lineno=start.lineno,
            col_offset=start.col_offset,
            target=target,
            iter=iterable,
            body=tuple(body),
            empty=tuple(empty),
        )
