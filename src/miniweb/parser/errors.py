"""Parser error handling.

Provides ParseError, a TemplateSyntaxError positioned on the offending token.
"""

from __future__ import annotations

from miniweb._types import Token
from miniweb.exceptions import ErrorCode, TemplateSyntaxError


class ParseError(TemplateSyntaxError):
    """Parser error with source context.

    Displays errors with source code snippets and visual pointers,
    matching the format used by the lexer for consistency.
    """

    def __init__(
        self,
        message: str,
        token: Token,
        source: str | None = None,
        name: str | None = None,
        suggestion: str | None = None,
        code: ErrorCode | None = None,
    ):
        self.token = token
        super().__init__(
            message,
            lineno=token.lineno,
            name=name,
            source=source,
            col_offset=token.col_offset,
            suggestion=suggestion,
            code=code or ErrorCode.UNEXPECTED_TOKEN,
        )
