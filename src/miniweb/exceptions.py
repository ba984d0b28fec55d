"""Exceptions for the miniweb template system.

Exception Hierarchy:
TemplateError (base)
├── TemplateNotFoundError     # Unknown template name / missing file
├── TemplateSyntaxError       # Parse-time error (malformed source or tag)
│   └── LexerError            # Unclosed delimiter, stray character
└── TemplateRuntimeError      # Tag contract violation during render

Rendering is a pure function of (template, data): none of these errors are
retried. Every message names the failing template and, where relevant, the
tag and line so the caller can turn it into a diagnostic page.

Example:
    ```
    Runtime Error: No such tag argument 'post' in 'get' tag
      Location: posts/index:7
       |
     7 | <td>{% get "title", at: post %}</td>
       |
      Suggestion: Bind 'post' with a {% for post in ... %} loop around the tag
    ```

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Searchable error codes for template errors.

    Format: M-{CATEGORY}-{NUMBER}
    Categories: LEX (lexer), PAR (parser), RUN (runtime), TPL (template loading)
    """

    # Lexer errors (M-LEX-xxx)
    UNCLOSED_TAG = "M-LEX-001"
    UNCLOSED_COMMENT = "M-LEX-002"
    UNEXPECTED_CHARACTER = "M-LEX-003"

    # Parser errors (M-PAR-xxx)
    UNEXPECTED_TOKEN = "M-PAR-001"
    UNCLOSED_BLOCK = "M-PAR-002"
    UNKNOWN_TAG = "M-PAR-003"
    INVALID_TAG_ARGUMENTS = "M-PAR-004"
    INVALID_FILTER = "M-PAR-005"

    # Runtime errors (M-RUN-xxx)
    MISSING_BINDING = "M-RUN-001"
    FORMAT_ERROR = "M-RUN-002"
    SLOT_DEPTH = "M-RUN-003"
    RUNTIME_ERROR = "M-RUN-004"

    # Template loading errors (M-TPL-xxx)
    TEMPLATE_NOT_FOUND = "M-TPL-001"
    SYNTAX_ERROR = "M-TPL-002"

    @property
    def category(self) -> str:
        """Error category (e.g., 'runtime', 'lexer', 'parser', 'template')."""
        prefix = self.value.split("-")[1]
        return {
            "LEX": "lexer",
            "PAR": "parser",
            "RUN": "runtime",
            "TPL": "template",
        }.get(prefix, "unknown")


# ---------------------------------------------------------------------------
# Source snippets
# ---------------------------------------------------------------------------


def format_template_stack(stack: list[tuple[str, int]] | None) -> str:
    """Format the chain of enclosing templates for error messages.

    Example:
        >>> print(format_template_stack([("layouts/default", 12), ("posts/index", 3)]))
        Template stack:
          • layouts/default:12
          • posts/index:3
    """
    if not stack:
        return ""

    lines = ["Template stack:"]
    for template_name, line_num in stack:
        lines.append(f"  • {template_name}:{line_num}")
    return "\n".join(lines)


@dataclass(frozen=True, slots=True)
class SourceSnippet:
    """Template source context around an error line.

    Attributes:
        lines: Tuple of (line_number, line_content) pairs around the error.
        error_line: The 1-based line number where the error occurred.
        column: Optional column offset for caret pointer.
    """

    lines: tuple[tuple[int, str], ...]
    error_line: int
    column: int | None = None

    def format(self) -> str:
        """Format snippet in a compiler-style diagnostic layout."""
        parts: list[str] = ["   |"]
        for lineno, content in self.lines:
            marker = ">" if lineno == self.error_line else " "
            parts.append(f"{marker}{lineno:>2} | {content}")
        if self.column is not None:
            parts.append(f"   | {' ' * self.column}^")
        parts.append("   |")
        return "\n".join(parts)


def build_source_snippet(
    source: str,
    error_line: int,
    *,
    context_lines: int = 1,
    column: int | None = None,
) -> SourceSnippet:
    """Build a SourceSnippet with ``context_lines`` around ``error_line``."""
    all_lines = source.splitlines()
    start = max(0, error_line - 1 - context_lines)
    end = min(len(all_lines), error_line + context_lines)
    lines = tuple((i + 1, all_lines[i]) for i in range(start, end))
    return SourceSnippet(lines=lines, error_line=error_line, column=column)


class TemplateError(Exception):
    """Base exception for all template errors.

    Attributes:
        code: Optional ErrorCode for searchable error identification.
    """

    code: ErrorCode | None = None

    def format_compact(self) -> str:
        """Format error as a short summary prefixed with its error code."""
        header = str(self)
        if self.code and self.code.value not in header:
            header = f"{self.code.value}: {header}"
        return header


class TemplateNotFoundError(TemplateError):
    """Template name not registered in a store, or missing on disk.

    Example:
            >>> store.render_named("nope", {})
        TemplateNotFoundError: Template 'nope' not found. Available: index, layouts/default
    """

    code: ErrorCode | None = ErrorCode.TEMPLATE_NOT_FOUND

    def __init__(self, message: str, name: str | None = None):
        self.name = name
        super().__init__(message)


class TemplateSyntaxError(TemplateError):
    """Parse-time syntax error in template source.

    When ``source`` and ``lineno`` are provided, the error message includes
    a source snippet with the offending line. If ``col_offset`` is also
    given, a caret (``^``) points at the exact column.
    """

    code: ErrorCode | None = ErrorCode.SYNTAX_ERROR

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        name: str | None = None,
        filename: str | None = None,
        source: str | None = None,
        col_offset: int | None = None,
        suggestion: str | None = None,
        code: ErrorCode | None = None,
    ):
        self.message = message
        self.lineno = lineno
        self.name = name
        self.filename = filename
        self.source = source
        self.col_offset = col_offset
        self.suggestion = suggestion
        if code is not None:
            self.code = code
        super().__init__(self._format_message())

    @property
    def location(self) -> str:
        location = self.name or self.filename or "<template>"
        if self.lineno:
            location += f":{self.lineno}"
            if self.col_offset is not None:
                location += f":{self.col_offset}"
        return location

    def _format_message(self) -> str:
        msg = f"Syntax Error: {self.message}\n  --> {self.location}"

        if self.source and self.lineno:
            lines = self.source.splitlines()
            if 0 < self.lineno <= len(lines):
                error_line = lines[self.lineno - 1]
                msg += f"\n   |\n{self.lineno:>3} | {error_line}"
                if self.col_offset is not None:
                    msg += f"\n   | {' ' * self.col_offset}^"

        if self.suggestion:
            msg += f"\n\nSuggestion: {self.suggestion}"
        return msg


class LexerError(TemplateSyntaxError):
    """Tokenization failure: unclosed delimiter or unexpected character."""


class TemplateRuntimeError(TemplateError):
    """Render-time error with debugging context.

    Raised when a tag's contract is violated: a missing loop binding, a
    value the formatting dispatch cannot handle, a runaway slot chain.

    Attributes:
        message: Error description
        template_name: Name of the template being rendered
        lineno: Line number in template source
        tag: Name of the tag that failed, if any
        values: Dict of names → values for context
        suggestion: Actionable fix suggestion
        source_snippet: Template lines around the failure
        template_stack: Enclosing (template, line) pairs from slot rendering
    """

    code: ErrorCode | None = ErrorCode.RUNTIME_ERROR

    def __init__(
        self,
        message: str,
        *,
        template_name: str | None = None,
        lineno: int | None = None,
        tag: str | None = None,
        values: dict[str, Any] | None = None,
        suggestion: str | None = None,
        source_snippet: SourceSnippet | None = None,
        template_stack: list[tuple[str, int]] | None = None,
        code: ErrorCode | None = None,
    ):
        self.message = message
        self.template_name = template_name
        self.lineno = lineno
        self.tag = tag
        self.values = values or {}
        self.suggestion = suggestion
        self.source_snippet = source_snippet
        self.template_stack = template_stack or []
        if code is not None:
            self.code = code
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        message = self.message
        if self.tag:
            message += f" in '{self.tag}' tag"
        parts = [f"Runtime Error: {message}"]

        if self.template_name or self.lineno:
            loc = self.template_name or "<template>"
            if self.lineno:
                loc += f":{self.lineno}"
            parts.append(f"  Location: {loc}")

        if self.source_snippet:
            parts.append(self.source_snippet.format())

        if self.template_stack:
            parts.append(format_template_stack(self.template_stack))

        if self.values:
            parts.append("  Values:")
            for name, value in self.values.items():
                value_repr = repr(value)
                if len(value_repr) > 80:
                    value_repr = value_repr[:77] + "..."
                parts.append(f"    {name} = {value_repr} ({type(value).__name__})")

        if self.suggestion:
            parts.append(f"\n  Suggestion: {self.suggestion}")

        return "\n".join(parts)
