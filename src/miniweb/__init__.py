"""miniweb: Liquid-style HTML templates with framework tags.

A small template engine for server-rendered pages. On top of a Liquid
subset (``{{ }}`` output with filters, ``if``/``unless``, ``for``) it adds
four framework tags:

- ``{% get "field", at: row %}``: unescaped field accessor with search
  highlighting
- ``{% html "field", at: row %}``: HTML-escaped field accessor
- ``{% slot "main" %}``: layout composition
- ``{% csrf_token %}``: anti-forgery hidden input

Quickstart:
    >>> from miniweb import parse
    >>> parse("Hello, {{ name }}!").render({"name": "World"})
    'Hello, World!'

Stores:
    >>> from miniweb import DiskStore, MemoryStore
    >>> DiskStore("templates/").render_named("posts/index", {"posts": posts})
    >>> store = MemoryStore.load("templates/")  # parse everything once
    >>> store.render_named("posts/index", {"posts": posts})

Architecture:
Template Source → Lexer → Parser → AST → Renderer → str

1. **Lexer**: Tokenizes template source into a token stream
2. **Parser**: Builds an immutable AST, handing custom tags to the Grammar
3. **Renderer**: Walks the AST with a RenderContext, calling tag callbacks
4. **Store**: Resolves template names to parsed templates

Thread-Safety:
Parsed templates and MemoryStore mappings are immutable; every render uses
its own buffer, scopes and ContextVar-held state. Rendering the same
template from many threads needs no lock.

"""

from miniweb import view
from miniweb._types import Token, TokenType
from miniweb.config import Settings
from miniweb.exceptions import (
    ErrorCode,
    LexerError,
    SourceSnippet,
    TemplateError,
    TemplateNotFoundError,
    TemplateRuntimeError,
    TemplateSyntaxError,
    build_source_snippet,
)
from miniweb.grammar import Grammar
from miniweb.loop_context import LoopContext
from miniweb.options import RenderOptions
from miniweb.parser import ParseError
from miniweb.render_context import (
    RenderContext,
    RenderState,
    get_render_state,
    render_state,
)
from miniweb.store import DiskStore, MemoryStore, TemplateStore
from miniweb.tags import DEFAULT_GRAMMAR, Tag
from miniweb.template import Template, parse, render_named

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_GRAMMAR",
    "DiskStore",
    "ErrorCode",
    "Grammar",
    "LexerError",
    "LoopContext",
    "MemoryStore",
    "ParseError",
    "RenderContext",
    "RenderOptions",
    "RenderState",
    "Settings",
    "SourceSnippet",
    "Tag",
    "Template",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplateRuntimeError",
    "TemplateStore",
    "TemplateSyntaxError",
    "Token",
    "TokenType",
    "__version__",
    "build_source_snippet",
    "get_render_state",
    "parse",
    "render_named",
    "render_state",
    "view",
]
