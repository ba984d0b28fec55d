"""The ``csrf_token`` tag: hidden anti-forgery input for forms.

The token comes from ``options.csrf_token`` when set, otherwise from the
``csrf_token`` metadata of the active render state. It is always
attribute-escaped, whatever alphabet the token generator uses today.
"""

from __future__ import annotations

import html
from typing import TYPE_CHECKING

from miniweb.exceptions import ErrorCode
from miniweb.nodes import CsrfToken
from miniweb.render_context import get_render_state, runtime_error
from miniweb.tags.base import Tag

if TYPE_CHECKING:
    from miniweb._types import Token
    from miniweb.options import RenderOptions
    from miniweb.parser import Parser
    from miniweb.render_context import RenderContext

FIELD_NAME = "_csrf_token"


class CsrfTokenTag(Tag):
    name = "csrf_token"

    def parse(self, parser: Parser, token: Token) -> CsrfToken:
        parser.parse_tag_arguments(self.name, positional=False)
        return CsrfToken(lineno=token.lineno, col_offset=token.col_offset, tag=self.name)

    def render(self, node: CsrfToken, context: RenderContext, options: RenderOptions) -> str:
        if options.csrf_token is not None:
            token = options.csrf_token()
        else:
            state = get_render_state()
            token = state.get_meta("csrf_token") if state else None
        if token is None:
            raise runtime_error(
                "No CSRF token available",
                tag=self.name,
                suggestion=(
                    "Pass RenderOptions(csrf_token=...) or set the 'csrf_token' "
                    "metadata in render_state()"
                ),
                code=ErrorCode.MISSING_BINDING,
            )
        value = html.escape(str(token), quote=True)
        return f'<input name="{FIELD_NAME}" type="hidden" value="{value}">'
