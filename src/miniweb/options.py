"""Options bag threaded through every render call."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from miniweb.store.base import TemplateStore

DEFAULT_TIMEZONE = "Europe/Paris"


@dataclass(frozen=True, slots=True)
class RenderOptions:
    """Render-wide settings, passed down unchanged to nested slot renders.

    Attributes:
        store: Active template store; ``{% slot %}`` renders through it
        csrf_token: Callable returning the session's anti-forgery token
        timezone: IANA zone that ``get``/``html`` display datetimes in
        autoescape: HTML-escape ``{{ }}`` output (off by default, as in Liquid)
        max_depth: Maximum nesting of slot renders
        base_path: URL prefix the app is mounted under, exposed to layouts
            as ``basePath``
    """

    store: TemplateStore | None = None
    csrf_token: Callable[[], str] | None = None
    timezone: str = DEFAULT_TIMEZONE
    autoescape: bool = False
    max_depth: int = 50
    base_path: str = ""

    def with_store(self, store: TemplateStore) -> RenderOptions:
        """Return options bound to ``store``, keeping an already-bound store."""
        if self.store is not None:
            return self
        return replace(self, store=store)
