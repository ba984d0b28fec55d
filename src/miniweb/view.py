"""Layout composition: render a page body inside a layout.

The layout is an ordinary template with a ``{% slot "main" %}`` where the
page goes. ``render_named`` hands the page to the layout through the
``main`` counter var, so the same layout serves every page.

Example:
    >>> from miniweb import MemoryStore, RenderOptions, view
    >>> store = MemoryStore.load("priv/templates")
    >>> view.render_named(
    ...     "layouts/default",
    ...     {"posts": posts},
    ...     RenderOptions(store=store),
    ...     main="posts/index",
    ...     title="Posts",
    ... )

"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from miniweb.options import RenderOptions
from miniweb.template import render_named as _render_named

DEFAULT_LAYOUT = "layouts/default"


def render_named(
    layout: str,
    data: Mapping[str, Any] | None,
    options: RenderOptions,
    *,
    main: str,
    title: str | None = None,
    base_path: str | None = None,
) -> str:
    """Render template ``main`` inside ``layout``.

    Both templates see ``data`` plus ``main`` (the page template name),
    ``basePath`` and, when given, ``title``. ``base_path`` defaults to
    ``options.base_path``.

    Raises:
        ValueError: If the options carry no store
        TemplateNotFoundError: If the layout or the page is unknown
    """
    page_data: dict[str, Any] = dict(data) if data else {}
    page_data["main"] = main
    page_data["basePath"] = options.base_path if base_path is None else base_path
    if title is not None:
        page_data["title"] = title
    return _render_named(layout, page_data, options, {"main": (main, page_data)})
