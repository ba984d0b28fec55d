"""Template store protocol.

A store resolves a template name to a parsed ``Template`` and renders it.
Names are paths relative to the store's root, ``/``-separated, without
the file extension: ``"layouts/default"``, ``"posts/index"``.

Custom Stores:
Implement the protocol:
    ```python
    class DatabaseStore:
        def get_template(self, name: str) -> Template:
            row = db.query("SELECT source FROM templates WHERE name = ?", name)
            if not row:
                raise TemplateNotFoundError(f"Template '{name}' not found", name)
            return parse(row.source, name=name)

        def list_templates(self) -> list[str]:
            return [r.name for r in db.query("SELECT name FROM templates")]

        def render_named(self, name, data=None, options=None, counter_vars=None):
            return render_with_store(self, name, data, options, counter_vars)
    ```

"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from miniweb.exceptions import TemplateSyntaxError
from miniweb.options import RenderOptions

if TYPE_CHECKING:
    from miniweb.template import Template

DEFAULT_EXTENSION = ".html"


@runtime_checkable
class TemplateStore(Protocol):
    def get_template(self, name: str) -> Template: ...

    def list_templates(self) -> list[str]: ...

    def render_named(
        self,
        name: str,
        data: Mapping[str, Any] | None = None,
        options: RenderOptions | None = None,
        counter_vars: Mapping[str, Any] | None = None,
    ) -> str: ...


def render_with_store(
    store: TemplateStore,
    name: str,
    data: Mapping[str, Any] | None,
    options: RenderOptions | None,
    counter_vars: Mapping[str, Any] | None,
) -> str:
    """Resolve ``name`` in ``store`` and render it with the store bound in options.

    Nested slots resolve through ``options.store``; when the caller did not
    set one, this store is used.
    """
    options = (options or RenderOptions()).with_store(store)
    return store.get_template(name).render(data, options, counter_vars)


def template_name(relative_path: str, extension: str) -> str:
    """Map a root-relative POSIX path to a template name."""
    return relative_path[: -len(extension)] if extension else relative_path


def read_source(path: Path, name: str, encoding: str) -> str:
    """Read a template file.

    Raises:
        TemplateSyntaxError: If the file is not valid ``encoding`` text
    """
    try:
        return path.read_text(encoding)
    except UnicodeDecodeError as exc:
        raise TemplateSyntaxError(
            f"Template is not valid {encoding} text: {exc.reason} at byte {exc.start}",
            name=name,
            filename=str(path),
            suggestion=f"Save the file as {encoding}",
        ) from exc
