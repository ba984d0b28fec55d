"""Settings for wiring a template store into an application.

Read from ``MINIWEB_*`` environment variables, or built directly:

=============================  ============  ===============
Variable                       Field         Default
=============================  ============  ===============
MINIWEB_TEMPLATES_DIR          templates_dir ``templates``
MINIWEB_TEMPLATE_EXTENSION     extension     ``.html``
MINIWEB_STORE                  store         ``disk``
MINIWEB_TIMEZONE               timezone      ``Europe/Paris``
MINIWEB_BASE_PATH              base_path     ``""``
MINIWEB_AUTOESCAPE             autoescape    ``false``
=============================  ============  ===============

Example:
    >>> settings = Settings.from_env()
    >>> store = settings.build_store()
    >>> options = settings.render_options(store, csrf_token=session.csrf_token)
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from miniweb.options import DEFAULT_TIMEZONE, RenderOptions
from miniweb.store import DEFAULT_EXTENSION, DiskStore, MemoryStore, TemplateStore

StoreKind = Literal["disk", "memory"]

_STORE_KINDS: tuple[StoreKind, ...] = ("disk", "memory")
_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean (true/false), got {value!r}")


@dataclass(frozen=True, slots=True)
class Settings:
    """Template store configuration.

    Raises:
        ValueError: On an unknown store kind, an unknown timezone, or an
            extension without a leading dot
    """

    templates_dir: Path = Path("templates")
    extension: str = DEFAULT_EXTENSION
    store: StoreKind = "disk"
    timezone: str = DEFAULT_TIMEZONE
    base_path: str = ""
    autoescape: bool = False

    def __post_init__(self) -> None:
        if self.store not in _STORE_KINDS:
            raise ValueError(
                f"Unknown store kind {self.store!r}, expected one of {list(_STORE_KINDS)}"
            )
        if not self.extension.startswith("."):
            raise ValueError(f"Template extension must start with '.', got {self.extension!r}")
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone {self.timezone!r}") from None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = os.environ) -> Settings:
        """Build settings from ``MINIWEB_*`` variables, defaults for the rest."""
        defaults = cls()
        return cls(
            templates_dir=Path(environ.get("MINIWEB_TEMPLATES_DIR", defaults.templates_dir)),
            extension=environ.get("MINIWEB_TEMPLATE_EXTENSION", defaults.extension),
            store=environ.get("MINIWEB_STORE", defaults.store).strip().lower(),  # type: ignore[arg-type]
            timezone=environ.get("MINIWEB_TIMEZONE", defaults.timezone),
            base_path=environ.get("MINIWEB_BASE_PATH", defaults.base_path).rstrip("/"),
            autoescape=_parse_bool(
                "MINIWEB_AUTOESCAPE", environ.get("MINIWEB_AUTOESCAPE", "false")
            ),
        )

    def build_store(self) -> TemplateStore:
        """Create the configured store; ``memory`` loads every template now."""
        if self.store == "memory":
            return MemoryStore.load(self.templates_dir, self.extension)
        return DiskStore(self.templates_dir, self.extension)

    def render_options(
        self,
        store: TemplateStore | None = None,
        csrf_token: Callable[[], str] | None = None,
    ) -> RenderOptions:
        return RenderOptions(
            store=store,
            csrf_token=csrf_token,
            timezone=self.timezone,
            autoescape=self.autoescape,
            base_path=self.base_path,
        )
