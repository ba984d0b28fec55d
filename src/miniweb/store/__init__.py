"""Template stores: uncached disk reads and the precompiled memory cache."""

from miniweb.store.base import DEFAULT_EXTENSION, TemplateStore, render_with_store
from miniweb.store.disk import DiskStore
from miniweb.store.memory import MemoryStore

__all__ = [
    "DEFAULT_EXTENSION",
    "DiskStore",
    "MemoryStore",
    "TemplateStore",
    "render_with_store",
]
