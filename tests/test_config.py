"""Tests for Settings."""

from pathlib import Path

import pytest

from miniweb import DiskStore, MemoryStore, Settings


class TestFromEnv:
    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings == Settings()
        assert settings.templates_dir == Path("templates")
        assert settings.extension == ".html"
        assert settings.store == "disk"
        assert settings.timezone == "Europe/Paris"
        assert settings.autoescape is False

    def test_reads_variables(self):
        settings = Settings.from_env(
            {
                "MINIWEB_TEMPLATES_DIR": "/srv/templates",
                "MINIWEB_TEMPLATE_EXTENSION": ".liquid",
                "MINIWEB_STORE": "Memory",
                "MINIWEB_TIMEZONE": "UTC",
                "MINIWEB_BASE_PATH": "/app/",
                "MINIWEB_AUTOESCAPE": "yes",
            }
        )
        assert settings.templates_dir == Path("/srv/templates")
        assert settings.extension == ".liquid"
        assert settings.store == "memory"
        assert settings.timezone == "UTC"
        assert settings.base_path == "/app"
        assert settings.autoescape is True

    @pytest.mark.parametrize(
        ("key", "value"),
        [
            ("MINIWEB_STORE", "redis"),
            ("MINIWEB_TIMEZONE", "Mars/Olympus_Mons"),
            ("MINIWEB_AUTOESCAPE", "maybe"),
            ("MINIWEB_TEMPLATE_EXTENSION", "html"),
        ],
    )
    def test_rejects_bad_values(self, key, value):
        with pytest.raises(ValueError):
            Settings.from_env({key: value})

    def test_frozen(self):
        with pytest.raises(AttributeError):
            Settings().store = "memory"


class TestBuild:
    def test_disk_store(self, template_dir):
        store = Settings(templates_dir=template_dir).build_store()
        assert isinstance(store, DiskStore)
        assert store.render_named("index", {"name": "x"}) == "Hello x!"

    def test_memory_store(self, template_dir):
        store = Settings(templates_dir=template_dir, store="memory").build_store()
        assert isinstance(store, MemoryStore)
        assert "posts/show" in store

    def test_render_options(self, memory_store):
        settings = Settings(timezone="UTC", autoescape=True)
        options = settings.render_options(memory_store, csrf_token=lambda: "t")
        assert options.store is memory_store
        assert options.timezone == "UTC"
        assert options.autoescape is True
        assert options.csrf_token() == "t"

    def test_render_options_carry_base_path(self, memory_store):
        options = Settings(base_path="/admin").render_options(memory_store)
        assert options.base_path == "/admin"
