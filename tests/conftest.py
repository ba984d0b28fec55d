"""Pytest configuration and fixtures for miniweb tests."""

from pathlib import Path

import pytest

from miniweb import MemoryStore, RenderOptions, parse


@pytest.fixture
def memory_store():
    """Create a MemoryStore from in-source templates, without touching disk."""
    sources = {
        "layouts/default": (
            "<html><title>{{ title }}</title>"
            '<body>{% slot "main" %}</body></html>'
        ),
        "main": "default main",
        "post": "Post {{ id }}",
        "posts/index": (
            "{% for post in posts %}"
            '<li>{% get "title", at: post %}</li>'
            "{% endfor %}"
        ),
    }
    return MemoryStore({name: parse(source, name=name) for name, source in sources.items()})


@pytest.fixture
def options(memory_store):
    """RenderOptions bound to the in-memory store."""
    return RenderOptions(store=memory_store)


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """Write a small template tree to disk."""
    files = {
        "index.html": "Hello {{ name }}!",
        "layouts/default.html": '<main>{% slot "main" %}</main>',
        "posts/index.html": (
            '{% for post in posts %}{% html "title", at: post %};{% endfor %}'
        ),
        "posts/show.html": "<h1>{{ post.title }}</h1>",
    }
    for name, source in files.items():
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source)
    return tmp_path


def render(source: str, data=None, options=None, counter_vars=None) -> str:
    """Parse and render ``source`` in one step."""
    return parse(source, name="test").render(data, options, counter_vars)


def assert_template_equal(template_result: str, expected: str) -> None:
    """Assert template result equals expected, normalizing whitespace.

    Args:
        template_result: The actual template rendering result.
        expected: The expected output.
    """
    # Normalize whitespace for comparison
    actual_normalized = " ".join(template_result.split())
    expected_normalized = " ".join(expected.split())
    assert actual_normalized == expected_normalized, (
        f"Template output mismatch:\n"
        f"  Actual: {actual_normalized!r}\n"
        f"  Expected: {expected_normalized!r}"
    )


def assert_contains(template_result: str, *expected_parts: str) -> None:
    """Assert template result contains all expected parts.

    Args:
        template_result: The actual template rendering result.
        expected_parts: Strings that should all be present in the result.
    """
    for part in expected_parts:
        assert part in template_result, (
            f"Template output missing expected content:\n"
            f"  Missing: {part!r}\n"
            f"  Actual: {template_result!r}"
        )
