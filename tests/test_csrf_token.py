"""Tests for the csrf_token tag."""

import pytest

from miniweb import MemoryStore, RenderOptions, TemplateRuntimeError, parse, render_state
from miniweb.exceptions import ErrorCode

FORM = "<form>{% csrf_token %}</form>"


class TestCsrfToken:
    def test_from_options(self):
        options = RenderOptions(csrf_token=lambda: "abc123")
        assert parse(FORM).render({}, options) == (
            '<form><input name="_csrf_token" type="hidden" value="abc123"></form>'
        )

    def test_token_is_attribute_escaped(self):
        options = RenderOptions(csrf_token=lambda: 'a"b<c>&\'d')
        output = parse("{% csrf_token %}").render({}, options)
        assert output == (
            '<input name="_csrf_token" type="hidden" value="a&quot;b&lt;c&gt;&amp;&#x27;d">'
        )

    def test_provider_called_per_render(self):
        tokens = iter(["first", "second"])
        options = RenderOptions(csrf_token=lambda: next(tokens))
        template = parse("{% csrf_token %}")
        assert 'value="first"' in template.render({}, options)
        assert 'value="second"' in template.render({}, options)

    def test_from_render_state_metadata(self):
        with render_state() as state:
            state.set_meta("csrf_token", "from-session")
            output = parse("{% csrf_token %}").render()
        assert 'value="from-session"' in output

    def test_metadata_reaches_slots(self):
        store = MemoryStore(
            {
                "layout": parse('{% slot "form" %}', name="layout"),
                "form": parse("{% csrf_token %}", name="form"),
            }
        )
        with render_state(meta={"csrf_token": "t0k"}):
            output = store.render_named("layout")
        assert 'value="t0k"' in output

    def test_missing_token(self):
        with pytest.raises(TemplateRuntimeError) as exc_info:
            parse("{% csrf_token %}").render()
        assert exc_info.value.code is ErrorCode.MISSING_BINDING
        assert "No CSRF token available in 'csrf_token' tag" in str(exc_info.value)
