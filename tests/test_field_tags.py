"""Tests for the get and html field accessor tags."""

import re
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum

import pytest

from miniweb import RenderOptions, TemplateRuntimeError, parse
from miniweb.exceptions import ErrorCode

from .conftest import assert_contains, render

GET_ROW = '{% for row in rows %}{% get "value", at: row %}{% endfor %}'
HTML_ROW = '{% for row in rows %}{% html "value", at: row %}{% endfor %}'


def _get(value, **kwargs) -> str:
    return render(GET_ROW, {"rows": [{"value": value}]}, **kwargs)


def _html(value, **kwargs) -> str:
    return render(HTML_ROW, {"rows": [{"value": value}]}, **kwargs)


class Status(Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


class TestFormatting:
    """Type dispatch shared by both tags."""

    @pytest.mark.parametrize("tag", [_get, _html])
    def test_booleans(self, tag):
        assert tag(True) == "Yes"
        assert tag(False) == "No"

    @pytest.mark.parametrize("tag", [_get, _html])
    def test_numbers(self, tag):
        assert tag(42) == "42"
        assert tag(3.5) == "3.5"
        assert tag(Decimal("9.99")) == "9.99"

    @pytest.mark.parametrize("tag", [_get, _html])
    def test_none_is_empty(self, tag):
        assert tag(None) == ""

    @pytest.mark.parametrize("tag", [_get, _html])
    def test_enum_shows_value(self, tag):
        assert tag(Status.PUBLISHED) == "published"

    def test_get_passes_markup_through(self):
        assert _get("<script>alert(1)</script>") == "<script>alert(1)</script>"

    def test_html_escapes_markup(self):
        assert _html("<script>alert(1)</script>") == "&lt;script&gt;alert(1)&lt;/script&gt;"

    def test_html_escapes_quotes(self):
        assert _html('say "hi"') == "say &quot;hi&quot;"

    def test_html_renders_mapping_as_json(self):
        assert _html({"a": 1}) == '{\n  &quot;a&quot;: 1\n}'

    def test_get_rejects_mapping(self):
        with pytest.raises(TemplateRuntimeError) as exc_info:
            _get({"a": 1})
        assert exc_info.value.code is ErrorCode.FORMAT_ERROR

    @pytest.mark.parametrize("tag", [_get, _html])
    def test_unsupported_type(self, tag):
        with pytest.raises(TemplateRuntimeError) as exc_info:
            tag([1, 2])
        assert "Cannot format value of type list" in str(exc_info.value)


class TestDatetimes:
    """Datetimes display in the configured zone, Europe/Paris by default."""

    def test_winter_time(self):
        value = datetime(2024, 1, 15, 12, 0, tzinfo=UTC)
        assert _get(value) == "Mon, January 15 13:00:00"

    def test_summer_time(self):
        value = datetime(2024, 7, 14, 10, 30, 5, tzinfo=UTC)
        assert _html(value) == "Sun, July 14 12:30:05"

    def test_naive_taken_as_utc(self):
        assert _get(datetime(2024, 1, 15, 12, 0)) == "Mon, January 15 13:00:00"

    def test_timezone_option(self):
        value = datetime(2024, 1, 15, 12, 0, tzinfo=UTC)
        assert _get(value, options=RenderOptions(timezone="UTC")) == "Mon, January 15 12:00:00"


class TestFieldResolution:
    """Record lookup through the loop binding and dotted-path indirection."""

    def test_missing_field_is_empty(self):
        assert render('{% for r in rows %}[{% get "nope", at: r %}]{% endfor %}', {"rows": [{}]}) == "[]"

    def test_object_record(self):
        class Post:
            title = "Hello"

        source = '{% for p in posts %}{% get "title", at: p %}{% endfor %}'
        assert render(source, {"posts": [Post()]}) == "Hello"

    def test_dotted_path_selects_field_name(self):
        source = (
            "{% for row in rows %}{% for column in columns %}"
            '{% get "column.key", at: row %};'
            "{% endfor %}{% endfor %}"
        )
        data = {
            "rows": [{"title": "Hello", "author": "Ada"}],
            "columns": [{"key": "title"}, {"key": "author"}],
        }
        assert render(source, data) == "Hello;Ada;"

    def test_deep_dotted_path(self):
        source = (
            "{% for row in rows %}{% for column in columns %}"
            '{% html "column.meta.key", at: row %}'
            "{% endfor %}{% endfor %}"
        )
        data = {"rows": [{"title": "T"}], "columns": [{"meta": {"key": "title"}}]}
        assert render(source, data) == "T"

    def test_unresolvable_intermediate_is_empty(self):
        source = (
            "{% for row in rows %}{% for column in columns %}"
            '[{% get "column.missing.key", at: row %}]'
            "{% endfor %}{% endfor %}"
        )
        data = {"rows": [{"title": "T"}], "columns": [{"key": "title"}]}
        assert render(source, data) == "[]"

    def test_dotted_path_ignores_data(self):
        # The key comes from loop bindings only, never from data
        source = '{% for row in rows %}[{% get "column.key", at: row %}]{% endfor %}'
        data = {"rows": [{"title": "T"}], "column": {"key": "title"}}
        assert render(source, data) == "[]"

    def test_binding_from_data_is_not_a_loop_binding(self):
        with pytest.raises(TemplateRuntimeError):
            render('{% get "title", at: post %}', {"post": {"title": "T"}})


class TestMissingBinding:
    def test_error_names_binding_and_tag(self):
        template = parse('<p>\n{% get "title", at: post %}\n</p>', name="posts/show")
        with pytest.raises(TemplateRuntimeError) as exc_info:
            template.render()
        error = exc_info.value
        assert error.code is ErrorCode.MISSING_BINDING
        assert_contains(
            str(error),
            "No such tag argument 'post' in 'get' tag",
            "posts/show:2",
            "for post in",
        )

    def test_html_falls_back_to_counter_vars(self):
        template = parse('{% html "title", at: post %}')
        output = template.render(counter_vars={"post": {"title": "<b>T</b>"}})
        assert output == "&lt;b&gt;T&lt;/b&gt;"

    def test_html_dotted_path_falls_back_to_counter_vars(self):
        source = '{% for row in rows %}{% html "column.key", at: row %}{% endfor %}'
        template = parse(source)
        output = template.render(
            {"rows": [{"title": "T"}]}, counter_vars={"column": {"key": "title"}}
        )
        assert output == "T"

    def test_get_does_not_fall_back(self):
        template = parse('{% get "title", at: post %}')
        with pytest.raises(TemplateRuntimeError):
            template.render(counter_vars={"post": {"title": "T"}})


class TestHighlight:
    def test_get_search_text(self):
        template = parse('{% for r in rows %}{% get "t", at: r %}|{% endfor %}')
        data = {"rows": [{"t": "Concatenate"}, {"t": "CAT"}, {"t": "dog"}]}
        output = template.render(data, counter_vars={"searchText": "cat"})
        assert output == "Con<mark>cat</mark>enate|<mark>CAT</mark>|dog|"

    def test_get_search_text_is_literal(self):
        template = parse('{% for r in rows %}{% get "t", at: r %}{% endfor %}')
        output = template.render(
            {"rows": [{"t": "a.b axb"}]}, counter_vars={"searchText": "a.b"}
        )
        assert output == "<mark>a.b</mark> axb"

    def test_get_empty_search_text(self):
        template = parse('{% for r in rows %}{% get "t", at: r %}{% endfor %}')
        assert template.render({"rows": [{"t": "cat"}]}, counter_vars={"searchText": ""}) == "cat"

    def test_get_highlights_formatted_numbers(self):
        template = parse('{% for r in rows %}{% get "n", at: r %}{% endfor %}')
        output = template.render({"rows": [{"n": 2024}]}, counter_vars={"searchText": "02"})
        assert output == "2<mark>02</mark>4"

    def test_html_pattern(self):
        template = parse('{% for r in rows %}{% html "t", at: r %}{% endfor %}')
        pattern = re.compile("cat", re.IGNORECASE)
        output = template.render(
            {"rows": [{"t": "Concatenate <CAT>"}]}, counter_vars={"highlight": pattern}
        )
        assert output == "Con<mark>cat</mark>enate &lt;<mark>CAT</mark>&gt;"

    def test_html_ignores_search_text(self):
        template = parse('{% for r in rows %}{% html "t", at: r %}{% endfor %}')
        assert template.render({"rows": [{"t": "cat"}]}, counter_vars={"searchText": "cat"}) == "cat"

    def test_html_rejects_plain_string_pattern(self):
        template = parse('{% for r in rows %}{% html "t", at: r %}{% endfor %}')
        with pytest.raises(TemplateRuntimeError) as exc_info:
            template.render({"rows": [{"t": "cat"}]}, counter_vars={"highlight": "cat"})
        assert exc_info.value.code is ErrorCode.FORMAT_ERROR

    def test_html_blank_loop_binding_falls_back(self):
        template = parse('{% for post in posts %}{% html "title", at: post %}{% endfor %}')
        counter_vars = {"post": {"title": "From counter"}}
        assert template.render({"posts": [None]}, counter_vars=counter_vars) == "From counter"
        assert template.render({"posts": [False]}, counter_vars=counter_vars) == "From counter"

    def test_html_blank_path_segment_falls_back(self):
        source = '{% for column in columns %}{% html "column.key", at: row %}{% endfor %}'
        output = parse(source).render(
            {"columns": [{"key": None}]},
            counter_vars={"row": {"title": "T"}, "column": {"key": "title"}},
        )
        assert output == "T"
