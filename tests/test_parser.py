"""Tests for the parser: base statements, tag arguments and syntax errors."""

import pytest

from miniweb import ParseError, TemplateSyntaxError, parse
from miniweb.exceptions import ErrorCode
from miniweb.nodes import Compare, CsrfToken, Data, Field, For, If, Not, Output, Slot


def _body(source: str):
    return parse(source).ast.body


class TestBaseStatements:
    """Output, conditionals and loops build the expected nodes."""

    def test_data_and_output(self):
        data, output = _body("Hi {{ name }}")
        assert isinstance(data, Data)
        assert data.value == "Hi "
        assert isinstance(output, Output)

    def test_if_elsif_else(self):
        (node,) = _body("{% if a %}A{% elsif b %}B{% else %}C{% endif %}")
        assert isinstance(node, If)
        assert len(node.elif_) == 1
        assert node.else_[0].value == "C"

    def test_unless_is_negated_if(self):
        (node,) = _body("{% unless a %}A{% endunless %}")
        assert isinstance(node, If)
        assert isinstance(node.test, Not)

    def test_comparison(self):
        (node,) = _body('{% if tags contains "x" %}{% endif %}')
        assert isinstance(node.test, Compare)
        assert node.test.op == "contains"

    def test_for_with_else(self):
        (node,) = _body("{% for post in posts %}{{ post }}{% else %}none{% endfor %}")
        assert isinstance(node, For)
        assert node.target == "post"
        assert node.empty[0].value == "none"

    def test_nested_blocks(self):
        (node,) = _body(
            "{% for row in rows %}{% if row %}{% for c in cols %}x{% endfor %}{% endif %}{% endfor %}"
        )
        inner_if = node.body[0]
        assert isinstance(inner_if, If)
        assert isinstance(inner_if.body[0], For)

    def test_ast_is_immutable(self):
        (node,) = _body("{{ name }}")
        with pytest.raises(AttributeError):
            node.expr = None


class TestFrameworkTags:
    """The default grammar's tags parse into their nodes."""

    def test_get_simple_path(self):
        (node,) = _body('{% get "title", at: post %}')
        assert isinstance(node, Field)
        assert node.tag == "get"
        assert node.path == ("title",)
        assert node.at == "post"

    def test_html_dotted_path(self):
        (node,) = _body('{% html "column.key", at: row %}')
        assert node.tag == "html"
        assert node.path == ("column", "key")

    def test_unquoted_dotted_path(self):
        (node,) = _body("{% get column.key, at: row %}")
        assert node.path == ("column", "key")

    def test_slot(self):
        (node,) = _body('{% slot "main", searchText: query %}')
        assert isinstance(node, Slot)
        assert node.target == "main"
        assert [key for key, _ in node.arguments] == ["searchText"]

    def test_csrf_token(self):
        (node,) = _body("{% csrf_token %}")
        assert isinstance(node, CsrfToken)


class TestSyntaxErrors:
    """Malformed source and malformed tags fail at parse time."""

    def test_unknown_tag(self):
        with pytest.raises(TemplateSyntaxError) as exc_info:
            parse("{% frobnicate %}")
        error = exc_info.value
        assert error.code is ErrorCode.UNKNOWN_TAG
        assert "Unknown tag 'frobnicate'" in str(error)
        assert "csrf_token, get, html, slot" in str(error)

    def test_error_location(self):
        with pytest.raises(ParseError) as exc_info:
            parse("first line\n{% frobnicate %}", name="pages/home")
        error = exc_info.value
        assert error.lineno == 2
        assert "pages/home:2" in str(error)
        assert "{% frobnicate %}" in str(error)

    def test_unclosed_block(self):
        with pytest.raises(TemplateSyntaxError) as exc_info:
            parse("{% if x %}never closed")
        assert exc_info.value.code is ErrorCode.UNCLOSED_BLOCK
        assert "endif" in str(exc_info.value)

    def test_stray_end_tag(self):
        with pytest.raises(TemplateSyntaxError) as exc_info:
            parse("{% endfor %}")
        assert exc_info.value.code is ErrorCode.UNCLOSED_BLOCK

    def test_mismatched_end_tag(self):
        with pytest.raises(TemplateSyntaxError):
            parse("{% for x in xs %}{% endif %}")

    def test_elsif_not_allowed_in_unless(self):
        with pytest.raises(TemplateSyntaxError):
            parse("{% unless a %}A{% elsif b %}B{% endunless %}")

    def test_unknown_filter(self):
        with pytest.raises(TemplateSyntaxError) as exc_info:
            parse("{{ name | shout }}")
        assert exc_info.value.code is ErrorCode.INVALID_FILTER

    def test_empty_expression(self):
        with pytest.raises(TemplateSyntaxError):
            parse("{{ }}")

    def test_for_without_in(self):
        with pytest.raises(TemplateSyntaxError) as exc_info:
            parse("{% for x of xs %}{% endfor %}")
        assert "Expected 'in'" in str(exc_info.value)

    @pytest.mark.parametrize(
        "source",
        [
            '{% get "title" %}',
            '{% get "title", at: post, limit: 3 %}',
            '{% get "title", at: post, at: other %}',
            '{% get "title", at post %}',
            '{% get "title", at: post.author %}',
            "{% get , at: post %}",
            "{% get 42, at: post %}",
            '{% html "title", at: post extra %}',
            "{% slot main %}",
            '{% slot "" %}',
            "{% slot %}",
            "{% csrf_token now %}",
        ],
    )
    def test_malformed_tag_arguments(self, source):
        with pytest.raises(TemplateSyntaxError) as exc_info:
            parse(source)
        assert exc_info.value.code is ErrorCode.INVALID_TAG_ARGUMENTS

    def test_missing_at_suggests_fix(self):
        with pytest.raises(TemplateSyntaxError) as exc_info:
            parse('{% get "title" %}')
        assert "Missing required argument 'at'" in str(exc_info.value)
        assert "at: item" in str(exc_info.value)

    def test_format_compact_has_code(self):
        with pytest.raises(TemplateSyntaxError) as exc_info:
            parse("{% frobnicate %}")
        assert exc_info.value.format_compact().startswith("M-PAR-003")
