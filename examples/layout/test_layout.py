"""Tests for the layout example."""

import app

from miniweb import view


class TestLayoutApp:
    """Verify pages render inside the layout with highlighting and CSRF."""

    def test_layout_wraps_page(self) -> None:
        assert "<title>Posts | Miniweb</title>" in app.index_output
        assert "<h1>Posts</h1>" in app.index_output

    def test_base_path_from_options(self) -> None:
        assert '<a href="/admin/">Home</a>' in app.index_output
        assert 'action="/admin/posts"' in app.form_output

    def test_columns_pick_fields(self) -> None:
        assert "<th>Title</th><th>Published</th><th>Updated</th>" in app.index_output
        assert "<td>Yes</td>" in app.index_output
        assert "<td>No</td>" in app.index_output

    def test_dates_in_paris_time(self) -> None:
        assert "<td>Mon, January 15 13:00:00</td>" in app.index_output
        assert "<td>Sun, July 14 12:30:00</td>" in app.index_output

    def test_search_text_highlighted(self) -> None:
        assert "<mark>Cat</mark>" in app.index_output
        assert "Con<mark>cat</mark>enating strings" in app.index_output

    def test_csrf_input(self) -> None:
        assert (
            '<input name="_csrf_token" type="hidden" value="s3cr3t-token">'
            in app.form_output
        )

    def test_empty_table(self) -> None:
        output = view.render_named(
            "layouts/default",
            {"posts": [], "columns": app.columns, "query": ""},
            app.options,
            main="posts/index",
            title="Posts",
        )
        assert "<td>No posts yet</td>" in output
        assert '<a href="/admin/">Home</a>' in output
