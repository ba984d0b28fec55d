"""Layouts, field accessors and CSRF tokens -- a typical admin page.

Loads every template once with MemoryStore, then renders two pages inside
the shared layout: a searchable post table and a form.

Run:
    python app.py
"""

from datetime import UTC, datetime
from pathlib import Path

from miniweb import MemoryStore, RenderOptions, view

templates_dir = Path(__file__).parent / "templates"
store = MemoryStore.load(templates_dir)
options = RenderOptions(store=store, csrf_token=lambda: "s3cr3t-token", base_path="/admin")

columns = [
    {"key": "title", "label": "Title"},
    {"key": "published", "label": "Published"},
    {"key": "updated_at", "label": "Updated"},
]
posts = [
    {
        "title": "Concatenating strings",
        "published": True,
        "updated_at": datetime(2024, 1, 15, 12, 0, tzinfo=UTC),
    },
    {
        "title": "Cats & <dogs>",
        "published": False,
        "updated_at": datetime(2024, 7, 14, 10, 30, tzinfo=UTC),
    },
]

index_output = view.render_named(
    "layouts/default",
    {"posts": posts, "columns": columns, "query": "cat"},
    options,
    main="posts/index",
    title="Posts",
)

form_output = view.render_named(
    "layouts/default",
    {},
    options,
    main="posts/new",
    title="New post",
)


def main() -> None:
    print("=== Posts ===")
    print(index_output)
    print()
    print("=== New post ===")
    print(form_output)


if __name__ == "__main__":
    main()
