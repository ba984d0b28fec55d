"""Loop iteration metadata for ``{% for %}`` blocks."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any


class LoopContext:
    """Loop iteration metadata accessible as ``forloop`` inside ``{% for %}``.

    Bound in iteration_vars next to the loop variable, so it is scoped to
    the loop body and shadowed by nested loops. All properties are computed
    on access.

    Properties:
        index: 1-based iteration count (1, 2, 3, ...)
        index0: 0-based iteration count (0, 1, 2, ...)
        rindex: Reverse 1-based index (counts down to 1)
        rindex0: Reverse 0-based index (counts down to 0)
        first: True on the first iteration
        last: True on the final iteration
        length: Total number of items in the sequence

    Example:
            ```liquid
            {% for post in posts %}
              <tr class="{% if forloop.first %}first{% endif %}">
                <td>{{ forloop.index }}/{{ forloop.length }}</td>
              </tr>
            {% endfor %}
            ```

    """

    __slots__ = ("_index", "_items", "_length")

    def __init__(self, items: list[Any]) -> None:
        self._items = items
        self._length = len(items)
        self._index = 0

    def __iter__(self) -> Iterator[Any]:
        """Iterate through items, updating index for each."""
        for i, item in enumerate(self._items):
            self._index = i
            yield item

    @property
    def index(self) -> int:
        return self._index + 1

    @property
    def index0(self) -> int:
        return self._index

    @property
    def rindex(self) -> int:
        return self._length - self._index

    @property
    def rindex0(self) -> int:
        return self._length - self._index - 1

    @property
    def first(self) -> bool:
        return self._index == 0

    @property
    def last(self) -> bool:
        return self._index == self._length - 1

    @property
    def length(self) -> int:
        return self._length

    def __repr__(self) -> str:
        return f"<LoopContext {self.index}/{self.length}>"
