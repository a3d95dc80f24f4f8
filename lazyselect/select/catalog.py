"""Ordered item catalog with label lookup.

Items are opaque caller values; identity is positional for one catalog
snapshot and value-based (``==``) when looking an item up again.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from typing import Any

ItemToString = Callable[[Any], str]


def default_item_to_string(item: Any) -> str:
    """Return ``""`` for ``None`` and ``str(item)`` otherwise."""
    if item is None:
        return ""
    return str(item)


class ItemCatalog:
    """Immutable snapshot of selectable items plus their text labels."""

    __slots__ = ("_items", "_item_to_string")

    def __init__(self, items: Sequence[Any] = (), item_to_string: ItemToString | None = None) -> None:
        self._items: tuple[Any, ...] = tuple(items)
        self._item_to_string = item_to_string if item_to_string is not None else default_item_to_string

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __getitem__(self, index: int) -> Any:
        return self._items[index]

    def __repr__(self) -> str:
        return f"ItemCatalog({list(self._items)!r})"

    @property
    def items(self) -> tuple[Any, ...]:
        return self._items

    @property
    def item_to_string(self) -> ItemToString:
        return self._item_to_string

    def is_empty(self) -> bool:
        return not self._items

    def last_index(self) -> int:
        """Return the last valid index, or ``-1`` for an empty catalog."""
        return len(self._items) - 1

    def is_valid_index(self, index: int) -> bool:
        return 0 <= index < len(self._items)

    def clamp_index(self, index: int) -> int:
        """Clamp ``index`` into ``[-1, n-1]``."""
        return max(-1, min(index, self.last_index()))

    def index_of(self, item: Any) -> int:
        """Return the first index whose item equals ``item``, else ``-1``."""
        if item is None:
            return -1
        for index, candidate in enumerate(self._items):
            if candidate == item:
                return index
        return -1

    def contains(self, item: Any) -> bool:
        return self.index_of(item) >= 0

    def label(self, index: int) -> str:
        """Return the text label of the item at ``index`` (``""`` when out of range)."""
        if not self.is_valid_index(index):
            return ""
        return self.label_for(self._items[index])

    def label_for(self, item: Any) -> str:
        """Return ``item_to_string(item)``, coercing non-string results."""
        text = self._item_to_string(item)
        return text if isinstance(text, str) else default_item_to_string(text)

    def replace(self, items: Sequence[Any]) -> ItemCatalog:
        """Return a new catalog with ``items`` and the same label function."""
        return ItemCatalog(items, self._item_to_string)
