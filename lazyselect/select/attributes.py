"""Accessibility attribute projection for the four select roles.

``project`` is a pure function of the state; values are strings so they can
be handed to any markup or widget layer unchanged.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass

from .catalog import ItemCatalog
from .state import SelectState

Attributes = dict[str, str]

_ID_COUNTER = itertools.count()


def generate_id(prefix: str = "lazyselect") -> str:
    """Return a process-unique id prefix such as ``lazyselect-3``."""
    return f"{prefix}-{next(_ID_COUNTER)}"


@dataclass(frozen=True)
class ElementIds:
    """Stable identifiers shared by the label, toggle, menu, and items."""

    base: str

    @property
    def label(self) -> str:
        return f"{self.base}-label"

    @property
    def toggle_button(self) -> str:
        return f"{self.base}-toggle-button"

    @property
    def menu(self) -> str:
        return f"{self.base}-menu"

    def item(self, index: int) -> str:
        return f"{self.base}-item-{index}"


@dataclass(frozen=True)
class AttributeSets:
    label: Attributes
    toggle: Attributes
    menu: Attributes
    items: tuple[Attributes, ...]

    def item(self, index: int) -> Attributes:
        """Return attributes for item ``index``; raises ``IndexError`` when out of range."""
        if not 0 <= index < len(self.items):
            raise IndexError(f"item index out of range: {index}")
        return self.items[index]


def _flag(value: bool) -> str:
    return "true" if value else "false"


def label_attributes(ids: ElementIds) -> Attributes:
    return {"id": ids.label, "for": ids.toggle_button, "aria-controls": ids.menu}


def toggle_attributes(state: SelectState, ids: ElementIds) -> Attributes:
    attrs: Attributes = {
        "id": ids.toggle_button,
        "role": "button",
        "aria-haspopup": "listbox",
        "aria-expanded": _flag(state.is_open),
        "aria-labelledby": ids.label,
    }
    if state.is_open:
        attrs["aria-controls"] = ids.menu
    return attrs


def menu_attributes(state: SelectState, catalog: ItemCatalog, ids: ElementIds) -> Attributes:
    attrs: Attributes = {
        "id": ids.menu,
        "role": "listbox",
        "aria-labelledby": ids.label,
        "tabindex": "0" if state.is_open else "-1",
    }
    if state.is_open and catalog.is_valid_index(state.highlighted_index):
        attrs["aria-activedescendant"] = ids.item(state.highlighted_index)
    return attrs


def item_attributes(
    state: SelectState,
    catalog: ItemCatalog,
    ids: ElementIds,
    index: int,
    selected_index: int | None = None,
) -> Attributes:
    if selected_index is None:
        selected_index = catalog.index_of(state.selected_item)
    return {
        "id": ids.item(index),
        "role": "option",
        "aria-selected": _flag(index == selected_index),
        "aria-posinset": str(index + 1),
        "aria-setsize": str(len(catalog)),
        "data-highlighted": _flag(index == state.highlighted_index),
        "data-menu-id": ids.menu,
    }


def project(state: SelectState, catalog: ItemCatalog, ids: ElementIds) -> AttributeSets:
    """Return attribute sets for every role given the current state."""
    selected_index = catalog.index_of(state.selected_item)
    return AttributeSets(
        label=label_attributes(ids),
        toggle=toggle_attributes(state, ids),
        menu=menu_attributes(state, catalog, ids),
        items=tuple(
            item_attributes(state, catalog, ids, index, selected_index) for index in range(len(catalog))
        ),
    )
