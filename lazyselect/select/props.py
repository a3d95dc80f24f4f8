"""Construction-time configuration for one select instance."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from .catalog import ItemCatalog, ItemToString
from .reducer import StateReducer
from .state import Changes, SelectState
from .transitions import highlighted_index_on_open
from .typeahead import DEFAULT_TYPEAHEAD_TIMEOUT_SECONDS


@dataclass(frozen=True)
class StateChange:
    """Payload passed to change callbacks after a dispatch.

    ``changes`` holds the fields whose newly computed value differs from the
    value in effect before the action, including fields the caller controls.
    """

    type: str
    changes: Changes
    state: SelectState


ChangeCallback = Callable[[StateChange], None]


@dataclass(frozen=True)
class SelectProps:
    """Everything a caller can configure on a :class:`SelectEngine`.

    ``initial_*`` values seed the first state; ``None`` falls back to the
    matching ``default_*`` value. ``default_*`` values are also what
    ``reset`` restores.
    """

    items: Sequence[Any] = ()
    item_to_string: ItemToString | None = None
    state_reducer: StateReducer | None = None
    circular_navigation: bool = True
    typeahead_timeout: float = DEFAULT_TYPEAHEAD_TIMEOUT_SECONDS
    clear_missing_selection: bool = False
    initial_is_open: bool | None = None
    initial_highlighted_index: int | None = None
    initial_selected_item: Any = None
    default_is_open: bool = False
    default_highlighted_index: int = -1
    default_selected_item: Any = None
    id: str | None = None
    on_state_change: ChangeCallback | None = None
    on_is_open_change: ChangeCallback | None = None
    on_highlighted_index_change: ChangeCallback | None = None
    on_selected_item_change: ChangeCallback | None = None

    def catalog(self) -> ItemCatalog:
        return ItemCatalog(self.items, self.item_to_string)

    def default_state(self) -> SelectState:
        return SelectState(
            is_open=self.default_is_open,
            highlighted_index=self.default_highlighted_index,
            selected_item=self.default_selected_item,
        )

    def initial_state(self, catalog: ItemCatalog) -> SelectState:
        """Build the first state; an initially open menu highlights per the opening rule."""
        is_open = self.default_is_open if self.initial_is_open is None else self.initial_is_open
        selected_item = (
            self.default_selected_item if self.initial_selected_item is None else self.initial_selected_item
        )
        state = SelectState(is_open=is_open, selected_item=selected_item)
        if self.initial_highlighted_index is not None:
            highlighted_index = self.initial_highlighted_index
        elif is_open:
            highlighted_index = highlighted_index_on_open(state, catalog)
        else:
            highlighted_index = self.default_highlighted_index
        return SelectState(is_open=is_open, highlighted_index=highlighted_index, selected_item=selected_item)
