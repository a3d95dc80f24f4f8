"""Playground wiring: settings, engine construction, and example reducers."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from ..select import SelectEngine, SelectProps, SelectState, StateChangeOptions
from ..select.actions import ActionType
from ..select.catalog import ItemCatalog
from ..select.reducer import StateReducer
from ..select.state import Changes
from ..select.transitions import step_index
from . import config

logger = logging.getLogger(__name__)

_CLOSED_ARROW_STEPS = {
    ActionType.TOGGLE_BUTTON_KEYDOWN_ARROW_DOWN.value: 1,
    ActionType.TOGGLE_BUTTON_KEYDOWN_ARROW_UP.value: -1,
}


def make_windows_style_reducer(catalog: Callable[[], ItemCatalog]) -> StateReducer:
    """Return a reducer where closed-toggle arrows change the selection in place.

    Mirrors a native Windows combo box: the list stays closed and the
    selection stops at the first and last items. ``catalog`` is called per
    action so the reducer follows catalog replacements.
    """

    def windows_style_reducer(state: SelectState, options: StateChangeOptions) -> Changes:
        delta = _CLOSED_ARROW_STEPS.get(str(options.type))
        if delta is None or state.is_open:
            return options.changes
        items = catalog()
        if items.is_empty():
            return {}
        current = items.index_of(state.selected_item)
        target = step_index(current, delta, len(items), circular=False)
        return {"selected_item": items[target], "keys_so_far": ""}

    return windows_style_reducer


@dataclass(frozen=True)
class PlaygroundSettings:
    """Resolved playground options (CLI flags over persisted config)."""

    label: str = "Choose an item:"
    theme_name: str | None = None
    no_color: bool = False
    windows_style: bool = False
    circular_navigation: bool = True
    typeahead_timeout_ms: int = config.DEFAULT_TYPEAHEAD_TIMEOUT_MS
    initial_selected_item: Any = None


def resolve_settings(
    *,
    label: str | None = None,
    theme_name: str | None = None,
    no_color: bool = False,
    windows_style: bool = False,
    circular_navigation: bool | None = None,
    typeahead_timeout_ms: int | None = None,
    initial_selected_item: Any = None,
) -> PlaygroundSettings:
    """Fill options the caller left unset from the persisted config."""
    return PlaygroundSettings(
        label=label if label else PlaygroundSettings.label,
        theme_name=theme_name if theme_name is not None else config.load_theme_name(),
        no_color=no_color,
        windows_style=windows_style,
        circular_navigation=(
            circular_navigation if circular_navigation is not None else config.load_circular_navigation()
        ),
        typeahead_timeout_ms=(
            typeahead_timeout_ms if typeahead_timeout_ms is not None else config.load_typeahead_timeout_ms()
        ),
        initial_selected_item=initial_selected_item,
    )


def build_engine(
    items: Sequence[Any],
    settings: PlaygroundSettings,
    *,
    clock: Callable[[], float] | None = None,
) -> SelectEngine:
    """Create the engine the playground drives."""
    engine_ref: list[SelectEngine] = []
    state_reducer = None
    if settings.windows_style:
        state_reducer = make_windows_style_reducer(lambda: engine_ref[0].catalog)
    props = SelectProps(
        items=tuple(items),
        state_reducer=state_reducer,
        circular_navigation=settings.circular_navigation,
        typeahead_timeout=settings.typeahead_timeout_ms / 1000.0,
        initial_selected_item=settings.initial_selected_item,
        id="lazyselect-playground",
    )
    engine = SelectEngine(props, clock=clock)
    engine_ref.append(engine)
    logger.debug(
        "playground engine: %d items, windows_style=%s, circular=%s",
        len(engine.catalog),
        settings.windows_style,
        settings.circular_navigation,
    )
    return engine
