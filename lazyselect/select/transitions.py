"""Default transition table: ``(state, action) -> Changes``.

Every handler is pure and returns a fresh partial update. Unknown action tags
map to an empty update so new tags never break existing callers.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from .actions import KEYS_SO_FAR_PRESERVING_ACTIONS, Action, ActionType, action_type_of
from .catalog import ItemCatalog
from .state import Changes, SelectState
from .typeahead import append_key, find_match_index

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransitionContext:
    """Read-only inputs a transition may consult besides the state itself."""

    catalog: ItemCatalog
    circular: bool = True
    defaults: SelectState = field(default_factory=SelectState)


Handler = Callable[[SelectState, Action, TransitionContext], Changes]


def highlighted_index_on_open(state: SelectState, catalog: ItemCatalog) -> int:
    """Selected item's index if present, else ``0`` (``-1`` for an empty catalog)."""
    selected_index = catalog.index_of(state.selected_item)
    if selected_index >= 0:
        return selected_index
    return 0 if len(catalog) else -1


def step_index(current: int, delta: int, count: int, *, circular: bool) -> int:
    """Move ``current`` by ``delta`` within ``count`` items.

    From ``-1`` a downward step lands on the first item and an upward step on
    the last one. Without ``circular`` the result is clamped to the ends.
    """
    if count <= 0:
        return -1
    if not 0 <= current < count:
        return 0 if delta > 0 else count - 1
    target = current + delta
    if circular:
        return target % count
    return max(0, min(target, count - 1))


def _opened(state: SelectState, ctx: TransitionContext) -> Changes:
    return {"is_open": True, "highlighted_index": highlighted_index_on_open(state, ctx.catalog)}


def _closed() -> Changes:
    return {"is_open": False, "highlighted_index": -1}


def _toggle(state: SelectState, action: Action, ctx: TransitionContext) -> Changes:
    if state.is_open:
        return _closed()
    return _opened(state, ctx)


def _open(state: SelectState, action: Action, ctx: TransitionContext) -> Changes:
    if state.is_open:
        return {"is_open": True}
    return _opened(state, ctx)


def _close(state: SelectState, action: Action, ctx: TransitionContext) -> Changes:
    return _closed()


def _arrow(delta: int) -> Handler:
    def handler(state: SelectState, action: Action, ctx: TransitionContext) -> Changes:
        if not state.is_open:
            return _opened(state, ctx)
        if ctx.catalog.is_empty():
            return {}
        return {
            "highlighted_index": step_index(
                state.highlighted_index,
                delta,
                len(ctx.catalog),
                circular=ctx.circular,
            )
        }

    return handler


def _home(state: SelectState, action: Action, ctx: TransitionContext) -> Changes:
    if ctx.catalog.is_empty():
        return {}
    return {"highlighted_index": 0}


def _end(state: SelectState, action: Action, ctx: TransitionContext) -> Changes:
    if ctx.catalog.is_empty():
        return {}
    return {"highlighted_index": ctx.catalog.last_index()}


def _escape(state: SelectState, action: Action, ctx: TransitionContext) -> Changes:
    return _closed()


def _commit_highlighted(state: SelectState, action: Action, ctx: TransitionContext) -> Changes:
    if not state.is_open or not ctx.catalog.is_valid_index(state.highlighted_index):
        return {}
    return {
        "selected_item": ctx.catalog[state.highlighted_index],
        "is_open": False,
        "highlighted_index": -1,
    }


def _menu_character(state: SelectState, action: Action, ctx: TransitionContext) -> Changes:
    keys_so_far = append_key(state.keys_so_far, action.key)
    if keys_so_far == state.keys_so_far:
        logger.debug("ignoring non-printable typeahead key %r", action.key)
        return {}
    changes: Changes = {"keys_so_far": keys_so_far}
    match_index = find_match_index(ctx.catalog, keys_so_far, state.highlighted_index)
    if match_index >= 0:
        changes["highlighted_index"] = match_index
    return changes


def _toggle_character(state: SelectState, action: Action, ctx: TransitionContext) -> Changes:
    keys_so_far = append_key(state.keys_so_far, action.key)
    if keys_so_far == state.keys_so_far:
        logger.debug("ignoring non-printable typeahead key %r", action.key)
        return {}
    changes: Changes = {"keys_so_far": keys_so_far}
    start_index = ctx.catalog.index_of(state.selected_item)
    match_index = find_match_index(ctx.catalog, keys_so_far, start_index)
    if match_index >= 0:
        changes["selected_item"] = ctx.catalog[match_index]
    return changes


def _item_mouse_move(state: SelectState, action: Action, ctx: TransitionContext) -> Changes:
    if action.index is None or not ctx.catalog.is_valid_index(action.index):
        return {}
    return {"highlighted_index": action.index}


def _mouse_leave(state: SelectState, action: Action, ctx: TransitionContext) -> Changes:
    return {"highlighted_index": -1}


def _item_click(state: SelectState, action: Action, ctx: TransitionContext) -> Changes:
    if action.index is None or not ctx.catalog.is_valid_index(action.index):
        logger.debug("ignoring click on invalid index %r", action.index)
        return {}
    return {
        "selected_item": ctx.catalog[action.index],
        "is_open": False,
        "highlighted_index": -1,
    }


def _blur(state: SelectState, action: Action, ctx: TransitionContext) -> Changes:
    return _closed()


def _set_highlighted_index(state: SelectState, action: Action, ctx: TransitionContext) -> Changes:
    index = -1 if action.index is None else action.index
    return {"highlighted_index": ctx.catalog.clamp_index(index)}


def _select_item(state: SelectState, action: Action, ctx: TransitionContext) -> Changes:
    if action.item is not None and not ctx.catalog.contains(action.item):
        logger.debug("ignoring selection of item %r missing from catalog", action.item)
        return {}
    return {"selected_item": action.item}


def _reset(state: SelectState, action: Action, ctx: TransitionContext) -> Changes:
    defaults = ctx.defaults
    return {
        "is_open": defaults.is_open,
        "highlighted_index": defaults.highlighted_index,
        "selected_item": defaults.selected_item,
        "keys_so_far": "",
    }


def _reset_keys_so_far(state: SelectState, action: Action, ctx: TransitionContext) -> Changes:
    return {"keys_so_far": ""}


TRANSITIONS: dict[str, Handler] = {
    ActionType.TOGGLE_BUTTON_CLICK.value: _toggle,
    ActionType.TOGGLE_BUTTON_KEYDOWN_ARROW_DOWN.value: _arrow(1),
    ActionType.TOGGLE_BUTTON_KEYDOWN_ARROW_UP.value: _arrow(-1),
    ActionType.TOGGLE_BUTTON_KEYDOWN_CHARACTER.value: _toggle_character,
    ActionType.MENU_KEYDOWN_ARROW_DOWN.value: _arrow(1),
    ActionType.MENU_KEYDOWN_ARROW_UP.value: _arrow(-1),
    ActionType.MENU_KEYDOWN_HOME.value: _home,
    ActionType.MENU_KEYDOWN_END.value: _end,
    ActionType.MENU_KEYDOWN_ESCAPE.value: _escape,
    ActionType.MENU_KEYDOWN_ENTER.value: _commit_highlighted,
    ActionType.MENU_KEYDOWN_SPACE_BUTTON.value: _commit_highlighted,
    ActionType.MENU_KEYDOWN_CHARACTER.value: _menu_character,
    ActionType.MENU_BLUR.value: _blur,
    ActionType.MENU_MOUSE_LEAVE.value: _mouse_leave,
    ActionType.ITEM_MOUSE_MOVE.value: _item_mouse_move,
    ActionType.ITEM_CLICK.value: _item_click,
    ActionType.FUNCTION_TOGGLE_MENU.value: _toggle,
    ActionType.FUNCTION_OPEN_MENU.value: _open,
    ActionType.FUNCTION_CLOSE_MENU.value: _close,
    ActionType.FUNCTION_SET_HIGHLIGHTED_INDEX.value: _set_highlighted_index,
    ActionType.FUNCTION_SELECT_ITEM.value: _select_item,
    ActionType.FUNCTION_RESET.value: _reset,
    ActionType.FUNCTION_RESET_KEYS_SO_FAR.value: _reset_keys_so_far,
}


def transition(
    state: SelectState,
    action: Action,
    catalog: ItemCatalog,
    *,
    circular: bool = True,
    defaults: SelectState | None = None,
) -> Changes:
    """Compute the default changes for ``action`` without touching ``state``.

    Known actions other than character keys, blur, and the typeahead reset also
    clear a non-empty ``keys_so_far``.
    """
    action_type = action_type_of(action)
    handler = TRANSITIONS.get(action_type)
    if handler is None:
        logger.debug("no default transition for action type %r", action_type)
        return {}
    ctx = TransitionContext(
        catalog=catalog,
        circular=circular,
        defaults=defaults if defaults is not None else SelectState(),
    )
    changes = handler(state, action, ctx)
    if state.keys_so_far and action_type not in KEYS_SO_FAR_PRESERVING_ACTIONS:
        changes.setdefault("keys_so_far", "")
    return changes
