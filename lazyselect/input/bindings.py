"""Classify terminal key and mouse tokens into select actions.

Which action a key raises depends on where focus is (toggle button or list)
and, for Space, on whether a typeahead sequence is in progress.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..select import actions
from ..select.actions import Action
from .keymap import ActionKeymap, KeyBinding

FOCUS_TOGGLE = "toggle"
FOCUS_MENU = "menu"
FOCUS_OUTSIDE = "outside"


@dataclass(frozen=True)
class KeyContext:
    """View facts the key classifier needs."""

    focus: str
    keys_so_far: str = ""


@dataclass(frozen=True)
class MouseGeometry:
    """Screen rows (1-based) occupied by the toggle and the visible list slice."""

    toggle_row: int
    list_first_row: int
    list_start: int
    visible_count: int
    is_open: bool
    max_col: int
    highlighted_index: int = -1


def _toggle_keymap() -> ActionKeymap:
    return ActionKeymap().bind_all(
        KeyBinding(("DOWN",), actions.toggle_button_arrow_down),
        KeyBinding(("UP",), actions.toggle_button_arrow_up),
        KeyBinding(("ENTER", " "), actions.toggle_button_click),
    )


def _menu_keymap() -> ActionKeymap:
    return ActionKeymap().bind_all(
        KeyBinding(("DOWN",), actions.arrow_down),
        KeyBinding(("UP",), actions.arrow_up),
        KeyBinding(("HOME", "PAGE_UP"), actions.home),
        KeyBinding(("END", "PAGE_DOWN"), actions.end),
        KeyBinding(("ESC",), actions.escape),
        KeyBinding(("ENTER",), actions.enter),
        KeyBinding((" ",), actions.space),
        KeyBinding(("TAB", "SHIFT_TAB"), actions.blur),
    )


TOGGLE_KEYMAP = _toggle_keymap()
MENU_KEYMAP = _menu_keymap()


def _is_character_key(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


def action_for_key(key: str, context: KeyContext) -> Action | None:
    """Return the action for ``key`` given the current focus, or ``None``."""
    if context.focus == FOCUS_MENU:
        if key == " " and context.keys_so_far:
            # Space inside a typeahead run is part of the label being typed.
            return actions.character(key)
        bound = MENU_KEYMAP.lookup(key)
        if bound is not None:
            return bound
        if _is_character_key(key):
            return actions.character(key)
        return None
    if context.focus == FOCUS_TOGGLE:
        bound = TOGGLE_KEYMAP.lookup(key)
        if bound is not None:
            return bound
        if _is_character_key(key):
            return actions.toggle_button_character(key)
    return None


def parse_mouse_col_row(mouse_key: str) -> tuple[int | None, int | None]:
    """Parse ``MOUSE_*:col:row`` key tokens into integer coordinates."""
    parts = mouse_key.split(":")
    if len(parts) < 3:
        return None, None
    try:
        return int(parts[1]), int(parts[2])
    except ValueError:
        return None, None


def item_index_at(row: int, geometry: MouseGeometry) -> int:
    """Return the catalog index drawn at screen ``row``, or ``-1``."""
    if not geometry.is_open:
        return -1
    offset = row - geometry.list_first_row
    if not 0 <= offset < geometry.visible_count:
        return -1
    return geometry.list_start + offset


def action_for_mouse(key: str, geometry: MouseGeometry) -> Action | None:
    """Map a mouse token to hover, click, leave, or blur actions."""
    col, row = parse_mouse_col_row(key)
    if col is None or row is None:
        return None
    inside = col <= geometry.max_col
    index = item_index_at(row, geometry) if inside else -1
    if key.startswith("MOUSE_LEFT_DOWN:"):
        if inside and row == geometry.toggle_row:
            return actions.toggle_button_click()
        if index >= 0:
            return actions.item_click(index)
        if geometry.is_open:
            return actions.blur()
        return None
    if key.startswith("MOUSE_MOVE:"):
        if index >= 0:
            return actions.item_mouse_move(index)
        if geometry.is_open and geometry.highlighted_index >= 0:
            return actions.mouse_leave()
        return None
    if key.startswith("MOUSE_WHEEL_UP:") and geometry.is_open:
        return actions.arrow_up()
    if key.startswith("MOUSE_WHEEL_DOWN:") and geometry.is_open:
        return actions.arrow_down()
    return None
