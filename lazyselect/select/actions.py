"""Action vocabulary for the select state machine.

Tags are plain strings so callers can pattern-match on them and so future
tags pass through code that does not know them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ActionType(str, Enum):
    """Built-in action tags. Values are stable across versions."""

    TOGGLE_BUTTON_CLICK = "__togglebutton_click__"
    TOGGLE_BUTTON_KEYDOWN_ARROW_DOWN = "__togglebutton_keydown_arrow_down__"
    TOGGLE_BUTTON_KEYDOWN_ARROW_UP = "__togglebutton_keydown_arrow_up__"
    TOGGLE_BUTTON_KEYDOWN_CHARACTER = "__togglebutton_keydown_character__"
    MENU_KEYDOWN_ARROW_DOWN = "__menu_keydown_arrow_down__"
    MENU_KEYDOWN_ARROW_UP = "__menu_keydown_arrow_up__"
    MENU_KEYDOWN_HOME = "__menu_keydown_home__"
    MENU_KEYDOWN_END = "__menu_keydown_end__"
    MENU_KEYDOWN_ESCAPE = "__menu_keydown_escape__"
    MENU_KEYDOWN_ENTER = "__menu_keydown_enter__"
    MENU_KEYDOWN_SPACE_BUTTON = "__menu_keydown_space_button__"
    MENU_KEYDOWN_CHARACTER = "__menu_keydown_character__"
    MENU_BLUR = "__menu_blur__"
    MENU_MOUSE_LEAVE = "__menu_mouse_leave__"
    ITEM_MOUSE_MOVE = "__item_mouse_move__"
    ITEM_CLICK = "__item_click__"
    FUNCTION_TOGGLE_MENU = "__function_toggle_menu__"
    FUNCTION_OPEN_MENU = "__function_open_menu__"
    FUNCTION_CLOSE_MENU = "__function_close_menu__"
    FUNCTION_SET_HIGHLIGHTED_INDEX = "__function_set_highlighted_index__"
    FUNCTION_SELECT_ITEM = "__function_select_item__"
    FUNCTION_RESET = "__function_reset__"
    FUNCTION_RESET_KEYS_SO_FAR = "__function_reset_keys_so_far__"

    def __str__(self) -> str:
        return self.value


# Sets hold plain string values; enum members hash by name, not value.
CHARACTER_ACTIONS = frozenset(
    {
        ActionType.MENU_KEYDOWN_CHARACTER.value,
        ActionType.TOGGLE_BUTTON_KEYDOWN_CHARACTER.value,
    }
)

# Actions that leave the typeahead buffer (and its timer) alone.
KEYS_SO_FAR_PRESERVING_ACTIONS = CHARACTER_ACTIONS | {
    ActionType.MENU_BLUR.value,
    ActionType.FUNCTION_RESET_KEYS_SO_FAR.value,
}


@dataclass(frozen=True)
class Action:
    """One discrete input event.

    Only the payload field relevant to ``type`` is populated: ``key`` for
    character input, ``index`` for hover/click/highlight setters, ``item`` for
    programmatic selection, ``generation`` for the typeahead idle timer.
    """

    type: str
    key: str | None = None
    index: int | None = None
    item: Any = None
    generation: int | None = None


def action_type_of(action: Action) -> str:
    """Return the tag of ``action`` as a plain string."""
    return str(action.type)


def toggle_button_click() -> Action:
    return Action(ActionType.TOGGLE_BUTTON_CLICK)


def toggle_button_arrow_down() -> Action:
    return Action(ActionType.TOGGLE_BUTTON_KEYDOWN_ARROW_DOWN)


def toggle_button_arrow_up() -> Action:
    return Action(ActionType.TOGGLE_BUTTON_KEYDOWN_ARROW_UP)


def toggle_button_character(key: str) -> Action:
    return Action(ActionType.TOGGLE_BUTTON_KEYDOWN_CHARACTER, key=key)


def arrow_down() -> Action:
    return Action(ActionType.MENU_KEYDOWN_ARROW_DOWN)


def arrow_up() -> Action:
    return Action(ActionType.MENU_KEYDOWN_ARROW_UP)


def home() -> Action:
    return Action(ActionType.MENU_KEYDOWN_HOME)


def end() -> Action:
    return Action(ActionType.MENU_KEYDOWN_END)


def escape() -> Action:
    return Action(ActionType.MENU_KEYDOWN_ESCAPE)


def enter() -> Action:
    return Action(ActionType.MENU_KEYDOWN_ENTER)


def space() -> Action:
    return Action(ActionType.MENU_KEYDOWN_SPACE_BUTTON)


def character(key: str) -> Action:
    return Action(ActionType.MENU_KEYDOWN_CHARACTER, key=key)


def blur() -> Action:
    return Action(ActionType.MENU_BLUR)


def mouse_leave() -> Action:
    return Action(ActionType.MENU_MOUSE_LEAVE)


def item_mouse_move(index: int) -> Action:
    return Action(ActionType.ITEM_MOUSE_MOVE, index=index)


def item_click(index: int) -> Action:
    return Action(ActionType.ITEM_CLICK, index=index)


def toggle_menu() -> Action:
    return Action(ActionType.FUNCTION_TOGGLE_MENU)


def open_menu() -> Action:
    return Action(ActionType.FUNCTION_OPEN_MENU)


def close_menu() -> Action:
    return Action(ActionType.FUNCTION_CLOSE_MENU)


def set_highlighted_index(index: int) -> Action:
    return Action(ActionType.FUNCTION_SET_HIGHLIGHTED_INDEX, index=index)


def select_item(item: Any) -> Action:
    return Action(ActionType.FUNCTION_SELECT_ITEM, item=item)


def reset() -> Action:
    return Action(ActionType.FUNCTION_RESET)


def reset_keys_so_far(generation: int | None = None) -> Action:
    return Action(ActionType.FUNCTION_RESET_KEYS_SO_FAR, generation=generation)
