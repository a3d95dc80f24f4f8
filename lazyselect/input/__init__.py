"""Input-layer public API for key decoding and action classification.

Exports are split between low-level terminal decoding (`read_key`) and the
binding tables that turn key tokens into select actions.
"""

from .bindings import (
    FOCUS_MENU,
    FOCUS_OUTSIDE,
    FOCUS_TOGGLE,
    KeyContext,
    MouseGeometry,
    action_for_key,
    action_for_mouse,
    item_index_at,
    parse_mouse_col_row,
)
from .keymap import ActionKeymap, KeyBinding
from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_key

__all__ = [
    "read_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "ActionKeymap",
    "KeyBinding",
    "FOCUS_MENU",
    "FOCUS_OUTSIDE",
    "FOCUS_TOGGLE",
    "KeyContext",
    "MouseGeometry",
    "action_for_key",
    "action_for_mouse",
    "item_index_at",
    "parse_mouse_col_row",
]
