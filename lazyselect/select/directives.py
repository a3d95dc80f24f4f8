"""Post-transition directives for focus, scrolling, and announcements.

Directives are derived from the published state delta only; executing them
is left to an adapter (see ``lazyselect.runtime.effects``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .actions import ActionType
from .catalog import ItemCatalog
from .state import SelectState


@dataclass(frozen=True)
class FocusToggle:
    """Return focus to the toggle button."""


@dataclass(frozen=True)
class FocusMenu:
    """Move focus into the list container."""


@dataclass(frozen=True)
class ScrollItemIntoView:
    index: int


@dataclass(frozen=True)
class AnnounceSelection:
    text: str


@dataclass(frozen=True)
class AnnounceStatus:
    text: str


Directive = Union[FocusToggle, FocusMenu, ScrollItemIntoView, AnnounceSelection, AnnounceStatus]


def selection_message(label: str) -> str:
    return f"{label} has been selected."


def status_message(result_count: int) -> str:
    """Describe the opened list for screen readers."""
    if result_count <= 0:
        return "No results are available."
    noun = "result is" if result_count == 1 else "results are"
    return (
        f"{result_count} {noun} available, use up and down arrow keys to navigate. "
        "Press Enter or Space Bar keys to select."
    )


def emit_directives(
    prev: SelectState,
    next_state: SelectState,
    catalog: ItemCatalog,
    *,
    action_type: str | None = None,
) -> list[Directive]:
    """Return the directives implied by moving from ``prev`` to ``next_state``.

    A close caused by blur does not pull focus back to the toggle, since focus
    has already moved elsewhere.
    """
    directives: list[Directive] = []
    opened = next_state.is_open and not prev.is_open
    closed = prev.is_open and not next_state.is_open

    if closed and action_type != ActionType.MENU_BLUR:
        directives.append(FocusToggle())
    if opened:
        directives.append(FocusMenu())
        directives.append(AnnounceStatus(status_message(len(catalog))))

    if next_state.is_open and next_state.highlighted_index >= 0:
        if opened or next_state.highlighted_index != prev.highlighted_index:
            directives.append(ScrollItemIntoView(next_state.highlighted_index))

    if next_state.selected_item is not None and next_state.selected_item != prev.selected_item:
        directives.append(AnnounceSelection(selection_message(catalog.label_for(next_state.selected_item))))
    return directives
