"""Terminal adapter that carries out engine directives.

The engine only says *that* focus should move, an item should be scrolled
into view, or text should be announced. This module applies those requests
to the playground's view state.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from ..input.bindings import FOCUS_MENU, FOCUS_TOGGLE
from ..select.directives import (
    AnnounceSelection,
    AnnounceStatus,
    Directive,
    FocusMenu,
    FocusToggle,
    ScrollItemIntoView,
)

logger = logging.getLogger(__name__)

ANNOUNCEMENT_SECONDS = 3.0
MAX_ANNOUNCEMENT_HISTORY = 50


@dataclass
class ViewState:
    """Presentation state owned by the playground, never by the engine."""

    focus: str = FOCUS_TOGGLE
    list_start: int = 0
    visible_rows: int = 8
    status_message: str = ""
    status_message_until: float = 0.0
    announcements: list[str] = field(default_factory=list)
    show_help: bool = False
    dirty: bool = True


def scroll_start_for(index: int, list_start: int, visible_rows: int) -> int:
    """Smallest viewport move that brings ``index`` into ``visible_rows`` rows."""
    rows = max(1, visible_rows)
    if index < list_start:
        return max(0, index)
    if index >= list_start + rows:
        return max(0, index - rows + 1)
    return list_start


class DirectiveAdapter:
    """Apply directives to a :class:`ViewState`."""

    def __init__(self, view: ViewState, clock: Callable[[], float] | None = None) -> None:
        self.view = view
        self._clock = clock if clock is not None else time.monotonic

    def announce(self, text: str) -> None:
        view = self.view
        view.status_message = text
        view.status_message_until = self._clock() + ANNOUNCEMENT_SECONDS
        view.announcements.append(text)
        overflow = len(view.announcements) - MAX_ANNOUNCEMENT_HISTORY
        if overflow > 0:
            del view.announcements[:overflow]
        logger.info("announce: %s", text)

    def apply(self, directives: Iterable[Directive]) -> None:
        view = self.view
        for directive in directives:
            if isinstance(directive, FocusToggle):
                view.focus = FOCUS_TOGGLE
            elif isinstance(directive, FocusMenu):
                view.focus = FOCUS_MENU
            elif isinstance(directive, ScrollItemIntoView):
                view.list_start = scroll_start_for(directive.index, view.list_start, view.visible_rows)
            elif isinstance(directive, (AnnounceSelection, AnnounceStatus)):
                self.announce(directive.text)
            else:
                logger.debug("no adapter for directive %r", directive)
                continue
            view.dirty = True

    def expire_status(self, now: float | None = None) -> None:
        """Clear the status line once its display window has passed."""
        view = self.view
        current = self._clock() if now is None else now
        if view.status_message and current >= view.status_message_until:
            view.status_message = ""
            view.status_message_until = 0.0
            view.dirty = True
