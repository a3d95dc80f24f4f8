"""Main interactive event loop for the dropdown playground.

Each iteration expires timed state (status line, typeahead buffer), renders
when dirty, then reads one key token and dispatches it. Waiting for input is
bounded by the nearest pending deadline so the typeahead reset fires on time.
"""

from __future__ import annotations

import logging
import shutil
import time
from collections.abc import Callable
from dataclasses import dataclass

from ..input import (
    FOCUS_MENU,
    FOCUS_OUTSIDE,
    FOCUS_TOGGLE,
    KeyContext,
    MouseGeometry,
    action_for_key,
    action_for_mouse,
    read_key,
)
from ..render import LIST_FIRST_ROW, RenderContext, mouse_geometry, render_frame
from ..select import SelectEngine
from ..select.actions import Action, ActionType, action_type_of
from ..ui_theme import UITheme
from .effects import DirectiveAdapter, ViewState
from .terminal import TerminalController

logger = logging.getLogger(__name__)

# Rows below the list: blank separator, typeahead echo, status line.
_FOOTER_ROWS = 3


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    idle_poll_ms: int = 250


@dataclass(frozen=True)
class PlaygroundView:
    """Static presentation inputs for one playground session."""

    label: str
    theme: UITheme
    windows_style: bool = False


def build_render_context(
    engine: SelectEngine,
    view: ViewState,
    presentation: PlaygroundView,
    width: int,
    height: int,
) -> RenderContext:
    state = engine.state
    catalog = engine.catalog
    return RenderContext(
        label=presentation.label,
        labels=[catalog.label(index) for index in range(len(catalog))],
        is_open=state.is_open,
        highlighted_index=state.highlighted_index,
        selected_index=catalog.index_of(state.selected_item),
        selected_label=engine.selected_label(),
        keys_so_far=state.keys_so_far,
        focus=view.focus,
        list_start=view.list_start,
        visible_rows=view.visible_rows,
        status_message=view.status_message,
        show_help=view.show_help,
        width=width,
        height=height,
        theme=presentation.theme,
        windows_style=presentation.windows_style,
    )


def handle_key(
    key: str,
    engine: SelectEngine,
    adapter: DirectiveAdapter,
    geometry: MouseGeometry,
) -> bool:
    """Dispatch one key token. Return ``True`` when the session should end."""
    view = adapter.view
    if key in {"CTRL_C", "CTRL_D"}:
        return True
    if key == "CTRL_QUESTION":
        view.show_help = not view.show_help
        view.dirty = True
        return False
    if key == "CTRL_R":
        adapter.apply(engine.reset())
        view.list_start = 0
        view.dirty = True
        return False

    action: Action | None
    if key.startswith("MOUSE_"):
        action = action_for_mouse(key, geometry)
        if action is not None and view.focus == FOCUS_OUTSIDE:
            # Clicking back into the control gives the toggle focus first.
            view.focus = FOCUS_TOGGLE
    elif view.focus == FOCUS_OUTSIDE:
        if key in {"TAB", "SHIFT_TAB"}:
            view.focus = FOCUS_TOGGLE
            view.dirty = True
        return False
    elif view.focus == FOCUS_TOGGLE and key in {"TAB", "SHIFT_TAB"} and not engine.state.is_open:
        view.focus = FOCUS_OUTSIDE
        view.dirty = True
        return False
    else:
        action = action_for_key(key, KeyContext(view.focus, engine.state.keys_so_far))

    if action is None:
        return False
    logger.debug("key %r -> %s", key, action.type)
    adapter.apply(engine.dispatch(action))
    if action_type_of(action) == ActionType.MENU_BLUR:
        view.focus = FOCUS_OUTSIDE
    elif view.focus == FOCUS_MENU and not engine.state.is_open:
        # A reducer may keep the menu closed without a close transition.
        view.focus = FOCUS_TOGGLE
    view.dirty = True
    return False


def _input_timeout_ms(engine: SelectEngine, view: ViewState, now: float, timing: RuntimeLoopTiming) -> int:
    waits = [timing.idle_poll_ms / 1000.0]
    deadline = engine.next_deadline()
    if deadline is not None:
        waits.append(deadline - now)
    if view.status_message:
        waits.append(view.status_message_until - now)
    return max(0, int(min(waits) * 1000) + 1)


def run_main_loop(
    engine: SelectEngine,
    view: ViewState,
    presentation: PlaygroundView,
    terminal: TerminalController,
    stdin_fd: int,
    timing: RuntimeLoopTiming | None = None,
    clock: Callable[[], float] | None = None,
) -> None:
    """Run the playground until a quit key arrives."""
    timing = timing or RuntimeLoopTiming()
    now_fn = clock or time.monotonic
    adapter = DirectiveAdapter(view, now_fn)
    if engine.state.is_open:
        view.focus = FOCUS_MENU

    with terminal.raw_mode():
        while True:
            term = shutil.get_terminal_size((80, 24))
            terminal.set_mouse_reporting(True)
            visible_rows = max(1, term.lines - LIST_FIRST_ROW - _FOOTER_ROWS)
            if visible_rows != view.visible_rows:
                view.visible_rows = visible_rows
                view.dirty = True

            now = now_fn()
            adapter.expire_status(now)
            adapter.apply(engine.tick(now))

            context = build_render_context(engine, view, presentation, term.columns, term.lines)
            if view.dirty:
                render_frame(context, terminal.stdout_fd)
                view.dirty = False

            try:
                key = read_key(stdin_fd, timeout_ms=_input_timeout_ms(engine, view, now, timing))
            except KeyboardInterrupt:
                break
            if key == "":
                continue
            if handle_key(key, engine, adapter, mouse_geometry(context)):
                break
    logger.info("playground closed with selection %r", engine.state.selected_item)
