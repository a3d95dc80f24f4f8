"""Runtime composition layer for the playground.

Builds the engine and view state from resolved settings, picks the key input
descriptor, and runs the loop. Returns the item selected when the session ends.
"""

from __future__ import annotations

import contextlib
import logging
import os
import sys
from collections.abc import Iterator, Sequence
from typing import Any

from ..ui_theme import resolve_theme
from .effects import ViewState
from .loop import PlaygroundView, RuntimeLoopTiming, run_main_loop
from .playground import PlaygroundSettings, build_engine
from .terminal import TerminalController

logger = logging.getLogger(__name__)

TTY_PATH = "/dev/tty"


@contextlib.contextmanager
def _key_input_fd() -> Iterator[int]:
    """Yield a readable tty descriptor, reopening the tty when stdin is piped."""
    stdin_fd = sys.stdin.fileno()
    if os.isatty(stdin_fd):
        yield stdin_fd
        return
    try:
        tty_fd = os.open(TTY_PATH, os.O_RDONLY)
    except OSError as exc:
        raise SystemExit(f"No terminal available for interactive input: {exc}") from exc
    try:
        yield tty_fd
    finally:
        os.close(tty_fd)


def run_playground(items: Sequence[Any], settings: PlaygroundSettings) -> Any:
    """Run an interactive dropdown over ``items`` and return the selected item."""
    stdout_fd = sys.stdout.fileno()
    if not os.isatty(stdout_fd):
        raise SystemExit("Interactive mode needs a terminal on stdout (try --print-attributes).")

    engine = build_engine(items, settings)
    presentation = PlaygroundView(
        label=settings.label,
        theme=resolve_theme(settings.theme_name, no_color=settings.no_color),
        windows_style=settings.windows_style,
    )
    view = ViewState()
    with _key_input_fd() as input_fd:
        terminal = TerminalController(input_fd, stdout_fd)
        run_main_loop(engine, view, presentation, terminal, input_fd, RuntimeLoopTiming())
    return engine.state.selected_item
