"""Frame rendering for the terminal dropdown.

Defines the render context and composes full ANSI frames without mutating
engine or view state. Row layout constants are shared with mouse mapping.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass

from ..input.bindings import FOCUS_TOGGLE, MouseGeometry
from ..ui_theme import UITheme
from .help import help_panel_lines

LABEL_ROW = 1
TOGGLE_ROW = 2
LIST_FIRST_ROW = 3
TOGGLE_PLACEHOLDER = "Select an item"
SELECTED_MARK = "✓"


@dataclass(frozen=True)
class RenderContext:
    label: str
    labels: Sequence[str]
    is_open: bool
    highlighted_index: int
    selected_index: int
    selected_label: str
    keys_so_far: str
    focus: str
    list_start: int
    visible_rows: int
    status_message: str
    show_help: bool
    width: int
    height: int
    theme: UITheme
    windows_style: bool = False


def clip_text(text: str, width: int) -> str:
    """Clip plain ``text`` to ``width`` columns, marking truncation with ``…``."""
    if width <= 0:
        return ""
    if len(text) <= width:
        return text
    if width == 1:
        return "…"
    return text[: width - 1] + "…"


def visible_slice(ctx: RenderContext) -> range:
    """Catalog indices drawn for the current viewport."""
    if not ctx.is_open:
        return range(0)
    start = max(0, min(ctx.list_start, max(0, len(ctx.labels) - 1)))
    return range(start, min(len(ctx.labels), start + max(1, ctx.visible_rows)))


def mouse_geometry(ctx: RenderContext) -> MouseGeometry:
    shown = visible_slice(ctx)
    return MouseGeometry(
        toggle_row=TOGGLE_ROW,
        list_first_row=LIST_FIRST_ROW,
        list_start=shown.start,
        visible_count=len(shown),
        is_open=ctx.is_open,
        max_col=ctx.width,
        highlighted_index=ctx.highlighted_index,
    )


def _toggle_line(ctx: RenderContext) -> str:
    theme = ctx.theme
    arrow = "▴" if ctx.is_open else "▾"
    caption = ctx.selected_label or TOGGLE_PLACEHOLDER
    text = clip_text(f"[ {caption} {arrow} ]", ctx.width)
    style = theme.toggle_focused if ctx.focus == FOCUS_TOGGLE else theme.toggle
    return f"{style}{text}{theme.reset}"


def _item_line(ctx: RenderContext, index: int) -> str:
    theme = ctx.theme
    mark = SELECTED_MARK if index == ctx.selected_index else " "
    text = clip_text(f" {mark} {ctx.labels[index]}", ctx.width)
    if index == ctx.highlighted_index:
        return f"{theme.item_highlighted}{text}{theme.reset}"
    if index == ctx.selected_index:
        return f"{theme.item_selected}{text}{theme.reset}"
    return f"{theme.item}{text}{theme.reset}"


def build_frame_lines(ctx: RenderContext) -> list[str]:
    """Return one string per screen row, top to bottom."""
    theme = ctx.theme
    lines = [
        f"{theme.label}{clip_text(ctx.label, ctx.width)}{theme.reset}",
        _toggle_line(ctx),
    ]
    if ctx.is_open:
        shown = visible_slice(ctx)
        if not shown:
            lines.append(f"{theme.menu_border}{clip_text('  (no items)', ctx.width)}{theme.reset}")
        for index in shown:
            lines.append(_item_line(ctx, index))
    lines.append("")
    if ctx.keys_so_far:
        lines.append(f"{theme.typeahead}{clip_text(f'typed: {ctx.keys_so_far}', ctx.width)}{theme.reset}")
    if ctx.status_message:
        lines.append(f"{theme.status}{clip_text(ctx.status_message, ctx.width)}{theme.reset}")
    if ctx.show_help:
        lines.append("")
        lines.extend(help_panel_lines(theme, windows_style=ctx.windows_style))
    return lines[: max(1, ctx.height)]


def render_frame(ctx: RenderContext, fd: int | None = None) -> None:
    """Write a full frame: home cursor, draw rows, clear the rest."""
    out_fd = sys.stdout.fileno() if fd is None else fd
    rows = build_frame_lines(ctx)
    payload = "\x1b[H" + "".join(f"{row}\x1b[K\r\n" for row in rows) + "\x1b[J"
    os.write(out_fd, payload.encode("utf-8", errors="replace"))
