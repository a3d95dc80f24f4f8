"""Help panel content for the playground.

Rendering helpers here are presentation-only and side-effect free.
"""

from __future__ import annotations

from ..ui_theme import DEFAULT_THEME, UITheme

_TOGGLE_KEYS: tuple[tuple[str, str], ...] = (
    ("Enter/Space", "open list"),
    ("Up/Down", "open list"),
    ("a-z", "select by first letters"),
)

_MENU_KEYS: tuple[tuple[str, str], ...] = (
    ("Up/Down", "move highlight"),
    ("Home/End", "first/last item"),
    ("Enter/Space", "select highlighted"),
    ("a-z", "jump by typed letters"),
    ("Esc", "close"),
    ("Tab", "leave list"),
)

_GLOBAL_KEYS: tuple[tuple[str, str], ...] = (
    ("Ctrl+R", "reset"),
    ("Ctrl+?", "toggle help"),
    ("Ctrl+C", "quit"),
)


def _section(title: str, keys: tuple[tuple[str, str], ...], theme: UITheme) -> list[str]:
    lines = [f"{theme.help_heading}{title}{theme.reset}"]
    for combo, description in keys:
        lines.append(f"{theme.help_key}{combo}{theme.reset} {theme.help_dim}{description}{theme.reset}")
    return lines


def help_panel_lines(theme: UITheme = DEFAULT_THEME, *, windows_style: bool = False) -> list[str]:
    """Return help rows; windows-style changes what closed arrows do."""
    toggle_keys = _TOGGLE_KEYS
    if windows_style:
        toggle_keys = (
            ("Enter/Space", "open list"),
            ("Up/Down", "select previous/next"),
            ("a-z", "select by first letters"),
        )
    lines: list[str] = []
    lines.extend(_section("BUTTON", toggle_keys, theme))
    lines.extend(_section("LIST", _MENU_KEYS, theme))
    lines.extend(_section("ANYWHERE", _GLOBAL_KEYS, theme))
    return lines
