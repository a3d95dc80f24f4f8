"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the playground's toggle, list, status line, and
help panel. ``--no-color`` always resolves to the plain palette.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    label: str
    toggle: str
    toggle_focused: str
    menu_border: str
    item: str
    item_highlighted: str
    item_selected: str
    status: str
    typeahead: str
    help_heading: str
    help_key: str
    help_dim: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    label="\033[1;38;5;81m",
    toggle="\033[38;5;252m",
    toggle_focused="\033[1;38;5;229m",
    menu_border="\033[2m",
    item="\033[38;5;252m",
    item_highlighted="\033[7;38;5;81m",
    item_selected="\033[38;5;42m",
    status="\033[38;5;214m",
    typeahead="\033[2;38;5;250m",
    help_heading="\033[1;38;5;81m",
    help_key="\033[38;5;229m",
    help_dim="\033[2;38;5;250m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    label="\033[1;38;5;45m",
    toggle="\033[38;5;153m",
    toggle_focused="\033[1;38;5;117m",
    menu_border="\033[2;38;5;31m",
    item="\033[38;5;252m",
    item_highlighted="\033[7;38;5;45m",
    item_selected="\033[38;5;84m",
    status="\033[38;5;215m",
    typeahead="\033[2;38;5;110m",
    help_heading="\033[1;38;5;45m",
    help_key="\033[38;5;153m",
    help_dim="\033[2;38;5;110m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    label="",
    toggle="",
    toggle_focused="",
    menu_border="",
    item="",
    item_highlighted="",
    item_selected="",
    status="",
    typeahead="",
    help_heading="",
    help_key="",
    help_dim="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
