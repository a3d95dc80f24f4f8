"""Persistent JSON config helpers.

Stores the playground theme, typeahead idle window, and wrap-around
preference. All access is defensive: malformed or missing config falls back
to defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from ..select.typeahead import DEFAULT_TYPEAHEAD_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

APP_NAME = "lazyselect"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH

DEFAULT_TYPEAHEAD_TIMEOUT_MS = int(DEFAULT_TYPEAHEAD_TIMEOUT_SECONDS * 1000)
MIN_TYPEAHEAD_TIMEOUT_MS = 50
MAX_TYPEAHEAD_TIMEOUT_MS = 10_000


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except Exception:
        logger.debug("ignoring unreadable config at %s", CONFIG_PATH, exc_info=True)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is logged and ignored to keep runtime
    behavior non-fatal when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        logger.warning("could not write config to %s", CONFIG_PATH, exc_info=True)


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def save_theme_name(theme_name: str) -> None:
    """Persist selected UI theme name."""
    stripped = str(theme_name).strip()
    if not stripped:
        return
    config = load_config()
    config["theme"] = stripped
    save_config(config)


def _coerce_timeout_ms(value: object) -> int | None:
    """Accept integer milliseconds within the supported window.

    Booleans and non-integers are rejected; out-of-range values are clamped.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return max(MIN_TYPEAHEAD_TIMEOUT_MS, min(MAX_TYPEAHEAD_TIMEOUT_MS, value))


def load_typeahead_timeout_ms() -> int:
    """Return the typeahead idle window in milliseconds."""
    coerced = _coerce_timeout_ms(load_config().get("typeahead_timeout_ms"))
    return DEFAULT_TYPEAHEAD_TIMEOUT_MS if coerced is None else coerced


def save_typeahead_timeout_ms(timeout_ms: int) -> None:
    coerced = _coerce_timeout_ms(timeout_ms)
    if coerced is None:
        return
    config = load_config()
    config["typeahead_timeout_ms"] = coerced
    save_config(config)


def load_circular_navigation() -> bool:
    """Return the wrap-around preference; only explicit booleans are honored."""
    value = load_config().get("circular_navigation")
    return value if isinstance(value, bool) else True


def save_circular_navigation(enabled: bool) -> None:
    config = load_config()
    config["circular_navigation"] = bool(enabled)
    save_config(config)
