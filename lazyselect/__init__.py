"""Public package surface for lazyselect.

Re-exports the headless select engine and a lazily imported ``main`` for
programmatic CLI invocation. The terminal playground lives under
``lazyselect.runtime``.
"""

from __future__ import annotations

import logging

from .select import (
    Action,
    ActionType,
    ItemCatalog,
    SelectEngine,
    SelectProps,
    SelectState,
    StateChangeOptions,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "Action",
    "ActionType",
    "ItemCatalog",
    "SelectEngine",
    "SelectProps",
    "SelectState",
    "StateChangeOptions",
    "main",
]
