"""Public runtime orchestration entry points.

This package groups the interactive playground bootstrap (`run_playground`)
and the lower-level loop pieces used by tests and composition code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .loop import PlaygroundView, RuntimeLoopTiming


def run_playground(*args, **kwargs):
    """Lazily import the playground entrypoint so importing the package stays cheap."""
    from .app import run_playground as _run_playground

    return _run_playground(*args, **kwargs)


def run_main_loop(*args, **kwargs):
    """Lazily import loop runner to avoid package-import cycles."""
    from .loop import run_main_loop as _run_main_loop

    return _run_main_loop(*args, **kwargs)


def __getattr__(name: str):
    if name in {"PlaygroundView", "RuntimeLoopTiming"}:
        from . import loop as _loop

        return getattr(_loop, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "run_playground",
    "PlaygroundView",
    "RuntimeLoopTiming",
    "run_main_loop",
]
