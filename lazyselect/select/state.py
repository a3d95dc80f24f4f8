"""Select state aggregate and partial-update helpers."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any

from .catalog import ItemCatalog

logger = logging.getLogger(__name__)

Changes = dict[str, Any]


@dataclass(frozen=True)
class SelectState:
    is_open: bool = False
    highlighted_index: int = -1
    selected_item: Any = None
    keys_so_far: str = ""


STATE_FIELDS: tuple[str, ...] = tuple(f.name for f in fields(SelectState))


def filter_changes(changes: Mapping[str, Any]) -> Changes:
    """Keep only keys naming a ``SelectState`` field."""
    unknown = [key for key in changes if key not in STATE_FIELDS]
    if unknown:
        logger.debug("ignoring unknown state fields in changes: %s", unknown)
    return {key: value for key, value in changes.items() if key in STATE_FIELDS}


def apply_changes(state: SelectState, changes: Mapping[str, Any]) -> SelectState:
    """Return ``state`` with ``changes`` applied; unknown keys are dropped."""
    filtered = filter_changes(changes)
    if not filtered:
        return state
    return replace(state, **filtered)


def diff_states(before: SelectState, after: SelectState) -> Changes:
    """Return the fields of ``after`` that differ from ``before``."""
    return {
        name: getattr(after, name)
        for name in STATE_FIELDS
        if getattr(before, name) != getattr(after, name)
    }


def guard_proposed_changes(
    current: SelectState,
    changes: Mapping[str, Any],
    catalog: ItemCatalog,
    default_changes: Mapping[str, Any] | None = None,
) -> Changes:
    """Drop override proposals that no transition could have produced.

    Values equal to the default transition's own proposal always pass.
    A ``selected_item`` must be ``None``, already held, or a catalog member.
    ``keys_so_far`` may only be cleared, kept, or grown by one printable
    character.
    """
    guarded = dict(changes)
    trusted = default_changes or {}

    def _is_default(name: str) -> bool:
        return name in trusted and guarded[name] == trusted[name]

    if "selected_item" in guarded and not _is_default("selected_item"):
        item = guarded["selected_item"]
        if item is not None and item != current.selected_item and not catalog.contains(item):
            logger.debug("rejecting proposed selected item %r missing from catalog", item)
            del guarded["selected_item"]
    if "keys_so_far" in guarded and not _is_default("keys_so_far"):
        keys = guarded["keys_so_far"]
        if not _is_keys_step(current.keys_so_far, keys):
            logger.debug("rejecting proposed keys_so_far %r after %r", keys, current.keys_so_far)
            del guarded["keys_so_far"]
    return guarded


def _is_keys_step(before: str, after: Any) -> bool:
    if not isinstance(after, str):
        return False
    if after in ("", before):
        return True
    return len(after) == len(before) + 1 and after.startswith(before) and after[-1].isprintable()


def validate_state(
    state: SelectState,
    catalog: ItemCatalog,
    *,
    clear_missing_selection: bool = False,
) -> SelectState:
    """Coerce ``state`` back into its invariants for ``catalog``.

    ``highlighted_index`` is clamped into ``[-1, n-1]``. A ``selected_item``
    that is no longer in the catalog is kept unless ``clear_missing_selection``.
    """
    is_open = bool(state.is_open)
    try:
        highlighted_index = int(state.highlighted_index)
    except (TypeError, ValueError):
        logger.debug("non-integer highlighted_index %r reset to -1", state.highlighted_index)
        highlighted_index = -1
    highlighted_index = catalog.clamp_index(highlighted_index)

    selected_item = state.selected_item
    if clear_missing_selection and selected_item is not None and not catalog.contains(selected_item):
        logger.debug("clearing selected item %r missing from catalog", selected_item)
        selected_item = None

    keys_so_far = state.keys_so_far if isinstance(state.keys_so_far, str) else ""

    if (
        is_open == state.is_open
        and highlighted_index == state.highlighted_index
        and selected_item is state.selected_item
        and keys_so_far == state.keys_so_far
    ):
        return state
    return SelectState(
        is_open=is_open,
        highlighted_index=highlighted_index,
        selected_item=selected_item,
        keys_so_far=keys_so_far,
    )
