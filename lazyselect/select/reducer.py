"""Reducer pipeline: default transition, caller override, controlled merge.

The override (``state_reducer``) receives the default changes by value and
returns the changes to apply in their place. Controlled fields are merged
after the override has run and are never visible to it as proposals.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from .actions import Action, ActionType, action_type_of
from .catalog import ItemCatalog
from .state import (
    Changes,
    SelectState,
    apply_changes,
    filter_changes,
    guard_proposed_changes,
    validate_state,
)
from .transitions import transition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StateChangeOptions:
    """What a state reducer sees: the action tag, the proposed changes, the action."""

    type: str
    changes: Changes
    action: Action


StateReducer = Callable[[SelectState, StateChangeOptions], Mapping[str, Any]]


@dataclass(frozen=True)
class ReduceResult:
    """Outcome of one pipeline run.

    ``previous`` is the internal input state the transition and override saw,
    ``provisional`` the result before the controlled overwrite, and ``state``
    the published result.
    """

    previous: SelectState
    provisional: SelectState
    state: SelectState
    changes: Changes


def symbolic_type(action: Action) -> str:
    """Return the ``ActionType`` member for known tags and the raw string otherwise."""
    action_type = action_type_of(action)
    try:
        return ActionType(action_type)
    except ValueError:
        return action_type


def pass_through_reducer(state: SelectState, options: StateChangeOptions) -> Changes:
    """State reducer that keeps the default changes."""
    return options.changes


def merge_controlled(state: SelectState, controlled: Mapping[str, Any] | None) -> SelectState:
    """Overwrite every controlled field of ``state`` with the caller's value."""
    if not controlled:
        return state
    return apply_changes(state, controlled)


def reduce(
    state: SelectState,
    action: Action,
    catalog: ItemCatalog,
    *,
    state_reducer: StateReducer | None = None,
    controlled: Mapping[str, Any] | None = None,
    circular: bool = True,
    defaults: SelectState | None = None,
    clear_missing_selection: bool = False,
) -> ReduceResult:
    """Run one action through the pipeline and return the resulting states.

    Raises ``TypeError`` when ``state_reducer`` returns something other than a
    mapping; that is a caller bug, not an input anomaly.
    """
    controlled_fields = filter_changes(controlled or {})
    current = validate_state(
        state,
        catalog,
        clear_missing_selection=clear_missing_selection,
    )

    changes = transition(current, action, catalog, circular=circular, defaults=defaults)
    if state_reducer is not None:
        options = StateChangeOptions(type=symbolic_type(action), changes=dict(changes), action=action)
        proposed = state_reducer(current, options)
        if not isinstance(proposed, Mapping):
            raise TypeError(
                f"state_reducer must return a mapping of changes, got {type(proposed).__name__}"
            )
        changes = guard_proposed_changes(current, filter_changes(proposed), catalog, changes)
    changes = filter_changes(changes)

    provisional = validate_state(
        apply_changes(current, changes),
        catalog,
        clear_missing_selection=clear_missing_selection,
    )
    published = provisional
    if controlled_fields:
        published = validate_state(
            merge_controlled(provisional, controlled_fields),
            catalog,
            clear_missing_selection=clear_missing_selection,
        )
    logger.debug("reduced %s: %s -> %s", action_type_of(action), current, published)
    return ReduceResult(previous=current, provisional=provisional, state=published, changes=changes)
