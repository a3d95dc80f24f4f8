"""Headless single-selection dropdown engine.

The pure pieces (transition table, reducer pipeline, directive emitter,
attribute projector) can be used on their own; :class:`SelectEngine` wires
them together with the typeahead idle timer and change callbacks.
"""

from __future__ import annotations

from .actions import Action, ActionType
from .attributes import AttributeSets, ElementIds, project
from .catalog import ItemCatalog, default_item_to_string
from .directives import (
    AnnounceSelection,
    AnnounceStatus,
    Directive,
    FocusMenu,
    FocusToggle,
    ScrollItemIntoView,
    emit_directives,
)
from .engine import SelectEngine
from .props import SelectProps, StateChange
from .reducer import ReduceResult, StateChangeOptions, pass_through_reducer, reduce
from .state import Changes, SelectState
from .transitions import transition
from .typeahead import TypeaheadTracker

__all__ = [
    "Action",
    "ActionType",
    "AnnounceSelection",
    "AnnounceStatus",
    "AttributeSets",
    "Changes",
    "Directive",
    "ElementIds",
    "FocusMenu",
    "FocusToggle",
    "ItemCatalog",
    "ReduceResult",
    "ScrollItemIntoView",
    "SelectEngine",
    "SelectProps",
    "SelectState",
    "StateChange",
    "StateChangeOptions",
    "TypeaheadTracker",
    "default_item_to_string",
    "emit_directives",
    "pass_through_reducer",
    "project",
    "reduce",
    "transition",
]
