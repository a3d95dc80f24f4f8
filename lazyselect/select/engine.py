"""Stateful select engine wiring the pure pieces together.

One engine owns one control's state. Each ``dispatch`` runs the action to
completion (transition, override, controlled merge, validation, callbacks,
directives) before returning, so actions are totally ordered.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import replace
from typing import Any

from . import actions
from .actions import CHARACTER_ACTIONS, Action, ActionType, action_type_of
from .attributes import AttributeSets, ElementIds, generate_id, project
from .directives import Directive, emit_directives
from .props import SelectProps, StateChange
from .reducer import ReduceResult, reduce, symbolic_type
from .state import SelectState, diff_states, validate_state
from .typeahead import TypeaheadTracker

logger = logging.getLogger(__name__)


class SelectEngine:
    """Single-selection dropdown state machine with an idle-reset typeahead."""

    def __init__(
        self,
        props: SelectProps | None = None,
        *,
        clock: Callable[[], float] | None = None,
        **overrides: Any,
    ) -> None:
        base = props if props is not None else SelectProps()
        self.props = replace(base, **overrides) if overrides else base
        self.catalog = self.props.catalog()
        self.ids = ElementIds(self.props.id or generate_id())
        self.typeahead = TypeaheadTracker(self.props.typeahead_timeout, clock)
        self.defaults = self.props.default_state()
        self._internal = self._validate(self.props.initial_state(self.catalog))
        self._state = self._internal
        self.last_directives: list[Directive] = []

    @property
    def state(self) -> SelectState:
        """Most recently published state (controlled values applied)."""
        return self._state

    @property
    def items(self) -> tuple[Any, ...]:
        return self.catalog.items

    def _validate(self, state: SelectState) -> SelectState:
        return validate_state(
            state,
            self.catalog,
            clear_missing_selection=self.props.clear_missing_selection,
        )

    def set_items(self, items: Sequence[Any]) -> None:
        """Replace the catalog and re-validate the current state against it."""
        self.catalog = self.catalog.replace(items)
        self._internal = self._validate(self._internal)
        self._state = self._validate(self._state)
        logger.debug("catalog replaced with %d items", len(self.catalog))

    def dispatch(self, action: Action, controlled: Mapping[str, Any] | None = None) -> list[Directive]:
        """Process ``action`` and return the directives for the resulting delta.

        ``controlled`` maps state field names to caller-owned values for this
        cycle only.
        """
        action_type = action_type_of(action)
        if action_type != ActionType.FUNCTION_RESET_KEYS_SO_FAR and self.typeahead.expired():
            # An idle timeout the host has not polled yet arrives first.
            self.tick()
        if (
            action_type == ActionType.FUNCTION_RESET_KEYS_SO_FAR
            and action.generation is not None
            and not self.typeahead.is_current(action.generation)
        ):
            logger.debug("ignoring stale typeahead reset (generation %s)", action.generation)
            self.last_directives = []
            return []

        previous_published = self._state
        result = reduce(
            self._internal,
            action,
            self.catalog,
            state_reducer=self.props.state_reducer,
            controlled=controlled,
            circular=self.props.circular_navigation,
            defaults=self.defaults,
            clear_missing_selection=self.props.clear_missing_selection,
        )
        self._internal = result.provisional
        self._state = result.state
        self._sync_typeahead(action_type, result)
        self._notify(action, result)

        directives = emit_directives(previous_published, self._state, self.catalog, action_type=action_type)
        self.last_directives = directives
        return directives

    def _sync_typeahead(self, action_type: str, result: ReduceResult) -> None:
        keys_so_far = result.state.keys_so_far
        if not keys_so_far:
            self.typeahead.cancel()
        elif action_type in CHARACTER_ACTIONS and keys_so_far != result.previous.keys_so_far:
            self.typeahead.arm()
        elif not self.typeahead.armed:
            # A buffer kept by an override or an unknown action still expires.
            self.typeahead.arm()

    def _notify(self, action: Action, result: ReduceResult) -> None:
        changes = diff_states(result.previous, result.provisional)
        if not changes:
            return
        change = StateChange(type=symbolic_type(action), changes=changes, state=result.provisional)
        props = self.props
        if props.on_is_open_change is not None and "is_open" in changes:
            props.on_is_open_change(change)
        if props.on_highlighted_index_change is not None and "highlighted_index" in changes:
            props.on_highlighted_index_change(change)
        if props.on_selected_item_change is not None and "selected_item" in changes:
            props.on_selected_item_change(change)
        if props.on_state_change is not None:
            props.on_state_change(change)

    def tick(self, now: float | None = None, controlled: Mapping[str, Any] | None = None) -> list[Directive]:
        """Fire the typeahead reset if its idle deadline has passed."""
        generation = self.typeahead.consume(now)
        if generation is None:
            return []
        logger.debug("typeahead idle timeout (generation %d)", generation)
        return self.dispatch(actions.reset_keys_so_far(generation), controlled)

    def next_deadline(self) -> float | None:
        """Clock time of the pending typeahead reset, for host loop timeouts."""
        return self.typeahead.deadline

    def attributes(self) -> AttributeSets:
        return project(self._state, self.catalog, self.ids)

    def selected_label(self) -> str:
        return self.catalog.label_for(self._state.selected_item)

    def highlighted_item(self) -> Any:
        if not self.catalog.is_valid_index(self._state.highlighted_index):
            return None
        return self.catalog[self._state.highlighted_index]

    def toggle_menu(self, controlled: Mapping[str, Any] | None = None) -> list[Directive]:
        return self.dispatch(actions.toggle_menu(), controlled)

    def open_menu(self, controlled: Mapping[str, Any] | None = None) -> list[Directive]:
        return self.dispatch(actions.open_menu(), controlled)

    def close_menu(self, controlled: Mapping[str, Any] | None = None) -> list[Directive]:
        return self.dispatch(actions.close_menu(), controlled)

    def set_highlighted_index(self, index: int, controlled: Mapping[str, Any] | None = None) -> list[Directive]:
        return self.dispatch(actions.set_highlighted_index(index), controlled)

    def select_item(self, item: Any, controlled: Mapping[str, Any] | None = None) -> list[Directive]:
        return self.dispatch(actions.select_item(item), controlled)

    def reset(self, controlled: Mapping[str, Any] | None = None) -> list[Directive]:
        return self.dispatch(actions.reset(), controlled)
