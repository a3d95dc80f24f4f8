"""Tests for the default transition table.

Each test feeds one action into ``transition`` and checks the proposed
changes, without running the override or controlled-merge pipeline.
"""

from __future__ import annotations

import unittest

from lazyselect.select import actions
from lazyselect.select.actions import Action
from lazyselect.select.catalog import ItemCatalog
from lazyselect.select.state import SelectState
from lazyselect.select.transitions import highlighted_index_on_open, step_index, transition

FRUITS = ItemCatalog(["apple", "banana", "cherry", "date"])


class StepIndexTests(unittest.TestCase):
    def test_circular_wraps_both_ways(self) -> None:
        self.assertEqual(step_index(3, 1, 4, circular=True), 0)
        self.assertEqual(step_index(0, -1, 4, circular=True), 3)

    def test_non_circular_clamps_at_ends(self) -> None:
        self.assertEqual(step_index(3, 1, 4, circular=False), 3)
        self.assertEqual(step_index(0, -1, 4, circular=False), 0)

    def test_from_no_highlight_down_is_first_and_up_is_last(self) -> None:
        self.assertEqual(step_index(-1, 1, 4, circular=True), 0)
        self.assertEqual(step_index(-1, -1, 4, circular=True), 3)

    def test_empty_count_returns_minus_one(self) -> None:
        self.assertEqual(step_index(0, 1, 0, circular=True), -1)


class OpeningRuleTests(unittest.TestCase):
    def test_open_highlights_selected_item(self) -> None:
        state = SelectState(selected_item="cherry")
        self.assertEqual(highlighted_index_on_open(state, FRUITS), 2)

    def test_open_without_selection_highlights_first(self) -> None:
        self.assertEqual(highlighted_index_on_open(SelectState(), FRUITS), 0)

    def test_open_on_empty_catalog_has_no_highlight(self) -> None:
        self.assertEqual(highlighted_index_on_open(SelectState(), ItemCatalog([])), -1)

    def test_toggle_click_opens_with_opening_rule(self) -> None:
        changes = transition(SelectState(selected_item="date"), actions.toggle_button_click(), FRUITS)
        self.assertEqual(changes, {"is_open": True, "highlighted_index": 3})

    def test_toggle_click_closes_open_menu(self) -> None:
        state = SelectState(is_open=True, highlighted_index=1)
        changes = transition(state, actions.toggle_button_click(), FRUITS)
        self.assertEqual(changes, {"is_open": False, "highlighted_index": -1})


class KeyboardTransitionTests(unittest.TestCase):
    def test_arrow_down_while_closed_opens_menu(self) -> None:
        for action in (actions.arrow_down(), actions.toggle_button_arrow_down(), actions.toggle_button_arrow_up()):
            with self.subTest(action=action.type):
                changes = transition(SelectState(), action, FRUITS)
                self.assertEqual(changes, {"is_open": True, "highlighted_index": 0})

    def test_arrow_moves_highlight_when_open(self) -> None:
        state = SelectState(is_open=True, highlighted_index=1)
        self.assertEqual(transition(state, actions.arrow_down(), FRUITS), {"highlighted_index": 2})
        self.assertEqual(transition(state, actions.arrow_up(), FRUITS), {"highlighted_index": 0})

    def test_arrow_respects_non_circular_navigation(self) -> None:
        state = SelectState(is_open=True, highlighted_index=3)
        changes = transition(state, actions.arrow_down(), FRUITS, circular=False)
        self.assertEqual(changes, {"highlighted_index": 3})

    def test_arrow_on_open_empty_catalog_is_noop(self) -> None:
        state = SelectState(is_open=True)
        self.assertEqual(transition(state, actions.arrow_down(), ItemCatalog([])), {})

    def test_home_and_end(self) -> None:
        state = SelectState(is_open=True, highlighted_index=2)
        self.assertEqual(transition(state, actions.home(), FRUITS), {"highlighted_index": 0})
        self.assertEqual(transition(state, actions.end(), FRUITS), {"highlighted_index": 3})
        self.assertEqual(transition(state, actions.end(), ItemCatalog([])), {})

    def test_escape_closes_without_touching_selection(self) -> None:
        state = SelectState(is_open=True, highlighted_index=2, selected_item="apple")
        changes = transition(state, actions.escape(), FRUITS)
        self.assertEqual(changes, {"is_open": False, "highlighted_index": -1})
        self.assertNotIn("selected_item", changes)

    def test_enter_and_space_select_highlighted(self) -> None:
        state = SelectState(is_open=True, highlighted_index=1)
        expected = {"selected_item": "banana", "is_open": False, "highlighted_index": -1}
        self.assertEqual(transition(state, actions.enter(), FRUITS), expected)
        self.assertEqual(transition(state, actions.space(), FRUITS), expected)

    def test_enter_without_highlight_is_noop(self) -> None:
        self.assertEqual(transition(SelectState(is_open=True), actions.enter(), FRUITS), {})
        self.assertEqual(transition(SelectState(highlighted_index=1), actions.enter(), FRUITS), {})

    def test_menu_character_moves_highlight_to_match(self) -> None:
        state = SelectState(is_open=True, highlighted_index=0)
        changes = transition(state, actions.character("C"), FRUITS)
        self.assertEqual(changes, {"keys_so_far": "c", "highlighted_index": 2})

    def test_menu_character_without_match_only_records_key(self) -> None:
        state = SelectState(is_open=True, highlighted_index=0)
        changes = transition(state, actions.character("z"), FRUITS)
        self.assertEqual(changes, {"keys_so_far": "z"})

    def test_toggle_character_selects_match_while_closed(self) -> None:
        state = SelectState(selected_item="apple")
        changes = transition(state, actions.toggle_button_character("d"), FRUITS)
        self.assertEqual(changes, {"keys_so_far": "d", "selected_item": "date"})

    def test_non_printable_character_is_ignored(self) -> None:
        state = SelectState(is_open=True, highlighted_index=0)
        self.assertEqual(transition(state, actions.character("\x07"), FRUITS), {})


class PointerAndFunctionTransitionTests(unittest.TestCase):
    def test_item_hover_highlights_valid_index_only(self) -> None:
        state = SelectState(is_open=True, highlighted_index=0)
        self.assertEqual(transition(state, actions.item_mouse_move(2), FRUITS), {"highlighted_index": 2})
        self.assertEqual(transition(state, actions.item_mouse_move(9), FRUITS), {})

    def test_mouse_leave_clears_highlight(self) -> None:
        state = SelectState(is_open=True, highlighted_index=2)
        self.assertEqual(transition(state, actions.mouse_leave(), FRUITS), {"highlighted_index": -1})

    def test_item_click_selects_and_closes(self) -> None:
        state = SelectState(is_open=True, highlighted_index=0)
        changes = transition(state, actions.item_click(3), FRUITS)
        self.assertEqual(changes, {"selected_item": "date", "is_open": False, "highlighted_index": -1})
        self.assertEqual(transition(state, actions.item_click(-1), FRUITS), {})

    def test_blur_closes_and_keeps_typeahead_buffer(self) -> None:
        state = SelectState(is_open=True, highlighted_index=1, keys_so_far="b")
        changes = transition(state, actions.blur(), FRUITS)
        self.assertEqual(changes, {"is_open": False, "highlighted_index": -1})

    def test_function_open_close_and_toggle(self) -> None:
        closed = SelectState()
        opened = SelectState(is_open=True, highlighted_index=2)
        self.assertEqual(transition(closed, actions.open_menu(), FRUITS), {"is_open": True, "highlighted_index": 0})
        self.assertEqual(transition(opened, actions.open_menu(), FRUITS), {"is_open": True})
        self.assertEqual(transition(opened, actions.close_menu(), FRUITS), {"is_open": False, "highlighted_index": -1})
        self.assertEqual(transition(opened, actions.toggle_menu(), FRUITS), {"is_open": False, "highlighted_index": -1})

    def test_set_highlighted_index_clamps(self) -> None:
        state = SelectState(is_open=True)
        self.assertEqual(transition(state, actions.set_highlighted_index(10), FRUITS), {"highlighted_index": 3})
        self.assertEqual(transition(state, actions.set_highlighted_index(-4), FRUITS), {"highlighted_index": -1})

    def test_select_item_ignores_foreign_items(self) -> None:
        state = SelectState()
        self.assertEqual(transition(state, actions.select_item("cherry"), FRUITS), {"selected_item": "cherry"})
        self.assertEqual(transition(state, actions.select_item("kiwi"), FRUITS), {})
        self.assertEqual(transition(state, actions.select_item(None), FRUITS), {"selected_item": None})

    def test_reset_restores_defaults(self) -> None:
        state = SelectState(is_open=True, highlighted_index=2, selected_item="date", keys_so_far="d")
        defaults = SelectState(selected_item="apple")
        changes = transition(state, actions.reset(), FRUITS, defaults=defaults)
        self.assertEqual(
            changes,
            {"is_open": False, "highlighted_index": -1, "selected_item": "apple", "keys_so_far": ""},
        )

    def test_known_non_character_actions_clear_typeahead_buffer(self) -> None:
        state = SelectState(is_open=True, highlighted_index=1, keys_so_far="ba")
        changes = transition(state, actions.arrow_down(), FRUITS)
        self.assertEqual(changes, {"highlighted_index": 2, "keys_so_far": ""})

    def test_unknown_action_type_yields_no_changes(self) -> None:
        state = SelectState(is_open=True, highlighted_index=1, keys_so_far="b")
        self.assertEqual(transition(state, Action("my_custom_action"), FRUITS), {})


if __name__ == "__main__":
    unittest.main()
