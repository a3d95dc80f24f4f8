"""Tests for directives derived from published state deltas."""

from __future__ import annotations

import unittest

from lazyselect.select.actions import ActionType
from lazyselect.select.catalog import ItemCatalog
from lazyselect.select.directives import (
    AnnounceSelection,
    AnnounceStatus,
    FocusMenu,
    FocusToggle,
    ScrollItemIntoView,
    emit_directives,
    selection_message,
    status_message,
)
from lazyselect.select.state import SelectState

CATALOG = ItemCatalog(["one", "two", "three"])


class MessageTests(unittest.TestCase):
    def test_selection_message(self) -> None:
        self.assertEqual(selection_message("two"), "two has been selected.")

    def test_status_message_counts(self) -> None:
        self.assertEqual(status_message(0), "No results are available.")
        self.assertTrue(status_message(1).startswith("1 result is available, use up and down arrow keys"))
        self.assertEqual(
            status_message(3),
            "3 results are available, use up and down arrow keys to navigate. "
            "Press Enter or Space Bar keys to select.",
        )


class EmitDirectivesTests(unittest.TestCase):
    def test_opening_focuses_menu_announces_and_scrolls(self) -> None:
        directives = emit_directives(SelectState(), SelectState(is_open=True, highlighted_index=1), CATALOG)
        self.assertEqual(
            directives,
            [FocusMenu(), AnnounceStatus(status_message(3)), ScrollItemIntoView(1)],
        )

    def test_opening_empty_menu_does_not_scroll(self) -> None:
        directives = emit_directives(SelectState(), SelectState(is_open=True), ItemCatalog([]))
        self.assertEqual(directives, [FocusMenu(), AnnounceStatus("No results are available.")])

    def test_highlight_move_scrolls(self) -> None:
        prev = SelectState(is_open=True, highlighted_index=0)
        directives = emit_directives(prev, SelectState(is_open=True, highlighted_index=2), CATALOG)
        self.assertEqual(directives, [ScrollItemIntoView(2)])

    def test_highlight_change_while_closed_does_not_scroll(self) -> None:
        directives = emit_directives(SelectState(highlighted_index=0), SelectState(highlighted_index=2), CATALOG)
        self.assertEqual(directives, [])

    def test_unchanged_highlight_emits_nothing(self) -> None:
        state = SelectState(is_open=True, highlighted_index=2)
        self.assertEqual(emit_directives(state, state, CATALOG), [])

    def test_selecting_closes_and_announces(self) -> None:
        prev = SelectState(is_open=True, highlighted_index=1)
        next_state = SelectState(selected_item="two")
        directives = emit_directives(prev, next_state, CATALOG, action_type=ActionType.MENU_KEYDOWN_ENTER)
        self.assertEqual(directives, [FocusToggle(), AnnounceSelection("two has been selected.")])

    def test_blur_close_does_not_refocus_toggle(self) -> None:
        prev = SelectState(is_open=True, highlighted_index=1)
        directives = emit_directives(prev, SelectState(), CATALOG, action_type=ActionType.MENU_BLUR.value)
        self.assertEqual(directives, [])

    def test_clearing_selection_is_not_announced(self) -> None:
        prev = SelectState(selected_item="one")
        self.assertEqual(emit_directives(prev, SelectState(), CATALOG), [])

    def test_selection_while_closed_is_announced_without_focus_change(self) -> None:
        prev = SelectState(selected_item="one")
        directives = emit_directives(prev, SelectState(selected_item="three"), CATALOG)
        self.assertEqual(directives, [AnnounceSelection("three has been selected.")])


if __name__ == "__main__":
    unittest.main()
