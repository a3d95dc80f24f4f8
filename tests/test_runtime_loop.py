from __future__ import annotations

from contextlib import contextmanager
import unittest
from unittest import mock

from lazyselect.input import FOCUS_MENU, FOCUS_OUTSIDE, FOCUS_TOGGLE
from lazyselect.render import mouse_geometry
from lazyselect.runtime import PlaygroundView, RuntimeLoopTiming, run_main_loop
from lazyselect.runtime.effects import DirectiveAdapter, ViewState
from lazyselect.runtime.loop import build_render_context, handle_key
from lazyselect.runtime.playground import PlaygroundSettings, build_engine
from lazyselect.select import SelectEngine
from lazyselect.select.state import SelectState
from lazyselect.ui_theme import PLAIN_THEME

ITEMS = ["apple", "banana", "cherry"]
PRESENTATION = PlaygroundView(label="Fruit:", theme=PLAIN_THEME)


class FakeClock:
    def __init__(self, now: float = 10.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class _FakeTerminal:
    stdout_fd = 1

    def __init__(self) -> None:
        self.entered = 0
        self.mouse_reporting_calls: list[bool] = []

    @contextmanager
    def raw_mode(self):
        self.entered += 1
        yield

    def set_mouse_reporting(self, enabled: bool) -> None:
        self.mouse_reporting_calls.append(bool(enabled))


class HandleKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = FakeClock()
        self.engine = SelectEngine(items=ITEMS, clock=self.clock)
        self.view = ViewState()
        self.adapter = DirectiveAdapter(self.view, self.clock)

    def press(self, key: str, engine: SelectEngine | None = None) -> bool:
        engine = engine or self.engine
        context = build_render_context(engine, self.view, PRESENTATION, 80, 24)
        return handle_key(key, engine, self.adapter, mouse_geometry(context))

    def test_quit_keys(self) -> None:
        self.assertTrue(self.press("CTRL_C"))
        self.assertTrue(self.press("CTRL_D"))

    def test_enter_opens_and_focuses_menu(self) -> None:
        self.assertFalse(self.press("ENTER"))
        self.assertTrue(self.engine.state.is_open)
        self.assertEqual(self.view.focus, FOCUS_MENU)
        self.assertTrue(self.view.status_message.startswith("3 results are available"))

    def test_escape_returns_focus_to_toggle(self) -> None:
        self.press("ENTER")
        self.press("ESC")
        self.assertFalse(self.engine.state.is_open)
        self.assertEqual(self.view.focus, FOCUS_TOGGLE)

    def test_choosing_with_keyboard_announces_selection(self) -> None:
        self.press("DOWN")
        self.press("DOWN")
        self.press(" ")
        self.assertEqual(self.engine.state, SelectState(selected_item="banana"))
        self.assertEqual(self.view.status_message, "banana has been selected.")
        self.assertEqual(self.view.focus, FOCUS_TOGGLE)

    def test_tab_in_menu_blurs_and_tab_from_outside_returns(self) -> None:
        self.press("ENTER")
        self.press("TAB")
        self.assertFalse(self.engine.state.is_open)
        self.assertEqual(self.view.focus, FOCUS_OUTSIDE)
        self.press("DOWN")
        self.assertFalse(self.engine.state.is_open)
        self.press("TAB")
        self.assertEqual(self.view.focus, FOCUS_TOGGLE)

    def test_tab_on_closed_toggle_leaves_control(self) -> None:
        self.press("TAB")
        self.assertEqual(self.view.focus, FOCUS_OUTSIDE)

    def test_ctrl_r_resets_and_ctrl_question_toggles_help(self) -> None:
        self.press("c")
        self.assertEqual(self.engine.state.selected_item, "cherry")
        self.press("CTRL_R")
        self.assertEqual(self.engine.state, SelectState())
        self.press("CTRL_QUESTION")
        self.assertTrue(self.view.show_help)
        self.press("CTRL_QUESTION")
        self.assertFalse(self.view.show_help)

    def test_mouse_click_selects_item(self) -> None:
        self.press("MOUSE_LEFT_DOWN:3:2")
        self.assertTrue(self.engine.state.is_open)
        self.press("MOUSE_MOVE:3:5")
        self.assertEqual(self.engine.state.highlighted_index, 2)
        self.press("MOUSE_LEFT_DOWN:3:5")
        self.assertEqual(self.engine.state.selected_item, "cherry")
        self.assertFalse(self.engine.state.is_open)

    def test_click_outside_blurs(self) -> None:
        self.press("ENTER")
        self.press("MOUSE_LEFT_DOWN:3:20")
        self.assertFalse(self.engine.state.is_open)
        self.assertEqual(self.view.focus, FOCUS_OUTSIDE)
        self.press("MOUSE_LEFT_DOWN:3:2")
        self.assertTrue(self.engine.state.is_open)
        self.assertEqual(self.view.focus, FOCUS_MENU)

    def test_pointer_motion_outside_list_keeps_typeahead_buffer(self) -> None:
        self.press("ENTER")
        self.press("MOUSE_MOVE:3:20")
        self.assertEqual(self.engine.state.highlighted_index, -1)
        self.press("z")
        self.assertEqual(self.engine.state.keys_so_far, "z")
        self.press("MOUSE_MOVE:3:21")
        self.press("MOUSE_MOVE:3:22")
        self.assertEqual(self.engine.state.keys_so_far, "z")
        self.assertTrue(self.engine.state.is_open)

    def test_windows_style_arrows_keep_focus_on_toggle(self) -> None:
        engine = build_engine(ITEMS, PlaygroundSettings(windows_style=True))
        self.press("DOWN", engine)
        self.press("DOWN", engine)
        self.assertEqual(engine.state, SelectState(selected_item="banana"))
        self.assertEqual(self.view.focus, FOCUS_TOGGLE)


class RuntimeLoopBehaviorTests(unittest.TestCase):
    def _run(self, engine: SelectEngine, keys, clock: FakeClock, timing: RuntimeLoopTiming | None = None):
        terminal = _FakeTerminal()
        timeouts: list[int] = []
        events = iter(keys)

        def _read_key(_fd, timeout_ms=None):
            timeouts.append(timeout_ms)
            event = next(events)
            if isinstance(event, BaseException):
                raise event
            if callable(event):
                return event()
            return event

        with mock.patch(
            "lazyselect.runtime.loop.shutil.get_terminal_size",
            return_value=mock.Mock(columns=80, lines=24),
        ), mock.patch("lazyselect.runtime.loop.read_key", side_effect=_read_key), mock.patch(
            "lazyselect.runtime.loop.render_frame", return_value=None
        ) as render_mock:
            run_main_loop(engine, ViewState(), PRESENTATION, terminal, 0, timing, clock)  # type: ignore[arg-type]
        return terminal, timeouts, render_mock

    def test_loop_selects_with_keyboard_and_quits(self) -> None:
        clock = FakeClock()
        engine = SelectEngine(items=ITEMS, clock=clock)
        terminal, _timeouts, render_mock = self._run(engine, ["ENTER", "DOWN", "ENTER", "CTRL_C"], clock)
        self.assertEqual(terminal.entered, 1)
        self.assertTrue(terminal.mouse_reporting_calls[0])
        self.assertEqual(engine.state.selected_item, "banana")
        self.assertGreaterEqual(render_mock.call_count, 4)

    def test_read_timeout_tracks_nearest_deadline(self) -> None:
        clock = FakeClock()
        engine = SelectEngine(items=ITEMS, clock=clock)
        _terminal, timeouts, _render = self._run(
            engine,
            ["ENTER", "b", "CTRL_C"],
            clock,
            RuntimeLoopTiming(idle_poll_ms=5000),
        )
        self.assertEqual(timeouts, [5001, 3001, 501])

    def test_loop_clock_drives_typeahead_reset(self) -> None:
        loop_clock = FakeClock()
        engine = SelectEngine(items=ITEMS, clock=FakeClock())

        def _idle_second() -> str:
            loop_clock.now += 1.0
            return ""

        self._run(engine, ["ENTER", "b", _idle_second, "CTRL_C"], loop_clock)
        self.assertEqual(engine.state.keys_so_far, "")
        self.assertEqual(engine.state.highlighted_index, 1)

    def test_idle_read_does_not_rerender_clean_frame(self) -> None:
        clock = FakeClock()
        engine = SelectEngine(items=ITEMS, clock=clock)
        _terminal, _timeouts, render_mock = self._run(engine, ["", "", "CTRL_C"], clock)
        self.assertEqual(render_mock.call_count, 1)

    def test_keyboard_interrupt_ends_loop(self) -> None:
        clock = FakeClock()
        engine = SelectEngine(items=ITEMS, clock=clock)
        _terminal, timeouts, _render = self._run(engine, [KeyboardInterrupt()], clock)
        self.assertEqual(len(timeouts), 1)


if __name__ == "__main__":
    unittest.main()
