"""Regression tests for raw-key decoding.

Covers ESC timing, navigation sequences, control-key tokens, UTF-8 input,
and SGR mouse events used for hover and click.
"""

import os
import time
import unittest

from lazyselect.input import reader as input_mod


class ReadKeyRegressionTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def _read_keys(self, payload: bytes, count: int) -> list[str]:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, payload)
            return [input_mod.read_key(read_fd, timeout_ms=20) for _ in range(count)]
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        started = time.monotonic()
        keys = self._read_keys(b"\x1b", 1)
        elapsed = time.monotonic() - started

        self.assertEqual(keys, ["ESC"])
        # Esc waits briefly for sequence bytes, but should not require another key press.
        self.assertLess(elapsed, 0.2)

    def test_timeout_without_input_returns_empty_token(self) -> None:
        self.assertEqual(self._read_keys(b"", 1), [""])

    def test_arrow_sequences_are_recognized(self) -> None:
        self.assertEqual(self._read_keys(b"\x1b[A\x1b[B", 2), ["UP", "DOWN"])

    def test_ss3_arrow_and_home_end_forms(self) -> None:
        self.assertEqual(self._read_keys(b"\x1bOB\x1bOH\x1bOF", 3), ["DOWN", "HOME", "END"])

    def test_tilde_sequences_map_to_navigation_tokens(self) -> None:
        keys = self._read_keys(b"\x1b[1~\x1b[4~\x1b[5~\x1b[6~", 4)
        self.assertEqual(keys, ["HOME", "END", "PAGE_UP", "PAGE_DOWN"])

    def test_shift_tab_is_recognized(self) -> None:
        self.assertEqual(self._read_keys(b"\x1b[Z", 1), ["SHIFT_TAB"])

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        self.assertEqual(self._read_keys(b"\x1ba", 2), ["ESC", "a"])

    def test_control_keys_are_recognized(self) -> None:
        keys = self._read_keys(b"\x03\x04\x12\x1f\t\r", 6)
        self.assertEqual(keys, ["CTRL_C", "CTRL_D", "CTRL_R", "CTRL_QUESTION", "TAB", "ENTER"])

    def test_printable_and_space_pass_through(self) -> None:
        self.assertEqual(self._read_keys(b"b ", 2), ["b", " "])

    def test_multibyte_utf8_character_is_one_key(self) -> None:
        self.assertEqual(self._read_keys("é€".encode("utf-8"), 2), ["é", "€"])

    def test_sgr_mouse_press_and_release(self) -> None:
        keys = self._read_keys(b"\x1b[<0;15;7M\x1b[<0;15;7m", 2)
        self.assertEqual(keys, ["MOUSE_LEFT_DOWN:15:7", "MOUSE_LEFT_UP:15:7"])

    def test_sgr_mouse_motion_maps_to_move(self) -> None:
        self.assertEqual(self._read_keys(b"\x1b[<35;4;9M", 1), ["MOUSE_MOVE:4:9"])

    def test_sgr_mouse_wheel_is_recognized(self) -> None:
        keys = self._read_keys(b"\x1b[<64;10;4M\x1b[<65;11;5M", 2)
        self.assertEqual(keys, ["MOUSE_WHEEL_UP:10:4", "MOUSE_WHEEL_DOWN:11:5"])

    def test_malformed_mouse_payload_falls_back_to_escape(self) -> None:
        self.assertEqual(self._read_keys(b"\x1b[<x;1M", 1), ["ESC"])


if __name__ == "__main__":
    unittest.main()
