"""Regression tests for raw-key decoding.

Covers the escape-sequence state machine, ESC timing and control-key
token mapping. These protect input handling in raw terminal mode.
"""

from __future__ import annotations

import os
import time
import unittest

from terse import input as input_mod


def _read_keys(payload: bytes, count: int) -> list[str]:
    read_fd, write_fd = os.pipe()
    try:
        os.write(write_fd, payload)
        return [input_mod.read_key(read_fd, timeout_ms=20) for _ in range(count)]
    finally:
        os.close(read_fd)
        os.close(write_fd)


class ReadKeyTests(unittest.TestCase):
    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        started = time.monotonic()
        keys = _read_keys(b"\x1b", 1)
        elapsed = time.monotonic() - started

        self.assertEqual(keys, ["ESC"])
        self.assertLess(elapsed, 1.0)

    def test_arrow_and_home_end_sequences(self) -> None:
        keys = _read_keys(b"\x1b[A\x1b[B\x1b[C\x1b[D\x1b[H\x1b[F", 6)
        self.assertEqual(keys, ["UP", "DOWN", "RIGHT", "LEFT", "HOME", "END"])

    def test_tilde_sequences(self) -> None:
        payload = b"".join(b"\x1b[" + digit + b"~" for digit in (b"1", b"3", b"4", b"5", b"6", b"7", b"8"))
        keys = _read_keys(payload, 7)
        self.assertEqual(keys, ["HOME", "DELETE", "END", "PAGE_UP", "PAGE_DOWN", "HOME", "END"])

    def test_ss3_home_and_end(self) -> None:
        self.assertEqual(_read_keys(b"\x1bOH\x1bOF", 2), ["HOME", "END"])

    def test_unknown_tilde_digit_resolves_to_escape(self) -> None:
        self.assertEqual(_read_keys(b"\x1b[9~", 2), ["ESC", ""])

    def test_digit_without_tilde_resolves_to_escape(self) -> None:
        self.assertEqual(_read_keys(b"\x1b[2X", 2), ["ESC", ""])

    def test_unknown_final_byte_resolves_to_escape(self) -> None:
        self.assertEqual(_read_keys(b"\x1b[Z\x1bOA\x1bxy", 4), ["ESC", "ESC", "ESC", ""])

    def test_truncated_sequence_resolves_to_escape(self) -> None:
        self.assertEqual(_read_keys(b"\x1b[", 1), ["ESC"])
        self.assertEqual(_read_keys(b"\x1b[5", 1), ["ESC"])

    def test_timeout_returns_empty_token(self) -> None:
        self.assertEqual(_read_keys(b"", 1), [""])

    def test_control_keys(self) -> None:
        keys = _read_keys(b"\x11\x13\x0c\r\x7f\x08\t", 7)
        self.assertEqual(keys, ["CTRL_Q", "CTRL_S", "CTRL_L", "ENTER", "BACKSPACE", "BACKSPACE", "\t"])

    def test_printable_and_high_bytes_pass_through(self) -> None:
        self.assertEqual(_read_keys(b"a~\xe9", 3), ["a", "~", "\xe9"])

    def test_blocking_read_without_timeout(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, b"z")
            key = input_mod.read_key(read_fd)
        finally:
            os.close(read_fd)
            os.close(write_fd)
        self.assertEqual(key, "z")

    def test_closed_input_raises_eof(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, b"k")
            os.close(write_fd)
            write_fd = -1
            self.assertEqual(input_mod.read_key(read_fd, timeout_ms=20), "k")
            with self.assertRaises(EOFError):
                input_mod.read_key(read_fd, timeout_ms=20)
            with self.assertRaises(EOFError):
                input_mod.read_key(read_fd)
        finally:
            os.close(read_fd)
            if write_fd >= 0:
                os.close(write_fd)

    def test_closed_input_inside_escape_sequence(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, b"\x1b[")
            os.close(write_fd)
            write_fd = -1
            self.assertEqual(input_mod.read_key(read_fd, timeout_ms=20), "ESC")
            with self.assertRaises(EOFError):
                input_mod.read_key(read_fd, timeout_ms=20)
        finally:
            os.close(read_fd)
            if write_fd >= 0:
                os.close(write_fd)


class DecoderTests(unittest.TestCase):
    def _decode(self, payload: bytes) -> str:
        chunks = iter([payload[idx:idx + 1] for idx in range(len(payload))])
        return input_mod.decode_escape_sequence(lambda: next(chunks, None))

    def test_state_machine_without_terminal(self) -> None:
        self.assertEqual(self._decode(b"[A"), "UP")
        self.assertEqual(self._decode(b"[6~"), "PAGE_DOWN")
        self.assertEqual(self._decode(b"OF"), "END")
        self.assertEqual(self._decode(b""), "ESC")
        self.assertEqual(self._decode(b"O"), "ESC")

    def test_ctrl_key_uses_low_five_bits(self) -> None:
        self.assertEqual(input_mod.ctrl_key("q"), 0x11)
        self.assertEqual(input_mod.ctrl_key("s"), 0x13)
        self.assertEqual(input_mod.decode_byte(bytes([input_mod.ctrl_key("q")])), "CTRL_Q")


if __name__ == "__main__":
    unittest.main()
