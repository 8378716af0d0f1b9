"""Terminal control helpers for the editor session.

Owns the raw-mode lifecycle and terminal size discovery. Size discovery
prefers the OS window-size query and falls back to moving the cursor to the
bottom-right corner and asking the terminal where it ended up.
"""

from __future__ import annotations

import contextlib
import logging
import os
import re
import termios
import tty

from .input import read_ready_byte

CURSOR_TO_BOTTOM_RIGHT = b"\x1b[999C\x1b[999B"
CURSOR_POSITION_QUERY = b"\x1b[6n"
CURSOR_REPORT_RE = re.compile(rb"^\x1b\[(\d+);(\d+)$")
CURSOR_REPORT_TIMEOUT_MS = 1000
CURSOR_REPORT_MAX_BYTES = 32

log = logging.getLogger(__name__)


class TerminalError(RuntimeError):
    """Raised when the terminal cannot be configured or measured."""


def parse_cursor_report(report: bytes) -> tuple[int, int] | None:
    """Parse an ``ESC [ rows ; cols`` reply (terminating ``R`` stripped)."""
    match = CURSOR_REPORT_RE.match(report)
    if match is None:
        return None
    return int(match.group(1)), int(match.group(2))


class TerminalController:
    """Manage raw-mode transitions and size queries for one terminal."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        try:
            self._saved_tty_state = termios.tcgetattr(stdin_fd)
        except termios.error as exc:
            raise TerminalError(f"tcgetattr: {exc}") from exc

    def enable_raw_mode(self) -> None:
        """Switch to unechoed, character-at-a-time input."""
        try:
            tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        except termios.error as exc:
            raise TerminalError(f"tcsetattr: {exc}") from exc

    def disable_raw_mode(self) -> None:
        """Clear the screen and restore the tty state saved at startup."""
        os.write(self.stdout_fd, b"\x1b[2J\x1b[H")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that restores the terminal on every exit path."""
        self.enable_raw_mode()
        try:
            yield
        finally:
            self.disable_raw_mode()

    def window_size(self) -> tuple[int, int]:
        """Return terminal ``(rows, cols)``; must be called in raw mode."""
        try:
            size = os.get_terminal_size(self.stdout_fd)
        except OSError:
            size = None
        if size is not None and size.columns > 0:
            return size.lines, size.columns
        log.info("window size ioctl unavailable; querying cursor position")
        return self._query_window_size()

    def _query_window_size(self) -> tuple[int, int]:
        os.write(self.stdout_fd, CURSOR_TO_BOTTOM_RIGHT + CURSOR_POSITION_QUERY)
        report = b""
        while len(report) < CURSOR_REPORT_MAX_BYTES:
            ch = read_ready_byte(self.stdin_fd, CURSOR_REPORT_TIMEOUT_MS)
            if not ch or ch == b"R":
                break
            report += ch
        parsed = parse_cursor_report(report)
        if parsed is None:
            raise TerminalError("window size query: unreadable cursor position report")
        return parsed
