"""Screen compositor for the editor view.

Builds one complete terminal frame (text rows, status bar, message bar and
cursor placement) into a scratch buffer and writes it with a single
``os.write`` so the terminal never shows a half-drawn screen.
"""

from __future__ import annotations

import io
import os

from . import __version__
from .state import EditorState
from .viewport import scroll

HIDE_CURSOR = b"\x1b[?25l"
SHOW_CURSOR = b"\x1b[?25h"
CURSOR_HOME = b"\x1b[H"
CLEAR_LINE = b"\x1b[K"
REVERSE_VIDEO = b"\x1b[7m"
RESET_ATTRS = b"\x1b[m"
CRLF = b"\r\n"

FILENAME_STATUS_WIDTH = 20
WELCOME_TEMPLATE = "terse editor -- version {version}"


def _encode(text: str) -> bytes:
    return text.encode("latin-1", errors="replace")


def cursor_position(row: int, col: int) -> bytes:
    """Return the sequence placing the cursor at 1-based ``row``/``col``."""
    return f"\x1b[{row};{col}H".encode("ascii")


def welcome_line(screen_cols: int) -> str:
    """Return the centered banner shown in an empty document."""
    welcome = WELCOME_TEMPLATE.format(version=__version__)[:screen_cols]
    padding = (screen_cols - len(welcome)) // 2
    prefix = ""
    if padding:
        prefix = "~"
        padding -= 1
    return prefix + " " * padding + welcome


def draw_rows(out: io.BytesIO, state: EditorState) -> None:
    document = state.document
    for y in range(state.screen_rows):
        filerow = y + state.rowoff
        if filerow >= document.numrows:
            if document.numrows == 0 and y == state.screen_rows // 3:
                out.write(_encode(welcome_line(state.screen_cols)))
            else:
                out.write(b"~")
        else:
            rendered = document.rows[filerow].rendered
            out.write(_encode(rendered[state.coloff:state.coloff + state.screen_cols]))
        out.write(CLEAR_LINE)
        out.write(CRLF)


def status_bar_text(state: EditorState) -> str:
    """Return the status bar padded to exactly ``screen_cols`` when it fits.

    The left side shows the truncated filename, row count and flags; the
    row indicator is right-aligned only when it fits after the left side.
    """
    document = state.document
    name = (document.filename or "[No Name]")[:FILENAME_STATUS_WIDTH]
    left = f"{name} - {document.numrows} lines"
    if document.dirty:
        left += " (modified)"
    if state.read_only:
        left += " [read-only]"
    right = f"{state.cy + 1}/{document.numrows}"

    cols = state.screen_cols
    left = left[:cols]
    remaining = cols - len(left)
    if remaining >= len(right):
        return left + " " * (remaining - len(right)) + right
    return left + " " * remaining


def draw_status_bar(out: io.BytesIO, state: EditorState) -> None:
    out.write(REVERSE_VIDEO)
    out.write(_encode(status_bar_text(state)))
    out.write(RESET_ATTRS)
    out.write(CRLF)


def draw_message_bar(out: io.BytesIO, state: EditorState, now: float) -> None:
    out.write(CLEAR_LINE)
    if state.status_message_visible(now):
        out.write(_encode(state.status_message[:state.screen_cols]))


def build_frame(state: EditorState, now: float) -> bytes:
    """Compose one frame from current state; offsets must already be scrolled."""
    with io.BytesIO() as out:
        out.write(HIDE_CURSOR)
        out.write(CURSOR_HOME)
        draw_rows(out, state)
        draw_status_bar(out, state)
        draw_message_bar(out, state, now)
        out.write(cursor_position(state.cy - state.rowoff + 1, state.rx - state.coloff + 1))
        out.write(SHOW_CURSOR)
        return out.getvalue()


def refresh_screen(state: EditorState, fd: int, now: float) -> None:
    """Scroll to the cursor, then draw the full frame in one write."""
    scroll(state)
    os.write(fd, build_frame(state, now))
