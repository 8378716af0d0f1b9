"""Render transform for row text.

Expands tabs to the editor tab stop and maps raw character offsets to
display columns. Rows hold single-byte characters, so one character is one
terminal cell except for tabs.
"""

from __future__ import annotations

TAB_STOP = 4


def tab_advance(rx: int) -> int:
    """Return how many columns a tab at display column ``rx`` occupies."""
    return TAB_STOP - (rx % TAB_STOP)


def cx_to_rx(raw: str, cx: int) -> int:
    """Convert raw character offset ``cx`` into a display column.

    Only characters in ``raw[:cx]`` are walked, so offsets past the end of
    the row behave like the row length.
    """
    rx = 0
    for ch in raw[:cx]:
        if ch == "\t":
            rx += tab_advance(rx)
        else:
            rx += 1
    return rx


def render_row(raw: str) -> str:
    """Return the display form of ``raw`` with tabs expanded to spaces."""
    if "\t" not in raw:
        return raw
    out: list[str] = []
    col = 0
    for ch in raw:
        if ch == "\t":
            width = tab_advance(col)
            out.append(" " * width)
            col += width
        else:
            out.append(ch)
            col += 1
    return "".join(out)
