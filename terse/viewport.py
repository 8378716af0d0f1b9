"""Scroll-offset bookkeeping that keeps the cursor inside the window."""

from __future__ import annotations

from .state import EditorState


def scroll(state: EditorState) -> None:
    """Recompute ``rx`` and adjust ``rowoff``/``coloff`` for the cursor.

    Offsets only move when the cursor has left the visible window, so the
    call is idempotent once the cursor is on screen.
    """
    row = state.current_row()
    state.rx = row.cx_to_rx(state.cx) if row is not None else 0

    if state.cy < state.rowoff:
        state.rowoff = state.cy
    if state.cy >= state.rowoff + state.screen_rows:
        state.rowoff = state.cy - state.screen_rows + 1

    if state.rx < state.coloff:
        state.coloff = state.rx
    if state.rx >= state.coloff + state.screen_cols:
        state.coloff = state.rx - state.screen_cols + 1
