"""Cursor-level editing and movement built on ``Document`` primitives."""

from __future__ import annotations

from .state import EditorState

MOVE_KEYS = ("UP", "DOWN", "LEFT", "RIGHT")


def insert_char(state: EditorState, ch: str) -> None:
    """Insert ``ch`` at the cursor, creating a row when past EOF."""
    document = state.document
    if state.cy == document.numrows:
        document.insert_row(document.numrows, "")
    document.insert_char(document.rows[state.cy], state.cx, ch)
    state.cx += 1


def insert_newline(state: EditorState) -> None:
    """Split the current row at the cursor and move to the new row."""
    document = state.document
    if state.cx == 0:
        document.insert_row(state.cy, "")
    else:
        row = document.rows[state.cy]
        document.insert_row(state.cy + 1, row.raw[state.cx:])
        document.truncate_row(document.rows[state.cy], state.cx)
    state.cy += 1
    state.cx = 0


def delete_char(state: EditorState) -> None:
    """Delete the character left of the cursor, joining rows at column 0."""
    document = state.document
    if state.cy == document.numrows:
        return
    if state.cx == 0 and state.cy == 0:
        return

    row = document.rows[state.cy]
    if state.cx > 0:
        document.delete_char(row, state.cx - 1)
        state.cx -= 1
        return

    previous = document.rows[state.cy - 1]
    # Capture the join column before the row list changes.
    join_col = previous.size
    document.append_string(previous, row.raw)
    document.delete_row(state.cy)
    state.cy -= 1
    state.cx = join_col


def delete_forward(state: EditorState) -> None:
    """Delete the character under the cursor (Delete key)."""
    if state.cy == state.document.numrows:
        return
    move_cursor(state, "RIGHT")
    delete_char(state)


def move_cursor(state: EditorState, key: str) -> None:
    """Move one step in direction ``key`` and clamp ``cx`` to the row."""
    document = state.document
    row = state.current_row()

    if key == "LEFT":
        if state.cx != 0:
            state.cx -= 1
        elif state.cy > 0:
            state.cy -= 1
            state.cx = document.rows[state.cy].size
    elif key == "RIGHT":
        if row is not None and state.cx < row.size:
            state.cx += 1
        elif row is not None and state.cx == row.size:
            state.cy += 1
            state.cx = 0
    elif key == "UP":
        if state.cy != 0:
            state.cy -= 1
    elif key == "DOWN":
        if state.cy < document.numrows:
            state.cy += 1

    row = state.current_row()
    row_len = row.size if row is not None else 0
    if state.cx > row_len:
        state.cx = row_len


def move_home(state: EditorState) -> None:
    state.cx = 0


def move_end(state: EditorState) -> None:
    row = state.current_row()
    if row is not None:
        state.cx = row.size


def page(state: EditorState, key: str) -> None:
    """Jump to the window edge, then step a full screen in that direction."""
    if key == "PAGE_UP":
        state.cy = state.rowoff
        direction = "UP"
    else:
        state.cy = min(state.rowoff + state.screen_rows - 1, state.document.numrows)
        direction = "DOWN"
    for _ in range(state.screen_rows):
        move_cursor(state, direction)
