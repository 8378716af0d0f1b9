"""Single-line input prompt drawn in the message bar."""

from __future__ import annotations

import time
from collections.abc import Callable

from .state import EditorState


def prompt_line(
    state: EditorState,
    template: str,
    *,
    read_key: Callable[[], str],
    refresh: Callable[[], None],
    clock: Callable[[], float] = time.monotonic,
) -> str | None:
    """Collect a line of text from the user.

    ``template`` is formatted with the text typed so far and shown as the
    status message. Enter with non-empty text accepts it; Escape cancels
    and returns ``None``. Only printable ASCII is accepted. The message bar is
    redrawn only when the text changes.
    """
    text = ""
    shown = None
    while True:
        if text != shown:
            state.set_status_message(template.format(text), clock())
            refresh()
            shown = text
        key = read_key()
        if key == "":
            continue
        if key in {"BACKSPACE", "DELETE"}:
            text = text[:-1]
        elif key == "ESC":
            state.set_status_message("", clock())
            return None
        elif key == "ENTER":
            if text:
                state.set_status_message("", clock())
                return text
        elif len(key) == 1 and 32 <= ord(key) < 127:
            text += key
