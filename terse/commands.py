"""Command dispatch: key tokens to document edits, movement, save and quit."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from . import editing
from .fileio import save_document
from .key_registry import KeyBinding, KeyBindings
from .state import EditorState

READ_ONLY_MESSAGE = "Read-only: buffer cannot be modified"
SAVE_AS_TEMPLATE = "Save as: {} (ESC to cancel)"

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandContext:
    """State and bound collaborators required for key handling."""

    state: EditorState
    prompt_filename: Callable[[], str | None]
    clock: Callable[[], float] = time.monotonic


def is_insertable(key: str) -> bool:
    """Return whether ``key`` is a literal byte to insert into the text."""
    if len(key) != 1:
        return False
    return key == "\t" or ord(key) >= 32


def save_buffer(context: CommandContext) -> bool:
    """Save the document, prompting for a name when it has none.

    Returns ``True`` on success. Failures leave the document and its dirty
    counter untouched and are reported through the status message.
    """
    state = context.state
    document = state.document
    if document.filename is None:
        filename = context.prompt_filename()
        if filename is None:
            state.set_status_message("Save aborted", context.clock())
            return False
        document.filename = filename

    try:
        written = save_document(document, document.filename)
    except OSError as exc:
        log.warning("save to %s failed: %s", document.filename, exc)
        state.set_status_message(f"Can't save! I/O error: {exc.strerror or exc}", context.clock())
        return False

    document.mark_clean()
    state.set_status_message(f"{written} bytes written to disk", context.clock())
    return True


def handle_key(key: str, context: CommandContext) -> bool:
    """Handle one key token and return ``True`` when the editor should quit."""
    state = context.state

    def refuse_in_read_only() -> bool:
        if state.read_only:
            state.set_status_message(READ_ONLY_MESSAGE, context.clock())
            return True
        return False

    def quit_action(_key: str) -> bool:
        if state.document.dirty and state.quit_times > 1:
            state.quit_times -= 1
            plural = "" if state.quit_times == 1 else "s"
            state.set_status_message(
                "WARNING!!! File has unsaved changes. "
                f"Press Ctrl-Q {state.quit_times} more time{plural} to quit.",
                context.clock(),
            )
            return False
        log.info("quit requested")
        return True

    def save_action(_key: str) -> bool:
        if not refuse_in_read_only():
            save_buffer(context)
        return False

    def newline_action(_key: str) -> bool:
        if not refuse_in_read_only():
            editing.insert_newline(state)
        return False

    def backspace_action(_key: str) -> bool:
        if not refuse_in_read_only():
            editing.delete_char(state)
        return False

    def delete_action(_key: str) -> bool:
        if not refuse_in_read_only():
            editing.delete_forward(state)
        return False

    def move_action(key: str) -> bool:
        editing.move_cursor(state, key)
        return False

    def page_action(key: str) -> bool:
        editing.page(state, key)
        return False

    def home_action(_key: str) -> bool:
        editing.move_home(state)
        return False

    def end_action(_key: str) -> bool:
        editing.move_end(state)
        return False

    def ignore_action(_key: str) -> bool:
        return False

    def insert_action(key: str) -> bool:
        if is_insertable(key) and not refuse_in_read_only():
            editing.insert_char(state, key)
        return False

    bindings = KeyBindings(fallback=insert_action).bind_all(
        KeyBinding(("CTRL_Q",), quit_action),
        KeyBinding(("CTRL_S",), save_action),
        KeyBinding(("ENTER",), newline_action),
        KeyBinding(("BACKSPACE",), backspace_action),
        KeyBinding(("DELETE",), delete_action),
        KeyBinding(editing.MOVE_KEYS, move_action),
        KeyBinding(("PAGE_UP", "PAGE_DOWN"), page_action),
        KeyBinding(("HOME",), home_action),
        KeyBinding(("END",), end_action),
        KeyBinding(("CTRL_L", "ESC"), ignore_action),
    )

    should_quit = bool(bindings.dispatch(key))
    if key != "CTRL_Q":
        state.reset_quit_times()
    return should_quit
