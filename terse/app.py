"""Runtime composition layer for terse.

Builds the editor state, negotiates the terminal and runs the
read-decode-dispatch-render loop until a quit command.
"""

from __future__ import annotations

import logging
import sys
import time
from collections.abc import Callable
from functools import partial

from .commands import SAVE_AS_TEMPLATE, CommandContext, handle_key
from .config import EditorSettings
from .document import Document
from .input import read_key
from .prompt import prompt_line
from .screen import refresh_screen
from .state import EditorState
from .terminal import TerminalController

KEY_POLL_TIMEOUT_MS = 100
STATUS_BAR_ROWS = 2
HELP_MESSAGE = "HELP: Ctrl-S = save | Ctrl-Q = quit"
VIEW_HELP_MESSAGE = "HELP: Ctrl-Q = quit"

log = logging.getLogger(__name__)


def apply_window_size(state: EditorState, rows: int, cols: int) -> None:
    """Size the text area, reserving the bottom rows for status and messages."""
    state.screen_rows = max(1, rows - STATUS_BAR_ROWS)
    state.screen_cols = max(1, cols)


def build_state(
    document: Document,
    settings: EditorSettings,
    read_only: bool = False,
) -> EditorState:
    return EditorState(
        document=document,
        read_only=read_only,
        quit_times_setting=settings.quit_times,
        quit_times=settings.quit_times,
        status_message_seconds=settings.status_message_seconds,
    )


def run_main_loop(
    state: EditorState,
    stdin_fd: int,
    stdout_fd: int,
    clock: Callable[[], float] = time.monotonic,
) -> None:
    """Run the interactive loop until the dispatcher reports a quit.

    The screen is redrawn after every key and once more when the status
    message expires; read timeouts are otherwise ignored. A closed input
    stream also ends the loop.
    """
    read = partial(read_key, stdin_fd, timeout_ms=KEY_POLL_TIMEOUT_MS)

    def refresh() -> None:
        refresh_screen(state, stdout_fd, clock())

    context = CommandContext(
        state=state,
        prompt_filename=lambda: prompt_line(
            state,
            SAVE_AS_TEMPLATE,
            read_key=read,
            refresh=refresh,
            clock=clock,
        ),
        clock=clock,
    )

    needs_redraw = True
    try:
        while True:
            if needs_redraw:
                refresh()
                needs_redraw = False
            key = read()
            if key == "":
                if state.status_message and not state.status_message_visible(clock()):
                    state.status_message = ""
                    needs_redraw = True
                continue
            if handle_key(key, context):
                break
            needs_redraw = True
    except EOFError:
        log.warning("input closed; leaving editor with %d unsaved changes", state.document.dirty)


def run_editor(
    document: Document,
    settings: EditorSettings | None = None,
    read_only: bool = False,
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
) -> None:
    """Open ``document`` in the interactive editor.

    Raises ``TerminalError`` when the terminal cannot be put into raw mode
    or measured; the terminal state is restored before it propagates.
    """
    if settings is None:
        settings = EditorSettings()
    if stdin_fd is None:
        stdin_fd = sys.stdin.fileno()
    if stdout_fd is None:
        stdout_fd = sys.stdout.fileno()

    state = build_state(document, settings, read_only=read_only)
    terminal = TerminalController(stdin_fd, stdout_fd)
    with terminal.raw_mode():
        rows, cols = terminal.window_size()
        apply_window_size(state, rows, cols)
        log.info("editor started: %dx%d, %d rows loaded", cols, rows, document.numrows)
        state.set_status_message(VIEW_HELP_MESSAGE if read_only else HELP_MESSAGE, time.monotonic())
        run_main_loop(state, stdin_fd, stdout_fd)
    log.info("editor exited")
