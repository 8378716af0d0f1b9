from __future__ import annotations

from dataclasses import dataclass, field

from .document import Document, Row

DEFAULT_QUIT_TIMES = 2
STATUS_MESSAGE_SECONDS = 5.0


@dataclass
class EditorState:
    document: Document = field(default_factory=Document)
    cx: int = 0
    cy: int = 0
    rx: int = 0
    rowoff: int = 0
    coloff: int = 0
    screen_rows: int = 22
    screen_cols: int = 80
    status_message: str = ""
    status_message_time: float = 0.0
    status_message_seconds: float = STATUS_MESSAGE_SECONDS
    quit_times_setting: int = DEFAULT_QUIT_TIMES
    quit_times: int = DEFAULT_QUIT_TIMES
    read_only: bool = False

    def current_row(self) -> Row | None:
        return self.document.row_at(self.cy)

    def set_status_message(self, message: str, now: float) -> None:
        self.status_message = message
        self.status_message_time = now

    def status_message_visible(self, now: float) -> bool:
        if not self.status_message:
            return False
        return now - self.status_message_time < self.status_message_seconds

    def reset_quit_times(self) -> None:
        self.quit_times = self.quit_times_setting
