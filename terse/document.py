"""In-memory line buffer for the editor.

``Document`` owns an ordered list of ``Row`` objects plus a dirty counter.
Every mutation keeps ``Row.rendered`` in sync with ``Row.raw`` and bumps
``dirty``. Out-of-range indices are treated as no-ops, never as errors.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .text import cx_to_rx, render_row


@dataclass
class Row:
    """One line of text and its tab-expanded display form."""

    raw: str = ""
    rendered: str = field(default="", init=False)

    def __post_init__(self) -> None:
        self.update()

    @property
    def size(self) -> int:
        return len(self.raw)

    def update(self) -> None:
        """Regenerate ``rendered`` from ``raw``."""
        self.rendered = render_row(self.raw)

    def cx_to_rx(self, cx: int) -> int:
        return cx_to_rx(self.raw, cx)


@dataclass
class Document:
    """Ordered rows of the open file with modification tracking."""

    rows: list[Row] = field(default_factory=list)
    filename: str | None = None
    dirty: int = 0

    @property
    def numrows(self) -> int:
        return len(self.rows)

    def row_at(self, index: int) -> Row | None:
        """Return row ``index`` or ``None`` for the virtual row past EOF."""
        if 0 <= index < len(self.rows):
            return self.rows[index]
        return None

    def insert_row(self, at: int, text: str = "") -> bool:
        """Insert ``text`` as a new row before index ``at``.

        ``at`` may equal ``numrows`` to append. Any other out-of-range index
        leaves the document unchanged and returns ``False``.
        """
        if at < 0 or at > len(self.rows):
            return False
        self.rows.insert(at, Row(text))
        self.dirty += 1
        return True

    def delete_row(self, at: int) -> bool:
        if at < 0 or at >= len(self.rows):
            return False
        del self.rows[at]
        self.dirty += 1
        return True

    def insert_char(self, row: Row, col: int, ch: str) -> None:
        """Insert one character into ``row``; bad columns append at the end."""
        if col < 0 or col > row.size:
            col = row.size
        row.raw = row.raw[:col] + ch + row.raw[col:]
        row.update()
        self.dirty += 1

    def delete_char(self, row: Row, col: int) -> bool:
        if col < 0 or col >= row.size:
            return False
        row.raw = row.raw[:col] + row.raw[col + 1:]
        row.update()
        self.dirty += 1
        return True

    def append_string(self, row: Row, text: str) -> None:
        row.raw += text
        row.update()
        self.dirty += 1

    def truncate_row(self, row: Row, at: int) -> None:
        """Keep only ``row.raw[:at]``."""
        row.raw = row.raw[:max(0, at)]
        row.update()
        self.dirty += 1

    def serialize(self) -> str:
        """Return the exact text to persist: every row followed by ``\\n``."""
        return "".join(f"{row.raw}\n" for row in self.rows)

    def mark_clean(self) -> None:
        self.dirty = 0

    @classmethod
    def from_lines(cls, lines: list[str], filename: str | None = None) -> Document:
        """Build a clean document whose rows are ``lines`` in order."""
        document = cls(filename=filename)
        for line in lines:
            document.insert_row(document.numrows, line)
        document.mark_clean()
        return document
