"""File load/save for editor documents.

Bytes are decoded as latin-1 so every byte round-trips unchanged through a
one-character slot in a row. Line endings are normalized to ``\\n`` on save.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .document import Document

ENCODING = "latin-1"

log = logging.getLogger(__name__)


def split_lines(text: str) -> list[str]:
    """Split file text into row strings without their line terminators."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line.rstrip("\r") for line in lines]


def load_document(path: str | os.PathLike[str]) -> Document:
    """Read ``path`` into a clean ``Document``.

    Raises ``OSError`` when the file cannot be opened; callers treat that
    as fatal at startup.
    """
    target = Path(path)
    data = target.read_bytes()
    document = Document.from_lines(split_lines(data.decode(ENCODING)), filename=str(path))
    log.info("loaded %s: %d bytes, %d rows", target, len(data), document.numrows)
    return document


def save_document(document: Document, path: str | os.PathLike[str]) -> int:
    """Write ``document`` to ``path`` and return the number of bytes written.

    The file is created with mode 0644 when absent and truncated to the new
    length. ``OSError`` propagates; the document is not touched here.
    """
    data = document.serialize().encode(ENCODING)
    fd = os.open(path, os.O_RDWR | os.O_CREAT, 0o644)
    with os.fdopen(fd, "r+b") as handle:
        handle.truncate(len(data))
        handle.write(data)
    log.info("saved %s: %d bytes", path, len(data))
    return len(data)
