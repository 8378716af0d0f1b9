"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Escape sequences are resolved by a small state machine; anything it does
not recognize collapses to a bare ``"ESC"`` instead of raising.
"""

from __future__ import annotations

import enum
import os
import select
from collections.abc import Callable

ESC_SEQUENCE_TIMEOUT_MS = 100

ESC = "ESC"

_TILDE_KEYS = {
    b"1": "HOME",
    b"3": "DELETE",
    b"4": "END",
    b"5": "PAGE_UP",
    b"6": "PAGE_DOWN",
    b"7": "HOME",
    b"8": "END",
}
_CSI_KEYS = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}
_SS3_KEYS = {
    b"H": "HOME",
    b"F": "END",
}


class EscapeState(enum.Enum):
    ESC1 = "esc1"
    ESC2 = "esc2"
    ESC3 = "esc3"


def ctrl_key(letter: str) -> int:
    """Return the byte value a terminal sends for Ctrl + ``letter``."""
    return ord(letter) & 0x1F


def decode_escape_sequence(next_byte: Callable[[], bytes | None]) -> str:
    """Resolve the bytes following ESC into a key token.

    ``next_byte`` returns ``None`` when no byte arrived in time; that is a
    normal transition back to a bare Escape, not an error.
    """
    state = EscapeState.ESC1
    intro = b""
    param = b""
    while True:
        byte = next_byte()
        if byte is None:
            return ESC

        if state is EscapeState.ESC1:
            intro = byte
            state = EscapeState.ESC2
            continue

        if state is EscapeState.ESC2:
            if intro == b"[":
                if byte.isdigit():
                    param = byte
                    state = EscapeState.ESC3
                    continue
                return _CSI_KEYS.get(byte, ESC)
            if intro == b"O":
                return _SS3_KEYS.get(byte, ESC)
            return ESC

        if byte == b"~":
            return _TILDE_KEYS.get(param, ESC)
        return ESC


def decode_byte(ch: bytes) -> str:
    """Map one non-escape byte to its key token."""
    if ch == b"\r":
        return "ENTER"
    if ch in {b"\x7f", bytes([ctrl_key("h")])}:
        return "BACKSPACE"
    if ch == b"\t":
        return "\t"
    code = ch[0]
    if code < 0x20:
        return f"CTRL_{chr(code | 0x40)}"
    return ch.decode("latin-1")


def read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    """Read one byte once ``fd`` is readable.

    Returns ``None`` when ``timeout_ms`` elapses first and ``b""`` at end of
    input.
    """
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    return os.read(fd, 1)


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token from ``fd``.

    Returns ``""`` when ``timeout_ms`` elapses before a byte arrives; callers
    simply try again. Raises ``EOFError`` once the input stream is closed.
    """
    if timeout_ms is not None:
        ch = read_ready_byte(fd, timeout_ms)
        if ch is None:
            return ""
    else:
        ch = os.read(fd, 1)
    if not ch:
        raise EOFError("terminal input closed")

    if ch != b"\x1b":
        return decode_byte(ch)
    # End of input inside a sequence reads as a bare Escape; the next read raises.
    return decode_escape_sequence(lambda: read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS) or None)
