"""User JSON config loading.

Reads editor preferences such as the quit-confirmation count. The file is
user-maintained; the editor never writes it. Malformed or missing config
falls back to defaults.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .state import DEFAULT_QUIT_TIMES, STATUS_MESSAGE_SECONDS

APP_NAME = "terse"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


@dataclass(frozen=True)
class EditorSettings:
    quit_times: int = DEFAULT_QUIT_TIMES
    status_message_seconds: float = STATUS_MESSAGE_SECONDS


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def _coerce_positive_int(value: object, default: int) -> int:
    """Booleans, non-integers and values below 1 fall back to ``default``."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        return default
    return value


def _coerce_positive_float(value: object, default: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        return default
    return float(value)


def load_editor_settings() -> EditorSettings:
    """Return editor settings from config, with defaults for bad values."""
    data = load_config()
    return EditorSettings(
        quit_times=_coerce_positive_int(data.get("quit_times"), DEFAULT_QUIT_TIMES),
        status_message_seconds=_coerce_positive_float(
            data.get("status_message_seconds"),
            STATUS_MESSAGE_SECONDS,
        ),
    )

