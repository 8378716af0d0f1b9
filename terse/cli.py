"""Command-line front door for terse.

Parses CLI options, loads the target file and hands off to the runtime.
Fatal startup errors become ``SystemExit`` with a one-line message.
"""

from __future__ import annotations

import argparse
from dataclasses import replace

from . import __version__
from .app import run_editor
from .config import load_editor_settings
from .document import Document
from .fileio import load_document
from .log import configure_logging
from .terminal import TerminalError


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="terse",
        description="Edit a plain-text file in the terminal.",
    )
    parser.add_argument("path", nargs="?", default=None, help="File to open. Omit for an empty, unnamed buffer.")
    parser.add_argument("--view", action="store_true", help="Open the file read-only.")
    parser.add_argument(
        "--quit-times",
        type=_positive_int,
        default=None,
        help="Ctrl-Q presses needed to quit with unsaved changes (default: config or 2).",
    )
    parser.add_argument("--log-file", default=None, help="Append debug log records to this file.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse arguments, load the file and run the editor.

    A file or log file that cannot be opened, or a terminal that cannot be
    configured, ends the process with status 1 and a message on stderr.
    """
    args = build_parser().parse_args(argv)
    try:
        configure_logging(args.log_file)
    except OSError as exc:
        raise SystemExit(f"terse: cannot open log file {exc.filename}: {exc.strerror or exc}") from exc

    settings = load_editor_settings()
    if args.quit_times is not None:
        settings = replace(settings, quit_times=args.quit_times)

    if args.path is None:
        document = Document()
    else:
        try:
            document = load_document(args.path)
        except OSError as exc:
            raise SystemExit(f"terse: cannot open {args.path}: {exc.strerror or exc}") from exc

    try:
        run_editor(document, settings=settings, read_only=args.view)
    except TerminalError as exc:
        raise SystemExit(f"terse: {exc}") from exc


if __name__ == "__main__":
    main()
