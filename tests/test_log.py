"""Opt-in file logging configuration."""

from __future__ import annotations

import logging
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from terse import log


class ConfigureLoggingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.logger = logging.getLogger(log.PACKAGE_LOGGER)
        self.saved_level = self.logger.level
        self.saved_propagate = self.logger.propagate

    def tearDown(self) -> None:
        self.logger.setLevel(self.saved_level)
        self.logger.propagate = self.saved_propagate

    def test_disabled_without_path(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            self.assertIsNone(log.configure_logging())

    def test_file_handler_from_environment(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "terse.log"
            env = {log.LOG_FILE_ENV: str(path), log.LOG_LEVEL_ENV: "debug"}
            with mock.patch.dict(os.environ, env, clear=True):
                handler = log.configure_logging()
            try:
                self.assertIsNotNone(handler)
                logging.getLogger("terse.fileio").debug("loaded %s", "notes.txt")
                handler.flush()
                text = path.read_text(encoding="utf-8")
            finally:
                self.logger.removeHandler(handler)
                handler.close()

        self.assertIn("DEBUG terse.fileio: loaded notes.txt", text)

    def test_explicit_path_wins(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "explicit.log"
            with mock.patch.dict(os.environ, {log.LOG_FILE_ENV: str(Path(tmp) / "env.log")}, clear=True):
                handler = log.configure_logging(str(path))
            try:
                self.assertEqual(Path(handler.baseFilename), path)
            finally:
                self.logger.removeHandler(handler)
                handler.close()

    def test_resolve_level(self) -> None:
        self.assertEqual(log.resolve_level("debug"), logging.DEBUG)
        self.assertEqual(log.resolve_level(" warning "), logging.WARNING)
        self.assertEqual(log.resolve_level("nonsense"), logging.INFO)
        self.assertEqual(log.resolve_level(None), logging.INFO)


if __name__ == "__main__":
    unittest.main()
