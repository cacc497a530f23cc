# tests/test_logging_config.py

"""Tests for the per-run logging configuration."""

import logging
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from src.config.logging_config import setup_logging
from src.config.settings import Settings


class TestLoggingConfig(unittest.TestCase):
    """Verify logging setup behaviour."""

    def setUp(self) -> None:
        """Reset the price_tracker logger and redirect logs/ to a temp dir."""
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        patcher = patch.object(
            Settings, "LOGS_DIR", Path(tmp.name) / "logs"
        )
        patcher.start()
        self.addCleanup(patcher.stop)

        self.root_logger = logging.getLogger("price_tracker")
        self._clear_handlers()
        self.addCleanup(self._clear_handlers)

    def _clear_handlers(self) -> None:
        for handler in list(self.root_logger.handlers):
            handler.close()
            self.root_logger.removeHandler(handler)

    def _console_handlers(self) -> list[logging.Handler]:
        return [
            h
            for h in self.root_logger.handlers
            if isinstance(h, logging.StreamHandler)
            and not isinstance(h, logging.FileHandler)
        ]

    def test_setup_creates_log_file(self) -> None:
        """setup_logging returns a path that exists on disk."""
        log_path = setup_logging()
        self.assertTrue(log_path.exists())

    def test_log_file_naming_convention(self) -> None:
        """Log file name matches run_YYYYMMDD_HHMMSS.log format."""
        log_path = setup_logging()
        pattern = r"^run_\d{8}_\d{6}\.log$"
        self.assertRegex(log_path.name, pattern)

    def test_log_file_inside_logs_dir(self) -> None:
        """Log file is created inside the logs/ directory."""
        log_path = setup_logging()
        self.assertEqual(log_path.parent.name, "logs")

    def test_file_handler_level_debug(self) -> None:
        """File handler should be set to DEBUG level."""
        setup_logging()
        file_handlers = [
            h
            for h in self.root_logger.handlers
            if isinstance(h, logging.FileHandler)
        ]
        self.assertEqual(len(file_handlers), 1)
        self.assertEqual(file_handlers[0].level, logging.DEBUG)

    def test_console_handler_level_warning(self) -> None:
        """Console handler defaults to WARNING."""
        setup_logging()
        handlers = self._console_handlers()
        self.assertEqual(len(handlers), 1)
        self.assertEqual(handlers[0].level, logging.WARNING)

    def test_debug_lowers_console_level(self) -> None:
        """--debug echoes DEBUG records to the console."""
        setup_logging(debug=True)
        self.assertEqual(self._console_handlers()[0].level, logging.DEBUG)

    def test_repeated_calls_no_duplicate_handlers(self) -> None:
        """Calling setup_logging twice does not duplicate handlers."""
        setup_logging()
        count_before = len(self.root_logger.handlers)
        setup_logging(debug=True)
        self.assertEqual(count_before, len(self.root_logger.handlers))
        self.assertEqual(self._console_handlers()[0].level, logging.DEBUG)

    def test_root_logger_level_is_debug(self) -> None:
        """The root project logger is set to DEBUG."""
        setup_logging()
        self.assertEqual(self.root_logger.level, logging.DEBUG)

    def test_child_loggers_reach_file(self) -> None:
        """Module loggers write through the per-run file."""
        log_path = setup_logging()
        logging.getLogger("price_tracker.emmsa").info("hello from emmsa")
        for handler in self.root_logger.handlers:
            handler.flush()
        self.assertIn("hello from emmsa", log_path.read_text(encoding="utf-8"))


if __name__ == "__main__":
    unittest.main()
