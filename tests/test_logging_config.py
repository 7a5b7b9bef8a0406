# tests/test_logging_config.py

"""Tests for the per-run logging configuration."""

import logging
import unittest

from src.config.logging_config import ROOT_LOGGER_NAME, setup_logging


class TestLoggingConfig(unittest.TestCase):
    """Verify logging setup behaviour."""

    def setUp(self) -> None:
        """Clean up the price_aggregator logger before each test."""
        logging.getLogger(ROOT_LOGGER_NAME).handlers.clear()

    def tearDown(self) -> None:
        for name in ("uvicorn.error", "uvicorn.access"):
            logging.getLogger(name).handlers.clear()

    def test_setup_creates_log_file(self) -> None:
        """setup_logging returns a path that exists on disk."""
        log_path = setup_logging()
        self.assertTrue(log_path.exists())

    def test_log_file_naming_convention(self) -> None:
        """Log file name matches run_YYYYMMDD_HHMMSS.log format."""
        log_path = setup_logging()
        self.assertRegex(log_path.name, r"^run_\d{8}_\d{6}\.log$")

    def test_file_handler_level_debug(self) -> None:
        """File handler should be set to DEBUG level."""
        setup_logging()
        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        file_handlers = [
            h
            for h in root_logger.handlers
            if isinstance(h, logging.FileHandler)
        ]
        self.assertEqual(len(file_handlers), 1)
        self.assertEqual(file_handlers[0].level, logging.DEBUG)

    def test_console_level_defaults_to_warning(self) -> None:
        setup_logging()
        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        stream_handlers = [
            h
            for h in root_logger.handlers
            if isinstance(h, logging.StreamHandler)
            and not isinstance(h, logging.FileHandler)
        ]
        self.assertEqual(len(stream_handlers), 1)
        self.assertEqual(stream_handlers[0].level, logging.WARNING)

    def test_console_level_can_be_lowered_for_server(self) -> None:
        setup_logging(console_level=logging.INFO)
        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        levels = {
            h.level
            for h in root_logger.handlers
            if not isinstance(h, logging.FileHandler)
        }
        self.assertEqual(levels, {logging.INFO})

    def test_repeated_calls_no_duplicate_handlers(self) -> None:
        """Calling setup_logging twice does not duplicate handlers."""
        first = setup_logging()
        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        count_before = len(root_logger.handlers)
        second = setup_logging()
        self.assertEqual(len(root_logger.handlers), count_before)
        self.assertEqual(second, first)

    def test_uvicorn_shares_run_file(self) -> None:
        """uvicorn's loggers write to the same file handler."""
        setup_logging()
        file_handler = next(
            h
            for h in logging.getLogger(ROOT_LOGGER_NAME).handlers
            if isinstance(h, logging.FileHandler)
        )
        self.assertIn(
            file_handler, logging.getLogger("uvicorn.error").handlers
        )

    def test_log_file_inside_logs_dir(self) -> None:
        """Log file is created inside the logs/ directory."""
        log_path = setup_logging()
        self.assertEqual(log_path.parent.name, "logs")


if __name__ == "__main__":
    unittest.main()
