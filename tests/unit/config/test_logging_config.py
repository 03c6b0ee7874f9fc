"""Unit tests for logging configuration functionality."""

import logging
from unittest.mock import patch

from pythonjsonlogger.json import JsonFormatter


class MockLoggingConfig:
    def __init__(self, directory):
        self.log_directory = str(directory)
        self.main_log_file = "app.log"
        self.error_log_file = "error.log"
        self.log_to_console = True


class MockConfig:
    def __init__(self, directory):
        self.logging = MockLoggingConfig(directory)


def _close_handlers(root_logger):
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)


class TestLoggingConfig:
    """Unit tests for logging configuration functions."""

    def test_production_logging_uses_json_console_and_file_handlers(self, tmp_path):
        # Arrange
        from cvchat.config.logging_config import _setup_production_logging

        root_logger = logging.getLogger()
        saved = root_logger.handlers[:]

        with patch("cvchat.config.logging_config.get_config", return_value=MockConfig(tmp_path)):
            try:
                # Act
                _setup_production_logging(logging.INFO)

                # Assert
                handlers = root_logger.handlers
                assert len(handlers) == 3
                assert sum(isinstance(h, logging.FileHandler) for h in handlers) == 2
                console = [h for h in handlers if not isinstance(h, logging.FileHandler)]
                assert isinstance(console[0].formatter, JsonFormatter)
                assert (tmp_path / "error").is_dir()
            finally:
                _close_handlers(root_logger)
                root_logger.handlers.extend(saved)

    def test_development_logging_writes_files(self, tmp_path):
        # Arrange
        from cvchat.config.logging_config import _setup_development_logging

        root_logger = logging.getLogger()
        saved = root_logger.handlers[:]

        with patch("cvchat.config.logging_config.get_config", return_value=MockConfig(tmp_path)):
            try:
                # Act
                _setup_development_logging(logging.DEBUG)
                logging.getLogger("cvchat.test").error("disk check")

                # Assert
                assert (tmp_path / "app.log").read_text().count("disk check") == 1
                assert "disk check" in (tmp_path / "error" / "error.log").read_text()
            finally:
                _close_handlers(root_logger)
                root_logger.handlers.extend(saved)

    def test_get_logger_returns_named_logger(self):
        from cvchat.config.logging_config import get_logger

        assert get_logger("cvchat.x") is logging.getLogger("cvchat.x")
