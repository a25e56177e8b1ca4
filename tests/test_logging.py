"""
Tests for logging configuration.

Verifies the rotating file handler, console handler in terminal runs,
and log level selection from the verbose flag.
"""
import logging
import sys
from logging.handlers import RotatingFileHandler

import pytest

from termspotter.LoggingSetup import setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestLoggingConfiguration:
    """Test suite for logging configuration."""

    def test_log_directory_created(self, tmp_path):
        logs_dir = tmp_path / "logs" / "nested"

        setup_logging(logs_dir)

        assert logs_dir.is_dir()

    def test_rotating_file_handler_configured(self, tmp_path):
        setup_logging(tmp_path, is_frozen=True)

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        handler = handlers[0]
        assert isinstance(handler, RotatingFileHandler)
        assert handler.maxBytes == 10 * 1024 * 1024
        assert handler.backupCount == 5
        assert handler.baseFilename.endswith("termspotter.log")

    def test_console_handler_added_when_not_frozen(self, tmp_path):
        setup_logging(tmp_path, is_frozen=False)

        stream_handlers = [
            h for h in logging.getLogger().handlers
            if type(h) is logging.StreamHandler
        ]
        assert len(stream_handlers) == 1
        assert stream_handlers[0].stream is sys.stdout

    def test_verbose_sets_debug_level(self, tmp_path):
        setup_logging(tmp_path, verbose=True, is_frozen=True)

        assert logging.getLogger().level == logging.DEBUG

    def test_default_level_is_warning(self, tmp_path):
        setup_logging(tmp_path, is_frozen=True)

        assert logging.getLogger().level == logging.WARNING

    def test_existing_handlers_replaced(self, tmp_path):
        setup_logging(tmp_path, is_frozen=True)
        setup_logging(tmp_path, is_frozen=True)

        assert len(logging.getLogger().handlers) == 1

    def test_messages_written_to_file(self, tmp_path):
        setup_logging(tmp_path, is_frozen=True)

        logging.warning("term index is empty")
        for handler in logging.getLogger().handlers:
            handler.flush()

        content = (tmp_path / "termspotter.log").read_text(encoding="utf-8")
        assert "[WARNING] root: term index is empty" in content

    def test_returns_log_file_path(self, tmp_path):
        log_file = setup_logging(str(tmp_path), is_frozen=True)

        assert log_file == tmp_path / "termspotter.log"
        assert log_file.exists()
