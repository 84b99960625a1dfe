#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_logging_utils.py
"""Unit tests for CLI logging setup."""

import logging

import pytest

from gdoc2md.logging_utils import configure_logging, resolve_log_level


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.unit
class TestResolveLogLevel:
    """Tests for resolve_log_level."""

    def test_names_and_numbers(self):
        assert resolve_log_level("debug") == logging.DEBUG
        assert resolve_log_level("WARNING") == logging.WARNING
        assert resolve_log_level(logging.ERROR) == logging.ERROR

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            resolve_log_level("chatty")


@pytest.mark.unit
class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_console_handler_only(self, restore_root_logger):
        root = configure_logging("INFO")
        assert root is restore_root_logger
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)

    def test_repeated_calls_do_not_duplicate(self, restore_root_logger):
        configure_logging(logging.DEBUG)
        root = configure_logging(logging.DEBUG)
        assert len(root.handlers) == 1

    def test_log_file(self, restore_root_logger, tmp_path):
        log_file = tmp_path / "gdoc2md.log"
        root = configure_logging("DEBUG", log_file=str(log_file), trace_mode=True)
        assert any(isinstance(handler, logging.FileHandler) for handler in root.handlers)
        logging.getLogger("gdoc2md.test").debug("hello file")
        for handler in root.handlers:
            handler.flush()
        content = log_file.read_text(encoding="utf-8")
        assert "[DEBUG] [gdoc2md.test] hello file" in content

    def test_unwritable_log_file(self, restore_root_logger, tmp_path):
        root = configure_logging("WARNING", log_file=str(tmp_path / "missing" / "x.log"))
        assert not any(isinstance(handler, logging.FileHandler) for handler in root.handlers)
