"""Tests for the logging setup module."""

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from docintake.utils.logger import get_logger, setup_logging


def _clear_root_handlers() -> logging.Logger:
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    return root


class TestSetupLogging:
    """Tests for the setup_logging function."""

    def test_setup_creates_handler(self) -> None:
        root = _clear_root_handlers()

        setup_logging("DEBUG")
        assert len(root.handlers) >= 1
        assert root.level == logging.DEBUG

        _clear_root_handlers()

    def test_setup_idempotent(self) -> None:
        root = _clear_root_handlers()

        setup_logging("INFO")
        count = len(root.handlers)
        setup_logging("INFO")
        assert len(root.handlers) == count

        _clear_root_handlers()

    def test_setup_invalid_level_defaults_to_info(self) -> None:
        root = _clear_root_handlers()

        setup_logging("NONEXISTENT")
        assert root.level == logging.INFO

        _clear_root_handlers()

    def test_log_file_adds_rotating_handler(self, tmp_path: Path) -> None:
        root = _clear_root_handlers()
        log_file = tmp_path / "logs" / "log.txt"

        setup_logging("INFO", str(log_file))
        rotating = [h for h in root.handlers if isinstance(h, TimedRotatingFileHandler)]
        assert len(rotating) == 1
        assert rotating[0].backupCount == 30
        assert log_file.parent.is_dir()

        _clear_root_handlers()


class TestGetLogger:
    """Tests for the get_logger function."""

    def test_returns_named_logger(self) -> None:
        logger = get_logger("test.module")
        assert logger.name == "test.module"
        assert isinstance(logger, logging.Logger)

    def test_same_name_returns_same_logger(self) -> None:
        logger1 = get_logger("test.same")
        logger2 = get_logger("test.same")
        assert logger1 is logger2
