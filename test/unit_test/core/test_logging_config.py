"""Unit tests for logging configuration module.

Tests verify that setup_logging honours levels and formats, applies the
per-package levels and only writes a log file when file logging is enabled.
"""

import logging
from logging.handlers import RotatingFileHandler

import pytest

from glimmer.core.logging_config import (
    FORMATS,
    PACKAGE_LOG_LEVELS,
    LoggingOptions,
    get_logger,
    load_options,
    setup_logging,
)


def _console_handler() -> logging.Handler:
    handler = next(
        (h for h in logging.getLogger().handlers if type(h) is logging.StreamHandler),
        None,
    )
    assert handler is not None
    return handler


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    setup_logging(enable_file=False, options=LoggingOptions())


class TestSetupLoggingLevels:
    """Test setup_logging with different log levels."""

    @pytest.mark.parametrize(
        "log_level,expected_level",
        [("DEBUG", logging.DEBUG), ("WARNING", logging.WARNING), ("error", logging.ERROR)],
    )
    def test_console_level(self, log_level, expected_level):
        setup_logging(log_level=log_level, enable_file=False, options=LoggingOptions())
        assert _console_handler().level == expected_level

    def test_level_from_options(self):
        setup_logging(options=LoggingOptions(level="critical"))
        assert _console_handler().level == logging.CRITICAL

    def test_repeated_setup_replaces_handlers(self):
        setup_logging(options=LoggingOptions())
        setup_logging(options=LoggingOptions())
        assert len(logging.getLogger().handlers) == 1


class TestSetupLoggingFormats:
    """Test setup_logging with different log formats."""

    @pytest.mark.parametrize("log_format", ["simple", "detailed", "json"])
    def test_known_formats(self, log_format):
        setup_logging(log_format=log_format, options=LoggingOptions())
        assert _console_handler().formatter._fmt == FORMATS[log_format]

    def test_unknown_format_falls_back_to_detailed(self):
        setup_logging(log_format="fancy", options=LoggingOptions())
        assert _console_handler().formatter._fmt == FORMATS["detailed"]


def test_package_levels_applied():
    setup_logging(options=LoggingOptions())
    for name, level in PACKAGE_LOG_LEVELS.items():
        assert logging.getLogger(name).level == logging.getLevelName(level)


class TestFileLogging:
    """Test the optional rotating log file."""

    def test_file_handler_when_enabled(self, tmp_path):
        log_dir = tmp_path / "logs"
        setup_logging(options=LoggingOptions(file_dir=str(log_dir), file_enabled=True))

        file_handlers = [h for h in logging.getLogger().handlers if isinstance(h, RotatingFileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].level == logging.DEBUG
        assert (log_dir / "glimmer.log").exists()

    def test_enable_file_false_wins(self, tmp_path):
        setup_logging(enable_file=False, options=LoggingOptions(file_dir=str(tmp_path), file_enabled=True))
        assert not [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]


def test_load_options_reads_settings(monkeypatch):
    from glimmer.server.core.config import settings

    monkeypatch.setattr(settings, "log_level", "debug")
    monkeypatch.setattr(settings, "log_format", "json")
    options = load_options()
    assert options.level == "DEBUG"
    assert options.fmt == "json"


def test_get_logger_returns_named_logger():
    assert get_logger("glimmer.games") is logging.getLogger("glimmer.games")
