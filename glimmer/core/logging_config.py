"""
Logging setup for Glimmer.

One console handler on the root logger, an optional rotating file under
``LOG_FILE_DIR``, and per-package levels so the realtime relay and the game
engines can stay chatty while SQLAlchemy and httpx stay quiet. Options come
from the server settings (``GLIMMER_LOG_LEVEL``, ``LOG_FORMAT``,
``LOG_FILE_DIR``, ``ENABLE_FILE_LOGGING``).
"""

import logging
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, Optional

FORMATS: Dict[str, str] = {
    "simple": "%(levelname)s %(name)s: %(message)s",
    "detailed": "%(asctime)s %(levelname)-8s %(name)s [%(filename)s:%(lineno)d] %(message)s",
    "json": (
        '{"ts": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", '
        '"where": "%(filename)s:%(lineno)d", "message": "%(message)s"}'
    ),
}
DEFAULT_FORMAT = "detailed"

LOG_FILE_NAME = "glimmer.log"
LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 3

PACKAGE_LOG_LEVELS: Dict[str, str] = {
    "glimmer": "INFO",
    "glimmer.realtime": "DEBUG",
    "glimmer.games": "DEBUG",
    "glimmer.ai": "DEBUG",
    "glimmer.server.services": "DEBUG",
    "sqlalchemy": "WARNING",
    "sqlalchemy.engine": "WARNING",
    "aiosqlite": "WARNING",
    "httpx": "WARNING",
    "httpcore": "WARNING",
    "uvicorn.access": "INFO",
}


@dataclass(frozen=True)
class LoggingOptions:
    level: str = "INFO"
    fmt: str = DEFAULT_FORMAT
    file_dir: str = "logs"
    file_enabled: bool = False


def load_options() -> LoggingOptions:
    """Read logging options from the server settings.

    The settings import is deferred so modules can grab a logger at import
    time without pulling in the configuration.
    """
    from glimmer.server.core.config import settings

    return LoggingOptions(
        level=settings.log_level.upper(),
        fmt=settings.log_format,
        file_dir=settings.log_file_dir,
        file_enabled=settings.enable_file_logging,
    )


def build_formatter(fmt: str) -> logging.Formatter:
    return logging.Formatter(FORMATS.get(fmt, FORMATS[DEFAULT_FORMAT]), datefmt="%Y-%m-%d %H:%M:%S")


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    enable_file: bool = True,
    options: Optional[LoggingOptions] = None,
) -> None:
    """
    Configure the root logger for the server process.

    Calling it again replaces the handlers it installed before.

    Args:
        log_level: Console level, overriding ``GLIMMER_LOG_LEVEL``
        log_format: ``simple``, ``detailed`` or ``json``, overriding ``LOG_FORMAT``
        enable_file: Allow the rotating log file when ``ENABLE_FILE_LOGGING`` is on
        options: Use these instead of the server settings
    """
    options = options or load_options()
    level = (log_level or options.level).upper()
    fmt = log_format or options.fmt
    formatter = build_formatter(fmt)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(formatter)
    root_logger.addHandler(console)

    write_file = enable_file and options.file_enabled
    if write_file:
        log_dir = Path(options.file_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_dir / LOG_FILE_NAME, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS
        )
        # The file keeps everything; the console is filtered
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    for name, package_level in PACKAGE_LOG_LEVELS.items():
        logging.getLogger(name).setLevel(package_level)

    root_logger.info(f"Logging ready: level={level} format={fmt} file={write_file}")


def get_logger(name: str) -> logging.Logger:
    """Logger for ``name`` (pass ``__name__``)."""
    return logging.getLogger(name)
