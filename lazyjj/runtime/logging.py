"""structlog setup for the TUI process.

The terminal belongs to the UI, so records only go to a rotating JSON-lines
file; nothing is ever written to stdout or stderr.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

import structlog
from platformdirs import user_log_dir

APP_NAME = "lazyjj"
LOG_FILENAME = "lazyjj.log"
LOG_LEVEL_ENV = "LAZYJJ_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_MAX_BYTES = 1_000_000
LOG_BACKUP_COUNT = 3


def default_log_path() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def resolve_log_level(cli_level: str | None = None) -> str:
    """CLI flag first, then ``LAZYJJ_LOG_LEVEL``, then ``WARNING``."""
    for candidate in (cli_level, os.environ.get(LOG_LEVEL_ENV)):
        if candidate and isinstance(logging.getLevelName(candidate.upper()), int):
            return candidate.upper()
    return DEFAULT_LOG_LEVEL


def configure_logging(level: str = DEFAULT_LOG_LEVEL, log_file: Path | None = None) -> Path | None:
    """Route structlog through stdlib logging into a rotating JSON file.

    Returns the log path, or ``None`` when the file could not be opened; in
    that case logging is silenced rather than allowed onto the terminal.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    path = log_file if log_file is not None else default_log_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler: logging.Handler = logging.handlers.RotatingFileHandler(
            path,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError:
        file_handler = logging.NullHandler()
        path = None
    file_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
        )
    )
    root_logger.addHandler(file_handler)

    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    return path
