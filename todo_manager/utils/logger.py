"""
Logger module - Logging configuration and utilities

Console logging is always available; a rotating log file is added when a
path is configured. Both top-level packages (todo_manager and ui) log
through the handlers installed here.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Parent loggers that receive the handlers; module loggers propagate to them
ROOT_LOGGERS = ("todo_manager", "ui")

_logging_initialized = False


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    enable_console: bool = True,
) -> None:
    """
    Configure handlers for the application loggers.

    Calling this again replaces previously installed handlers, so the
    launcher can re-apply settings read from config.properties.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path of a rotating log file
        max_bytes: Max file size before rotation (default: 10MB)
        backup_count: Number of rotated files to keep
        enable_console: Emit records to stdout
    """
    global _logging_initialized

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = []
    if enable_console:
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(formatter)
        handlers.append(console)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    for name in ROOT_LOGGERS:
        root = logging.getLogger(name)
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        root.setLevel(numeric_level)
        for handler in handlers:
            root.addHandler(handler)

    _logging_initialized = True


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Get a logger, installing default console logging on first use.

    Args:
        name: Logger name (typically __name__)
        level: Optional logging level override for this logger

    Returns:
        Configured logger instance
    """
    if not _logging_initialized:
        setup_logging()

    logger = logging.getLogger(name)
    if level:
        logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return logger
