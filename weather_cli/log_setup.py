"""
Log sink setup for a single CLI invocation.
"""

import contextlib
import logging
from typing import Iterator

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
PACKAGE_LOGGER = "weather_cli"


def open_log_file(path: str) -> logging.Handler:
    """
    Open the append-only log file.

    Raises:
        OSError: If the file cannot be opened for appending
    """
    return logging.FileHandler(path, mode="a", encoding="utf-8")


def is_valid_level(level: str) -> bool:
    """Whether `level` names a standard logging level."""
    return isinstance(logging.getLevelName(level.upper()), int)


@contextlib.contextmanager
def attached_handler(
    handler: logging.Handler, level: str = "INFO"
) -> Iterator[logging.Logger]:
    """
    Attach a handler to the package logger for the duration of the block.

    The handler is detached and closed on exit, whatever happens inside.

    Args:
        handler: Log sink, a file handler or an in-memory one in tests
        level: Log level name

    Raises:
        ValueError: If `level` is not a logging level name; the handler is
            closed all the same

    Yields:
        logging.Logger: The package logger
    """
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    previous_level = package_logger.level
    try:
        package_logger.setLevel(level.upper())
        package_logger.addHandler(handler)
        yield package_logger
    finally:
        package_logger.removeHandler(handler)
        package_logger.setLevel(previous_level)
        handler.close()
