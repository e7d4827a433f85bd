"""Logging utilities for html5_media.

The plugin logs to the ``html5_media`` logger and leaves output to the host
application: records propagate to its handlers, and nothing is printed
unless the host asks for it with setup_logging().
"""

import logging
import sys

LOGGER_NAME = "html5_media"


class CleanFormatter(logging.Formatter):
    """Formatter that outputs clean messages without log level prefixes."""

    def format(self, record: logging.LogRecord) -> str:
        return record.getMessage()


class PrefixFormatter(logging.Formatter):
    """Formatter that prefixes messages with level name for warnings/errors."""

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno >= logging.WARNING:
            return f"{record.levelname.capitalize()}: {record.getMessage()}"
        return record.getMessage()


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Send html5_media messages to the console.

    Meant for scripts without their own logging setup. Debug and info
    messages go to stdout, warnings and errors to stderr with a prefix, and
    records no longer propagate to the root logger.

    Args:
        verbose: If True, show debug-level messages. Otherwise, warnings and above.

    Returns:
        The configured logger instance.
    """
    logger = logging.getLogger(LOGGER_NAME)

    logger.handlers.clear()
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(logging.DEBUG)
    stdout_handler.addFilter(lambda r: r.levelno < logging.WARNING)
    stdout_handler.setFormatter(CleanFormatter())

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.setFormatter(PrefixFormatter())

    logger.addHandler(stdout_handler)
    logger.addHandler(stderr_handler)
    logger.propagate = False

    return logger


def get_logger() -> logging.Logger:
    """Get the html5_media logger.

    Without setup_logging() the logger only carries a NullHandler, so
    records reach whatever handlers the host configured.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    return logger


def debug(msg: str) -> None:
    """Log a debug message."""
    get_logger().debug(msg)


def warning(msg: str) -> None:
    """Log a warning message."""
    get_logger().warning(msg)
