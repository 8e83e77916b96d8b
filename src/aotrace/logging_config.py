"""Logger setup for scripts that drive the renderer.

Library modules only create ``logging.getLogger(__name__)`` loggers under
the ``aotrace`` namespace and never attach handlers themselves. Scripts
call ``setup_logging`` once to route those messages to stderr and,
optionally, to a log file.

Example:
    >>> import logging
    >>> from aotrace.logging_config import setup_logging
    >>> logger = setup_logging(logging.DEBUG)
    >>> logger.name
    'aotrace'
"""

import logging
import sys

# Namespace shared by every module logger in the package
PACKAGE_LOGGER = "aotrace"

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(level: int = logging.INFO, log_file: str | None = None) -> logging.Logger:
    """Attach handlers to the package logger.

    Calling this again replaces the handlers from the previous call.

    Args:
        level: Threshold for the logger and its handlers, e.g. logging.DEBUG.
        log_file: Path of a file to write as well as stderr, or None.

    Returns:
        The configured ``aotrace`` logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
