"""Logging setup for cashboard.

User-facing output goes through rich consoles; this logger only carries
diagnostics, written to stderr.
"""

import logging

LOGGER_NAME = "cashboard"


def configure_logging(level: str | int = logging.WARNING) -> logging.Logger:
    """Configure the package logger.

    Safe to call more than once: the handler is replaced, so it always
    writes to the current sys.stderr.

    Args:
        level: Level name ("DEBUG", "INFO", ...) or number.

    Returns:
        The configured "cashboard" logger.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(handler)
    return logger
