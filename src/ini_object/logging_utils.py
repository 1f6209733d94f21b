# src/ini_object/logging_utils.py
"""
Logging utilities for ini_object.

Provides a single entry point to configure the package logger for CLI use.
Library code only creates module loggers and never configures handlers.
"""

import logging
import sys
from typing import IO, Optional

PACKAGE_LOGGER = "ini_object"

_VERBOSITY_LEVELS = {
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,  # any value >= 2 maps to DEBUG
}


def configure_logging(
    verbosity: int = 0, stream: Optional[IO[str]] = None
) -> logging.Logger:
    """
    Configure the ini_object package logger.

    Parameters
    ----------
    verbosity : int, default=0
        Verbosity level:
        - 0 -> WARNING
        - 1 -> INFO
        - 2 or higher -> DEBUG (shows skipped fields and ignored keys)
        Must be a non-negative integer.
    stream : IO[str] or None, default=None
        Target stream for the StreamHandler. Defaults to sys.stderr if None,
        so that rendered config text on stdout stays clean.

    Returns
    -------
    logging.Logger
        The configured package logger.

    Raises
    ------
    TypeError
        If verbosity is not an int, or if a stream is provided that does not
        have a write method.
    ValueError
        If verbosity is negative.
    """
    if isinstance(verbosity, bool) or not isinstance(verbosity, int):
        raise TypeError(f"verbosity must be int, got {type(verbosity).__name__}")
    if verbosity < 0:
        raise ValueError(f"verbosity must be non-negative, got {verbosity}")

    level = _VERBOSITY_LEVELS.get(verbosity, logging.DEBUG)

    if stream is None:
        stream = sys.stderr
    elif not hasattr(stream, "write"):
        raise TypeError("stream must be file-like (support .write(...))")

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt))

    logger = logging.getLogger(PACKAGE_LOGGER)
    # Replace only StreamHandlers from earlier calls; leave other handlers
    #   (e.g., FileHandler) intact
    logger.handlers = [
        h
        for h in logger.handlers
        if not isinstance(h, logging.StreamHandler)
        or isinstance(h, logging.FileHandler)
    ]
    logger.addHandler(handler)
    logger.setLevel(level)

    return logger
