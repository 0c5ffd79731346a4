"""Logging setup for the CLI.

stdout is reserved for shell script the caller evaluates, so every handler
installed here writes to stderr.
"""

import logging
import sys
from typing import Optional, TextIO, Union

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def level_for_verbosity(verbosity: int, default: Union[int, str] = logging.WARNING) -> int:
    """Map -v counts to a log level: 0 -> default, 1 -> INFO, 2+ -> DEBUG."""
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    if isinstance(default, str):
        return logging.getLevelName(default.upper())
    return default


def configure_logging(level: Union[int, str] = logging.WARNING, stream: Optional[TextIO] = None) -> None:
    """Configure the package logger.

    Safe to call more than once; the handler is replaced, not duplicated.
    """
    logger = logging.getLogger("durrrrrenv")
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        if getattr(handler, "_durrrrrenv_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    setattr(handler, "_durrrrrenv_handler", True)
    logger.addHandler(handler)
