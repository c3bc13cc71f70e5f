"""Logging setup for the save reader.

Every module logs through a child of the ``titan_souls`` logger, obtained
with get_logger(). Nothing is emitted until setup_logging() attaches
handlers; until then records propagate to whatever the host application
configured on the root logger.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

ROOT_LOGGER_NAME = "titan_souls"

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
CONSOLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"


def _make_handler(handler: logging.Handler, fmt: str, datefmt: Optional[str] = None) -> logging.Handler:
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def setup_logging(debug: bool = False, log_file: Optional[Path] = None) -> logging.Logger:
    """Attach file (and optionally console) handlers to the package logger.

    Calling this again replaces the handlers of the previous call, so
    switching the log file or the debug flag never duplicates output.

    Args:
        debug: Echo every record to stdout as well
        log_file: Where to write the log, AppPaths.LOG_FILE when omitted

    Returns:
        The ``titan_souls`` logger
    """
    if log_file is None:
        from .config.paths import AppPaths
        log_file = AppPaths.LOG_FILE
    log_file.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    for old_handler in list(logger.handlers):
        old_handler.close()
        logger.removeHandler(old_handler)

    logger.addHandler(_make_handler(
        logging.FileHandler(log_file, encoding="utf-8"),
        FILE_FORMAT,
        FILE_DATE_FORMAT,
    ))
    if debug:
        logger.addHandler(_make_handler(logging.StreamHandler(sys.stdout), CONSOLE_FORMAT))

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return the ``titan_souls.<name>`` logger, e.g. get_logger("save_locator")."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
