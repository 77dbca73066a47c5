"""
Logging Configuration
Sets up the 'sketchfolder' logger for command-line runs.
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

LOGGER_NAME = "sketchfolder"

CONSOLE_FORMAT = "%(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: int = logging.WARNING,
    log_file: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configures the logger for the 'sketchfolder' namespace.

    Args:
        level: Threshold for console output (e.g. logging.WARNING).
        log_file: Optional path that receives a timestamped log. The file
            always records DEBUG and above, independent of ``level``.
        stream: Console stream, stderr by default so listings on stdout
            stay machine readable.
    """
    logger = logging.getLogger(LOGGER_NAME)

    # main() may run several times in one process (tests, embedding)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(file_handler)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(level)

    logger.debug("Logging initialized (console=%s, file=%s).", logging.getLevelName(level), log_file)
    return logger


def level_from_name(name: str | None, default: int = logging.WARNING) -> int:
    """Map a level name such as ``"info"`` to its numeric value."""
    if not name:
        return default
    value = logging.getLevelName(name.strip().upper())
    return value if isinstance(value, int) else default
