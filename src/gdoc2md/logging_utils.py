#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Logging setup for the gdoc2md command line.

The library modules only create loggers. Handlers are installed here, and
only by the CLI.
"""

from __future__ import annotations

import logging
import sys

TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
CONSOLE_FORMAT = "%(levelname)s: %(message)s"


def resolve_log_level(log_level: int | str) -> int:
    """Turn a level name such as ``"debug"`` or a numeric level into an int.

    Raises
    ------
    ValueError
        If the name is not a standard logging level

    """
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")
    return level


def configure_logging(log_level: int | str, log_file: str | None = None, trace_mode: bool = False) -> logging.Logger:
    """Configure the root logger with a console handler and an optional file handler.

    Existing root handlers are removed first, so calling this twice does not
    duplicate output.

    Parameters
    ----------
    log_level : int or str
        Logging level, e.g. ``logging.DEBUG`` or ``"INFO"``
    log_file : str, optional
        Also append log records to this file
    trace_mode : bool, default False
        Use a detailed format with timestamps and logger names

    Returns
    -------
    logging.Logger
        The configured root logger

    """
    level = resolve_log_level(log_level)
    if trace_mode:
        formatter = logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    else:
        formatter = logging.Formatter(CONSOLE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as e:
            root_logger.warning(f"Could not open log file {log_file}: {e}")
        else:
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)

    return root_logger
