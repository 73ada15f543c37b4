#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Logging setup for the mdtree command-line tool.

Library code only creates module loggers under the ``mdtree`` namespace and
never installs handlers. The CLI calls :func:`configure_logging`, which
attaches handlers to the ``mdtree`` package logger alone, so an embedding
application's root logging configuration is left untouched.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "mdtree"

CONSOLE_FORMAT = "mdtree: %(levelname)s: %(message)s"
# Parse units run on worker threads; the thread name identifies the unit in traces
TRACE_FORMAT = "[%(asctime)s.%(msecs)03d] [%(levelname)s] [%(threadName)s] %(name)s: %(message)s"
TRACE_DATE_FORMAT = "%H:%M:%S"


def _resolve_level(log_level: int | str) -> int:
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(
    log_level: int | str = logging.WARNING,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Attach console and optional file handlers to the ``mdtree`` logger.

    Calling it again replaces (and closes) the handlers of the previous call.

    Parameters
    ----------
    log_level : int | str, default logging.WARNING
        Numeric level or level name; unknown names fall back to WARNING
    log_file : str, optional
        Path of a file that receives the same records, appended to
    trace_mode : bool, default False
        Timestamped records that also name the worker thread

    Returns
    -------
    logging.Logger
        The ``mdtree`` package logger

    """
    level = _resolve_level(log_level)
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(level)
    package_logger.propagate = False

    if trace_mode:
        formatter = logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    else:
        formatter = logging.Formatter(CONSOLE_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            package_logger.warning("Could not open log file %s: %s", log_file, exc)
        else:
            file_handler.setFormatter(logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT))
            package_logger.addHandler(file_handler)
            package_logger.debug("Logging to file: %s", log_file)

    return package_logger
