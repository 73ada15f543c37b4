#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtree/utils/decorators.py
"""Timing helpers for the parse and render entry points."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Generator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Context manager for timing operations with DEBUG-level logging.

    Parameters
    ----------
    logger : logging.Logger
        Logger instance to use for DEBUG messages
    operation : str
        Description of the operation being timed (e.g., "Block parsing")

    Examples
    --------
        >>> logger = logging.getLogger(__name__)
        >>> with debug_timer(logger, "Block parsing"):
        ...     blocks = parser.parse(lines)
        ... # Logs: "Block parsing completed in 1.23ms" at DEBUG level

    Notes
    -----
    Time is only measured when the logger has DEBUG enabled.

    """
    if logger.isEnabledFor(logging.DEBUG):
        start_time = time.perf_counter()
        yield
        elapsed = (time.perf_counter() - start_time) * 1000
        logger.debug(f"{operation} completed in {elapsed:.2f}ms")
    else:
        yield
