#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtree/scheduler.py
"""Fan-out/fan-in execution of independent parse units.

A parse call splits its work into units (one per top-level block subtree)
that share no mutable state. A mapper runs ``func`` over the units and
returns the results in the original unit order, whatever order they
completed in.

The default mapper, :func:`parallel_map`, is fail-fast for the whole
batch: the first unit that raises aborts the parse with
:class:`~mdtree.exceptions.UnitFailedError`, and a batch that does not
finish within the timeout aborts with
:class:`~mdtree.exceptions.ParseTimeoutError`. No partial results are
returned in either case. Outstanding units are cancelled; a unit already
running in a worker thread cannot be interrupted and its result is
discarded.

Any callable with the :data:`Mapper` signature can replace it, for example
:func:`sequential_map` to run units in the calling thread without a
timeout.

"""

from __future__ import annotations

import logging
import time
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from typing import Any, Callable, Optional, Sequence, TypeVar

from mdtree.constants import DEFAULT_TIMEOUT_MS
from mdtree.exceptions import ParseTimeoutError, UnitFailedError

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

Mapper = Callable[[Callable[[Any], Any], Sequence[Any], Optional[int]], list]
"""``(func, items, timeout_ms) -> results`` with results in item order."""

_MAX_WORKERS = 32


def _unit_line(item: Any) -> int | None:
    line = getattr(item, "line", None)
    return line if isinstance(line, int) else None


def parallel_map(
    func: Callable[[T], R],
    items: Sequence[T],
    timeout: Optional[int] = DEFAULT_TIMEOUT_MS,
    max_workers: Optional[int] = None,
) -> list[R]:
    """Run ``func`` over ``items`` concurrently and join in order.

    Parameters
    ----------
    func : callable
        Unit of work, called once per item
    items : sequence
        Units to dispatch; their position is their index
    timeout : int or None, default 5000
        Bound in milliseconds for the whole batch; None waits forever
    max_workers : int, optional
        Thread pool size, defaults to ``min(32, len(items))``

    Returns
    -------
    list
        ``[func(items[0]), func(items[1]), ...]``

    Raises
    ------
    UnitFailedError
        If any unit raised; the lowest failing index is reported
    ParseTimeoutError
        If the batch did not complete within ``timeout``

    """
    items = list(items)
    if not items:
        return []

    workers = max_workers or min(_MAX_WORKERS, len(items))
    seconds = None if timeout is None else timeout / 1000
    started = time.perf_counter()

    executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="mdtree-unit")
    try:
        futures: list[Future[R]] = [executor.submit(func, item) for item in items]
        position = {future: index for index, future in enumerate(futures)}
        logger.debug("Dispatched %d parse units to %d workers", len(futures), workers)

        done, not_done = wait(futures, timeout=seconds, return_when=FIRST_EXCEPTION)

        failed = sorted(position[future] for future in done if future.exception() is not None)
        if failed:
            index = failed[0]
            error = futures[index].exception()
            assert error is not None
            logger.error("Parse unit #%d failed: %r", index, error)
            raise UnitFailedError(index, error, line=_unit_line(items[index])) from error

        if not_done:
            assert timeout is not None
            index = min(position[future] for future in not_done)
            logger.error("Parse unit #%d exceeded the %dms timeout", index, timeout)
            raise ParseTimeoutError(timeout, unit_index=index)

        logger.debug("Joined %d parse units in %.1fms", len(futures), (time.perf_counter() - started) * 1000)
        return [future.result() for future in futures]
    finally:
        executor.shutdown(wait=False, cancel_futures=True)


def sequential_map(
    func: Callable[[T], R],
    items: Sequence[T],
    timeout: Optional[int] = None,
) -> list[R]:
    """Run ``func`` over ``items`` in order in the calling thread.

    ``timeout`` is accepted for signature compatibility and ignored.

    Raises
    ------
    UnitFailedError
        If a unit raises; later units are not run

    """
    results: list[R] = []
    for index, item in enumerate(items):
        try:
            results.append(func(item))
        except Exception as e:
            logger.error("Parse unit #%d failed: %r", index, e)
            raise UnitFailedError(index, e, line=_unit_line(item)) from e
    return results
