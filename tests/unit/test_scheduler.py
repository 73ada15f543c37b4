#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_scheduler.py
"""Tests for the concurrent parse unit scheduler."""

import threading
import time
from dataclasses import dataclass

import pytest

from mdtree.exceptions import ParseTimeoutError, UnitFailedError
from mdtree.scheduler import parallel_map, sequential_map


@dataclass
class _Unit:
    value: int
    line: int


@pytest.mark.unit
class TestParallelMap:
    """Tests for parallel_map."""

    def test_results_in_dispatch_order(self):
        # Later units finish first
        def work(value):
            time.sleep((5 - value) * 0.01)
            return value * 10

        assert parallel_map(work, [0, 1, 2, 3, 4]) == [0, 10, 20, 30, 40]

    def test_empty_input(self):
        assert parallel_map(lambda item: item, []) == []

    def test_runs_in_worker_threads(self):
        names = parallel_map(lambda _: threading.current_thread().name, [1, 2])
        assert all(name.startswith("mdtree-unit") for name in names)

    def test_unit_failure_aborts_batch(self):
        def work(unit):
            if unit.value == 2:
                raise KeyError("boom")
            return unit.value

        units = [_Unit(0, 1), _Unit(1, 3), _Unit(2, 5)]
        with pytest.raises(UnitFailedError) as exc_info:
            parallel_map(work, units)

        error = exc_info.value
        assert error.unit_index == 2
        assert error.line == 5
        assert isinstance(error.original_error, KeyError)
        assert error.message == "Parse unit #2 (line 5) has died with reason KeyError('boom')"

    @pytest.mark.slow
    def test_timeout(self):
        def work(value):
            time.sleep(0.5)
            return value

        started = time.perf_counter()
        with pytest.raises(ParseTimeoutError) as exc_info:
            parallel_map(work, [1, 2], timeout=50)

        assert time.perf_counter() - started < 0.4
        assert exc_info.value.timeout == 50
        assert "50ms" in str(exc_info.value)

    def test_no_timeout(self):
        assert parallel_map(lambda value: value + 1, [1, 2, 3], timeout=None) == [2, 3, 4]


@pytest.mark.unit
class TestSequentialMap:
    """Tests for sequential_map."""

    def test_runs_in_calling_thread(self):
        caller = threading.current_thread().name
        assert sequential_map(lambda _: threading.current_thread().name, [1, 2]) == [caller, caller]

    def test_stops_at_first_failure(self):
        calls = []

        def work(unit):
            calls.append(unit.value)
            if unit.value == 1:
                raise RuntimeError("bad unit")
            return unit.value

        with pytest.raises(UnitFailedError) as exc_info:
            sequential_map(work, [_Unit(0, 1), _Unit(1, 2), _Unit(2, 3)])

        assert calls == [0, 1]
        assert exc_info.value.unit_index == 1
        assert exc_info.value.line == 2

    def test_timeout_ignored(self):
        assert sequential_map(lambda value: value, [1], timeout=1) == [1]
