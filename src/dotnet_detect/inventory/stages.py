# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Bounded fan-out/fan-in execution of independent pipeline units."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Generic, TypeVar

from ..errors import InventoryBuildError, InventoryError, UnitFailure
from ..subprocess_utils import SubprocessExecutionError

LOGGER = logging.getLogger(__name__)

UnitT = TypeVar("UnitT")
ResultT = TypeVar("ResultT")

# Failures of one unit that must not cancel its siblings.
UNIT_ERRORS: tuple[type[BaseException], ...] = (InventoryError, SubprocessExecutionError, OSError, ValueError)


class Stage(Generic[UnitT, ResultT]):
    """Run ``worker`` over independent units with bounded parallelism.

    Results are returned in the order the units were supplied, regardless of
    completion order. Every unit runs to completion; failures are collected
    and raised together once the stage has finished.
    """

    def __init__(
        self,
        name: str,
        worker: Callable[[UnitT], ResultT],
        *,
        label: Callable[[UnitT], str],
        jobs: int,
    ) -> None:
        self.name = name
        self._worker = worker
        self._label = label
        self._jobs = max(1, jobs)

    def run(self, units: Sequence[UnitT]) -> list[ResultT]:
        """Execute the stage over ``units``.

        Raises:
            InventoryBuildError: If any unit failed.
        """

        results: dict[int, ResultT] = {}
        failures: list[UnitFailure] = []
        if not units:
            return []
        with ThreadPoolExecutor(max_workers=min(self._jobs, len(units))) as executor:
            future_map: dict[Future[ResultT], int] = {
                executor.submit(self._worker, unit): index for index, unit in enumerate(units)
            }
            for future in as_completed(future_map):
                index = future_map[future]
                try:
                    results[index] = future.result()
                except UNIT_ERRORS as exc:
                    label = self._label(units[index])
                    LOGGER.debug("%s failed for %s: %s", self.name, label, exc)
                    failures.append(UnitFailure(stage=self.name, unit=label, error=exc))
        if failures:
            failures.sort(key=lambda failure: failure.unit)
            raise InventoryBuildError(failures)
        return [results[index] for index in range(len(units))]


__all__ = ["UNIT_ERRORS", "Stage"]
