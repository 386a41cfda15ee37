"""Parallel fixed-point iteration over node positions."""

from __future__ import annotations

import logging
import math
import sys
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Sequence

from .config import COULOMB_SCALE, SPRING_SCALE, TIME_DELTA, default_worker_count
from .geometry import Coordinates
from .logging_utils import debug_log_call
from .model import Node, Relation

logger = logging.getLogger(__name__)


class SimulationError(RuntimeError):
    """Raised when a worker fails; the whole run is void."""

    def __init__(self, message: str, *, phase: str, partition: int, iteration: int) -> None:
        super().__init__(message)
        self.phase = phase
        self.partition = partition
        self.iteration = iteration


def partition_ranges(count: int, workers: int) -> List[range]:
    """Split ``range(count)`` into contiguous near-equal slices.

    At most ``workers`` slices are produced and none is empty; slice sizes
    differ by at most one.
    """

    if workers < 1:
        raise ValueError("partition_ranges requires at least one worker")
    if count <= 0:
        return []
    parts = min(workers, count)
    base, extra = divmod(count, parts)
    ranges: List[range] = []
    start = 0
    for idx in range(parts):
        stop = start + base + (1 if idx < extra else 0)
        ranges.append(range(start, stop))
        start = stop
    return ranges


def _is_normal(value: float) -> bool:
    return math.isfinite(value) and abs(value) >= sys.float_info.min


class SimulationState:
    """Static graph plus the scalars that drive its simulation.

    Node and relation collections never change during a run; only node
    positions do.
    """

    def __init__(
        self,
        nodes: Sequence[Node],
        relations: Sequence[Relation],
        spring_scale: float = SPRING_SCALE,
        coulomb_scale: float = COULOMB_SCALE,
        time_delta: float = TIME_DELTA,
        *,
        workers: Optional[int] = None,
    ) -> None:
        self.nodes = tuple(nodes)
        self.relations = tuple(relations)
        self.spring_scale = float(spring_scale)
        if self.spring_scale < 0.0:
            raise ValueError("spring_scale must be non-negative")
        self.coulomb_scale = float(coulomb_scale)
        self.time_delta = float(time_delta)
        self.workers = default_worker_count() if workers is None else int(workers)
        self.partitions = partition_ranges(len(self.nodes), self.workers)
        self.change_history: List[float] = []
        logger.info(
            "Simulation state with %d node(s), %d relation(s), %d partition(s)",
            len(self.nodes),
            len(self.relations),
            len(self.partitions),
        )

    def positions(self) -> Dict[int, Coordinates]:
        return {node.id: node.loc for node in self.nodes}

    @debug_log_call(logger, name="SimulationState.run_n_steps")
    def run_n_steps(self, n: int) -> float:
        """Advance every node ``n`` times and return the last iteration's change.

        If any worker fails, every node is put back where it was before the
        call and the earliest failure is raised.
        """

        if n < 0:
            raise ValueError("run_n_steps requires a non-negative iteration count")
        if n == 0 or not self.partitions:
            return 0.0

        barrier = threading.Barrier(len(self.partitions))
        logger.info("Running %d iteration(s) on %d worker(s)", n, len(self.partitions))
        before = [node.loc for node in self.nodes]

        results: List[List[float]] = []
        failures: List[SimulationError] = []
        with ThreadPoolExecutor(
            max_workers=len(self.partitions), thread_name_prefix="springlayout"
        ) as executor:
            futures = [
                executor.submit(self._run_partition, idx, span, n, barrier)
                for idx, span in enumerate(self.partitions)
            ]
            for future in futures:
                try:
                    results.append(future.result())
                except threading.BrokenBarrierError:
                    continue
                except SimulationError as exc:
                    failures.append(exc)

        if failures:
            first = min(failures, key=lambda exc: (exc.iteration, exc.partition))
            logger.error("Simulation failed: %s", first)
            self._restore(before)
            raise first
        if len(results) != len(self.partitions):
            self._restore(before)
            raise SimulationError(
                "synchronization barrier broke without a worker failure",
                phase="barrier",
                partition=-1,
                iteration=-1,
            )

        totals = [sum(per_worker) for per_worker in zip(*results)]
        self.change_history.extend(totals)
        last_change = totals[-1]
        logger.info("Finished %d iteration(s), last change=%.6g", n, last_change)
        return last_change

    def _restore(self, snapshot: Sequence[Coordinates]) -> None:
        logger.warning("Restoring %d node position(s) to their pre-run values", len(snapshot))
        for node, loc in zip(self.nodes, snapshot):
            node.update_coordinates(loc)

    def _run_partition(
        self, index: int, span: range, n: int, barrier: threading.Barrier
    ) -> List[float]:
        owned = self.nodes[span.start : span.stop]
        changes: List[float] = []
        pending: List[Coordinates] = []
        phase = "compute"
        iteration = 0
        try:
            for iteration in range(n):
                phase = "compute"
                pending.clear()
                total = 0.0
                for node in owned:
                    old = node.loc
                    new = node.calc_new_position(
                        self.nodes, self.spring_scale, self.coulomb_scale, self.time_delta
                    )
                    moved = old.to(new).length()
                    if _is_normal(moved):
                        total += moved
                    pending.append(new)
                changes.append(total)
                barrier.wait()

                phase = "commit"
                for node, new in zip(owned, pending):
                    node.update_coordinates(new)
                barrier.wait()
        except threading.BrokenBarrierError:
            raise
        except Exception as exc:
            barrier.abort()
            raise SimulationError(
                f"worker {index} failed in {phase} phase of iteration {iteration}: {exc!r}",
                phase=phase,
                partition=index,
                iteration=iteration,
            ) from exc
        return changes


__all__ = ["SimulationError", "SimulationState", "partition_ranges"]
