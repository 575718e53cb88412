# recipe_planner/generators/ga_workers.py
"""
Bounded worker pool for population phases.

Each phase (initialization, evaluation, crossover) splits the
population index range into contiguous, disjoint slices. Every task
owns its slice exclusively and returns one result per index (or per
pair, for crossover). The orchestrator waits for all tasks before
merging, so phases never overlap and no two tasks write the same slot.

Each task receives its own random.Random seeded from the run's root
generator. Seeds are drawn up front in slice order, so a seeded run
is reproducible for a given worker count regardless of thread timing.

Classes:
    WorkerPool - ThreadPoolExecutor wrapper with slice partitioning
"""
import logging
import random
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Callable, List, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

# task(start, stop, rng) -> one result per index in range(start, stop)
SliceTask = Callable[[int, int, Optional[random.Random]], Sequence[T]]


def partition(count: int, parts: int) -> List[range]:
    """
    Split range(count) into at most `parts` contiguous, non-empty slices.

    Slice sizes differ by at most one; earlier slices get the extra item.

    Example:
        >>> partition(5, 2)
        [range(0, 3), range(3, 5)]
    """
    if count <= 0:
        return []
    parts = max(1, min(parts, count))
    base, extra = divmod(count, parts)
    slices = []
    start = 0
    for i in range(parts):
        size = base + (1 if i < extra else 0)
        slices.append(range(start, start + size))
        start += size
    return slices


class WorkerPool:
    """
    Fixed-size thread pool running slice tasks behind a join barrier.

    Usage:
        with WorkerPool(4) as pool:
            fitness = pool.map_slices(score_slice, len(members), rng)
    """

    def __init__(self, max_workers: int):
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self.max_workers = max_workers
        self._executor: Optional[ThreadPoolExecutor] = None

    def __enter__(self) -> 'WorkerPool':
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    def start(self) -> None:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self.max_workers,
                thread_name_prefix="planner-worker",
            )

    def shutdown(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def map_slices(self, task: SliceTask, count: int,
                   rng: Optional[random.Random] = None) -> List[T]:
        """
        Run `task` over disjoint slices of range(count) and merge by index.

        Args:
            task: Callable(start, stop, rng) returning stop - start results
            count: Number of indices to cover
            rng: Root generator; one child seed is drawn per slice.
                 Without it tasks receive None and nothing is drawn

        Returns:
            Results for indices 0..count-1, in index order

        Raises:
            Whatever the first failing slice (in slice order) raised,
            after every slice has finished
        """
        slices = partition(count, self.max_workers)
        if rng is None:
            worker_rngs = [None] * len(slices)
        else:
            worker_rngs = [random.Random(rng.getrandbits(64)) for _ in slices]

        if self._executor is None:
            # Not started: run inline, same slicing and seeds
            outputs = [task(s.start, s.stop, r) for s, r in zip(slices, worker_rngs)]
            return self._merge(slices, outputs)

        futures = [
            self._executor.submit(task, s.start, s.stop, r)
            for s, r in zip(slices, worker_rngs)
        ]
        wait(futures)

        outputs = []
        for future in futures:
            error = future.exception()
            if error is not None:
                raise error
            outputs.append(future.result())

        return self._merge(slices, outputs)

    @staticmethod
    def _merge(slices: List[range], outputs: List[Sequence[T]]) -> List[T]:
        merged: List[T] = []
        for owned, result in zip(slices, outputs):
            if len(result) != len(owned):
                raise RuntimeError(
                    f"Worker for indices {owned.start}-{owned.stop - 1} returned "
                    f"{len(result)} results, expected {len(owned)}"
                )
            merged.extend(result)
        return merged
