"""
Tests for the slice worker pool.
"""
import random
import threading

import pytest

from recipe_planner.generators import WorkerPool
from recipe_planner.generators.ga_workers import partition


# partition tests
def test_partition_even():
    """Test an even split."""
    assert partition(6, 3) == [range(0, 2), range(2, 4), range(4, 6)]


def test_partition_uneven():
    """Test earlier slices take the remainder."""
    assert partition(5, 2) == [range(0, 3), range(3, 5)]


def test_partition_more_parts_than_items():
    """Test no empty slices are produced."""
    assert partition(2, 8) == [range(0, 1), range(1, 2)]


def test_partition_empty():
    """Test zero items give no slices."""
    assert partition(0, 4) == []


@pytest.mark.parametrize("count,parts", [(1, 1), (7, 3), (100, 8), (13, 13)])
def test_partition_covers_range_once(count, parts):
    """Test slices are disjoint and cover every index."""
    covered = [i for s in partition(count, parts) for i in s]
    assert covered == list(range(count))


# WorkerPool tests
def test_pool_rejects_zero_workers():
    """Test max_workers must be positive."""
    with pytest.raises(ValueError):
        WorkerPool(0)


def test_map_slices_merges_in_index_order():
    """Test results come back by index regardless of slice timing."""
    def task(start, stop, rng):
        return [i * i for i in range(start, stop)]

    with WorkerPool(4) as pool:
        assert pool.map_slices(task, 10, random.Random(1)) == [i * i for i in range(10)]


def test_map_slices_runs_on_worker_threads():
    """Test a started pool runs slices off the calling thread."""
    names = set()

    def task(start, stop, rng):
        names.add(threading.current_thread().name)
        return [None] * (stop - start)

    with WorkerPool(2) as pool:
        pool.map_slices(task, 4, random.Random(1))
    assert all(name.startswith("planner-worker") for name in names)


def test_map_slices_inline_matches_threaded():
    """Test inline and threaded runs draw identical per-slice randomness."""
    def task(start, stop, rng):
        return [rng.random() for _ in range(start, stop)]

    inline = WorkerPool(3).map_slices(task, 9, random.Random(5))
    with WorkerPool(3) as pool:
        threaded = pool.map_slices(task, 9, random.Random(5))
    assert inline == threaded


def test_map_slices_propagates_first_error():
    """Test the first failing slice's error is raised after all finish."""
    finished = []

    def task(start, stop, rng):
        finished.append(start)
        if start == 0:
            raise KeyError("first")
        if start == 2:
            raise IndexError("second")
        return [0] * (stop - start)

    with WorkerPool(3) as pool:
        with pytest.raises(KeyError):
            pool.map_slices(task, 6, random.Random(0))
    assert sorted(finished) == [0, 2, 4]


def test_map_slices_checks_result_length():
    """Test a slice returning the wrong number of results is an error."""
    def task(start, stop, rng):
        return [0]

    with pytest.raises(RuntimeError):
        WorkerPool(2).map_slices(task, 6, random.Random(0))


def test_shutdown_is_idempotent():
    """Test pool can be shut down more than once."""
    pool = WorkerPool(2)
    pool.start()
    pool.shutdown()
    pool.shutdown()


def test_map_slices_without_rng():
    """Test tasks receive no generator when none is given."""
    received = []

    def task(start, stop, rng):
        received.append(rng)
        return list(range(start, stop))

    with WorkerPool(3) as pool:
        assert pool.map_slices(task, 6) == list(range(6))
    assert received == [None, None, None]


def test_map_slices_draws_one_seed_per_slice():
    """Test the root generator advances once per slice only."""
    def task(start, stop, rng):
        return [None] * (stop - start)

    root = random.Random(8)
    expected = random.Random(8)
    for _ in range(3):
        expected.getrandbits(64)

    WorkerPool(3).map_slices(task, 9, root)
    assert root.random() == expected.random()
