"""Time and memory measurement of container operations."""

import gc
import time
import tracemalloc
from statistics import mean
from typing import Callable, Iterable, List, Optional, Sequence

from search_structures.base import Container

# Returns the number of bytes currently allocated by the process
MemoryProbe = Callable[[], int]


def traced_memory_bytes() -> int:
    """Default memory probe: bytes currently traced by tracemalloc."""
    if not tracemalloc.is_tracing():
        tracemalloc.start()
    current, _ = tracemalloc.get_traced_memory()
    return current


class Benchmarker:
    """
    Measures batches of insert / delete / search calls on fresh containers.

    Every trial builds a new container from ``container_factory``. Delete
    and search batches run against a container pre-filled with the same
    dataset; the pre-fill is not measured.

    Args:
        container_factory: Zero-argument callable returning an empty container.
        memory_probe: Capability sampled before and after a batch; defaults
            to :func:`traced_memory_bytes`.
    """

    def __init__(
        self,
        container_factory: Callable[[], Container],
        memory_probe: Optional[MemoryProbe] = None,
    ) -> None:
        self.container_factory = container_factory
        self.memory_probe = memory_probe or traced_memory_bytes

    # Public API
    def benchmark_insert_time(self, datasets: Sequence[Sequence], iterations: int) -> List[int]:
        """Average nanoseconds to insert each dataset, one entry per dataset."""
        return [self._average(self._time_batch, dataset, "insert", False, iterations) for dataset in datasets]

    def benchmark_delete_time(self, datasets: Sequence[Sequence], iterations: int) -> List[int]:
        """Average nanoseconds to delete each dataset from a container holding it."""
        return [self._average(self._time_batch, dataset, "delete", True, iterations) for dataset in datasets]

    def benchmark_search_time(self, datasets: Sequence[Sequence], iterations: int) -> List[int]:
        """Average nanoseconds to search each dataset in a container holding it."""
        return [self._average(self._time_batch, dataset, "search", True, iterations) for dataset in datasets]

    def benchmark_insert_memory(self, datasets: Sequence[Sequence], iterations: int) -> List[int]:
        """Average bytes allocated while inserting each dataset."""
        return [self._average(self._memory_batch, dataset, "insert", False, iterations) for dataset in datasets]

    def benchmark_delete_memory(self, datasets: Sequence[Sequence], iterations: int) -> List[int]:
        """Average change in allocated bytes while deleting each dataset."""
        return [self._average(self._memory_batch, dataset, "delete", True, iterations) for dataset in datasets]

    def benchmark_search_memory(self, datasets: Sequence[Sequence], iterations: int) -> List[int]:
        """Average change in allocated bytes while searching each dataset."""
        return [self._average(self._memory_batch, dataset, "search", True, iterations) for dataset in datasets]

    # Private Methods
    def _prepare(self, dataset: Iterable, prefill: bool) -> Container:
        container = self.container_factory()
        if prefill:
            insert = container.insert
            for value in dataset:
                insert(value)
        return container

    @staticmethod
    def _average(measure, dataset, operation: str, prefill: bool, iterations: int) -> int:
        if iterations < 1:
            raise ValueError(f"iterations must be >= 1, got {iterations}")
        return int(mean(measure(dataset, operation, prefill) for _ in range(iterations)))

    def _time_batch(self, dataset: Sequence, operation: str, prefill: bool) -> int:
        container = self._prepare(dataset, prefill)
        fn = getattr(container, operation)

        gc.collect()
        gc_was_enabled = gc.isenabled()
        gc.disable()
        try:
            start = time.perf_counter_ns()
            for value in dataset:
                fn(value)
            elapsed = time.perf_counter_ns() - start
        finally:
            if gc_was_enabled:
                gc.enable()
        return elapsed

    def _memory_batch(self, dataset: Sequence, operation: str, prefill: bool) -> int:
        container = self._prepare(dataset, prefill)
        fn = getattr(container, operation)

        gc.collect()
        before = self.memory_probe()
        for value in dataset:
            fn(value)
        after = self.memory_probe()
        return after - before
