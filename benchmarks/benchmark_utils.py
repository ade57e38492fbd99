"""
Benchmarking utilities for the search containers.

Reproducibility:
    All random data generation uses deterministic seeds by default.
    The default seed can be overridden via the BENCHMARK_SEED environment variable.

Logging:
    Benchmarks should be run with logging at INFO level or higher to avoid
    performance contamination from verbose debug output.
"""

import logging
import os
import random
from typing import List, Sequence

import numpy as np

# Default seed for deterministic benchmarking - can be overridden via environment variable
DEFAULT_BENCHMARK_SEED = int(os.environ.get('BENCHMARK_SEED', '42'))

DISTRIBUTIONS = ('uniform', 'unique', 'sequential')


class BenchmarkUtils:
    """Utility class for benchmark data generation and setup checks."""

    @staticmethod
    def check_logging_level():
        """
        Check if logging level is appropriate for benchmarking.

        Raises if DEBUG or lower (more verbose) logging is enabled, as this
        can significantly contaminate benchmark results with I/O overhead.
        """
        package_logger = logging.getLogger("search_structures")
        effective_level = package_logger.getEffectiveLevel()
        if effective_level <= logging.DEBUG:
            raise ValueError(
                f"Logging level is set to {logging.getLevelName(effective_level)}. "
                "Benchmarks require logging to be at INFO level or higher to avoid "
                "performance contamination from verbose debug output."
            )

    @staticmethod
    def generate_dataset(size: int,
                         seed: int = None,
                         distribution: str = 'uniform') -> List[int]:
        """
        Generate one deterministic dataset.

        Args:
            size: Number of values to generate
            seed: Random seed for reproducibility. If None, uses DEFAULT_BENCHMARK_SEED.
            distribution: 'uniform' draws from [1, size/2] so roughly half the
                values repeat and exercise the duplicate paths; 'unique' is a
                shuffled permutation of 1..size; 'sequential' is 1..size in order.

        Returns:
            List of ints
        """
        if seed is None:
            seed = DEFAULT_BENCHMARK_SEED

        random.seed(seed)
        np.random.seed(seed)

        if distribution == 'uniform':
            upper = max(1, size // 2)
            return np.random.randint(1, upper + 1, size=size).tolist()
        elif distribution == 'unique':
            return np.random.permutation(np.arange(1, size + 1)).tolist()
        elif distribution == 'sequential':
            return list(range(1, size + 1))
        else:
            raise ValueError(f"Unknown distribution: {distribution}")

    @staticmethod
    def generate_datasets(sizes: Sequence[int],
                          seed: int = None,
                          distribution: str = 'uniform') -> List[List[int]]:
        """One dataset per size; each size gets its own seed derived from ``seed``."""
        if seed is None:
            seed = DEFAULT_BENCHMARK_SEED
        return [
            BenchmarkUtils.generate_dataset(size, seed + i, distribution)
            for i, size in enumerate(sizes)
        ]
