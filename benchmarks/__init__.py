"""
Benchmarks package for the search containers.

This package measures and compares:
- Insert, search and delete time of the AVL tree, the splay tree and the
  hash table (chaining and quadratic probing)
- Approximate memory allocated by each batch of operations

Results are presented as human-readable tables and as CSV.
"""

# Import benchmark utilities for easier access
from .benchmark_utils import BenchmarkUtils
from .benchmarker import Benchmarker
from .config import BenchmarkConfig
from .data_table import DataTable, Format

__all__ = ["BenchmarkConfig", "BenchmarkUtils", "Benchmarker", "DataTable", "Format"]
