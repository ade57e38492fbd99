"""Comparison of the search containers on shared datasets."""

import logging
import tracemalloc
from typing import Callable, Dict, List, Tuple

from tqdm import tqdm

from search_structures.avl_tree import AVLTree
from search_structures.base import Container
from search_structures.hash_table import CollisionBehavior, HashTable
from search_structures.splay_tree import SplayTree

from .benchmark_utils import BenchmarkUtils
from .benchmarker import Benchmarker
from .config import BenchmarkConfig, BenchmarkMetadata, get_git_commit_hash
from .data_table import DataTable, Format, NS_PER_MS
from .verify import verify_invariants

OPERATIONS = ("insert", "search", "delete")

TITLES = {
    "insert": "Insertion Performance Comparison",
    "search": "Search Performance Comparison",
    "delete": "Deletion Performance Comparison",
}


def _identity(x):
    return x


def container_factories(config: BenchmarkConfig) -> List[Tuple[str, Callable[[], Container]]]:
    """Row label and factory for every structure under comparison."""
    return [
        ("AVL Tree", AVLTree),
        ("Splay Tree", SplayTree),
        ("Hash Table (Chaining)",
         lambda: HashTable(CollisionBehavior.CHAINING, _identity)),
        ("Hash Table (Quadratic Probing)",
         lambda: HashTable(CollisionBehavior.QUADRATIC_PROBING, _identity, config.c1, config.c2)),
    ]


def column_headers(sizes: List[int]) -> List[str]:
    return ["Data Structure"] + [f"{size:,} Elements" for size in sizes]


def run_comparison(config: BenchmarkConfig) -> Dict[str, DataTable]:
    """
    Benchmark every structure on the configured datasets.

    Returns:
        Tables keyed ``"<operation>_time"`` and, when memory is measured,
        ``"<operation>_memory"``. Each table has one row per structure.
    """
    BenchmarkUtils.check_logging_level()

    factories = container_factories(config)
    row_headers = [name for name, _ in factories]
    col_headers = column_headers(config.sizes)

    metadata = BenchmarkMetadata(
        commit_hash=get_git_commit_hash(),
        config=config,
        structures=row_headers,
    )

    # === SETUP PHASE (not timed) ===
    logging.debug("Setup: generating %d datasets...", len(config.sizes))
    datasets = BenchmarkUtils.generate_datasets(config.sizes, config.seed, config.distribution)

    tables: Dict[str, DataTable] = {}
    for op in OPERATIONS:
        tables[f"{op}_time"] = DataTable(f"{TITLES[op]} (Time in milliseconds)", col_headers, row_headers)
        if config.measure_memory:
            tables[f"{op}_memory"] = DataTable(f"{TITLES[op]} (Memory)", col_headers, row_headers)

    # === MEASUREMENT PHASE ===
    for name, factory in tqdm(factories, desc="Structures", unit="structure"):
        benchmarker = Benchmarker(factory)
        for op in OPERATIONS:
            measure = getattr(benchmarker, f"benchmark_{op}_time")
            tables[f"{op}_time"].add_row(measure(datasets, config.iterations))
            if config.measure_memory:
                measure = getattr(benchmarker, f"benchmark_{op}_memory")
                tables[f"{op}_memory"].add_row(measure(datasets, config.iterations))

        # === VERIFY PHASE (not timed) ===
        if config.verify:
            for dataset in datasets:
                container = factory()
                for value in dataset:
                    container.insert(value)
                if verify_invariants(container, dataset):
                    logging.info("✓ %s verified for n=%d", name, len(dataset))
                else:
                    logging.error("✗ %s failed verification for n=%d", name, len(dataset))

    if config.measure_memory and tracemalloc.is_tracing():
        tracemalloc.stop()

    report(tables, metadata)
    return tables


def report(tables: Dict[str, DataTable], metadata: BenchmarkMetadata) -> None:
    """
    Log every table in human-readable form, then as CSV when enabled.

    NOT TIMED.
    """
    logging.info("")
    logging.info("=== METADATA ===")
    for line in str(metadata).split('\n'):
        logging.info(line)

    for key, table in tables.items():
        fmt = Format.MEMORY if key.endswith("_memory") else Format.TIME
        logging.info("")
        for line in table.render(fmt).split('\n'):
            logging.info(line)

    if metadata.config.csv:
        for key, table in tables.items():
            divide_by = 1 if key.endswith("_memory") else NS_PER_MS
            logging.info("")
            for line in table.to_csv(divide_by).split('\n'):
                logging.info(line)
