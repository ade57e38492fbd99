"""Tests for the benchmark harness"""

import itertools
import logging
import os
import tracemalloc
import unittest
from unittest import mock

from benchmarks.benchmark_utils import BenchmarkUtils
from benchmarks.benchmarker import Benchmarker
from benchmarks.config import BenchmarkConfig, BenchmarkMetadata
from benchmarks.data_table import (
    GB,
    KB,
    MB,
    DataTable,
    Format,
    format_memory,
    format_time,
)
from benchmarks.runner import column_headers, container_factories, run_comparison
from benchmarks.verify import verify_invariants
from search_structures.avl_tree import AVLTree
from search_structures.base import Container
from search_structures.hash_table import CollisionBehavior, HashTable

import run_benchmarks


class RecordingContainer(Container):
    """Container that only remembers which calls it received."""

    def __init__(self):
        self.calls = []

    def insert(self, element):
        self.calls.append(("insert", element))
        return True

    def delete(self, element):
        self.calls.append(("delete", element))
        return element

    def search(self, element):
        self.calls.append(("search", element))
        return element

    def __len__(self):
        return 0


class TestDatasets(unittest.TestCase):
    def test_uniform_values_repeat_within_half_range(self):
        data = BenchmarkUtils.generate_dataset(100, seed=1, distribution='uniform')
        self.assertEqual(len(data), 100)
        self.assertTrue(all(1 <= v <= 50 for v in data))
        self.assertLess(len(set(data)), 100)

    def test_unique_is_a_permutation(self):
        data = BenchmarkUtils.generate_dataset(200, seed=1, distribution='unique')
        self.assertEqual(sorted(data), list(range(1, 201)))

    def test_sequential(self):
        self.assertEqual(
            BenchmarkUtils.generate_dataset(5, distribution='sequential'),
            [1, 2, 3, 4, 5],
        )

    def test_same_seed_same_data(self):
        a = BenchmarkUtils.generate_dataset(50, seed=7)
        b = BenchmarkUtils.generate_dataset(50, seed=7)
        self.assertEqual(a, b)

    def test_values_are_python_ints(self):
        data = BenchmarkUtils.generate_dataset(10, seed=3)
        self.assertTrue(all(type(v) is int for v in data))

    def test_unknown_distribution(self):
        with self.assertRaises(ValueError):
            BenchmarkUtils.generate_dataset(10, distribution='zipf')

    def test_one_dataset_per_size(self):
        datasets = BenchmarkUtils.generate_datasets([10, 20, 30], seed=5)
        self.assertEqual([len(d) for d in datasets], [10, 20, 30])

    def test_check_logging_level_rejects_debug(self):
        package_logger = logging.getLogger("search_structures")
        previous = package_logger.level
        package_logger.setLevel(logging.DEBUG)
        try:
            with self.assertRaises(ValueError):
                BenchmarkUtils.check_logging_level()
        finally:
            package_logger.setLevel(previous)


class TestBenchmarker(unittest.TestCase):
    def setUp(self):
        self.created = []

        def factory():
            container = RecordingContainer()
            self.created.append(container)
            return container

        self.factory = factory

    def test_insert_runs_on_fresh_container(self):
        times = Benchmarker(self.factory).benchmark_insert_time([[1, 2, 3]], 2)
        self.assertEqual(len(times), 1)
        self.assertGreaterEqual(times[0], 0)
        self.assertEqual(len(self.created), 2)
        for container in self.created:
            self.assertEqual(container.calls, [("insert", 1), ("insert", 2), ("insert", 3)])

    def test_delete_and_search_prefill_the_container(self):
        benchmarker = Benchmarker(self.factory)
        benchmarker.benchmark_delete_time([[4, 5]], 1)
        benchmarker.benchmark_search_time([[6]], 1)
        self.assertEqual(
            self.created[0].calls,
            [("insert", 4), ("insert", 5), ("delete", 4), ("delete", 5)],
        )
        self.assertEqual(self.created[1].calls, [("insert", 6), ("search", 6)])

    def test_one_result_per_dataset(self):
        datasets = [[1], [1, 2], [1, 2, 3]]
        times = Benchmarker(AVLTree).benchmark_search_time(datasets, 1)
        self.assertEqual(len(times), 3)
        self.assertTrue(all(isinstance(t, int) for t in times))

    def test_memory_uses_injected_probe(self):
        readings = itertools.cycle([100, 250])
        benchmarker = Benchmarker(self.factory, memory_probe=lambda: next(readings))
        self.assertEqual(benchmarker.benchmark_insert_memory([[1, 2], [3]], 3), [150, 150])

    def test_default_probe_uses_tracemalloc(self):
        was_tracing = tracemalloc.is_tracing()
        try:
            result = Benchmarker(AVLTree).benchmark_insert_memory([list(range(200))], 1)
            self.assertGreater(result[0], 0)
        finally:
            if not was_tracing and tracemalloc.is_tracing():
                tracemalloc.stop()

    def test_iterations_must_be_positive(self):
        with self.assertRaises(ValueError):
            Benchmarker(self.factory).benchmark_insert_time([[1]], 0)


class TestDataTable(unittest.TestCase):
    def test_format_time(self):
        self.assertEqual(format_time(1_500_000_000), "1.5 s")
        self.assertEqual(format_time(2_000_000_000), "2 s")
        self.assertEqual(format_time(3_000_000), "3 ms")
        self.assertEqual(format_time(500_000), "0.5 ms")
        self.assertEqual(format_time(0), "0 ms")

    def test_format_memory(self):
        self.assertEqual(format_memory(512), "512 B")
        self.assertEqual(format_memory(2 * KB), "2 KB")
        self.assertEqual(format_memory(3 * MB // 2), "1.5 MB")
        self.assertEqual(format_memory(GB), "1.0 GB")

    def make_table(self):
        table = DataTable("Insertion", ["Data Structure", "1,000 Elements"], ["AVL Tree", "Splay Tree"])
        table.add_row([3_000_000])
        table.add_row([1_500_000_000])
        return table

    def test_render_pads_columns(self):
        lines = self.make_table().render(Format.TIME).split("\n")
        self.assertEqual(lines[0], "Insertion")
        self.assertEqual(lines[1], "Data Structure     1,000 Elements")
        self.assertEqual(lines[2], "AVL Tree" + " " * 6 + "     " + "3 ms")
        self.assertEqual(lines[3], "Splay Tree" + " " * 4 + "     " + "1.5 s")

    def test_render_raw(self):
        lines = self.make_table().render(Format.CSV).split("\n")
        self.assertTrue(lines[3].endswith("1500000000"))

    def test_str_renders_time(self):
        table = self.make_table()
        self.assertEqual(str(table), table.render(Format.TIME))

    def test_to_csv(self):
        self.assertEqual(
            self.make_table().to_csv(1_000_000),
            '"Insertion"\n'
            '"Data Structure","1,000 Elements"\n'
            '"AVL Tree",3.0\n'
            '"Splay Tree",1500.0',
        )

    def test_to_csv_rejects_zero_divisor(self):
        with self.assertRaises(ValueError):
            self.make_table().to_csv(0)

    def test_add_row_validation(self):
        table = DataTable("T", ["Data Structure", "a", "b"], ["x"])
        with self.assertRaises(ValueError):
            table.add_row([1])
        table.add_row([1, 2])
        with self.assertRaises(ValueError):
            table.add_row([3, 4])


class TestConfig(unittest.TestCase):
    def test_defaults(self):
        config = BenchmarkConfig()
        self.assertEqual(config.sizes, [1_000, 10_000, 100_000])
        self.assertEqual((config.c1, config.c2), (1, 3))

    def test_validation(self):
        with self.assertRaises(ValueError):
            BenchmarkConfig(iterations=0)
        with self.assertRaises(ValueError):
            BenchmarkConfig(sizes=[10, 0])

    def test_from_env(self):
        env = {
            "BENCHMARK_SEED": "9",
            "BENCHMARK_SIZES": "10,20",
            "BENCHMARK_ITERATIONS": "2",
            "BENCHMARK_MEMORY": "true",
            "BENCHMARK_LOG_LEVEL": "WARNING",
        }
        with mock.patch.dict(os.environ, env):
            config = BenchmarkConfig.from_env()
        self.assertEqual(config.seed, 9)
        self.assertEqual(config.sizes, [10, 20])
        self.assertEqual(config.iterations, 2)
        self.assertTrue(config.measure_memory)
        self.assertFalse(config.verify)
        self.assertEqual(config.log_level, "WARNING")

    def test_metadata(self):
        metadata = BenchmarkMetadata(None, BenchmarkConfig(sizes=[10]), ["AVL Tree"])
        text = str(metadata)
        self.assertIn("Commit: unknown", text)
        self.assertIn("Sizes (n): 10", text)
        self.assertIn("Structures: AVL Tree", text)


class TestVerify(unittest.TestCase):
    def test_valid_containers(self):
        tree = AVLTree()
        table = HashTable(CollisionBehavior.CHAINING, lambda x: x)
        for v in [3, 1, 2]:
            tree.insert(v)
            table.insert(v)
        self.assertTrue(verify_invariants(tree, [1, 2, 3]))
        self.assertTrue(verify_invariants(table, [1, 2, 3]))

    def test_missing_values_fail(self):
        tree = AVLTree()
        tree.insert(1)
        with self.assertLogs(level="ERROR"):
            self.assertFalse(verify_invariants(tree, [1, 2]))

    def test_broken_structure_fails(self):
        tree = AVLTree()
        for v in [2, 1, 3]:
            tree.insert(v)
        tree.root.left.value = 5
        with self.assertLogs(level="ERROR"):
            self.assertFalse(verify_invariants(tree))


class TestRunner(unittest.TestCase):
    def test_column_headers(self):
        self.assertEqual(column_headers([1000, 10]), ["Data Structure", "1,000 Elements", "10 Elements"])

    def test_factories_build_empty_containers(self):
        factories = container_factories(BenchmarkConfig(c1=0, c2=1))
        self.assertEqual(len(factories), 4)
        for name, factory in factories:
            with self.subTest(name=name):
                container = factory()
                self.assertIsInstance(container, Container)
                self.assertEqual(len(container), 0)
        probing = factories[3][1]()
        self.assertEqual((probing.c1, probing.c2), (0, 1))

    def test_small_comparison(self):
        config = BenchmarkConfig(sizes=[20, 40], iterations=1, measure_memory=True, verify=True)
        with self.assertLogs(level="INFO") as captured:
            tables = run_comparison(config)

        self.assertEqual(
            sorted(tables),
            sorted(f"{op}_{kind}" for op in ("insert", "search", "delete") for kind in ("time", "memory")),
        )
        for table in tables.values():
            self.assertEqual(len(table.data_rows), 4)
            self.assertTrue(all(len(row) == 2 for row in table.data_rows))
        output = "\n".join(captured.output)
        self.assertIn("Hash Table (Quadratic Probing)", output)
        self.assertNotIn("failed verification", output)


class TestCommandLine(unittest.TestCase):
    def test_main_runs(self):
        self.assertEqual(run_benchmarks.main(["--sizes", "10", "-i", "1", "--no-csv"]), 0)

    def test_main_rejects_invalid_iterations(self):
        self.assertEqual(run_benchmarks.main(["--sizes", "10", "-i", "0"]), 1)


if __name__ == '__main__':
    unittest.main()
