#!/usr/bin/env python3
"""
Benchmark runner script for the search containers.

Builds the datasets, benchmarks the AVL tree, the splay tree and the two
open hash-table policies against them, and logs the comparison tables.
"""

import argparse
import logging
import sys
from datetime import datetime

from benchmarks.benchmark_utils import DISTRIBUTIONS
from benchmarks.config import BenchmarkConfig
from benchmarks.runner import run_comparison


def parse_args(argv=None):
    env = BenchmarkConfig.from_env()
    parser = argparse.ArgumentParser(
        description="Compare AVL tree, splay tree and hash table performance",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_benchmarks.py                              # Default sizes 1k / 10k / 100k
  python run_benchmarks.py --sizes 100 1000 -i 5        # Quick run, 5 trials each
  python run_benchmarks.py --memory --no-csv            # Also measure memory
  python run_benchmarks.py --distribution sequential    # Sorted input
        """
    )
    parser.add_argument('--sizes', type=int, nargs='+', default=env.sizes,
                        help='Dataset sizes (default: %(default)s)')
    parser.add_argument('-i', '--iterations', type=int, default=env.iterations,
                        help='Trials averaged per dataset (default: %(default)s)')
    parser.add_argument('--seed', type=int, default=env.seed,
                        help='Random seed (default: %(default)s)')
    parser.add_argument('--distribution', choices=DISTRIBUTIONS, default=env.distribution,
                        help='Dataset distribution (default: %(default)s)')
    parser.add_argument('--c1', type=int, default=env.c1,
                        help='Linear probing coefficient (default: %(default)s)')
    parser.add_argument('--c2', type=int, default=env.c2,
                        help='Quadratic probing coefficient (default: %(default)s)')
    parser.add_argument('--memory', action='store_true', default=env.measure_memory,
                        help='Also measure memory allocated per batch')
    parser.add_argument('--verify', action='store_true', default=env.verify,
                        help='Check container invariants after building each dataset')
    parser.add_argument('--no-csv', dest='csv', action='store_false',
                        help='Skip the CSV output')
    parser.add_argument('--log-level', default=env.log_level,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level (default: %(default)s)')
    parser.add_argument('--log-file', default=None,
                        help='Also write the log to this file')
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    handlers = [logging.StreamHandler(sys.stdout)]
    if args.log_file:
        handlers.append(logging.FileHandler(args.log_file, mode="w"))
    log_level = getattr(logging, args.log_level)
    logging.basicConfig(level=log_level, format="%(message)s", handlers=handlers)
    logging.getLogger("search_structures").setLevel(log_level)

    logging.info("Benchmark started at %s", datetime.now().isoformat(timespec="seconds"))
    try:
        config = BenchmarkConfig(
            seed=args.seed,
            sizes=args.sizes,
            iterations=args.iterations,
            distribution=args.distribution,
            c1=args.c1,
            c2=args.c2,
            measure_memory=args.memory,
            verify=args.verify,
            csv=args.csv,
            log_level=args.log_level,
        )
        run_comparison(config)
    except ValueError as exc:
        logging.error("❌ %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
