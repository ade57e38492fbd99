"""Correctness verification for benchmarked containers."""

import logging

from search_structures.base import Container
from search_structures.binary_tree import BinaryTreeBase
from search_structures.hash_table import HashTable
from search_structures.invariants import (
    InvariantError,
    assert_tree_invariants_raise,
    check_hash_table_invariants,
)
from search_structures.tree_stats import tree_stats_


def verify_invariants(container: Container, expected_values=None) -> bool:
    """
    Check the structural invariants of ``container``.

    This is the verify phase - not timed in benchmarks.

    Args:
        container: The container to verify
        expected_values: Optional iterable of values that must all be found

    Returns:
        True if all invariants pass, False otherwise
    """
    try:
        if isinstance(container, BinaryTreeBase):
            assert_tree_invariants_raise(container, tree_stats_(container))
        elif isinstance(container, HashTable):
            check_hash_table_invariants(container)
    except InvariantError as exc:
        logging.error("%s: %s", type(container).__name__, exc)
        return False

    if expected_values is not None:
        missing = [v for v in set(expected_values) if container.search(v) is None]
        if missing:
            logging.error(
                "%s: %d expected values missing (e.g. %r)",
                type(container).__name__, len(missing), missing[:5],
            )
            return False
    return True
