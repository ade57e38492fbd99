"""Shared invariant-checking utilities.

Used by the benchmark verify phase and by the test suite, so both
validate containers against the same rules.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from search_structures.logging_config import get_logger

logger = get_logger(__name__)

if TYPE_CHECKING:
    from search_structures.binary_tree import BinaryTreeBase
    from search_structures.hash_table import HashTable
    from search_structures.tree_stats import Stats

TREE_FLAGS = (
    "is_search_tree",
    "size_consistent",
)

AVL_FLAGS = (
    "is_balanced",
    "heights_consistent",
)


class InvariantError(Exception):
    """Raised when a container invariant is violated."""


def assert_tree_invariants_raise(
    t: BinaryTreeBase,
    stats: Optional[Stats] = None,
) -> None:
    """Check all tree invariants, raising :class:`InvariantError` on the first failure."""
    from search_structures.avl_tree import AVLTree
    from search_structures.tree_stats import tree_stats_

    if stats is None:
        stats = tree_stats_(t)

    flags = TREE_FLAGS + AVL_FLAGS if isinstance(t, AVLTree) else TREE_FLAGS
    for flag in flags:
        if not getattr(stats, flag):
            raise InvariantError(f"Invariant failed: {flag} is False")

    if not t.is_empty():
        if stats.node_count <= 0:
            raise InvariantError(f"Invariant failed: node_count={stats.node_count} ≤ 0 for non-empty tree")
        if stats.least_item is None:
            raise InvariantError("Invariant failed: least_item is None for non-empty tree")
        if stats.greatest_item is None:
            raise InvariantError("Invariant failed: greatest_item is None for non-empty tree")
        if stats.least_item != t.min() or stats.greatest_item != t.max():
            raise InvariantError(
                f"Invariant failed: extremes ({stats.least_item!r}, {stats.greatest_item!r}) "
                f"≠ tree min/max ({t.min()!r}, {t.max()!r})"
            )


def check_hash_table_invariants(table: HashTable) -> None:
    """
    Validate the bookkeeping of a hash table, raising :class:`InvariantError`.

    Checks that ``len(table)`` equals the number of live entries, that the
    load factor stayed within bounds, that every live key is unique and
    reachable through ``find``, and that single-slot policies never hold
    more than one entry per bucket.
    """
    from search_structures.hash_table import CollisionBehavior

    live = 0
    seen = set()
    single_slot = table.collision_behavior is not CollisionBehavior.CHAINING

    for index, bucket in enumerate(table.buckets):
        if single_slot and len(bucket) > 1:
            raise InvariantError(
                f"Invariant failed: bucket {index} holds {len(bucket)} entries "
                f"under {table.collision_behavior.value}"
            )
        for entry in bucket.live_entries():
            live += 1
            if entry.key in seen:
                raise InvariantError(f"Invariant failed: key {entry.key!r} is live twice")
            seen.add(entry.key)
            if table.find(entry.key) is not entry.value:
                raise InvariantError(f"Invariant failed: key {entry.key!r} is not reachable via find()")

    if live != len(table):
        raise InvariantError(f"Invariant failed: len(table)={len(table)} ≠ live entries={live}")

    # One insert may land after the last load check
    limit = table.MAX_LOAD_FACTOR + 1 / table.capacity
    if table.load_factor > limit:
        raise InvariantError(
            f"Invariant failed: load factor {table.load_factor:.3f} exceeds {limit:.3f}"
        )

    logger.debug("Hash table invariants hold: %s", table)
