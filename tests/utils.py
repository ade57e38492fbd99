"""Utility functions for testing container invariants."""

from typing import Optional

from search_structures.avl_tree import AVLTree
from search_structures.binary_tree import BinaryTreeBase
from search_structures.hash_table import CollisionBehavior, HashTable
from search_structures.tree_stats import Stats

TREE_FLAGS = (
    "is_search_tree",
    "size_consistent",
)

AVL_FLAGS = (
    "is_balanced",
    "heights_consistent",
)


def assert_tree_invariants_tc(tc, t: BinaryTreeBase, stats: Stats, err_msg: Optional[str] = "") -> None:
    """TestCase version: use inside unittest.TestCase methods."""
    flags = TREE_FLAGS + AVL_FLAGS if isinstance(t, AVLTree) else TREE_FLAGS
    for flag in flags:
        tc.assertTrue(
            getattr(stats, flag),
            f"Invariant failed: {flag} is False \n\n{err_msg}\n\n{t.print_structure()}"
        )

    if not t.is_empty():
        tc.assertGreater(
            stats.node_count, 0,
            f"Invariant failed: node_count={stats.node_count} ≤ 0 for non-empty tree\n\n{err_msg}"
        )
        tc.assertEqual(
            stats.node_count, len(t),
            f"Invariant failed: node_count={stats.node_count} ≠ len(tree)={len(t)}\n\n{err_msg}"
        )
        tc.assertIsNotNone(
            stats.least_item,
            f"Invariant failed: least_item is None for non-empty tree\n\n{err_msg}"
        )
        tc.assertIsNotNone(
            stats.greatest_item,
            f"Invariant failed: greatest_item is None for non-empty tree\n\n{err_msg}"
        )
        if isinstance(t, AVLTree):
            tc.assertLessEqual(
                stats.max_abs_balance, 1,
                f"Invariant failed: |balance factor|={stats.max_abs_balance} > 1\n\n{err_msg}"
            )


def assert_hash_invariants_tc(tc, table: HashTable, err_msg: Optional[str] = "") -> None:
    """Check hash-table bookkeeping from inside a TestCase."""
    live = 0
    for index, bucket in enumerate(table.buckets):
        if table.collision_behavior is not CollisionBehavior.CHAINING:
            tc.assertLessEqual(
                len(bucket), 1,
                f"Bucket {index} holds {len(bucket)} entries under "
                f"{table.collision_behavior.value}\n\n{err_msg}"
            )
        for entry in bucket.live_entries():
            live += 1
            tc.assertIs(
                table.find(entry.key), entry.value,
                f"Live key {entry.key!r} is not reachable via find()\n\n{err_msg}"
            )
    tc.assertEqual(live, len(table), f"len(table)={len(table)} ≠ live entries={live}\n\n{err_msg}")
