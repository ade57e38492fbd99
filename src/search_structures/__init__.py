"""
search_structures: interchangeable in-memory search containers.

Quick-start imports::

    from search_structures import AVLTree, SplayTree, HashTable, CollisionBehavior

All containers implement :class:`Container` (``insert`` / ``delete`` /
``search``), so callers can swap one for another.
"""

# Shared contract & errors
from search_structures.base import (
    Container,
    MisconfiguredCollisionPolicyError,
    SearchStructureError,
    TableFullError,
)

# Trees
from search_structures.binary_tree import BinaryNode, BinaryTreeBase
from search_structures.avl_tree import AVLNode, AVLTree
from search_structures.splay_tree import SplayTree

# Hash table
from search_structures.hash_table import (
    CollisionBehavior,
    HashTable,
    PutStatus,
    SlotState,
    next_prime,
)

# Stats, invariants & display
from search_structures.display import format_table, print_pretty
from search_structures.invariants import (
    InvariantError,
    assert_tree_invariants_raise,
    check_hash_table_invariants,
)
from search_structures.tree_stats import Stats, tree_stats_

__all__ = [
    "AVLNode",
    "AVLTree",
    "BinaryNode",
    "BinaryTreeBase",
    "CollisionBehavior",
    "Container",
    "HashTable",
    "InvariantError",
    "MisconfiguredCollisionPolicyError",
    "PutStatus",
    "SearchStructureError",
    "SlotState",
    "SplayTree",
    "Stats",
    "TableFullError",
    "assert_tree_invariants_raise",
    "check_hash_table_invariants",
    "format_table",
    "next_prime",
    "print_pretty",
    "tree_stats_",
]
