"""Statistics and structural checks for binary search trees."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Tuple

if TYPE_CHECKING:
    from search_structures.binary_tree import BinaryTreeBase


@dataclass
class Stats:
    """Aggregated statistics for a binary search tree."""

    node_count: int
    leaf_count: int
    height: int
    least_item: Any | None
    greatest_item: Any | None
    is_search_tree: bool
    is_balanced: bool
    heights_consistent: bool
    size_consistent: bool
    max_abs_balance: int


# (height, count, leaves, least, greatest, is_bst, balanced, heights_ok, max_abs_bf)
_Summary = Tuple[int, int, int, Any, Any, bool, bool, bool, int]
_EMPTY: _Summary = (0, 0, 0, None, None, True, True, True, 0)


def tree_stats_(t: BinaryTreeBase) -> Stats:
    """
    Returns aggregated statistics for a binary search tree in **O(n)** time.

    Heights are measured from the actual links, so for AVL trees the stored
    ``height`` fields can be compared against them (``heights_consistent``).
    The walk is an explicit post-order so degenerate splay trees do not
    exhaust the recursion limit.
    """
    if t is None or t.root is None:
        return Stats(
            node_count=0,
            leaf_count=0,
            height=0,
            least_item=None,
            greatest_item=None,
            is_search_tree=True,
            is_balanced=True,
            heights_consistent=True,
            size_consistent=t is None or len(t) == 0,
            max_abs_balance=0,
        )

    summaries: Dict[int, _Summary] = {}
    stack: List[Tuple[Any, bool]] = [(t.root, False)]

    while stack:
        node, children_done = stack.pop()
        if not children_done:
            stack.append((node, True))
            if node.right is not None:
                stack.append((node.right, False))
            if node.left is not None:
                stack.append((node.left, False))
            continue

        left = summaries.pop(id(node.left)) if node.left is not None else _EMPTY
        right = summaries.pop(id(node.right)) if node.right is not None else _EMPTY
        l_height, l_count, l_leaves, l_least, l_greatest, l_bst, l_bal, l_hok, l_bf = left
        r_height, r_count, r_leaves, r_least, r_greatest, r_bst, r_bal, r_hok, r_bf = right

        value = node.value
        is_bst = l_bst and r_bst
        if l_count and not l_greatest < value:
            is_bst = False
        if r_count and not value < r_least:
            is_bst = False

        height = 1 + max(l_height, r_height)
        bf = abs(l_height - r_height)
        stored = getattr(node, "height", None)
        heights_ok = l_hok and r_hok and (stored is None or stored == height)

        summaries[id(node)] = (
            height,
            l_count + r_count + 1,
            l_leaves + r_leaves + (1 if node.is_leaf() else 0),
            l_least if l_count else value,
            r_greatest if r_count else value,
            is_bst,
            l_bal and r_bal and bf <= 1,
            heights_ok,
            max(l_bf, r_bf, bf),
        )

    height, count, leaves, least, greatest, is_bst, balanced, heights_ok, max_bf = summaries[id(t.root)]
    stats = Stats(
        node_count=count,
        leaf_count=leaves,
        height=height,
        least_item=least,
        greatest_item=greatest,
        is_search_tree=is_bst,
        is_balanced=balanced,
        heights_consistent=heights_ok,
        size_consistent=count == len(t),
        max_abs_balance=max_bf,
    )
    return stats
