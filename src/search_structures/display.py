"""Pretty-printing and display utilities for the containers."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Union

from search_structures.hash_table import HashTable, SlotState

if TYPE_CHECKING:
    from search_structures.binary_tree import BinaryNode, BinaryTreeBase


# ANSI colour codes
PRIMARY = '\033[32m'    # green
SECONDARY = '\033[33m'  # yellow
RESET = '\033[0m'


def print_pretty(container: Union[BinaryTreeBase, HashTable, None], color: bool = False) -> str:
    """
    Renders a tree level by level:
      • Lines go from the root down to the deepest level.
      • Within a line, nodes appear left→right, with ``·`` for an absent
        child of a node on the previous line.
      • All columns have the same width so each line reads as one level.

    Hash tables are rendered with :func:`format_table`.
    """
    from search_structures.binary_tree import BinaryTreeBase

    if container is None:
        return f"{type(container).__name__}: None"

    if isinstance(container, HashTable):
        return format_table(container, color=color)

    if not isinstance(container, BinaryTreeBase):
        raise TypeError(f"print_pretty() expects BinaryTreeBase or HashTable, got {type(container).__name__}")

    if container.is_empty():
        return f"{type(container).__name__}: Empty"

    levels: List[List[Optional[BinaryNode]]] = []
    level: List[Optional[BinaryNode]] = [container.root]
    while any(node is not None for node in level):
        levels.append(level)
        level = [
            child
            for node in level if node is not None
            for child in (node.left, node.right)
        ]

    width = max(len(str(node.value)) for lvl in levels for node in lvl if node is not None)
    lines = []
    for lvl in levels:
        cells = []
        for node in lvl:
            text = "·" if node is None else str(node.value)
            cell = text.center(width)
            if color and node is not None:
                cell = f"{PRIMARY}{cell}{RESET}"
            cells.append(cell)
        lines.append(" ".join(cells))
    return f"{type(container).__name__}:\n" + "\n".join(lines)


def format_table(table: HashTable, color: bool = False) -> str:
    """
    One line per bucket: ``index: key = value`` for live slots, ``deleted``
    for tombstones and ``null`` for empty slots. Chained buckets list every
    entry separated by `` -> ``.
    """
    lines = []
    for index, bucket in enumerate(table.buckets):
        if bucket.state is SlotState.EMPTY:
            body = "null"
        else:
            parts = []
            for entry in bucket.entries:
                if entry.deleted:
                    text = "deleted"
                    if color:
                        text = f"{SECONDARY}{text}{RESET}"
                else:
                    text = f"{entry.key} = {entry.value}"
                    if color:
                        text = f"{PRIMARY}{text}{RESET}"
                parts.append(text)
            body = " -> ".join(parts)
        lines.append(f"{index}: {body}")
    return "\n".join(lines)
