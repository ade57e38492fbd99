"""Shared node and tree scaffolding for the binary search trees."""

from __future__ import annotations

from typing import Any, Iterator, List, Optional, Type

from search_structures.base import Container


class BinaryNode:
    """
    A node of a binary search tree. The node exclusively owns its two
    subtrees; rotations move links between nodes and never touch values.
    """
    __slots__ = ("value", "left", "right")

    def __init__(self, value: Any) -> None:
        self.value = value
        self.left: Optional[BinaryNode] = None
        self.right: Optional[BinaryNode] = None

    def rotate_right(self) -> BinaryNode:
        """
        Promote the left child to the root of this subtree.

        Returns:
            BinaryNode: The new subtree root (the former left child).
        """
        pivot = self.left
        self.left = pivot.right
        pivot.right = self
        return pivot

    def rotate_left(self) -> BinaryNode:
        """
        Promote the right child to the root of this subtree.

        Returns:
            BinaryNode: The new subtree root (the former right child).
        """
        pivot = self.right
        self.right = pivot.left
        pivot.left = self
        return pivot

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __repr__(self) -> str:
        cls = self.__class__.__name__
        return f"{cls}(value={self.value!r})"


class BinaryTreeBase(Container):
    """
    A binary search tree is either empty or holds a root node.

    Attributes:
        root (Optional[BinaryNode]): The root node. If None, the tree is empty.
    """
    __slots__ = ("root", "_size")

    # set by subclasses
    NodeClass: Type[BinaryNode] = BinaryNode

    def __init__(self) -> None:
        self.root: Optional[BinaryNode] = None
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self.root is None

    def clear(self) -> None:
        self.root = None
        self._size = 0

    def in_order(self) -> Iterator[Any]:
        """
        Yield every stored value in ascending order (left, self, right).

        Uses an explicit stack so degenerate (list-shaped) trees do not hit
        the recursion limit.
        """
        stack: List[BinaryNode] = []
        node = self.root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node.value
            node = node.right

    __iter__ = in_order

    def height(self) -> int:
        """Physical height of the tree; the empty tree has height 0."""
        if self.root is None:
            return 0
        height = 0
        level = [self.root]
        while level:
            height += 1
            level = [
                child
                for node in level
                for child in (node.left, node.right)
                if child is not None
            ]
        return height

    def min(self) -> Optional[Any]:
        node = self.root
        if node is None:
            return None
        while node.left is not None:
            node = node.left
        return node.value

    def max(self) -> Optional[Any]:
        node = self.root
        if node is None:
            return None
        while node.right is not None:
            node = node.right
        return node.value

    def print_structure(self, indent: int = 0, max_depth: Optional[int] = None) -> str:
        """Return a sideways rendering of the tree, right subtree on top."""
        if self.root is None:
            return " " * indent + "Empty"
        lines: List[str] = []

        # Reverse in-order walk; splay trees can be deeper than the recursion limit
        stack: List[tuple] = []
        node, depth = self.root, 0
        while stack or node is not None:
            while node is not None:
                if max_depth is not None and depth > max_depth:
                    lines.append(" " * (indent + 4 * depth) + "...")
                    node = None
                    break
                stack.append((node, depth))
                node, depth = node.right, depth + 1
            if not stack:
                break
            node, depth = stack.pop()
            lines.append(" " * (indent + 4 * depth) + self._node_label(node))
            node, depth = node.left, depth + 1
        return "\n".join(lines)

    def _node_label(self, node: BinaryNode) -> str:
        return str(node.value)

    def __str__(self) -> str:
        cls = self.__class__.__name__
        if self.is_empty():
            return f"Empty {cls}"
        return f"{cls}(root={self.root.value!r}, size={len(self)})"

    __repr__ = __str__
