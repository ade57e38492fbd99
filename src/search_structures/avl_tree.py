"""AVL tree: height-balanced binary search tree"""

from __future__ import annotations

from typing import Any, Optional, Tuple

from search_structures.base import debug_log
from search_structures.binary_tree import BinaryNode, BinaryTreeBase

# Marks a delete that reached an empty subtree
_MISSING = object()


class AVLNode(BinaryNode):
    """Binary node that also records the height of its subtree (leaf = 1)."""
    __slots__ = ("height",)

    def __init__(self, value: Any) -> None:
        super().__init__(value)
        self.height = 1

    def update_height(self) -> None:
        self.height = 1 + max(height(self.left), height(self.right))

    def rotate_right(self) -> AVLNode:
        pivot = super().rotate_right()
        # self is now below pivot, so its height must be fixed first
        self.update_height()
        pivot.update_height()
        return pivot

    def rotate_left(self) -> AVLNode:
        pivot = super().rotate_left()
        self.update_height()
        pivot.update_height()
        return pivot

    def __repr__(self) -> str:
        return f"AVLNode(value={self.value!r}, height={self.height})"


def height(node: Optional[AVLNode]) -> int:
    """Height of a subtree; 0 for the empty subtree."""
    return 0 if node is None else node.height


def balance_factor(node: Optional[AVLNode]) -> int:
    """Left-subtree height minus right-subtree height."""
    if node is None:
        return 0
    return height(node.left) - height(node.right)


def rebalance(node: AVLNode) -> AVLNode:
    """
    Restore the AVL balance condition at ``node`` after one of its subtrees
    changed height by at most one.

    Returns:
        AVLNode: The (possibly new) root of the subtree.
    """
    bf = balance_factor(node)
    if bf > 1:
        # Left-Right case: straighten the left child first
        if balance_factor(node.left) < 0:
            node.left = node.left.rotate_left()
        return node.rotate_right()
    if bf < -1:
        # Right-Left case
        if balance_factor(node.right) > 0:
            node.right = node.right.rotate_right()
        return node.rotate_left()
    return node


class AVLTree(BinaryTreeBase):
    """
    Balanced binary search tree with O(log n) worst-case insert, delete and
    search. Duplicate values are rejected.
    """
    __slots__ = ()

    NodeClass = AVLNode

    # Public API
    def insert(self, element: Any) -> bool:
        """
        Insert ``element`` unless an equal value is already stored.

        Returns:
            bool: True if inserted, False for a duplicate (tree unchanged).
        """
        self.root, inserted = self._insert_node(self.root, element)
        if inserted:
            self._size += 1
        return inserted

    def delete(self, element: Any) -> Optional[Any]:
        """
        Remove the value equal to ``element``.

        Returns:
            The removed value, or None if no equal value was stored.
        """
        if self.root is None:
            return None
        new_root, removed = self._delete_node(self.root, element)
        if removed is _MISSING:
            return None
        self.root = new_root
        self._size -= 1
        return removed

    def search(self, element: Any) -> Optional[Any]:
        """Return the stored value equal to ``element``, or None."""
        node = self.root
        while node is not None:
            if element < node.value:
                node = node.left
            elif element > node.value:
                node = node.right
            else:
                return node.value
        return None

    # Private Methods
    def _insert_node(self, node: Optional[AVLNode], value: Any) -> Tuple[AVLNode, bool]:
        if node is None:
            return self.NodeClass(value), True

        if value < node.value:
            node.left, inserted = self._insert_node(node.left, value)
        elif value > node.value:
            node.right, inserted = self._insert_node(node.right, value)
        else:
            return node, False

        if not inserted:
            return node, False

        node.update_height()
        return rebalance(node), True

    def _delete_node(self, node: Optional[AVLNode], value: Any) -> Tuple[Optional[AVLNode], Any]:
        """
        Delete ``value`` from the subtree rooted at ``node``.

        Returns:
            (new_subtree_root, removed_value); removed_value is ``_MISSING``
            when the value is not in the subtree, in which case the subtree
            is untouched.
        """
        if node is None:
            return None, _MISSING

        if value < node.value:
            new_left, removed = self._delete_node(node.left, value)
            if removed is _MISSING:
                return node, _MISSING
            node.left = new_left
        elif value > node.value:
            new_right, removed = self._delete_node(node.right, value)
            if removed is _MISSING:
                return node, _MISSING
            node.right = new_right
        else:
            removed = node.value
            if node.left is None or node.right is None:
                # At most one child: splice the node out
                return (node.left if node.left is not None else node.right), removed

            successor = node.right
            while successor.left is not None:
                successor = successor.left
            debug_log("AVL delete %r: copying in-order successor %r", removed, successor.value)
            node.value = successor.value
            node.right, _ = self._delete_node(node.right, successor.value)

        node.update_height()
        return rebalance(node), removed

    def _node_label(self, node: AVLNode) -> str:
        return f"{node.value} (h={node.height})"
