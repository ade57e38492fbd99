"""Splay tree: self-adjusting binary search tree"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from search_structures.base import debug_log
from search_structures.binary_tree import BinaryNode, BinaryTreeBase

# Rotation patterns recorded on the way down, undone on the way up
ZIG = "zig"            # key is the left child
ZIG_ZIG = "zig-zig"    # left-left
ZIG_ZAG = "zig-zag"    # left-right
ZAG = "zag"            # key is the right child
ZAG_ZAG = "zag-zag"    # right-right
ZAG_ZIG = "zag-zig"    # right-left

_LEFT_CASES = (ZIG, ZIG_ZIG, ZIG_ZAG)


def splay(root: Optional[BinaryNode], key: Any) -> Optional[BinaryNode]:
    """
    Move the node holding ``key`` to the root of the subtree. On a miss the
    last node visited on the search path becomes the root instead.

    Each step looks two levels down, splays the grandchild subtree first and
    then rotates the current node, exactly like the recursive formulation;
    the descent is kept on an explicit stack because access sequences can
    grow the tree into a path far deeper than the interpreter's recursion
    limit.

    Returns:
        The new root of the subtree (None only for an empty subtree).
    """
    path: List[Tuple[BinaryNode, str]] = []
    node = root

    while True:
        if node is None or node.value == key:
            sub = node
            break
        if key < node.value:
            child = node.left
            if child is None:
                sub = node
                break
            if key < child.value:
                path.append((node, ZIG_ZIG))
                node = child.left
            elif key > child.value:
                path.append((node, ZIG_ZAG))
                node = child.right
            else:
                path.append((node, ZIG))
                sub = None
                break
        else:
            child = node.right
            if child is None:
                sub = node
                break
            if key > child.value:
                path.append((node, ZAG_ZAG))
                node = child.right
            elif key < child.value:
                path.append((node, ZAG_ZIG))
                node = child.left
            else:
                path.append((node, ZAG))
                sub = None
                break

    for node, case in reversed(path):
        if case == ZIG_ZIG:
            node.left.left = sub
            node = node.rotate_right()
        elif case == ZIG_ZAG:
            node.left.right = sub
            if node.left.right is not None:
                node.left = node.left.rotate_left()
        elif case == ZAG_ZAG:
            node.right.right = sub
            node = node.rotate_left()
        elif case == ZAG_ZIG:
            node.right.left = sub
            if node.right.left is not None:
                node.right = node.right.rotate_right()

        if case in _LEFT_CASES:
            sub = node if node.left is None else node.rotate_right()
        else:
            sub = node if node.right is None else node.rotate_left()

    return sub


class SplayTree(BinaryTreeBase):
    """
    Binary search tree reordered by access: every insert, delete and search
    splays the accessed key (or the closest node on a miss) to the root.
    O(log n) amortized; no balance metadata is stored.
    """
    __slots__ = ()

    NodeClass = BinaryNode

    def insert(self, element: Any) -> bool:
        """
        Insert ``element``; the new node becomes the root.

        Returns:
            bool: True if inserted, False for a duplicate.
        """
        if self.root is None:
            self.root = self.NodeClass(element)
            self._size += 1
            return True

        root = splay(self.root, element)
        self.root = root
        if element < root.value:
            new_node = self.NodeClass(element)
            new_node.right = root
            new_node.left = root.left
            root.left = None
        elif element > root.value:
            new_node = self.NodeClass(element)
            new_node.left = root
            new_node.right = root.right
            root.right = None
        else:
            return False

        self.root = new_node
        self._size += 1
        return True

    def delete(self, element: Any) -> Optional[Any]:
        """
        Remove the value equal to ``element``.

        Returns:
            The removed value, or None if absent (the tree keeps the shape
            produced by splaying toward ``element``).
        """
        if self.root is None:
            return None
        root = splay(self.root, element)
        self.root = root
        if root.value != element:
            return None

        deleted = root.value
        if root.left is None:
            self.root = root.right
        else:
            right = root.right
            # element is gone from the left subtree, so this brings its maximum up
            new_root = splay(root.left, element)
            new_root.right = right
            self.root = new_root
        self._size -= 1
        debug_log("Splay delete %r: new root %r", deleted,
                  None if self.root is None else self.root.value)
        return deleted

    def search(self, element: Any) -> Optional[Any]:
        """
        Splay toward ``element`` and return it if it is now the root.
        The tree shape changes even when the element is absent.
        """
        self.root = splay(self.root, element)
        if self.root is not None and self.root.value == element:
            return self.root.value
        return None
