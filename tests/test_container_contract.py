"""Behaviour shared by every container implementation"""

import random
import unittest

from search_structures.avl_tree import AVLTree
from search_structures.base import Container
from search_structures.hash_table import CollisionBehavior, HashTable
from search_structures.splay_tree import SplayTree


class ContainerContractMixin:
    """Mixed into one TestCase per implementation; subclasses define make()."""

    def make(self) -> Container:
        raise NotImplementedError

    def test_empty_container(self):
        container = self.make()
        self.assertEqual(len(container), 0)
        self.assertTrue(container.is_empty())
        self.assertIsNone(container.search(1))
        self.assertIsNone(container.delete(1))

    def test_insert_then_search(self):
        container = self.make()
        self.assertTrue(container.insert(42))
        self.assertEqual(container.search(42), 42)
        self.assertIn(42, container)
        self.assertEqual(len(container), 1)

    def test_duplicate_insert_is_rejected(self):
        container = self.make()
        container.insert(7)
        self.assertFalse(container.insert(7))
        self.assertEqual(len(container), 1)

    def test_delete_returns_removed_element(self):
        container = self.make()
        container.insert(7)
        self.assertEqual(container.delete(7), 7)
        self.assertIsNone(container.search(7))
        self.assertIsNone(container.delete(7))
        self.assertEqual(len(container), 0)

    def test_reinsert_after_delete(self):
        container = self.make()
        container.insert(3)
        container.delete(3)
        self.assertTrue(container.insert(3))
        self.assertEqual(container.search(3), 3)

    def test_unique_dataset(self):
        container = self.make()
        values = list(range(1, 1001))
        random.Random(31).shuffle(values)
        for v in values:
            self.assertTrue(container.insert(v))
        self.assertEqual(len(container), 1000)
        for v in values:
            self.assertEqual(container.search(v), v)
        for v in values[::2]:
            self.assertEqual(container.delete(v), v)
        self.assertEqual(len(container), 500)
        for v in values[1::2]:
            self.assertEqual(container.search(v), v)
        for v in values[::2]:
            self.assertIsNone(container.search(v))


class TestAVLContract(ContainerContractMixin, unittest.TestCase):
    def make(self):
        return AVLTree()


class TestSplayContract(ContainerContractMixin, unittest.TestCase):
    def make(self):
        return SplayTree()


class TestChainingContract(ContainerContractMixin, unittest.TestCase):
    def make(self):
        return HashTable(CollisionBehavior.CHAINING, lambda x: x)


class TestQuadraticProbingContract(ContainerContractMixin, unittest.TestCase):
    def make(self):
        return HashTable(CollisionBehavior.QUADRATIC_PROBING, lambda x: x, 1, 3)


if __name__ == '__main__':
    unittest.main()
