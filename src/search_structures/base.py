from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar
import logging

from search_structures.logging_config import get_logger

# Get logger for this module
logger = get_logger("containers")

T = TypeVar("T")


class SearchStructureError(Exception):
    """Base class for errors raised by the containers in this package."""


class TableFullError(SearchStructureError, RuntimeError):
    """Raised when quadratic probing visits every slot without finding a place for a key."""


class MisconfiguredCollisionPolicyError(SearchStructureError, ValueError):
    """Raised when a hash table is asked for a collision policy it cannot be built with."""


class Container(ABC, Generic[T]):
    """
    Abstract base class for the interchangeable containers.

    Every implementation answers the same three operations so a caller
    (the benchmark harness in particular) can swap one for another.
    Absent elements and duplicates are reported through return values,
    never through exceptions.
    """

    @abstractmethod
    def insert(self, element: T) -> bool:
        """
        Insert an element into the container.

        Parameters:
            element (T): The element to be inserted.

        Returns:
            bool: True if the element was stored, False if an equal element
                (or one with the same key) is already present.
        """
        pass

    @abstractmethod
    def delete(self, element: T) -> Optional[T]:
        """
        Delete the element equal to the given one.

        Parameters:
            element (T): The element to be deleted.

        Returns:
            Optional[T]: The removed element, or None if it was absent.
        """
        pass

    @abstractmethod
    def search(self, element: T) -> Optional[T]:
        """
        Look up the stored element equal to the given one.

        Parameters:
            element (T): The element to search for.

        Returns:
            Optional[T]: The stored element, or None if it is absent.
        """
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass

    def is_empty(self) -> bool:
        return len(self) == 0

    def __contains__(self, element) -> bool:
        return self.search(element) is not None


def debug_log(message, *args, **kwargs):
    """Log a debug message only if debug logging is enabled"""
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(message, *args, **kwargs)
