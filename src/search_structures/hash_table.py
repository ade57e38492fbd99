"""Hash table with chaining, quadratic probing or abort-on-collision policies"""

from __future__ import annotations

import math
from enum import Enum, IntEnum
from typing import Any, Callable, Hashable, Iterator, List, Optional, Tuple

from search_structures.base import (
    Container,
    MisconfiguredCollisionPolicyError,
    TableFullError,
    debug_log,
)
from search_structures.logging_config import get_logger

logger = get_logger(__name__)


class CollisionBehavior(Enum):
    CHAINING = "chaining"
    QUADRATIC_PROBING = "quadratic_probing"
    ABORT = "abort"


class PutStatus(IntEnum):
    """Outcome of :meth:`HashTable.put`."""
    NO_COLLISION = 0
    CHAINED = 1
    UPDATED = 2


class SlotState(Enum):
    """State of a bucket as seen by the probe sequence."""
    EMPTY = "empty"
    LIVE = "live"
    TOMBSTONE = "tombstone"


class Entry:
    __slots__ = ("key", "value", "deleted")

    def __init__(self, key: Hashable, value: Any) -> None:
        self.key = key
        self.value = value
        self.deleted = False

    def __repr__(self) -> str:
        flag = ", deleted" if self.deleted else ""
        return f"Entry(key={self.key!r}, value={self.value!r}{flag})"


class Bucket:
    """
    Ordered sequence of entries. Under chaining it grows as keys collide;
    under probing and abort it holds at most one entry, live or tombstoned.
    """
    __slots__ = ("entries",)

    def __init__(self) -> None:
        self.entries: List[Entry] = []

    @property
    def state(self) -> SlotState:
        if not self.entries:
            return SlotState.EMPTY
        if self.entries[0].deleted:
            return SlotState.TOMBSTONE
        return SlotState.LIVE

    def first(self) -> Optional[Entry]:
        return self.entries[0] if self.entries else None

    def find_live(self, key: Hashable) -> Optional[Entry]:
        for entry in self.entries:
            if not entry.deleted and entry.key == key:
                return entry
        return None

    def find_tombstone(self, key: Hashable) -> Optional[Entry]:
        for entry in self.entries:
            if entry.deleted and entry.key == key:
                return entry
        return None

    def has_live(self) -> bool:
        return any(not entry.deleted for entry in self.entries)

    def live_entries(self) -> Iterator[Entry]:
        return (entry for entry in self.entries if not entry.deleted)

    def append(self, entry: Entry) -> None:
        self.entries.append(entry)

    def store(self, entry: Entry) -> None:
        """Occupy a single-slot bucket, overwriting a tombstone if present."""
        self.entries = [entry]

    def is_empty(self) -> bool:
        return not self.entries

    def __len__(self) -> int:
        return len(self.entries)


def is_prime(n: int) -> bool:
    if n <= 1:
        return False
    if n <= 3:
        return True
    if n % 2 == 0:
        return False
    for divisor in range(3, math.isqrt(n) + 1, 2):
        if n % divisor == 0:
            return False
    return True


def next_prime(n: int) -> int:
    """Smallest prime >= n."""
    while not is_prime(n):
        n += 1
    return n


class HashTable(Container):
    """
    Hash table keyed by ``key_fn(element)``.

    ``put`` / ``remove`` / ``find`` work on explicit keys; the container
    methods ``insert`` / ``delete`` / ``search`` take whole elements and
    derive the key. Deletion is lazy under every policy: entries are
    tombstoned in place and only dropped when the table is resized.

    Attributes:
        collision_behavior (CollisionBehavior): How colliding keys are placed.
        key_fn (Callable): Extracts the key from a stored element.
        c1, c2 (Optional[int]): Quadratic probing coefficients.
    """

    MAX_LOAD_FACTOR = 0.5
    INITIAL_CAPACITY = 20

    def __init__(
        self,
        collision_behavior: CollisionBehavior,
        key_fn: Callable[[Any], Hashable],
        c1: Optional[int] = None,
        c2: Optional[int] = None,
        initial_capacity: int = INITIAL_CAPACITY,
    ) -> None:
        if not isinstance(collision_behavior, CollisionBehavior):
            raise TypeError(
                f"collision_behavior must be a CollisionBehavior, got {type(collision_behavior).__name__}"
            )
        if not callable(key_fn):
            raise TypeError(f"key_fn must be callable, got {type(key_fn).__name__}")
        if not isinstance(initial_capacity, int) or initial_capacity < 1:
            raise ValueError(f"initial_capacity must be a positive int, got {initial_capacity!r}")

        if collision_behavior is CollisionBehavior.QUADRATIC_PROBING:
            if c1 is None or c2 is None:
                raise MisconfiguredCollisionPolicyError(
                    "Quadratic probing requires both coefficients c1 and c2"
                )
            if not isinstance(c1, int) or not isinstance(c2, int) or c1 < 0 or c2 <= 0:
                raise MisconfiguredCollisionPolicyError(
                    f"Invalid quadratic probing coefficients c1={c1!r}, c2={c2!r} "
                    "(expected ints with c1 >= 0 and c2 > 0)"
                )
            # A quadratic sequence reaches at least half the slots only
            # when the capacity is prime
            initial_capacity = next_prime(initial_capacity)

        self.collision_behavior = collision_behavior
        self.key_fn = key_fn
        self.c1 = c1
        self.c2 = c2
        self._table: List[Bucket] = [Bucket() for _ in range(initial_capacity)]
        self._size = 0

    # Introspection
    @property
    def capacity(self) -> int:
        return len(self._table)

    @property
    def load_factor(self) -> float:
        return self._size / len(self._table)

    @property
    def buckets(self) -> Tuple[Bucket, ...]:
        return tuple(self._table)

    def __len__(self) -> int:
        return self._size

    def __contains__(self, element) -> bool:
        return self._locate(self.key_fn(element)) is not None

    def contains_key(self, key: Hashable) -> bool:
        return self._locate(key) is not None

    def items(self) -> Iterator[Tuple[Hashable, Any]]:
        """Yield (key, value) for every live entry in bucket order."""
        for bucket in self._table:
            for entry in bucket.live_entries():
                yield entry.key, entry.value

    def keys(self) -> Iterator[Hashable]:
        return (key for key, _ in self.items())

    def values(self) -> Iterator[Any]:
        return (value for _, value in self.items())

    def tombstone_count(self) -> int:
        return sum(1 for bucket in self._table for entry in bucket.entries if entry.deleted)

    def __str__(self) -> str:
        return (
            f"HashTable({self.collision_behavior.value}, size={self._size}, "
            f"capacity={self.capacity})"
        )

    __repr__ = __str__

    # Public API
    def put(self, key: Hashable, value: Any) -> PutStatus:
        """
        Store ``value`` under ``key``, updating the value if the key is live.

        Returns:
            PutStatus: NO_COLLISION for a new entry in an uncontested slot
                (also reported when the abort policy rejects a colliding
                key without storing it), CHAINED for a new entry appended
                next to other live entries, UPDATED when the key was already
                present.

        Raises:
            TableFullError: If quadratic probing finds no usable slot.
        """
        status = self._put(key, value)
        return PutStatus.NO_COLLISION if status is None else status

    def remove(self, key: Hashable) -> Optional[Any]:
        """Tombstone the live entry for ``key`` and return its value, or None."""
        entry = self._locate(key)
        if entry is None:
            return None
        entry.deleted = True
        self._size -= 1
        return entry.value

    def find(self, key: Hashable) -> Optional[Any]:
        """Return the value stored under ``key``, or None."""
        entry = self._locate(key)
        return None if entry is None else entry.value

    def insert(self, element: Any) -> bool:
        """
        Store ``element`` under ``key_fn(element)``.

        Returns:
            bool: False if the key is already present (nothing changes) or
                the abort policy rejected the element; True otherwise.
        """
        key = self.key_fn(element)
        if self._locate(key) is not None:
            return False
        return self._put(key, element) is not None

    def delete(self, element: Any) -> Optional[Any]:
        return self.remove(self.key_fn(element))

    def search(self, element: Any) -> Optional[Any]:
        return self.find(self.key_fn(element))

    # Private Methods
    def _hash(self, key: Hashable) -> int:
        return abs(hash(key)) % len(self._table)

    def _put(self, key: Hashable, value: Any) -> Optional[PutStatus]:
        """Insert path shared by put(), insert() and resize; None means rejected."""
        if self._size / len(self._table) >= self.MAX_LOAD_FACTOR:
            self._resize()

        behavior = self.collision_behavior
        if behavior is CollisionBehavior.CHAINING:
            return self._put_chaining(key, value)
        if behavior is CollisionBehavior.QUADRATIC_PROBING:
            return self._put_probing(key, value)
        if behavior is CollisionBehavior.ABORT:
            return self._put_abort(key, value)
        raise ValueError(f"Unknown collision behavior: {behavior!r}")

    def _put_chaining(self, key: Hashable, value: Any) -> PutStatus:
        bucket = self._table[self._hash(key)]

        existing = bucket.find_live(key)
        if existing is not None:
            existing.value = value
            return PutStatus.UPDATED

        status = PutStatus.CHAINED if bucket.has_live() else PutStatus.NO_COLLISION

        # Reusing the key's own tombstone keeps repeated insert/delete cycles
        # from growing the chain
        tombstone = bucket.find_tombstone(key)
        if tombstone is not None:
            tombstone.value = value
            tombstone.deleted = False
        else:
            bucket.append(Entry(key, value))
        self._size += 1
        return status

    def _put_probing(self, key: Hashable, value: Any) -> PutStatus:
        index = self._quadratic_probe(key, for_insert=True)
        bucket = self._table[index]
        state = bucket.state

        if state is SlotState.LIVE:
            bucket.first().value = value
            return PutStatus.UPDATED
        if state is SlotState.EMPTY or state is SlotState.TOMBSTONE:
            bucket.store(Entry(key, value))
            self._size += 1
            return PutStatus.NO_COLLISION
        raise ValueError(f"Unknown slot state: {state!r}")

    def _put_abort(self, key: Hashable, value: Any) -> Optional[PutStatus]:
        bucket = self._table[self._hash(key)]
        state = bucket.state

        if state is SlotState.EMPTY:
            bucket.store(Entry(key, value))
            self._size += 1
            return PutStatus.NO_COLLISION

        # Any non-empty bucket holding another key rejects, tombstones included
        entry = bucket.first()
        if entry.key != key:
            debug_log("Abort policy: rejected key %r colliding with %r", key, entry.key)
            return None
        if state is SlotState.TOMBSTONE:
            entry.value = value
            entry.deleted = False
            self._size += 1
            return PutStatus.NO_COLLISION
        if state is SlotState.LIVE:
            entry.value = value
            return PutStatus.UPDATED
        raise ValueError(f"Unknown slot state: {state!r}")

    def _locate(self, key: Hashable) -> Optional[Entry]:
        """Return the live entry for ``key`` under the active policy, or None."""
        behavior = self.collision_behavior
        if behavior is CollisionBehavior.CHAINING:
            return self._table[self._hash(key)].find_live(key)
        if behavior is CollisionBehavior.QUADRATIC_PROBING:
            index = self._quadratic_probe(key, for_insert=False)
            return None if index is None else self._table[index].first()
        if behavior is CollisionBehavior.ABORT:
            bucket = self._table[self._hash(key)]
            if bucket.state is SlotState.LIVE and bucket.first().key == key:
                return bucket.first()
            return None
        raise ValueError(f"Unknown collision behavior: {behavior!r}")

    def _probe_sequence(self, key: Hashable) -> Iterator[int]:
        """Indices ``(h + c1*i + c2*i^2) mod capacity`` for i = 0 .. capacity - 1."""
        home = self._hash(key)
        capacity = len(self._table)
        c1, c2 = self.c1, self.c2
        for i in range(capacity):
            yield (home + c1 * i + c2 * i * i) % capacity

    def _quadratic_probe(self, key: Hashable, for_insert: bool) -> Optional[int]:
        """
        Walk the probe sequence for ``key``.

        For lookups, returns the index of the live entry holding ``key`` or
        None; tombstones are stepped over so keys placed beyond a deleted
        slot stay reachable.

        For inserts, returns the live entry's index if the key is present,
        otherwise the first tombstone seen (preferred) or the empty slot
        that ended the walk.

        Raises:
            TableFullError: On insert, when every probed slot is live with
                another key.
        """
        first_tombstone = None
        for index in self._probe_sequence(key):
            bucket = self._table[index]
            state = bucket.state
            if state is SlotState.EMPTY:
                if not for_insert:
                    return None
                return index if first_tombstone is None else first_tombstone
            if state is SlotState.TOMBSTONE:
                if for_insert and first_tombstone is None:
                    first_tombstone = index
            elif state is SlotState.LIVE:
                if bucket.first().key == key:
                    return index

        if not for_insert:
            return None
        if first_tombstone is not None:
            return first_tombstone
        logger.error(
            "Quadratic probe exhausted %d slots for key %r (size=%d)",
            len(self._table), key, self._size,
        )
        raise TableFullError(
            f"HashTable is full: no slot for key {key!r} after {len(self._table)} probes"
        )

    def _resize(self) -> None:
        """Grow to next_prime(2 * capacity) and re-put every live entry."""
        old_table = self._table
        new_capacity = next_prime(2 * len(old_table))
        logger.debug(
            "Resizing %s table: capacity %d -> %d (size=%d)",
            self.collision_behavior.value, len(old_table), new_capacity, self._size,
        )
        self._table = [Bucket() for _ in range(new_capacity)]
        self._size = 0

        dropped = 0
        for bucket in old_table:
            for entry in bucket.live_entries():
                if self._put(entry.key, entry.value) is None:
                    dropped += 1
        if dropped:
            logger.warning(
                "Abort policy dropped %d entries that collided after resizing to %d",
                dropped, new_capacity,
            )
