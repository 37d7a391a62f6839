"""Bounded in-memory entry store with LRU eviction.

Holds CacheEntry objects keyed by CacheKey and drops the least recently
used entries when max_elements is exceeded. Expiration is not evaluated
here; entries only carry their deadline.
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Generic, Hashable, List, Optional, TypeVar

from memoizer.errors import ValidationError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class CacheEntry(Generic[T]):
    # Stores value + monotonic deadline, fixed at creation
    value: T
    deadline: float  # time.monotonic()

    def is_fresh(self, now: float) -> bool:
        return now < self.deadline


class EntryStore(Generic[T]):
    # LRU mapping guarded by a single lock; OrderedDict keeps recency order
    def __init__(self, *, max_elements: int) -> None:
        max_elements = int(max_elements)
        if max_elements < 0:
            raise ValidationError("max_elements must be >= 0")
        self._max_elements = max_elements
        self._store: "OrderedDict[Hashable, CacheEntry[T]]" = OrderedDict()
        self._lock = threading.Lock()

    @property
    def max_elements(self) -> int:
        return self._max_elements

    def get(self, key: Hashable) -> Optional[CacheEntry[T]]:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None

            # Move to end to mark as recently used
            self._store.move_to_end(key, last=True)
            return entry

    def put(self, key: Hashable, entry: CacheEntry[T]) -> List[Hashable]:
        """Insert or replace an entry and return the keys evicted to make room."""
        if self._max_elements == 0:
            return []

        evicted: List[Hashable] = []
        with self._lock:
            self._store[key] = entry
            self._store.move_to_end(key, last=True)

            # The entry just stored is last, so it is never the one popped
            while len(self._store) > self._max_elements:
                old_key, _ = self._store.popitem(last=False)
                evicted.append(old_key)
        return evicted

    def discard(self, key: Hashable) -> None:
        with self._lock:
            self._store.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def keys(self) -> List[Hashable]:
        # Snapshot, least recently used first
        with self._lock:
            return list(self._store.keys())

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._store

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
