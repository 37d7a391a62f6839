"""Memoizing cache built on top of the LRU entry store.

Turns (operation, arguments) into a CacheKey, serves fresh entries from
the store and computes-and-stores on a miss or an expired entry.
Expiration is checked lazily on read against time.monotonic(); there is
no background sweep.

Concurrent misses on the same key may both compute. The last put wins.
"""

from __future__ import annotations

import enum
import logging
import threading
import time
from dataclasses import asdict, dataclass
from typing import Any, Awaitable, Callable, Dict, Iterable, Optional, Tuple, TypeVar

from memoizer.errors import ValidationError
from memoizer.keys import CacheKey, make_key
from memoizer.store import CacheEntry, EntryStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ELEMENTS = 1024
DEFAULT_TTL_MILLIS = 1000


class Lookup(enum.Enum):
    HIT = "hit"
    MISS = "miss"
    STALE = "stale"


@dataclass(frozen=True)
class CacheStats:
    hits: int
    misses: int
    stale: int
    evictions: int
    bypasses: int
    failures: int
    size: int
    max_elements: int
    ttl_millis: int

    @property
    def hit_ratio(self) -> float:
        lookups = self.hits + self.misses + self.stale
        return self.hits / lookups if lookups else 0.0

    def as_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["hit_ratio"] = self.hit_ratio
        return data


_COUNTERS = ("hits", "misses", "stale", "evictions", "bypasses", "failures")


class MemoizingCache:
    def __init__(
        self,
        *,
        max_elements: int = DEFAULT_MAX_ELEMENTS,
        ttl_millis: int = DEFAULT_TTL_MILLIS,
    ) -> None:
        self._counts_lock = threading.Lock()
        self._counts: Dict[str, int] = dict.fromkeys(_COUNTERS, 0)
        self.configure(max_elements=max_elements, ttl_millis=ttl_millis)

    def configure(self, *, max_elements: int, ttl_millis: int) -> None:
        """Set capacity and TTL. Replaces the store, so cached entries are dropped.

        Meant for setup. Store and TTL are swapped together as one pair;
        a call already computing keeps the pair it started with, so its
        result lands in the discarded store rather than the new one.
        """
        ttl_millis = int(ttl_millis)
        if ttl_millis < 0:
            raise ValidationError("ttl_millis must be >= 0")

        store: EntryStore[Any] = EntryStore(max_elements=max_elements)
        self._state: Tuple[EntryStore[Any], int] = (store, ttl_millis)

    @property
    def max_elements(self) -> int:
        return self._state[0].max_elements

    @property
    def ttl_millis(self) -> int:
        return self._state[1]

    def __len__(self) -> int:
        return len(self._state[0])

    def lookup(self, key: CacheKey) -> Tuple[Lookup, Optional[CacheEntry[Any]]]:
        return self._lookup_in(self._state[0], key)

    def _lookup_in(self, store: EntryStore[Any], key: CacheKey) -> Tuple[Lookup, Optional[CacheEntry[Any]]]:
        entry = store.get(key)
        if entry is None:
            return Lookup.MISS, None
        if entry.is_fresh(time.monotonic()):
            return Lookup.HIT, entry
        return Lookup.STALE, entry

    def call(
        self,
        operation: str,
        arguments: Iterable[Any],
        compute: Callable[[], T],
        *,
        has_value_result: bool = True,
    ) -> T:
        key = self._key_for(operation, arguments, has_value_result)
        if key is None:
            return compute()

        state = self._state
        cached = self._cached_entry(state[0], key)
        if cached is not None:
            return cached.value

        try:
            value = compute()
        except BaseException:
            self._count("failures")
            raise

        self._remember(state, key, value)
        return value

    async def acall(
        self,
        operation: str,
        arguments: Iterable[Any],
        compute: Callable[[], Awaitable[T]],
        *,
        has_value_result: bool = True,
    ) -> T:
        # Same contract as call(); a cancelled await stores nothing
        key = self._key_for(operation, arguments, has_value_result)
        if key is None:
            return await compute()

        state = self._state
        cached = self._cached_entry(state[0], key)
        if cached is not None:
            return cached.value

        try:
            value = await compute()
        except BaseException:
            self._count("failures")
            raise

        self._remember(state, key, value)
        return value

    def stats(self) -> CacheStats:
        with self._counts_lock:
            counts = dict(self._counts)
        store, ttl_millis = self._state
        return CacheStats(
            size=len(store),
            max_elements=store.max_elements,
            ttl_millis=ttl_millis,
            **counts,
        )

    def clear(self) -> None:
        self._state[0].clear()

    # --- Internal helpers ---
    def _key_for(self, operation: str, arguments: Iterable[Any], has_value_result: bool) -> Optional[CacheKey]:
        if not has_value_result:
            self._count("bypasses")
            return None

        try:
            return make_key(operation, arguments)
        except TypeError:
            # Unhashable arguments: forward the call uncached
            logger.debug("Arguments of %s are not hashable; calling through", operation)
            self._count("bypasses")
            return None

    def _cached_entry(self, store: EntryStore[Any], key: CacheKey) -> Optional[CacheEntry[Any]]:
        state, entry = self._lookup_in(store, key)
        if state is Lookup.HIT:
            self._count("hits")
            return entry

        if state is Lookup.STALE:
            logger.debug("Stale entry for %s; recomputing", key.operation)
            self._count("stale")
        else:
            self._count("misses")
        return None

    def _remember(self, state: Tuple[EntryStore[Any], int], key: CacheKey, value: Any) -> None:
        store, ttl_millis = state
        # Deadline starts when the result is stored, not when the call began
        entry = CacheEntry(value=value, deadline=time.monotonic() + ttl_millis / 1000.0)
        evicted = store.put(key, entry)
        if evicted:
            logger.debug("Evicted %d entries to store %s", len(evicted), key.operation)
            self._count("evictions", len(evicted))

    def _count(self, name: str, amount: int = 1) -> None:
        with self._counts_lock:
            self._counts[name] += amount
