"""Transparent call-result cache with LRU eviction and per-entry TTL."""

from memoizer.cache import (
    DEFAULT_MAX_ELEMENTS,
    DEFAULT_TTL_MILLIS,
    CacheStats,
    Lookup,
    MemoizingCache,
)
from memoizer.errors import AdaptationError, MemoizerError, ValidationError
from memoizer.keys import CacheKey, make_key
from memoizer.proxy import MemoizedProxy, cache_of, memoize, memoized
from memoizer.store import CacheEntry, EntryStore

__all__ = [
    "DEFAULT_MAX_ELEMENTS",
    "DEFAULT_TTL_MILLIS",
    "AdaptationError",
    "CacheEntry",
    "CacheKey",
    "CacheStats",
    "EntryStore",
    "Lookup",
    "MemoizedProxy",
    "MemoizerError",
    "MemoizingCache",
    "ValidationError",
    "cache_of",
    "make_key",
    "memoize",
    "memoized",
]
