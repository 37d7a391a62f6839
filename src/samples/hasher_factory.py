"""Factory for the memoized sample hasher.

Exposes get_memoized_hasher which wraps a SlowHasher with memoize() so
that callers only see the Hasher operations.
"""

from __future__ import annotations

from memoizer.cache import DEFAULT_MAX_ELEMENTS, DEFAULT_TTL_MILLIS
from memoizer.proxy import memoize
from samples.hasher import Hasher, SlowHasher


def get_memoized_hasher(
    *,
    algorithm: str = "sha512",
    max_elements: int = DEFAULT_MAX_ELEMENTS,
    ttl_millis: int = DEFAULT_TTL_MILLIS,
) -> Hasher:
    """Return a SlowHasher whose `hash` results are cached (LRU + TTL)."""
    return memoize(
        SlowHasher(algorithm=algorithm),
        interface=Hasher,
        max_elements=max_elements,
        ttl_millis=ttl_millis,
    )
