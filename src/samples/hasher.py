"""Sample slow target for memoization: text digests via hashlib.

The Hasher protocol is the operation set a memoized hasher exposes;
SlowHasher computes a fresh digest on every call.
"""

from __future__ import annotations

import base64
import hashlib
from typing import Protocol, runtime_checkable

from memoizer.errors import ValidationError


@runtime_checkable
class Hasher(Protocol):
    """Contract for anything that turns text into a digest string."""
    def hash(self, text: str) -> str:
        ...


class SlowHasher:
    # Recomputes the digest each time; a good candidate for memoize()
    def __init__(self, *, algorithm: str = "sha512") -> None:
        name = (algorithm or "").strip().lower()
        # shake_* digests need an explicit length, so they are not supported
        if name not in hashlib.algorithms_available or name.startswith("shake_"):
            raise ValidationError(f"Unsupported hash algorithm: {algorithm}")
        self._algorithm = name

    @property
    def algorithm(self) -> str:
        return self._algorithm

    def hash(self, text: str) -> str:
        digest = hashlib.new(self._algorithm, text.encode("utf-8")).digest()
        return base64.b64encode(digest).decode("ascii")
