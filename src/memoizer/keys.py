"""Cache key construction.

A key is the operation identifier plus the call's argument values. Values
are frozen into hashable equivalents tagged with their type, so equal
argument sequences map to equal keys while 1, True and 1.0 stay apart.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Hashable, Iterable, Tuple


@dataclass(frozen=True, slots=True)
class CacheKey:
    operation: str
    arguments: Tuple[Hashable, ...]


def freeze(value: Any) -> Hashable:
    """Return a hashable, type-tagged stand-in for `value`.

    Two frozen values are equal only when the originals have the same type
    and compare equal. Like lru_cache(typed=True), 1, True and 1.0 differ.
    OrderedDicts keep their order; plain dicts and sets do not.
    Raises TypeError for values that cannot be made hashable.
    """
    kind = type(value)
    if isinstance(value, (tuple, list)):
        return (kind, tuple(freeze(v) for v in value))
    if isinstance(value, OrderedDict):
        return (kind, tuple((freeze(k), freeze(v)) for k, v in value.items()))
    if isinstance(value, dict):
        return (kind, frozenset((freeze(k), freeze(v)) for k, v in value.items()))
    if isinstance(value, (set, frozenset)):
        return (kind, frozenset(freeze(v) for v in value))

    hash(value)
    return (kind, value)


def make_key(operation: str, arguments: Iterable[Any]) -> CacheKey:
    return CacheKey(operation=operation, arguments=tuple(freeze(a) for a in arguments))
