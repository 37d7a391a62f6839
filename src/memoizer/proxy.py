"""Interception layer that routes a target's operations through a cache.

memoize() builds a MemoizedProxy exposing the same operations as the
target. Each operation call binds its arguments against the method
signature and goes through MemoizingCache.call (or acall for coroutine
methods). Methods annotated to return None are never cached.
"""

from __future__ import annotations

import functools
import inspect
import logging
import types
from typing import Any, Callable, Dict, List, Optional, Tuple, Type

from memoizer.cache import DEFAULT_MAX_ELEMENTS, DEFAULT_TTL_MILLIS, MemoizingCache
from memoizer.errors import AdaptationError, ValidationError

logger = logging.getLogger(__name__)

_CACHE_ATTR = "__memoizer_cache__"


def _signature_or_none(fn: Callable[..., Any]) -> Optional[inspect.Signature]:
    try:
        return inspect.signature(fn)
    except (TypeError, ValueError):
        # Some builtins expose no signature
        return None


def _declares_no_value(signature: Optional[inspect.Signature]) -> bool:
    if signature is None:
        return False
    # Postponed annotations leave the string "None"
    return signature.return_annotation in (None, type(None), "None")


def _call_arguments(
    signature: Optional[inspect.Signature],
    args: Tuple[Any, ...],
    kwargs: Dict[str, Any],
) -> Optional[Tuple[Any, ...]]:
    # Bind so f(1) and f(x=1) produce the same argument sequence
    if signature is None:
        return args + tuple(sorted(kwargs.items()))

    try:
        bound = signature.bind(*args, **kwargs)
    except TypeError:
        return None
    bound.apply_defaults()
    return tuple(bound.arguments.values())


def _intercept(cache: MemoizingCache, operation: str, fn: Callable[..., Any]) -> Callable[..., Any]:
    signature = _signature_or_none(fn)
    has_value = not _declares_no_value(signature)

    if inspect.iscoroutinefunction(fn):

        @functools.wraps(fn)
        async def async_operation(*args: Any, **kwargs: Any) -> Any:
            arguments = _call_arguments(signature, args, kwargs)
            if arguments is None:
                # Let the target raise its own error for a bad call
                return await fn(*args, **kwargs)
            return await cache.acall(
                operation,
                arguments,
                lambda: fn(*args, **kwargs),
                has_value_result=has_value,
            )

        return async_operation

    @functools.wraps(fn)
    def operation_call(*args: Any, **kwargs: Any) -> Any:
        arguments = _call_arguments(signature, args, kwargs)
        if arguments is None:
            return fn(*args, **kwargs)
        return cache.call(
            operation,
            arguments,
            lambda: fn(*args, **kwargs),
            has_value_result=has_value,
        )

    return operation_call


def _operation_names(source: type) -> List[str]:
    names: List[str] = []
    for name in dir(source):
        if name.startswith("_"):
            continue
        attr = inspect.getattr_static(source, name)
        if isinstance(attr, (types.FunctionType, staticmethod, classmethod)):
            names.append(name)
    return names


class MemoizedProxy:
    """Stand-in for a target whose operations are answered from a cache."""

    def __init__(self, target: Any, cache: MemoizingCache, operations: Dict[str, Callable[..., Any]]) -> None:
        object.__setattr__(self, "_target", target)
        object.__setattr__(self, "_operations", operations)
        object.__setattr__(self, _CACHE_ATTR, cache)

        # Real instance attributes, so runtime Protocol checks see them
        for name, operation in operations.items():
            object.__setattr__(self, name, operation)

    def __getattr__(self, name: str) -> Any:
        # Only reached for names not found on the proxy itself
        return getattr(object.__getattribute__(self, "_target"), name)

    def __setattr__(self, name: str, value: Any) -> None:
        setattr(self._target, name, value)

    def __dir__(self) -> List[str]:
        return sorted(set(dir(self._target)) | set(self._operations))

    def __repr__(self) -> str:
        return f"MemoizedProxy({self._target!r})"


def memoize(
    target: Any,
    *,
    interface: Optional[Type[Any]] = None,
    max_elements: int = DEFAULT_MAX_ELEMENTS,
    ttl_millis: int = DEFAULT_TTL_MILLIS,
) -> Any:
    """Wrap `target` so repeated calls with equal arguments reuse results.

    Operations are the public methods of `interface` when given, otherwise
    the public methods of the target's class. A target that lacks any of
    them raises AdaptationError before any call is made. Results live for
    `ttl_millis` and at most `max_elements` are kept (LRU).
    """
    if target is None:
        raise AdaptationError("Cannot memoize None")

    source = interface if interface is not None else type(target)
    names = _operation_names(source)
    if not names:
        raise AdaptationError(f"{source.__qualname__} exposes no public operations")

    cache = MemoizingCache(max_elements=max_elements, ttl_millis=ttl_millis)
    owner = type(target).__qualname__

    operations: Dict[str, Callable[..., Any]] = {}
    for name in names:
        fn = getattr(target, name, None)
        if fn is None or not callable(fn):
            raise AdaptationError(f"{owner} does not provide a callable '{name}'")
        operations[name] = _intercept(cache, f"{owner}.{name}", fn)

    logger.debug("Memoizing %s operations of %s", len(operations), owner)
    return MemoizedProxy(target, cache, operations)


def memoized(
    fn: Optional[Callable[..., Any]] = None,
    *,
    max_elements: int = DEFAULT_MAX_ELEMENTS,
    ttl_millis: int = DEFAULT_TTL_MILLIS,
) -> Any:
    """Decorator form of memoize() for plain functions.

    Usable bare (@memoized) or with settings (@memoized(ttl_millis=500)).
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        cache = MemoizingCache(max_elements=max_elements, ttl_millis=ttl_millis)
        wrapper = _intercept(cache, func.__qualname__, func)
        setattr(wrapper, _CACHE_ATTR, cache)
        return wrapper

    if fn is not None:
        return decorator(fn)
    return decorator


def cache_of(memoized_obj: Any) -> MemoizingCache:
    """Return the cache behind a memoize() proxy or a @memoized function."""
    try:
        cache = object.__getattribute__(memoized_obj, _CACHE_ATTR)
    except AttributeError:
        raise ValidationError("Object is not memoized") from None
    return cache
