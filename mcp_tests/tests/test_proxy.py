from collections import OrderedDict
from typing import Protocol

import pytest

import memoizer.cache as cache_mod
from memoizer.errors import AdaptationError, ValidationError
from memoizer.proxy import MemoizedProxy, cache_of, memoize, memoized


class Squarer(Protocol):
    def square(self, x: int, scale: int = 1) -> int:
        ...


class Calculator:
    def __init__(self):
        self.calls = []
        self.label = "calc"

    def square(self, x: int, scale: int = 1) -> int:
        self.calls.append(("square", x, scale))
        return x * x * scale

    def record(self, item) -> None:
        self.calls.append(("record", item))

    def total(self, items):
        self.calls.append(("total", tuple(items)))
        return sum(items)

    def fail(self, message):
        self.calls.append(("fail", message))
        raise ValueError(message)

    async def fetch(self, key):
        self.calls.append(("fetch", key))
        return key.upper()


class Postponed:
    def __init__(self):
        self.calls = 0

    def touch(self) -> "None":
        self.calls += 1


class NoSquare:
    def cube(self, x):
        return x ** 3


def test_memoize_caches_repeated_calls():
    calc = Calculator()
    proxy = memoize(calc, ttl_millis=60_000)

    assert proxy.square(3) == 9
    assert proxy.square(3) == 9

    assert calc.calls == [("square", 3, 1)]
    assert cache_of(proxy).stats().hits == 1


def test_keyword_and_default_arguments_share_a_key():
    calc = Calculator()
    proxy = memoize(calc, ttl_millis=60_000)

    proxy.square(3)
    proxy.square(x=3)
    proxy.square(3, scale=1)
    proxy.square(3, scale=2)

    assert calc.calls == [("square", 3, 1), ("square", 3, 2)]


def test_list_arguments_compared_by_value():
    calc = Calculator()
    proxy = memoize(calc, ttl_millis=60_000)

    assert proxy.total([1, 2, 3]) == 6
    assert proxy.total([1, 2, 3]) == 6
    assert proxy.total([3, 2, 1]) == 6

    assert len(calc.calls) == 2


def test_void_operations_always_forward():
    calc = Calculator()
    proxy = memoize(calc, ttl_millis=60_000)

    proxy.record("x")
    proxy.record("x")

    assert calc.calls == [("record", "x"), ("record", "x")]


def test_postponed_none_annotation_counts_as_void():
    target = Postponed()
    proxy = memoize(target, ttl_millis=60_000)

    proxy.touch()
    proxy.touch()

    assert target.calls == 2


def test_failures_propagate_unchanged_and_are_retried():
    calc = Calculator()
    proxy = memoize(calc, ttl_millis=60_000)

    with pytest.raises(ValueError, match="bad"):
        proxy.fail("bad")
    with pytest.raises(ValueError, match="bad"):
        proxy.fail("bad")

    assert calc.calls == [("fail", "bad"), ("fail", "bad")]


def test_bad_call_raises_targets_own_type_error():
    proxy = memoize(Calculator(), ttl_millis=60_000)

    with pytest.raises(TypeError):
        proxy.square()

    assert len(cache_of(proxy)) == 0


def test_expiry_through_proxy(monkeypatch):
    t = {"now": 0.0}
    monkeypatch.setattr(cache_mod.time, "monotonic", lambda: t["now"])

    calc = Calculator()
    proxy = memoize(calc, ttl_millis=1000)

    proxy.square(2)
    t["now"] = 0.5
    proxy.square(2)
    t["now"] = 1.0
    proxy.square(2)

    assert calc.calls == [("square", 2, 1), ("square", 2, 1)]


def test_interface_limits_intercepted_operations():
    calc = Calculator()
    proxy = memoize(calc, interface=Squarer, ttl_millis=60_000)

    proxy.square(4)
    proxy.square(4)
    proxy.total([1])
    proxy.total([1])

    # total is not part of the interface, so it is never cached
    assert calc.calls == [("square", 4, 1), ("total", (1,)), ("total", (1,))]


def test_missing_interface_operation_fails_at_construction():
    with pytest.raises(AdaptationError):
        memoize(NoSquare(), interface=Squarer)


def test_memoize_none_fails():
    with pytest.raises(AdaptationError):
        memoize(None)


def test_memoize_target_without_operations_fails():
    with pytest.raises(AdaptationError):
        memoize(object())


def test_invalid_settings_fail_at_construction():
    with pytest.raises(ValidationError):
        memoize(Calculator(), max_elements=-1)


def test_attribute_access_falls_through_to_target():
    calc = Calculator()
    proxy = memoize(calc)

    assert isinstance(proxy, MemoizedProxy)
    assert proxy.label == "calc"

    proxy.label = "renamed"
    assert calc.label == "renamed"
    assert "square" in dir(proxy)


def test_operation_identity_includes_owner_and_name():
    calc = Calculator()
    proxy = memoize(calc, ttl_millis=60_000)

    proxy.square(2)
    proxy.total([2])

    assert len(cache_of(proxy)) == 2


@pytest.mark.asyncio
async def test_coroutine_methods_are_memoized():
    calc = Calculator()
    proxy = memoize(calc, ttl_millis=60_000)

    assert await proxy.fetch("a") == "A"
    assert await proxy.fetch("a") == "A"

    assert calc.calls == [("fetch", "a")]


def test_memoized_decorator_with_settings():
    calls = []

    @memoized(max_elements=2, ttl_millis=60_000)
    def add(a, b):
        calls.append((a, b))
        return a + b

    assert add(1, 2) == 3
    assert add(1, 2) == 3
    assert add(a=1, b=2) == 3
    assert calls == [(1, 2)]
    assert add.__name__ == "add"
    assert cache_of(add).max_elements == 2


def test_memoized_bare_decorator():
    calls = []

    @memoized
    def double(x):
        calls.append(x)
        return x * 2

    double(5)
    double(5)

    assert calls == [5]
    assert cache_of(double).ttl_millis == 1000


def test_cache_of_rejects_plain_objects():
    with pytest.raises(ValidationError):
        cache_of(Calculator())


def test_memoized_results_respect_argument_type():
    @memoized(ttl_millis=60_000)
    def describe(x) -> str:
        return repr(x)

    @memoized(ttl_millis=60_000)
    def first(mapping) -> str:
        return next(iter(mapping))

    assert describe(1) == "1"
    assert describe(True) == "True"
    assert describe(1.0) == "1.0"

    assert first(OrderedDict([("a", 1), ("b", 2)])) == "a"
    assert first(OrderedDict([("b", 2), ("a", 1)])) == "b"
