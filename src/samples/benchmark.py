"""Direct vs. memoized timing for a Hasher.

Runs the same hashing loop against a plain hasher and a memoized one
and reports elapsed milliseconds for each.
"""

from __future__ import annotations

import time
from dataclasses import asdict, dataclass
from typing import Any, Dict

from memoizer.errors import MemoizerError, ValidationError
from samples.hasher import Hasher


@dataclass(frozen=True)
class BenchmarkResult:
    iterations: int
    direct_ms: float
    memoized_ms: float
    digest: str

    @property
    def speedup(self) -> float:
        if self.memoized_ms <= 0:
            return 0.0
        return self.direct_ms / self.memoized_ms

    def as_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["speedup"] = self.speedup
        return data


def _time_loop(hasher: Hasher, text: str, iterations: int) -> float:
    start = time.perf_counter()
    for _ in range(iterations):
        hasher.hash(text)
    return (time.perf_counter() - start) * 1000.0


def run_benchmark(direct: Hasher, memoized: Hasher, *, text: str, iterations: int) -> BenchmarkResult:
    if iterations <= 0:
        raise ValidationError("iterations must be positive")

    direct_ms = _time_loop(direct, text, iterations)
    memoized_ms = _time_loop(memoized, text, iterations)

    digest = memoized.hash(text)
    if digest != direct.hash(text):
        # A memoized result must be indistinguishable from the direct one
        raise MemoizerError("Memoized digest differs from direct digest")

    return BenchmarkResult(
        iterations=iterations,
        direct_ms=direct_ms,
        memoized_ms=memoized_ms,
        digest=digest,
    )
