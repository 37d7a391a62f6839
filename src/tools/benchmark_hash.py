"""MCP tool comparing direct and memoized hashing speed.

Registers 'benchmark_hash', which runs the same loop against a plain
SlowHasher and a freshly memoized one and reports both timings.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict

from mcp.server.fastmcp import FastMCP

from config import (
    BENCHMARK_ITERATIONS,
    BENCHMARK_MAX_ITERATIONS,
    HASH_ALGORITHM,
    MEMOIZE_MAX_ELEMENTS,
    MEMOIZE_TTL_MILLIS,
)
from memoizer.errors import ValidationError
from samples.benchmark import run_benchmark
from samples.hasher import SlowHasher
from samples.hasher_factory import get_memoized_hasher


def register(mcp: FastMCP) -> None:
    @mcp.tool(name="benchmark_hash")
    async def benchmark_hash(
        text: str = "hello world",
        iterations: int = BENCHMARK_ITERATIONS,
    ) -> Dict[str, Any]:
        """Time `iterations` hashes of `text`, directly and memoized.

        Returns:
          Dict with iterations, direct_ms, memoized_ms, digest and speedup.

        Raises:
          ValidationError if iterations is outside 1..BENCHMARK_MAX_ITERATIONS.
        """
        if iterations < 1 or iterations > BENCHMARK_MAX_ITERATIONS:
            raise ValidationError(
                f"iterations must be between 1 and {BENCHMARK_MAX_ITERATIONS}"
            )

        direct = SlowHasher(algorithm=HASH_ALGORITHM)
        memo = get_memoized_hasher(
            algorithm=HASH_ALGORITHM,
            max_elements=MEMOIZE_MAX_ELEMENTS,
            ttl_millis=MEMOIZE_TTL_MILLIS,
        )

        # CPU-bound loop; keep the event loop responsive
        result = await asyncio.to_thread(
            run_benchmark, direct, memo, text=text, iterations=iterations
        )
        return result.as_dict()
