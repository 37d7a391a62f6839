"""MCP tool exposing counters of the shared memoized hasher."""

from __future__ import annotations

from typing import Any, Dict

from mcp.server.fastmcp import FastMCP

from memoizer.proxy import cache_of
from samples.hasher import Hasher


def register(mcp: FastMCP, *, hasher: Hasher) -> None:
    cache = cache_of(hasher)

    @mcp.tool(name="cache_stats")
    async def cache_stats() -> Dict[str, Any]:
        """Return hit/miss/stale/eviction counters and the current cache size."""
        return cache.stats().as_dict()
