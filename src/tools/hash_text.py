"""MCP tool that hashes text through the memoized sample hasher.

Registers 'hash_text'; repeated calls with the same text inside the TTL
window are answered from the cache.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from mcp.server.fastmcp import FastMCP

from config import HASH_ALGORITHM, MEMOIZE_MAX_ELEMENTS, MEMOIZE_TTL_MILLIS
from samples.hasher import Hasher
from samples.hasher_factory import get_memoized_hasher


def register(mcp: FastMCP, *, hasher: Optional[Hasher] = None) -> None:
    memo = hasher or get_memoized_hasher(
        algorithm=HASH_ALGORITHM,
        max_elements=MEMOIZE_MAX_ELEMENTS,
        ttl_millis=MEMOIZE_TTL_MILLIS,
    )

    @mcp.tool(name="hash_text")
    async def hash_text(text: str) -> str:
        """Return the base64 digest of `text` (UTF-8 encoded).

        Params:
          - text: input text (UTF-8 encoded before hashing).

        Returns:
          The digest encoded as base64 ASCII.
        """
        return await asyncio.to_thread(memo.hash, text)
