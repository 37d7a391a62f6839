import json

from mcp.server.fastmcp import FastMCP

from config import HASH_ALGORITHM, MEMOIZE_MAX_ELEMENTS, MEMOIZE_TTL_MILLIS


def register_resources(mcp: FastMCP) -> None:
    """
    Register read-only resources describing the memoizer configuration.
    """

    @mcp.resource(
        "memoizer://config",
        mime_type="application/json",
        description="Cache capacity, TTL and hash algorithm used by hash_text"
    )
    def cache_config() -> str:
        return json.dumps(
            {
                "max_elements": MEMOIZE_MAX_ELEMENTS,
                "ttl_millis": MEMOIZE_TTL_MILLIS,
                "hash_algorithm": HASH_ALGORITHM,
            },
            indent=2,
        )
