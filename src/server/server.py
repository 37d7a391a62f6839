"""Server bootstrap for the memoizer MCP service.

Creates the FastMCP instance, builds one shared memoized hasher, wires
it into the tools, registers resources and starts the MCP server (stdio
transport).
"""

import logging
import sys

from mcp.server.fastmcp import FastMCP

from config import HASH_ALGORITHM, LOG_LEVEL, MEMOIZE_MAX_ELEMENTS, MEMOIZE_TTL_MILLIS
from samples.hasher_factory import get_memoized_hasher

from tools.benchmark_hash import register as register_benchmark_hash
from tools.cache_stats import register as register_cache_stats
from tools.hash_text import register as register_hash_text

from resources.cache_config import register_resources

mcp = FastMCP("memoizer-mcp")


def register_tools() -> None:
    hasher = get_memoized_hasher(
        algorithm=HASH_ALGORITHM,
        max_elements=MEMOIZE_MAX_ELEMENTS,
        ttl_millis=MEMOIZE_TTL_MILLIS,
    )

    # hash_text and cache_stats must share the same cache
    register_hash_text(mcp, hasher=hasher)
    register_cache_stats(mcp, hasher=hasher)
    register_benchmark_hash(mcp)


def register_all() -> None:
    register_tools()
    register_resources(mcp)


register_all()


def main() -> None:
    # stdout is the stdio transport; logs go to stderr
    logging.basicConfig(stream=sys.stderr, level=LOG_LEVEL)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
