"""Configuration and environment helpers for the project.

Provides small helpers to read typed environment variables and exposes
project-level configuration constants used across the codebase (cache
capacity and TTL, hash algorithm, benchmark limits, log level).
"""

from __future__ import annotations

import os


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_str(name: str, default: str) -> str:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


# Memoizer cache
MEMOIZE_MAX_ELEMENTS = _env_int("MEMOIZE_MAX_ELEMENTS", 1024)
MEMOIZE_TTL_MILLIS = _env_int("MEMOIZE_TTL_MILLIS", 1000)

# Sample hasher
HASH_ALGORITHM = _env_str("HASH_ALGORITHM", "sha512").lower()

# Benchmark limits
BENCHMARK_ITERATIONS = _env_int("BENCHMARK_ITERATIONS", 100_000)
BENCHMARK_MAX_ITERATIONS = _env_int("BENCHMARK_MAX_ITERATIONS", 1_000_000)

# Logging (stderr; stdout carries the stdio transport)
LOG_LEVEL = _env_str("LOG_LEVEL", "WARNING").upper()
