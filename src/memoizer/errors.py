from __future__ import annotations


class MemoizerError(Exception):
    """Base error for the memoizer."""


class ValidationError(MemoizerError):
    """Raised when a configuration value or user input is invalid."""


class AdaptationError(MemoizerError):
    """Raised when a target cannot be wrapped with the requested operations."""
