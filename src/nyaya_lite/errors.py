"""Exception taxonomy for Nyaya Lite.

The analyzer itself is pure; the only failures it surfaces are bad arguments.
Corpus loading is the one place that touches the filesystem.
"""
from __future__ import annotations


class NyayaError(Exception):
    pass


class InvalidArgumentError(NyayaError, ValueError):
    """Raised when the analyzer receives a non-text query or a non-sequence corpus."""


class CorpusLoadError(NyayaError, RuntimeError):
    """Raised when the law corpus file is missing, unreadable or not a JSON list."""


__all__ = ["NyayaError", "InvalidArgumentError", "CorpusLoadError"]
