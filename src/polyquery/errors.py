"""
Structured exceptions for query building and dispatch
"""
from __future__ import annotations


class PolyQueryError(Exception):
    """Base exception for polyquery."""

    pass


class MissingDependencyError(PolyQueryError):
    """Raised when the backend client an adapter needs was never registered."""

    pass


class UnsupportedOperationError(PolyQueryError):
    """Raised when the active adapter cannot perform a requested operation."""

    pass
