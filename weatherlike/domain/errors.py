"""Domain-level error types that cross layer boundaries.

Transport-specific failures stay in ``weatherlike.adapters.api_errors`` and are
translated by ``weatherlike.usecases.error_mapping``.
"""

from __future__ import annotations


class GeolocationError(RuntimeError):
    """Device refused or failed to provide a position."""

    def __init__(self, message: str, *, denied: bool = False) -> None:
        super().__init__(message)
        self.denied = denied
