"""Exceptions raised by the coverage engine."""

from __future__ import annotations


class InvalidCoverageQuery(ValueError):
    """Raised when a query carries missing or non-finite coordinates."""

    error_code = "INVALID_INPUT"

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message
