"""Errors raised while cleaning CTAB records."""
from __future__ import annotations

from typing import Optional


class CtabError(Exception):
    """Base error for this package."""


class StructuralError(CtabError):
    """
    Raised when a record cannot be repaired.

    Covers a fixed-count block that ends early, a fixed-width field that is
    not an integer, and a connection table that never reaches ``M  END``.
    """

    def __init__(self, message: str, line_number: Optional[int] = None) -> None:
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class AmbiguousHeaderError(StructuralError):
    """Raised when a short header cannot be unambiguously rebuilt."""
