"""
Helpers for fixed-width CTAB fields.
"""
from __future__ import annotations

from typing import List, Optional, Sequence, TypeVar

from ..errors import StructuralError

T = TypeVar("T")


def is_blank(line: Optional[str]) -> bool:
    """True for an empty or whitespace-only line (``None`` is not blank)."""
    return line is not None and not line.strip()


def parse_int(token: str, what: str, line_number: Optional[int] = None) -> int:
    """
    Parse *token* as an integer field.

    Raises
    ------
    StructuralError
        When *token* is not an integer.
    """
    try:
        return int(token)
    except (TypeError, ValueError):
        raise StructuralError(
            f"{what} is not an integer: {token!r}", line_number
        ) from None


def chunked(items: Sequence[T], size: int) -> List[List[T]]:
    """Split *items* into consecutive lists of at most *size* entries."""
    return [list(items[i : i + size]) for i in range(0, len(items), size)]


def pad3(value: object) -> str:
    """Right-justify *value* in a three-column field."""
    return f"{value!s:>3}"
