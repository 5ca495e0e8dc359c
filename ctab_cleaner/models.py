"""
Core data models for the CTAB cleaner.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


# ---------------------------------------------------------------------------
# CTAB versions
# ---------------------------------------------------------------------------

V2000 = "V2000"
V3000 = "V3000"

CTAB_VERSIONS = (V2000, V3000)

# S-prefixed property codes that carry no sgroup id (SUB: substitution count)
NON_SGROUP_CODES = frozenset({"STY", "SUB"})


# ---------------------------------------------------------------------------
# Per-record side table
# ---------------------------------------------------------------------------


@dataclass
class ParseFacts:
    """
    Facts learned early in a record and consumed later in the same record.

    A fresh instance is created for every record by
    :class:`~ctab_cleaner.pipeline.record_iterator.CleanRecordIterator`.
    """

    atom_count: int = 0
    bond_count: int = 0
    version: str = V2000
    # Set by DELIMITER when blank lines preceded the next header.
    leading_blank: bool = False


# ---------------------------------------------------------------------------
# Counts line
# ---------------------------------------------------------------------------


@dataclass
class CountsLine:
    """
    The fields of a V2000/V3000 counts line.

    ``aaabbblllfffcccsssxxxrrrpppiiimmmvvvvvv``

    ``fff`` is obsolete and always rendered as zero; ``xxxrrrpppiii`` is
    carried through verbatim as :attr:`middle`.
    """

    atoms: int
    bonds: int
    atom_lists: int = 0
    chiral: int = 0
    stext: int = 0
    middle: str = "  0  0  0  0"
    properties: int = 999
    version: str = V2000

    def render(self) -> str:
        return (
            f"{self.atoms:>3}{self.bonds:>3}{self.atom_lists:>3}{0:>3}"
            f"{self.chiral:>3}{self.stext:>3}{self.middle}{self.properties:>3}"
            f" {self.version}"
        )


# ---------------------------------------------------------------------------
# Property line
# ---------------------------------------------------------------------------


@dataclass
class PropertyLine:
    """An ``M  xxx`` line of the properties block broken into tokens."""

    code: str            # CHG, STY, SAL, END, ...
    tokens: List[str]    # whitespace-separated fields after the code
    raw_text: str
    line_number: Optional[int] = None

    @property
    def is_sgroup(self) -> bool:
        return self.code.startswith("S") and self.code not in NON_SGROUP_CODES

    def __repr__(self) -> str:
        return f"PropertyLine(code={self.code!r}, tokens={self.tokens})"
