"""
AtomListState
=============

Copies the V2000 atom block, re-aligning the x coordinate.

Atom line layout::

    xxxxx.xxxxyyyyy.yyyyzzzzz.zzzz aaaddcccssshhhbbbvvvHHHrrriiimmmnnneee

Only the integer part of the x coordinate (everything before the first
decimal point) is touched: it is stripped and right-justified to five
columns so the decimal point lands in column 6 again.  Everything from the
decimal point onwards is copied verbatim.
"""
from __future__ import annotations

import re
from typing import List

from ..errors import StructuralError
from ..models import ParseFacts
from ..reader.line_source import LookaheadLineSource
from .read_state import ReadState

_INTEGER_PART_RE = re.compile(r"^-?\d*$")


class AtomListState:
    """Consumes exactly ``facts.atom_count`` atom lines."""

    INTEGER_WIDTH: int = 5

    def run(
        self,
        source: LookaheadLineSource,
        out: List[str],
        facts: ParseFacts,
    ) -> ReadState:
        for i in range(facts.atom_count):
            line = source.read_line()
            if line is None:
                raise StructuralError(
                    f"end of input after {i} of {facts.atom_count} atom lines",
                    source.line_number,
                )
            out.append(self._realign(line, source.line_number) + "\n")
        return ReadState.BOND_LIST

    def _realign(self, line: str, line_number: int) -> str:
        point = line.find(".")
        if point < 0:
            raise StructuralError(f"atom line has no coordinates: {line!r}", line_number)
        integer = line[:point].strip()
        if not _INTEGER_PART_RE.match(integer):
            raise StructuralError(f"bad x coordinate in atom line: {line!r}", line_number)
        return integer.rjust(self.INTEGER_WIDTH) + line[point:]
