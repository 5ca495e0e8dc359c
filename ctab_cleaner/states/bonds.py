"""
BondListState
=============

Copies the V2000 bond block, re-deriving the padding of the two atom-index
fields.

Bond line layout::

    111222tttsssxxxrrrccc

Both index fields are right-justified in three columns.  When a tool strips
leading whitespace the line starts with the first index, and if that index
was three digits wide the second index may be glued onto it (``100101  1``).
The width of the first token tells the two cases apart:

* width 1, 2, 3: the first index alone, padded with 2, 1, 0 spaces; the
  second index is the next token and is re-padded to three columns.
* width 4, 5, 6: the first index followed by a three-digit second index,
  padded with 2, 1, 0 spaces.

Everything after the second index is copied verbatim.
"""
from __future__ import annotations

import re
from typing import List

from ..errors import StructuralError
from ..models import ParseFacts
from ..parser.fields import pad3
from ..reader.line_source import LookaheadLineSource
from .read_state import ReadState

_FIRST_RE = re.compile(r"\d+")
_SECOND_RE = re.compile(r"\s*(\d+)")


class BondListState:
    """Consumes exactly ``facts.bond_count`` bond lines."""

    FIELD_WIDTH: int = 3

    def run(
        self,
        source: LookaheadLineSource,
        out: List[str],
        facts: ParseFacts,
    ) -> ReadState:
        for i in range(facts.bond_count):
            line = source.read_line()
            if line is None:
                raise StructuralError(
                    f"end of input after {i} of {facts.bond_count} bond lines",
                    source.line_number,
                )
            out.append(self._realign(line, source.line_number) + "\n")
        return ReadState.CONNECTION_TABLE

    def _realign(self, line: str, line_number: int) -> str:
        stripped = line.lstrip()
        first = _FIRST_RE.match(stripped)
        if not first or len(first.group()) > 2 * self.FIELD_WIDTH:
            raise StructuralError(f"bad atom index in bond line: {line!r}", line_number)

        token = first.group()
        if len(token) > self.FIELD_WIDTH:
            # second index glued onto the first
            first_index, second_index = token[: -self.FIELD_WIDTH], token[-self.FIELD_WIDTH :]
            tail = stripped[first.end() :]
        else:
            second = _SECOND_RE.match(stripped, first.end())
            if not second:
                raise StructuralError(f"bond line has one atom index: {line!r}", line_number)
            first_index, second_index = token, second.group(1)
            tail = stripped[second.end() :]

        return pad3(first_index) + pad3(second_index) + tail
