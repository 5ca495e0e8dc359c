"""
HeaderState
===========

Reads and repairs the three-line Mol header.

A conforming header is::

    line 1 : molecule name (may be blank)
    line 2 : program / timestamp line (may be blank)
    line 3 : comment (may be blank)
    line 4 : counts line ending in V2000 / V3000

Copy / paste and whitespace-stripping tools often lose one of the first three
lines, leaving only two lines before the counts line.  The missing line is
restored from the blank / non-blank pattern of the two survivors:

+---------------------+--------------------------------------------------+
| Pattern             | Repair                                           |
+=====================+==================================================+
| text, blank         | blank name was dropped  → blank inserted first   |
+---------------------+--------------------------------------------------+
| blank, text         | text with internal whitespace → blank first;     |
|                     | otherwise comment was dropped → blank third      |
+---------------------+--------------------------------------------------+
| text, text          | first has internal whitespace → it is the        |
|                     | program line, blank first; otherwise it is the   |
|                     | name and the comment was dropped → blank third   |
+---------------------+--------------------------------------------------+
| blank, blank        | ambiguous → :class:`AmbiguousHeaderError`        |
+---------------------+--------------------------------------------------+

The counts line is pushed back for
:class:`~ctab_cleaner.states.counts.CountsLineState`.
"""
from __future__ import annotations

import logging
import re
from typing import List

from ..errors import AmbiguousHeaderError, StructuralError
from ..models import ParseFacts
from ..parser.counts_line import find_version
from ..parser.fields import is_blank
from ..reader.line_source import LookaheadLineSource
from .read_state import ReadState

logger = logging.getLogger(__name__)

_INTERNAL_WHITESPACE_RE = re.compile(r"\S\s+\S")


class HeaderState:
    """Emits the three header lines and hands the counts line on."""

    HEADER_LINES: int = 4

    def run(
        self,
        source: LookaheadLineSource,
        out: List[str],
        facts: ParseFacts,
    ) -> ReadState:
        header: List[str] = []
        while len(header) < self.HEADER_LINES:
            line = source.read_line()
            if line is None:
                raise StructuralError(
                    f"end of input inside mol header: {header}", source.line_number
                )
            header.append(line)
            if find_version(line):
                break

        # blank title line swallowed by the record delimiter
        if facts.leading_blank and len(header) < self.HEADER_LINES:
            header.insert(0, "")
        facts.leading_blank = False

        header = self._repair(header, source.line_number)
        out.extend(line + "\n" for line in header[:3])
        source.push_back(header[3])
        return ReadState.COUNTS_LINE

    # ------------------------------------------------------------------

    @staticmethod
    def _repair(header: List[str], line_number: int) -> List[str]:
        if len(header) == 4:
            return header
        if len(header) != 3:
            raise AmbiguousHeaderError(
                f"mol header has only {len(header)} line(s): {header}", line_number
            )

        first, second, counts = header
        first_blank, second_blank = is_blank(first), is_blank(second)

        if not first_blank and second_blank:
            position = 0
        elif first_blank and not second_blank:
            position = 0 if _INTERNAL_WHITESPACE_RE.search(second) else 2
        elif not first_blank and not second_blank:
            position = 0 if _INTERNAL_WHITESPACE_RE.search(first) else 2
        else:
            raise AmbiguousHeaderError(
                f"cannot tell which header line is missing: {header}", line_number
            )

        logger.debug("Short mol header; inserting blank line at position %d", position)
        repaired = [first, second, counts]
        repaired.insert(position, "")
        return repaired
