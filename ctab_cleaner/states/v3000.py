"""
V3000CtabState
==============

Best-effort cleaning of a V3000 connection table.

V3000 records carry their whole connection table in ``M  V30`` lines grouped
into ``BEGIN x`` / ``END x`` blocks::

    M  V30 BEGIN CTAB
    M  V30 COUNTS 5 4 0 0 0
    M  V30 BEGIN ATOM
    ...
    M  V30 END ATOM
    ...
    M  V30 END CTAB
    M  END

Only the block structure is repaired:

* the ``M  V30`` prefix is normalised to ``M  V30 ``;
* an ``END x`` with no open ``x`` block is dropped;
* blocks closed out of order, or still open at ``M  END``, get synthesised
  ``END`` lines;
* the ``COUNTS`` line feeds the atom / bond counts into :class:`ParseFacts`.

Everything else is copied verbatim.
"""
from __future__ import annotations

import logging
import re
from typing import List

from ..errors import StructuralError
from ..models import ParseFacts
from ..parser.property_line import parse_property_line
from ..reader.line_source import LookaheadLineSource
from .connection_table import write_end_line
from .read_state import ReadState

logger = logging.getLogger(__name__)

V30_PREFIX = "M  V30 "

_V30_RE = re.compile(r"^\s*M\s+V30 ?(.*)$")
_BLOCK_RE = re.compile(r"^\s*(BEGIN|END)\s+(\S+)", re.IGNORECASE)
_COUNTS_RE = re.compile(r"^\s*COUNTS\s+(\d+)\s+(\d+)", re.IGNORECASE)


class V3000CtabState:
    """Copies ``M  V30`` lines until ``M  END``, balancing BEGIN / END blocks."""

    def run(
        self,
        source: LookaheadLineSource,
        out: List[str],
        facts: ParseFacts,
    ) -> ReadState:
        open_blocks: List[str] = []

        while True:
            line = source.read_line()
            if line is None:
                raise StructuralError(
                    "reached end of input inside V3000 connection table (no M  END)",
                    source.line_number,
                )

            prop = parse_property_line(line)
            if prop is not None and prop.code == "END":
                self._close(open_blocks, out, len(open_blocks))
                write_end_line(source, out)
                return ReadState.BEFORE_DATA_ITEMS

            match = _V30_RE.match(line)
            if not match:
                out.append(line + "\n")
                continue

            body = match.group(1)
            block = _BLOCK_RE.match(body)
            if block and block.group(1).upper() == "BEGIN":
                open_blocks.append(block.group(2).upper())
            elif block:
                name = block.group(2).upper()
                if name not in open_blocks:
                    logger.debug("Dropping dangling %r", line)
                    continue
                depth = len(open_blocks) - 1 - open_blocks[::-1].index(name)
                # close inner blocks left open
                self._close(open_blocks, out, len(open_blocks) - depth - 1)
                open_blocks.pop()
            else:
                counts = _COUNTS_RE.match(body)
                if counts:
                    facts.atom_count = int(counts.group(1))
                    facts.bond_count = int(counts.group(2))

            out.append(V30_PREFIX + body + "\n")

    @staticmethod
    def _close(open_blocks: List[str], out: List[str], how_many: int) -> None:
        for _ in range(how_many):
            name = open_blocks.pop()
            logger.debug("Closing unterminated V3000 block %s", name)
            out.append(f"{V30_PREFIX}END {name}\n")
