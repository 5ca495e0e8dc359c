"""
CountsLineState
===============

Re-renders the counts line with canonical three-column fields and records
the declared atom and bond counts for the atom and bond blocks.
"""
from __future__ import annotations

import logging
from typing import List

from ..errors import StructuralError
from ..models import V3000, ParseFacts
from ..parser.counts_line import parse_counts_line
from ..reader.line_source import LookaheadLineSource
from .read_state import ReadState

logger = logging.getLogger(__name__)


class CountsLineState:
    """Parses and rewrites the counts line."""

    def run(
        self,
        source: LookaheadLineSource,
        out: List[str],
        facts: ParseFacts,
    ) -> ReadState:
        line = source.read_line()
        if line is None:
            raise StructuralError("end of input before counts line", source.line_number)

        counts = parse_counts_line(line, source.line_number)
        facts.atom_count = counts.atoms
        facts.bond_count = counts.bonds
        facts.version = counts.version

        rendered = counts.render()
        if rendered != line:
            logger.debug("Counts line rewritten: %r -> %r", line, rendered)
        out.append(rendered + "\n")

        if counts.version == V3000:
            return ReadState.V3000_CTAB
        return ReadState.ATOM_LIST
