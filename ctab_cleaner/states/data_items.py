"""
Data item states
================

The tail of an SD record: the ``> <FIELD>`` data items after ``M  END`` and
the ``$$$$`` record delimiter.

* :class:`BeforeDataItemsState` drops blank lines between ``M  END`` and the
  first data item.
* :class:`DataItemsState` copies data items verbatim up to ``$$$$``.
* :class:`DelimiterState` drops blank lines between ``$$$$`` and the next
  header and remembers whether it did so.

The last record of the input carries no trailing newline.
"""
from __future__ import annotations

import logging
from typing import List

from ..models import ParseFacts
from ..parser.fields import is_blank
from ..reader.line_source import LookaheadLineSource
from .read_state import ReadState

logger = logging.getLogger(__name__)

DELIMITER = "$$$$"


def strip_trailing_newline(out: List[str]) -> None:
    """Remove the newline ending the last non-empty fragment of *out*."""
    while out and out[-1] == "\n":
        out.pop()
    if out and out[-1].endswith("\n"):
        out[-1] = out[-1][:-1]


class BeforeDataItemsState:
    def run(
        self,
        source: LookaheadLineSource,
        out: List[str],
        facts: ParseFacts,
    ) -> ReadState:
        while True:
            line = source.read_line()
            if line is None:
                strip_trailing_newline(out)
                return ReadState.EOF
            if not is_blank(line):
                source.push_back(line)
                return ReadState.DATA_ITEMS
            logger.debug("Dropping blank line %d after M  END", source.line_number)


class DataItemsState:
    """Copies data items until the ``$$$$`` delimiter."""

    def run(
        self,
        source: LookaheadLineSource,
        out: List[str],
        facts: ParseFacts,
    ) -> ReadState:
        while True:
            line = source.read_line()
            if line is None:
                strip_trailing_newline(out)
                return ReadState.EOF
            if line.startswith(DELIMITER):
                if line != DELIMITER:
                    logger.debug("Trimming delimiter line %r", line)
                out.append(DELIMITER)
                if source.peek_line() is not None:
                    out.append("\n")
                return ReadState.DELIMITER
            out.append(line + "\n")


class DelimiterState:
    """Skips blank lines between records."""

    def run(
        self,
        source: LookaheadLineSource,
        out: List[str],
        facts: ParseFacts,
    ) -> ReadState:
        blanks = 0
        while True:
            line = source.read_line()
            if line is None:
                return ReadState.EOF
            if not is_blank(line):
                source.push_back(line)
                facts.leading_blank = blanks > 0
                return ReadState.HEADER
            blanks += 1
