"""
CleanRecordIterator
===================

Pull-based iterator over the cleaned records of one input.

The next record is always read one step ahead so that :meth:`has_next` can
answer without consuming anything, and so that the last record can be told
apart from the others (it carries no trailing newline).

If reading record *k + 1* fails, record *k* is still returned; the failure is
raised from the following call to :func:`next` and the iterator is then
exhausted.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Union

from ..errors import CtabError
from ..models import ParseFacts
from ..reader.line_source import LookaheadLineSource
from ..states.data_items import DELIMITER
from ..states.read_state import ReadState
from .state_machine import step

logger = logging.getLogger(__name__)


class CleanRecordIterator:
    """
    Iterates over cleaned Mol / SD records.

    Parameters
    ----------
    source:
        A :class:`LookaheadLineSource`, or any iterable of text lines (an open
        text file, ``io.StringIO``...) which is wrapped in one.  The iterator
        owns the source and closes it when exhausted or closed.

    Raises
    ------
    CtabError
        When the first record cannot be cleaned.  The source is closed first.
    """

    def __init__(self, source: Union[LookaheadLineSource, Iterable[str]]) -> None:
        if not isinstance(source, LookaheadLineSource):
            source = LookaheadLineSource(source)
        self._source = source
        self._state = ReadState.BEGIN
        self._error: Optional[Exception] = None
        #: Number of records read from the source so far.
        self.records_read = 0
        try:
            self._next_record = self._read_next_record()
        except Exception:
            self.close()
            raise
        if self._next_record is None:
            self.close()

    # ------------------------------------------------------------------
    # Iterator protocol
    # ------------------------------------------------------------------

    def has_next(self) -> bool:
        """True while :meth:`next` will return a record or raise a pending error."""
        return self._next_record is not None or self._error is not None

    def __iter__(self) -> "CleanRecordIterator":
        return self

    def __next__(self) -> str:
        record = self._next_record
        if record is None:
            if self._error is not None:
                error, self._error = self._error, None
                raise error
            raise StopIteration

        self._next_record = self._prefetch()
        if self._next_record is None and self._error is None and record.endswith(DELIMITER + "\n"):
            # trailing blank lines followed the last delimiter
            record = record[:-1]
        return record

    next = __next__

    def close(self) -> None:
        """Close the underlying source.  Safe to call more than once."""
        self._next_record = None
        self._error = None
        self._state = ReadState.EOF
        self._source.close()

    def __enter__(self) -> "CleanRecordIterator":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _prefetch(self) -> Optional[str]:
        try:
            record = self._read_next_record()
        except (CtabError, OSError, UnicodeDecodeError) as exc:
            logger.debug("Record %d failed: %s", self.records_read + 1, exc)
            self._error = exc
            self._state = ReadState.EOF
            self._source.close()
            return None
        if record is None:
            self._source.close()
        return record

    def _read_next_record(self) -> Optional[str]:
        facts = ParseFacts()
        out: List[str] = []
        state = self._state
        while state is not ReadState.EOF:
            state = step(state, self._source, out, facts)
            if state is ReadState.DELIMITER:
                break
        self._state = state

        if not out:
            return None
        self.records_read += 1
        logger.debug(
            "Record %d cleaned (%s, %d atoms, %d bonds)",
            self.records_read,
            facts.version,
            facts.atom_count,
            facts.bond_count,
        )
        return "".join(out)
