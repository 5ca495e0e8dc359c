"""
LookaheadLineSource
===================

Line-oriented reader with a single pushback slot.

Every state of the record state machine reads through this class.  A state
that reads one line too many (for example the version line at the end of a
header, or the first line of the next record) hands it back with
:meth:`LookaheadLineSource.push_back` so the next state sees it first.

Lines are returned without their line terminator.  ``None`` marks the end of
input.
"""
from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional

logger = logging.getLogger(__name__)


class LookaheadLineSource:
    """
    Wraps an iterable of text lines (usually an open text file).

    Parameters
    ----------
    stream:
        Any iterable of ``str`` lines.  If it has a ``close()`` method it is
        called by :meth:`close`.
    """

    def __init__(self, stream: Iterable[str]) -> None:
        self._stream = stream
        self._lines: Iterator[str] = iter(stream)
        self._pending: Optional[str] = None
        self._has_pending = False
        self._closed = False
        #: Number of physical lines consumed from the stream so far.
        self.line_number = 0

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def read_line(self) -> Optional[str]:
        """Return the next line (pushed-back line first) or ``None`` at EOF."""
        self._check_open()
        if self._has_pending:
            line = self._pending
            self._pending = None
            self._has_pending = False
            return line

        try:
            raw = next(self._lines)
        except StopIteration:
            return None
        self.line_number += 1
        return raw.rstrip("\r\n")

    def peek_line(self) -> Optional[str]:
        """Return the next line without consuming it."""
        self._check_open()
        if not self._has_pending:
            line = self.read_line()
            if line is None:
                return None
            self.push_back(line)
        return self._pending

    def push_back(self, line: str) -> None:
        """
        Make *line* the next value returned by :meth:`read_line`.

        Raises
        ------
        RuntimeError
            If a line is already pending.
        """
        self._check_open()
        if self._has_pending:
            raise RuntimeError(
                f"pushback slot already holds {self._pending!r}; cannot push back {line!r}"
            )
        self._pending = line
        self._has_pending = True

    def close(self) -> None:
        """Release the underlying stream.  Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._pending = None
        self._has_pending = False
        close = getattr(self._stream, "close", None)
        if close is not None:
            close()
        logger.debug("Line source closed after %d lines", self.line_number)

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("I/O operation on closed line source")

    def __enter__(self) -> "LookaheadLineSource":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
