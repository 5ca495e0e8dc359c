"""
CtabCleaner
===========

High-level facade for cleaning Mol / SD text.

Wraps a string, a path or a stream in a
:class:`~ctab_cleaner.reader.line_source.LookaheadLineSource` and hands it to
a :class:`~ctab_cleaner.pipeline.record_iterator.CleanRecordIterator`.
"""
from __future__ import annotations

import gzip
import io
import logging
from pathlib import Path
from typing import IO, Union

from .record_iterator import CleanRecordIterator

logger = logging.getLogger(__name__)


class CtabCleaner:
    """
    Entry points for cleaning CTAB records.

    Parameters
    ----------
    encoding:
        Text encoding used when reading paths and binary streams.
    errors:
        Decoding error handler (see :func:`open`).  The default replaces
        undecodable bytes so that one bad character does not lose a record.
    """

    def __init__(self, encoding: str = "utf-8", errors: str = "replace") -> None:
        self.encoding = encoding
        self.errors = errors

    # ------------------------------------------------------------------
    # Strings
    # ------------------------------------------------------------------

    def iter_text(self, text: str) -> CleanRecordIterator:
        """Return an iterator over the cleaned records of *text*."""
        return CleanRecordIterator(io.StringIO(text, newline=None))

    def clean_text(self, text: str) -> str:
        """
        Clean the first record of *text*.

        Returns
        -------
        str
            The cleaned record, or ``""`` when *text* holds no record.
        """
        with self.iter_text(text) as records:
            return next(records, "")

    def clean_all_text(self, text: str) -> str:
        """Clean every record of *text* and return them concatenated."""
        with self.iter_text(text) as records:
            return "".join(records)

    # ------------------------------------------------------------------
    # Files and streams
    # ------------------------------------------------------------------

    def clean_file(self, path: Union[str, Path]) -> CleanRecordIterator:
        """
        Open *path* and return an iterator over its cleaned records.

        Paths ending in ``.gz`` are decompressed on the fly.  The file is
        closed when the iterator is exhausted or closed.
        """
        path = Path(path)
        logger.info("Cleaning %s", path)
        if path.suffix == ".gz":
            stream: IO[str] = gzip.open(path, "rt", encoding=self.encoding, errors=self.errors)
        else:
            stream = path.open("r", encoding=self.encoding, errors=self.errors)
        return CleanRecordIterator(stream)

    def clean_stream(self, stream: IO) -> CleanRecordIterator:
        """
        Return an iterator over the cleaned records of an open *stream*.

        Binary streams are decoded with :attr:`encoding`; text streams are
        read as they are.  The iterator takes ownership of the stream.
        """
        if isinstance(stream, (io.RawIOBase, io.BufferedIOBase)):
            stream = io.TextIOWrapper(stream, encoding=self.encoding, errors=self.errors)
        return CleanRecordIterator(stream)
