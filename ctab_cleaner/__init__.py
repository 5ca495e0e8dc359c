"""
CTAB Cleaner
============

Structural cleaner for MDL Mol / SD (CTAB) text.

Hand-edited and tool-mangled Mol files often lose a header line, strip the
leading whitespace of fixed-width fields or carry Sgroup lines that refer to
Sgroups which were never declared.  Most toolkits reject such records
outright.  This package rewrites each record into a canonical form that
parses, without changing the chemistry it describes.

Records are read one at a time through a small state machine; see
:mod:`ctab_cleaner.pipeline.state_machine`.

Quick start
-----------
>>> import ctab_cleaner
>>> cleaned = ctab_cleaner.clean(open("messy.mol").read())
>>> for record in ctab_cleaner.clean_file("library.sdf.gz"):
...     print(ctab_cleaner.MolFileInfo.parse(record).name)
"""

from typing import IO

from .errors import AmbiguousHeaderError, CtabError, StructuralError
from .info import MolFileInfo
from .models import CountsLine, ParseFacts, PropertyLine
from .pipeline.ctab_cleaner import CtabCleaner
from .pipeline.record_iterator import CleanRecordIterator

__version__ = "0.1.0"
__all__ = [
    "AmbiguousHeaderError",
    "CtabError",
    "StructuralError",
    "MolFileInfo",
    "CountsLine",
    "ParseFacts",
    "PropertyLine",
    "CtabCleaner",
    "CleanRecordIterator",
    "clean",
    "clean_file",
    "clean_stream",
]


def clean(text: str) -> str:
    """Clean the first record of *text* with a default :class:`CtabCleaner`."""
    return CtabCleaner().clean_text(text)


def clean_file(path) -> CleanRecordIterator:
    """Iterate over the cleaned records of the file at *path*."""
    return CtabCleaner().clean_file(path)


def clean_stream(stream: IO) -> CleanRecordIterator:
    """Iterate over the cleaned records of an open *stream*."""
    return CtabCleaner().clean_stream(stream)
