"""
Counts line parsing.

The counts line is the fourth line of a Mol record::

    aaabbblllfffcccsssxxxrrrpppiiimmmvvvvvv
      5  4  0  0  0  0  0  0  0  0999 V2000

+-------+---------+--------------------------------------------+
| Field | Columns | Meaning                                    |
+=======+=========+============================================+
| aaa   | 1-3     | number of atoms                            |
| bbb   | 4-6     | number of bonds                            |
| lll   | 7-9     | number of atom lists                       |
| fff   | 10-12   | obsolete                                   |
| ccc   | 13-15   | chiral flag                                |
| sss   | 16-18   | number of stext entries                    |
| x..i  | 19-30   | obsolete, passed through verbatim          |
| mmm   | 31-33   | number of additional property lines (999)  |
| vvvvvv| 34-39   | `` V2000`` or `` V3000``                   |
+-------+---------+--------------------------------------------+

Well-aligned lines are read by column.  When a producer has shifted the
columns (typically by stripping leading whitespace) the fields are recovered
from whitespace-separated tokens instead.
"""
from __future__ import annotations

import logging
import re
from typing import List, Optional

from ..errors import StructuralError
from ..models import V2000, CountsLine
from .fields import parse_int, pad3

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(r"V[23]000")
# A right-aligned three-column integer field, or an empty one
_FIELD_RE = re.compile(r"^ *\d*$")

_FIXED_STARTS = (0, 3, 6, 9, 12, 15)
_MIDDLE = slice(18, 30)
_PROPERTIES = slice(30, 33)


def find_version(line: str) -> Optional[str]:
    """Return ``V2000`` / ``V3000`` if *line* carries a version marker."""
    match = _VERSION_RE.search(line)
    return match.group() if match else None


def parse_counts_line(line: str, line_number: Optional[int] = None) -> CountsLine:
    """
    Parse a counts line.

    Raises
    ------
    StructuralError
        When the atom / bond counts (or any other numeric field) are not
        integers.
    """
    match = _VERSION_RE.search(line)
    if match:
        body, version = line[: match.start()], match.group()
    else:
        body, version = line, V2000

    counts = _parse_fixed(body, version)
    if counts is None:
        logger.debug("Counts line not column-aligned, tokenising: %r", line)
        counts = _parse_tokens(body, version, line_number)
    return counts


def _parse_fixed(body: str, version: str) -> Optional[CountsLine]:
    padded = body.ljust(33)
    fields = [padded[i : i + 3] for i in _FIXED_STARTS] + [padded[_PROPERTIES]]
    if not all(_FIELD_RE.match(f) for f in fields):
        return None
    # atom and bond counts are mandatory
    if not fields[0].strip() or not fields[1].strip():
        return None
    atoms, bonds, lists, _obsolete, chiral, stext, props = (
        int(f) if f.strip() else 0 for f in fields
    )
    return CountsLine(
        atoms=atoms,
        bonds=bonds,
        atom_lists=lists,
        chiral=chiral,
        stext=stext,
        middle=padded[_MIDDLE],
        properties=props if fields[-1].strip() else 999,
        version=version,
    )


def _parse_tokens(body: str, version: str, line_number: Optional[int]) -> CountsLine:
    tokens: List[str] = body.split()
    if len(tokens) < 2:
        raise StructuralError(f"counts line has no atom/bond counts: {body!r}", line_number)

    # "0999": the last obsolete field glued to the properties count
    last = tokens[-1]
    if len(tokens) > 6 and len(last) > 3 and last.isdigit():
        tokens[-1:] = [last[:-3], last[-3:]]

    values = [parse_int(t, "counts field", line_number) for t in tokens]
    head = values[:6] + [0] * (6 - len(values[:6]))
    rest = values[6:]
    properties = rest[-1] if rest else 999
    middle_values = rest[:-1][:4]
    middle_values += [0] * (4 - len(middle_values))

    atoms, bonds, lists, _obsolete, chiral, stext = head
    return CountsLine(
        atoms=atoms,
        bonds=bonds,
        atom_lists=lists,
        chiral=chiral,
        stext=stext,
        middle="".join(pad3(v) for v in middle_values),
        properties=properties,
        version=version,
    )
