"""
PropertyLine parsing
====================

Splits an ``M  xxx`` line of the properties block into its three-letter code
and whitespace-separated fields.  Spacing between ``M`` and the code is not
enforced (``M CHG``, ``  M  CHG`` and ``M  CHG`` are all recognised), since
hand-edited files frequently get it wrong.

Lines that are not property lines (atom aliases ``A  aaa``, group
abbreviations ``G  aaa``, stext, old-style atom lists) yield ``None`` and are
passed through unchanged by the callers.
"""
from __future__ import annotations

import re
from typing import Optional

from ..models import PropertyLine

_PROPERTY_RE = re.compile(r"^\s*M\s+([A-Z0-9]{3})(.*)$")

# Column where the free-text payload of SCD/SED lines begins:
# "M  SCD sss " is eleven characters wide.
DATA_PAYLOAD_COLUMN = 11

_CANONICAL_DATA_RE = re.compile(r"^M  S[CE]D [ \d]{3} ")
_LOOSE_DATA_RE = re.compile(r"^\s*M\s+S[CE]D\s*\d+ ?(.*)$")


def parse_property_line(
    line: str, line_number: Optional[int] = None
) -> Optional[PropertyLine]:
    """Return the parsed property line, or ``None`` for any other line."""
    match = _PROPERTY_RE.match(line)
    if not match:
        return None
    code, rest = match.group(1), match.group(2)
    return PropertyLine(
        code=code,
        tokens=rest.split(),
        raw_text=line,
        line_number=line_number,
    )


def data_payload(line: str) -> str:
    """Return the free-text payload of an ``M  SCD`` / ``M  SED`` line."""
    if _CANONICAL_DATA_RE.match(line):
        return line[DATA_PAYLOAD_COLUMN:]
    match = _LOOSE_DATA_RE.match(line)
    return match.group(1) if match else ""
