"""
Sgroup type codes and the per-record registry of declared sgroups.

``M  STY`` lines declare sgroups as ``(id, type)`` pairs.  Only the type
codes in :data:`KNOWN_SGROUP_TYPES` are accepted; every other ``M  Sxx`` line
must reference an id declared earlier in the same record.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterator, Optional, Tuple

logger = logging.getLogger(__name__)

KNOWN_SGROUP_TYPES: Dict[str, str] = {
    "GEN": "generic",
    "COM": "component",
    "COP": "copolymer",
    "CRO": "crosslink",
    "DAT": "data",
    "FOR": "formulation",
    "MUL": "multiple group",
    "MON": "monomer",
    "SRU": "structural repeating unit",
    "SUP": "superatom / abbreviation",
    "ANY": "any polymer",
    "GRA": "graft",
    "MIX": "mixture",
    "MER": "mer",
    "MOD": "modification",
}

# Member-line codes only meaningful for one group type.
_TYPE_RESTRICTED_LINES: Dict[str, frozenset] = {
    "SPA": frozenset({"MUL"}),   # parent atoms of a multiple group
    "SDT": frozenset({"DAT"}),   # data field description
    "SDD": frozenset({"DAT"}),   # data field display information
    "SCD": frozenset({"DAT"}),   # data field continuation
    "SED": frozenset({"DAT"}),   # data field end
}


def is_known_type(type_code: str) -> bool:
    """True when *type_code* is a recognised sgroup type."""
    return type_code in KNOWN_SGROUP_TYPES


def is_valid_line_for_type(sgroup_type: str, line_code: str) -> bool:
    """True when an ``M  <line_code>`` line may reference a *sgroup_type* group."""
    allowed = _TYPE_RESTRICTED_LINES.get(line_code)
    return allowed is None or sgroup_type in allowed


class SgroupRegistry:
    """
    Sgroups declared so far in the current record.

    One registry lives for exactly one connection table; nothing carries over
    to the next record.
    """

    def __init__(self) -> None:
        self._types: Dict[int, str] = {}

    def declare(self, sgroup_id: int, type_code: str) -> bool:
        """
        Register *sgroup_id* as *type_code*.

        Returns ``False`` (and registers nothing) when the type is unknown or
        the id was already declared.
        """
        if not is_known_type(type_code):
            logger.debug("Dropping sgroup %d: unknown type %r", sgroup_id, type_code)
            return False
        if sgroup_id in self._types:
            logger.debug(
                "Dropping redeclaration of sgroup %d as %s (already %s)",
                sgroup_id, type_code, self._types[sgroup_id],
            )
            return False
        self._types[sgroup_id] = type_code
        return True

    def type_of(self, sgroup_id: int) -> Optional[str]:
        return self._types.get(sgroup_id)

    def accepts(self, sgroup_id: int, line_code: str) -> bool:
        """True when a ``line_code`` line for *sgroup_id* should be kept."""
        sgroup_type = self._types.get(sgroup_id)
        return sgroup_type is not None and is_valid_line_for_type(sgroup_type, line_code)

    def __contains__(self, sgroup_id: object) -> bool:
        return sgroup_id in self._types

    def __len__(self) -> int:
        return len(self._types)

    def __iter__(self) -> Iterator[Tuple[int, str]]:
        return iter(self._types.items())
