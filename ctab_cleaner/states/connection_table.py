"""
ConnectionTableState
====================

Cleans the V2000 properties block, from the line after the bond block up to
and including ``M  END``.

+--------------------------+--------------------------------------------------+
| Line                     | Action                                           |
+==========================+==================================================+
| ``M  CHG``               | consecutive lines merged, re-chunked to 8 pairs  |
+--------------------------+--------------------------------------------------+
| ``M  STY``               | unknown types and redeclared ids dropped; new    |
|                          | declarations re-chunked to 8 pairs               |
+--------------------------+--------------------------------------------------+
| ``M  SDS EXP``           | re-chunked to 15 ids                             |
+--------------------------+--------------------------------------------------+
| ``M  SAL/SBL/SPA sss``   | dropped for unknown / invalid sgroup; indices    |
|                          | < 1 dropped; re-chunked to 15 indices            |
+--------------------------+--------------------------------------------------+
| ``M  SLB`` ``SCN``       | pairs for unknown sgroups dropped; re-chunked to |
| ``SPL`` ``SNC`` ``SBT``  | 8 pairs                                          |
+--------------------------+--------------------------------------------------+
| ``M  SCD/SED sss``       | merged through a :class:`DataAccumulator`        |
+--------------------------+--------------------------------------------------+
| other ``M  Sxx sss``     | dropped for unknown / invalid sgroup             |
+--------------------------+--------------------------------------------------+
| ``M  END``               | written as ``M  END``; anything after it dropped |
+--------------------------+--------------------------------------------------+
| anything else            | copied verbatim                                  |
+--------------------------+--------------------------------------------------+
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from ..errors import StructuralError
from ..models import ParseFacts, PropertyLine
from ..parser.fields import chunked, pad3, parse_int
from ..parser.property_line import data_payload, parse_property_line
from ..reader.line_source import LookaheadLineSource
from ..sgroups.data_accumulator import DataAccumulator
from ..sgroups.sgroup_types import SgroupRegistry
from .read_state import ReadState

logger = logging.getLogger(__name__)

END_LINE = "M  END"

_INDEX_LIST_CODES = frozenset({"SAL", "SBL", "SPA"})
_PAIR_LIST_CODES = frozenset({"SLB", "SCN", "SPL", "SNC", "SBT"})
_DATA_CODES = frozenset({"SCD", "SED"})


def write_end_line(source: LookaheadLineSource, out: List[str]) -> None:
    """Write ``M  END``, with a newline only when more input follows."""
    out.append(END_LINE)
    if source.peek_line() is not None:
        out.append("\n")


class ConnectionTableState:
    """Cleans ``M  xxx`` property lines until ``M  END``."""

    MAX_CHARGES_PER_LINE: int = 8
    MAX_SGROUPS_PER_LINE: int = 8
    MAX_INDICES_PER_LINE: int = 15
    MAX_EXPANSIONS_PER_LINE: int = 15

    def run(
        self,
        source: LookaheadLineSource,
        out: List[str],
        facts: ParseFacts,
    ) -> ReadState:
        _PropertyBlock(self, source, out).clean()
        return ReadState.BEFORE_DATA_ITEMS


class _PropertyBlock:
    """Cleaning state for the properties block of a single record."""

    def __init__(
        self,
        limits: ConnectionTableState,
        source: LookaheadLineSource,
        out: List[str],
    ) -> None:
        self._limits = limits
        self._source = source
        self._out = out
        self._registry = SgroupRegistry()
        self._pending: Optional[DataAccumulator] = None

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def clean(self) -> None:
        while True:
            line = self._source.read_line()
            if line is None:
                raise StructuralError(
                    "reached end of input inside connection table (no M  END)",
                    self._source.line_number,
                )
            prop = parse_property_line(line, self._source.line_number)

            if self._pending is not None and not self._continues_data(prop):
                self._flush_data()

            if prop is None:
                self._emit(line)
            elif prop.code == "END":
                write_end_line(self._source, self._out)
                return
            elif prop.code == "CHG":
                self._charges(prop)
            elif prop.code == "STY":
                self._sgroup_types(prop)
            elif prop.code == "SDS":
                self._expansion(prop)
            elif prop.code in _INDEX_LIST_CODES:
                self._index_list(prop)
            elif prop.code in _PAIR_LIST_CODES:
                self._pair_list(prop)
            elif prop.code in _DATA_CODES:
                self._data(prop)
            elif prop.is_sgroup:
                self._member(prop)
            else:
                self._emit(line)

    # ------------------------------------------------------------------
    # Atom properties
    # ------------------------------------------------------------------

    def _charges(self, prop: PropertyLine) -> None:
        pairs = self._counted_pairs(prop)
        # merge the following CHG lines
        while True:
            following = self._source.peek_line()
            nxt = parse_property_line(following) if following is not None else None
            if nxt is None or nxt.code != "CHG":
                break
            self._source.read_line()
            nxt.line_number = self._source.line_number
            pairs.extend(self._counted_pairs(nxt))

        values = [
            (parse_int(a, "charged atom", prop.line_number), parse_int(c, "charge", prop.line_number))
            for a, c in pairs
        ]
        self._emit_pairs("CHG", values, self._limits.MAX_CHARGES_PER_LINE)

    # ------------------------------------------------------------------
    # Sgroup declarations
    # ------------------------------------------------------------------

    def _sgroup_types(self, prop: PropertyLine) -> None:
        declared: List[Tuple[int, str]] = []
        for raw_id, type_code in self._counted_pairs(prop):
            sgroup_id = parse_int(raw_id, "sgroup id", prop.line_number)
            if self._registry.declare(sgroup_id, type_code):
                declared.append((sgroup_id, type_code))
        self._emit_pairs("STY", declared, self._limits.MAX_SGROUPS_PER_LINE)

    def _expansion(self, prop: PropertyLine) -> None:
        tokens = prop.tokens
        if tokens and tokens[0] == "EXP":
            count_token, values = (tokens[1] if len(tokens) > 1 else ""), tokens[2:]
        elif tokens and tokens[0].startswith("EXP") and tokens[0][3:].isdigit():
            count_token, values = tokens[0][3:], tokens[1:]
        else:
            self._emit(prop.raw_text)
            return

        count = parse_int(count_token, "SDS EXP count", prop.line_number)
        ids = [parse_int(v, "sgroup id", prop.line_number) for v in self._take(prop, values, count)]
        for chunk in chunked(ids, self._limits.MAX_EXPANSIONS_PER_LINE):
            self._emit("M  SDS EXP" + pad3(len(chunk)) + "".join(" " + pad3(i) for i in chunk))

    # ------------------------------------------------------------------
    # Sgroup members
    # ------------------------------------------------------------------

    def _index_list(self, prop: PropertyLine) -> None:
        sgroup_id = self._sgroup_id(prop)
        if not self._keep(sgroup_id, prop):
            return
        count = parse_int(prop.tokens[1] if len(prop.tokens) > 1 else "", "index count", prop.line_number)
        indices = [
            parse_int(v, "atom/bond index", prop.line_number)
            for v in self._take(prop, prop.tokens[2:], count)
        ]
        kept = [i for i in indices if i > 0]
        if len(kept) != len(indices):
            logger.debug("Dropping non-positive indices from %r", prop.raw_text)

        for chunk in chunked(kept, self._limits.MAX_INDICES_PER_LINE):
            self._emit(
                f"M  {prop.code} {pad3(sgroup_id)}{pad3(len(chunk))}"
                + "".join(" " + pad3(i) for i in chunk)
            )

    def _pair_list(self, prop: PropertyLine) -> None:
        pairs = self._counted_pairs(prop)
        kept = []
        for first, second in pairs:
            ids = [parse_int(first, "sgroup id", prop.line_number)]
            if prop.code == "SPL":
                ids.append(parse_int(second, "parent sgroup id", prop.line_number))
            if all(i in self._registry for i in ids):
                kept.append((first, second))

        if len(kept) == len(pairs) and len(pairs) <= self._limits.MAX_SGROUPS_PER_LINE:
            self._emit(prop.raw_text)
            return
        logger.debug("Rewriting %r keeping %d of %d pairs", prop.raw_text, len(kept), len(pairs))
        self._emit_pairs(prop.code, kept, self._limits.MAX_SGROUPS_PER_LINE)

    def _member(self, prop: PropertyLine) -> None:
        if self._keep(self._sgroup_id(prop), prop):
            self._emit(prop.raw_text)

    # ------------------------------------------------------------------
    # Data sgroup values
    # ------------------------------------------------------------------

    def _data(self, prop: PropertyLine) -> None:
        sgroup_id = self._sgroup_id(prop)
        if not self._keep(sgroup_id, prop):
            return
        if self._pending is None:
            self._pending = DataAccumulator(sgroup_id)

        payload = data_payload(prop.raw_text)
        if prop.code == "SCD":
            self._pending.add(payload)
        else:
            self._pending.terminate(payload)
            self._flush_data()

    def _continues_data(self, prop: Optional[PropertyLine]) -> bool:
        if prop is None or prop.code not in _DATA_CODES or not prop.tokens:
            return False
        return prop.tokens[0].isdigit() and int(prop.tokens[0]) == self._pending.sgroup_id

    def _flush_data(self) -> None:
        if not self._pending.terminated:
            logger.debug("Data sgroup %d has no M  SED line; closing it", self._pending.sgroup_id)
        for line in self._pending.render():
            self._emit(line)
        self._pending = None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _emit(self, line: str) -> None:
        self._out.append(line + "\n")

    def _emit_pairs(self, code: str, pairs: Sequence[Tuple[object, object]], size: int) -> None:
        for chunk in chunked(pairs, size):
            body = "".join(f" {pad3(a)} {_pad_value(b)}" for a, b in chunk)
            self._emit(f"M  {code}{pad3(len(chunk))}{body}".rstrip())

    def _counted_pairs(self, prop: PropertyLine) -> List[Tuple[str, str]]:
        """Return the pairs of an ``M  xxxnn8 aaa vvv ...`` line."""
        count = parse_int(prop.tokens[0] if prop.tokens else "", f"{prop.code} count", prop.line_number)
        values = self._take(prop, prop.tokens[1:], 2 * count)
        return list(zip(values[0::2], values[1::2]))

    @staticmethod
    def _take(prop: PropertyLine, values: Sequence[str], count: int) -> List[str]:
        if count < 0 or len(values) < count:
            raise StructuralError(
                f"M  {prop.code} declares {count} entries but has {len(values)}",
                prop.line_number,
            )
        return list(values[:count])

    @staticmethod
    def _sgroup_id(prop: PropertyLine) -> int:
        return parse_int(prop.tokens[0] if prop.tokens else "", "sgroup id", prop.line_number)

    def _keep(self, sgroup_id: int, prop: PropertyLine) -> bool:
        if self._registry.accepts(sgroup_id, prop.code):
            return True
        logger.debug(
            "Dropping %r: sgroup %d is %s",
            prop.raw_text,
            sgroup_id,
            "undeclared" if sgroup_id not in self._registry else "of the wrong type",
        )
        return False


def _pad_value(value: object) -> str:
    text = str(value)
    return pad3(text) if text.lstrip("-").isdigit() else f"{text:<3}"
