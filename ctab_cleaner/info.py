"""
MolFileInfo
===========

A small summary read back from a cleaned Mol record: title, CTAB version,
declared atom / bond counts and the number of single, double and aromatic
bonds.

Different toolkits write the same molecule with different atom and bond
orderings, so these counts are a cheap way to compare two records without
parsing the whole connection table.
"""
from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Dict, Iterator, List

from .errors import StructuralError
from .models import V2000, V3000
from .parser.counts_line import find_version
from .parser.fields import parse_int

_V30_COUNTS_RE = re.compile(r"^M\s+V30\s+COUNTS\s+(\d+)\s+(\d+)")
_V30_BOND_RE = re.compile(r"^M\s+V30\s+(\d+)\s+(\d+)\s+(\d+)\s+(\d+)")
_V30_BEGIN_BOND = "M  V30 BEGIN BOND"

# bond type -> MolFileInfo field
_BOND_ORDERS = {1: "single_bonds", 2: "double_bonds", 4: "aromatic_bonds"}


@dataclass
class MolFileInfo:
    """Counts taken from one cleaned Mol record."""

    name: str
    version: str
    atom_count: int = 0
    bond_count: int = 0
    single_bonds: int = 0
    double_bonds: int = 0
    aromatic_bonds: int = 0

    @classmethod
    def parse(cls, record: str) -> "MolFileInfo":
        """
        Summarise a cleaned record.

        Parameters
        ----------
        record:
            One record as returned by
            :class:`~ctab_cleaner.pipeline.record_iterator.CleanRecordIterator`.

        Raises
        ------
        StructuralError
            When the record is too short, or its counts line or bond block
            cannot be read.
        """
        lines = record.splitlines()
        if len(lines) < 4:
            raise StructuralError(f"record has only {len(lines)} line(s)")

        counts_line = lines[3]
        version = find_version(counts_line)
        if version == V3000:
            info = cls(name=lines[0].strip(), version=V3000)
            bond_types = info._read_v3000(lines)
        else:
            info = cls(name=lines[0].strip(), version=V2000)
            bond_types = info._read_v2000(lines)

        for bond_type in bond_types:
            field = _BOND_ORDERS.get(bond_type)
            if field is not None:
                setattr(info, field, getattr(info, field) + 1)
        return info

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)

    # ------------------------------------------------------------------

    def _read_v2000(self, lines: List[str]) -> Iterator[int]:
        counts_line = lines[3]
        self.atom_count = parse_int(counts_line[0:3], "atom count", 4)
        self.bond_count = parse_int(counts_line[3:6], "bond count", 4)

        first_bond = 4 + self.atom_count
        bond_lines = lines[first_bond : first_bond + self.bond_count]
        if len(bond_lines) < self.bond_count:
            raise StructuralError(
                f"record declares {self.bond_count} bonds but has {len(bond_lines)} bond lines"
            )
        for offset, line in enumerate(bond_lines):
            yield parse_int(line[6:9], "bond type", first_bond + offset + 1)

    def _read_v3000(self, lines: List[str]) -> Iterator[int]:
        numbered = list(enumerate(lines, start=1))
        for _, line in numbered:
            counts = _V30_COUNTS_RE.match(line)
            if counts:
                self.atom_count = int(counts.group(1))
                self.bond_count = int(counts.group(2))
                break
        else:
            raise StructuralError("V3000 record has no COUNTS line")

        in_bonds = False
        for line_number, line in numbered:
            if line.rstrip() == _V30_BEGIN_BOND:
                in_bonds = True
            elif in_bonds and line.startswith("M  V30 END"):
                return
            elif in_bonds:
                bond = _V30_BOND_RE.match(line)
                if not bond:
                    raise StructuralError(f"bad V3000 bond line: {line!r}", line_number)
                yield int(bond.group(2))
