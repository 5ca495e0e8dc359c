"""
Tests for MolFileInfo.
"""
from __future__ import annotations

from pathlib import Path

import pytest

from ctab_cleaner import CtabCleaner, MolFileInfo, StructuralError
from ctab_cleaner.models import V2000, V3000

FIXTURES = Path(__file__).parent / "fixtures"

MIXED_BONDS = "\n".join([
    "mixed",
    "",
    "",
    "  4  3  0  0  0  0  0  0  0  0999 V2000",
    "    0.0000    0.0000    0.0000 C   0  0  0  0  0  0  0  0  0  0  0  0",
    "    1.0000    0.0000    0.0000 C   0  0  0  0  0  0  0  0  0  0  0  0",
    "    2.0000    0.0000    0.0000 N   0  0  0  0  0  0  0  0  0  0  0  0",
    "    3.0000    0.0000    0.0000 C   0  0  0  0  0  0  0  0  0  0  0  0",
    "  1  2  1  0  0  0  0",
    "  2  3  2  0  0  0  0",
    "  3  4  4  0  0  0  0",
    "M  END",
])


class TestMolFileInfo:
    def test_v2000_record(self):
        record = CtabCleaner().clean_text((FIXTURES / "clean.mol").read_text())
        info = MolFileInfo.parse(record)
        assert info == MolFileInfo(
            name="neopentane",
            version=V2000,
            atom_count=5,
            bond_count=4,
            single_bonds=4,
        )

    def test_bond_orders(self):
        info = MolFileInfo.parse(MIXED_BONDS)
        assert (info.single_bonds, info.double_bonds, info.aromatic_bonds) == (1, 1, 1)

    def test_v3000_record(self):
        info = MolFileInfo.parse((FIXTURES / "v3000.mol").read_text())
        assert info.name == "ethanol"
        assert info.version == V3000
        assert (info.atom_count, info.bond_count) == (3, 2)
        assert info.single_bonds == 2

    def test_blank_title(self):
        record = CtabCleaner().clean_text((FIXTURES / "messy.sdf").read_text())
        assert MolFileInfo.parse(record).name == ""

    def test_to_dict(self):
        info = MolFileInfo.parse(MIXED_BONDS)
        assert info.to_dict() == {
            "name": "mixed",
            "version": "V2000",
            "atom_count": 4,
            "bond_count": 3,
            "single_bonds": 1,
            "double_bonds": 1,
            "aromatic_bonds": 1,
        }

    def test_short_record(self):
        with pytest.raises(StructuralError):
            MolFileInfo.parse("title\n\n")

    def test_missing_bond_lines(self):
        truncated = "\n".join(MIXED_BONDS.split("\n")[:9])
        with pytest.raises(StructuralError):
            MolFileInfo.parse(truncated)
