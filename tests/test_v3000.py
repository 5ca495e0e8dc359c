"""
Tests for V3000 connection-table cleaning.
"""
from __future__ import annotations

from pathlib import Path

import pytest

from ctab_cleaner.errors import StructuralError
from ctab_cleaner.models import ParseFacts
from ctab_cleaner.pipeline.ctab_cleaner import CtabCleaner
from ctab_cleaner.reader.line_source import LookaheadLineSource
from ctab_cleaner.states.read_state import ReadState
from ctab_cleaner.states.v3000 import V3000CtabState

FIXTURES = Path(__file__).parent / "fixtures"

CTAB = [
    "M  V30 BEGIN CTAB",
    "M  V30 COUNTS 3 2 0 0 0",
    "M  V30 BEGIN ATOM",
    "M  V30 1 C 0.0 0.0 0.0 0",
    "M  V30 2 C 1.299 0.75 0.0 0",
    "M  V30 3 O 2.598 0.0 0.0 0",
    "M  V30 END ATOM",
    "M  V30 BEGIN BOND",
    "M  V30 1 1 1 2",
    "M  V30 2 1 2 3",
    "M  V30 END BOND",
    "M  V30 END CTAB",
    "M  END",
]


def _run(lines):
    source = LookaheadLineSource(lines)
    out = []
    facts = ParseFacts()
    next_state = V3000CtabState().run(source, out, facts)
    return next_state, "".join(out).split("\n"), facts


class TestV3000CtabState:
    def test_canonical_block_unchanged(self):
        next_state, result, _ = _run(CTAB)
        assert next_state is ReadState.BEFORE_DATA_ITEMS
        assert result == CTAB

    def test_counts_recorded(self):
        _, _, facts = _run(CTAB)
        assert (facts.atom_count, facts.bond_count) == (3, 2)

    def test_prefix_normalised(self):
        lines = ["M V30 BEGIN CTAB", "M   V30 COUNTS 3 2 0 0 0"] + CTAB[2:]
        _, result, _ = _run(lines)
        assert result == CTAB

    def test_dangling_end_dropped(self):
        lines = CTAB[:7] + ["M  V30 END SGROUP"] + CTAB[7:]
        _, result, _ = _run(lines)
        assert result == CTAB

    def test_unclosed_blocks_closed_before_end(self):
        lines = [line for line in CTAB if line not in ("M  V30 END BOND", "M  V30 END CTAB")]
        _, result, _ = _run(lines)
        assert result == CTAB

    def test_inner_block_closed_by_outer_end(self):
        lines = [line for line in CTAB if line != "M  V30 END BOND"]
        _, result, _ = _run(lines)
        assert result == CTAB

    def test_missing_end_line(self):
        with pytest.raises(StructuralError):
            _run(CTAB[:-1])


class TestV3000Records:
    def test_fixture_unchanged(self):
        text = (FIXTURES / "v3000.mol").read_text()
        assert CtabCleaner().clean_text(text) == text.rstrip("\n")

    def test_fixture_idempotent(self):
        cleaner = CtabCleaner()
        once = cleaner.clean_text((FIXTURES / "v3000.mol").read_text())
        assert cleaner.clean_text(once) == once

    def test_rdkit_counts_line_normalised(self):
        text = (FIXTURES / "v3000.mol").read_text().splitlines()
        text[3] = "  0  0  0     0  0            999 V3000"
        cleaned = CtabCleaner().clean_text("\n".join(text))
        assert cleaned.splitlines()[3] == "  0  0  0  0  0  0            999 V3000"
