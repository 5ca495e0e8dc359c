"""
Integration tests for the CtabCleaner facade and the package-level helpers.
"""
from __future__ import annotations

import gzip
import io
from pathlib import Path

import pytest

import ctab_cleaner
from ctab_cleaner import CtabCleaner, StructuralError

FIXTURES = Path(__file__).parent / "fixtures"

NEOPENTANE_BODY = [
    "  5  4  0  0  0  0  0  0  0  0999 V2000",
    "    0.0000    0.0000    0.0000 C   0  0  0  0  0  0  0  0  0  0  0  0",
    "    1.5000    0.0000    0.0000 C   0  0  0  0  0  0  0  0  0  0  0  0",
    "   -1.5000    0.0000    0.0000 C   0  0  0  0  0  0  0  0  0  0  0  0",
    "    0.0000    1.5000    0.0000 C   0  0  0  0  0  0  0  0  0  0  0  0",
    "    0.0000   -1.5000    0.0000 C   0  0  0  0  0  0  0  0  0  0  0  0",
    "  1  2  1  0  0  0  0",
    "  1  3  1  0  0  0  0",
    "  1  4  1  0  0  0  0",
    "  1  5  1  0  0  0  0",
]

MESSY_CLEANED = "\n".join(
    ["", "  -ISIS-  10192614002D", ""]
    + NEOPENTANE_BODY
    + [
        "M  CHG  2   1   1   2  -1",
        "M  STY  1   1 SUP",
        "M  SAL   1  2   4   5",
        "M  SMT   1 CH3",
        "M  END",
        "> <ID>",
        "42",
        "",
        "$$$$",
    ]
)


@pytest.fixture
def cleaner():
    return CtabCleaner()


# ─────────────────────────────────────────────────────────────────────────────
# Text entry points
# ─────────────────────────────────────────────────────────────────────────────


class TestCleanText:
    def test_clean_record_unchanged(self, cleaner):
        text = (FIXTURES / "clean.mol").read_text()
        assert cleaner.clean_text(text) == text.rstrip("\n")

    def test_only_end_line_normalised(self, cleaner):
        text = (FIXTURES / "clean.mol").read_text().rstrip("\n")
        assert cleaner.clean_text(text.replace("M  END", "M END")) == text

    def test_messy_record(self, cleaner):
        text = (FIXTURES / "messy.sdf").read_text()
        assert cleaner.clean_text(text) == MESSY_CLEANED

    def test_idempotent(self, cleaner):
        for name in ("clean.mol", "messy.sdf", "v3000.mol"):
            once = cleaner.clean_text((FIXTURES / name).read_text())
            assert cleaner.clean_text(once) == once

    def test_counts_match_blocks(self, cleaner):
        lines = cleaner.clean_text((FIXTURES / "messy.sdf").read_text()).split("\n")
        atoms, bonds = int(lines[3][0:3]), int(lines[3][3:6])
        block = lines[4 : 4 + atoms + bonds]
        assert all(line[5] == "." for line in block[:atoms])
        assert all(line[6:9].strip().isdigit() for line in block[atoms:])
        assert lines[4 + atoms + bonds].startswith("M  ")

    def test_bare_carriage_returns(self, cleaner):
        text = (FIXTURES / "clean.mol").read_text()
        assert cleaner.clean_text(text.replace("\n", "\r")) == text.rstrip("\n")

    def test_first_record_only(self, cleaner):
        text = (FIXTURES / "multi.sdf").read_text()
        assert cleaner.clean_text(text).startswith("neopentane\n")
        assert cleaner.clean_text(text).count("$$$$") == 1

    def test_all_records(self, cleaner):
        text = (FIXTURES / "multi.sdf").read_text()
        assert cleaner.clean_all_text(text) == text.rstrip("\n")

    def test_empty_input(self, cleaner):
        assert cleaner.clean_text("") == ""
        assert cleaner.clean_all_text("") == ""

    def test_structural_error(self, cleaner):
        with pytest.raises(StructuralError):
            cleaner.clean_text("title\n\n\n  3  2  0  0  0  0  0  0  0  0999 V2000\n")

    def test_package_helper(self):
        text = (FIXTURES / "messy.sdf").read_text()
        assert ctab_cleaner.clean(text) == MESSY_CLEANED


# ─────────────────────────────────────────────────────────────────────────────
# Files and streams
# ─────────────────────────────────────────────────────────────────────────────


class TestCleanFile:
    def test_clean_file(self, cleaner):
        with cleaner.clean_file(FIXTURES / "multi.sdf") as records:
            assert len(list(records)) == 2

    def test_clean_file_accepts_str(self):
        records = list(ctab_cleaner.clean_file(str(FIXTURES / "messy.sdf")))
        assert records == [MESSY_CLEANED]

    def test_gzip_file(self, cleaner, tmp_path):
        text = (FIXTURES / "multi.sdf").read_text()
        path = tmp_path / "multi.sdf.gz"
        with gzip.open(path, "wt", encoding="utf-8") as fh:
            fh.write(text)
        assert "".join(cleaner.clean_file(path)) == text.rstrip("\n")

    def test_missing_file(self, cleaner, tmp_path):
        with pytest.raises(OSError):
            cleaner.clean_file(tmp_path / "missing.sdf")


class TestCleanStream:
    def test_binary_stream(self, cleaner):
        data = (FIXTURES / "messy.sdf").read_bytes()
        assert list(cleaner.clean_stream(io.BytesIO(data))) == [MESSY_CLEANED]

    def test_text_stream(self):
        text = (FIXTURES / "messy.sdf").read_text()
        assert list(ctab_cleaner.clean_stream(io.StringIO(text))) == [MESSY_CLEANED]

    def test_undecodable_bytes_replaced(self, cleaner):
        data = b"caf\xe9" + (FIXTURES / "clean.mol").read_bytes()[len(b"neopentane"):]
        (record,) = list(cleaner.clean_stream(io.BytesIO(data)))
        assert record.startswith("caf\ufffd\n")

    def test_configured_encoding(self):
        data = b"caf\xe9" + (FIXTURES / "clean.mol").read_bytes()[len(b"neopentane"):]
        (record,) = list(CtabCleaner(encoding="latin-1").clean_stream(io.BytesIO(data)))
        assert record.startswith("caf\xe9\n")
