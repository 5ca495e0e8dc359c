"""
Tests for the sgroup type table, the per-record registry and the data
accumulator.
"""
from __future__ import annotations

from ctab_cleaner.sgroups.data_accumulator import DataAccumulator
from ctab_cleaner.sgroups.sgroup_types import (
    KNOWN_SGROUP_TYPES,
    SgroupRegistry,
    is_known_type,
    is_valid_line_for_type,
)


class TestSgroupTypes:
    def test_known_types(self):
        for code in ("GEN", "SUP", "DAT", "MUL", "SRU", "MOD"):
            assert is_known_type(code)
        assert len(KNOWN_SGROUP_TYPES) == 15

    def test_unknown_types(self):
        assert not is_known_type("XYZ")
        assert not is_known_type("sup")
        assert not is_known_type("")

    def test_parent_atoms_only_for_multiple_groups(self):
        assert is_valid_line_for_type("MUL", "SPA")
        assert not is_valid_line_for_type("SUP", "SPA")

    def test_data_lines_only_for_data_groups(self):
        for code in ("SDT", "SDD", "SCD", "SED"):
            assert is_valid_line_for_type("DAT", code)
            assert not is_valid_line_for_type("SRU", code)

    def test_unrestricted_lines(self):
        assert is_valid_line_for_type("SUP", "SAL")
        assert is_valid_line_for_type("DAT", "SAL")


class TestSgroupRegistry:
    def test_declare_known_type(self):
        registry = SgroupRegistry()
        assert registry.declare(1, "SUP")
        assert 1 in registry
        assert registry.type_of(1) == "SUP"
        assert len(registry) == 1

    def test_unknown_type_not_registered(self):
        registry = SgroupRegistry()
        assert not registry.declare(12, "XYZ")
        assert 12 not in registry
        assert registry.type_of(12) is None

    def test_redeclaration_refused(self):
        registry = SgroupRegistry()
        registry.declare(1, "SUP")
        assert not registry.declare(1, "DAT")
        assert registry.type_of(1) == "SUP"

    def test_accepts(self):
        registry = SgroupRegistry()
        registry.declare(1, "SUP")
        registry.declare(2, "MUL")
        assert registry.accepts(1, "SAL")
        assert not registry.accepts(1, "SPA")
        assert registry.accepts(2, "SPA")
        assert not registry.accepts(3, "SAL")

    def test_iteration_in_declaration_order(self):
        registry = SgroupRegistry()
        registry.declare(3, "DAT")
        registry.declare(1, "SUP")
        assert list(registry) == [(3, "DAT"), (1, "SUP")]


class TestDataAccumulator:
    def test_payloads_merged_and_right_trimmed(self):
        acc = DataAccumulator(5)
        acc.add("first ")
        acc.add("second ")
        acc.terminate("third   ")
        assert acc.terminated
        assert acc.text == "first second third"
        assert acc.render() == ["M  SED   5 first second third"]

    def test_long_value_rewrapped(self):
        acc = DataAccumulator(5)
        acc.add("A" * 60)
        acc.add("B" * 60)
        acc.terminate("C" * 10)
        lines = acc.render()
        assert lines == [
            "M  SCD   5 " + "A" * 60 + "B" * 9,
            "M  SED   5 " + "B" * 51 + "C" * 10,
        ]

    def test_every_payload_fits(self):
        acc = DataAccumulator(123)
        acc.add("x" * 500)
        lines = acc.render()
        assert all(len(line) - len("M  SCD 123 ") <= DataAccumulator.MAX_PAYLOAD for line in lines)
        assert [line[:6] for line in lines] == ["M  SCD"] * 7 + ["M  SED"]

    def test_unterminated_value_still_closed_by_sed(self):
        acc = DataAccumulator(2)
        acc.add("value")
        assert not acc.terminated
        assert acc.render() == ["M  SED   2 value"]

    def test_empty_value(self):
        acc = DataAccumulator(2)
        acc.terminate("   ")
        assert acc.render() == ["M  SED   2"]
