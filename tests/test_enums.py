"""Tests for enum constant extraction."""

import pytest

pytestmark = pytest.mark.fast

from gospec.parser.go_parser import parse_const_groups
from gospec.resolution import EnumExtractor, PackageSources
from gospec.resolution.enums import decode_literal, values_in_group
from gospec.scanner import discover_packages


def _values(source: str, type_name: str):
    values = []
    for group in parse_const_groups(source):
        values.extend(values_in_group(group, type_name))
    return values


class TestValuesInGroup:

    def test_iota_and_implicit_counter(self):
        source = '''
const (
	Active Status = iota
	Suspended
	Closed
)
'''
        assert _values(source, "Status") == [0, 1, 2]

    def test_counter_is_scoped_to_its_group(self):
        source = '''
const (
	A Level = iota
	B
)

const (
	C Level = iota
	D
)
'''
        assert _values(source, "Level") == [0, 1, 0, 1]

    def test_declared_type_carries_forward(self):
        source = '''
const (
	Red Color = "red"
	Green = "green"
	Other Shade = "other"
	Blue = "blue"
)
'''
        assert _values(source, "Color") == ["red", "green"]
        assert _values(source, "Shade") == ["other", "blue"]

    def test_other_types_are_skipped(self):
        source = '''
const Limit int = 10
const Kind Mode = "fast"
'''
        assert _values(source, "Mode") == ["fast"]

    def test_multi_name_and_multi_value_specs_are_skipped(self, warnings_log):
        source = '''
const (
	First Pair = 1
	A, B Pair = 2, 3
	Last Pair = 4
)
'''
        assert _values(source, "Pair") == [1, 4]
        assert any("more than one name" in message for message in warnings_log)


class TestDecodeLiteral:

    @pytest.mark.parametrize("text,expected", [
        ('"red"', "red"),
        ('"tab\\tsep"', "tab\tsep"),
        ("`raw\\n`", "raw\\n"),
        ("42", 42),
        ("-7", -7),
        ("0x1F", 31),
        ("0b101", 5),
        ("0o17", 15),
        ("017", 15),
        ("0", 0),
        ("1_000", 1000),
        ("2.5", 2.5),
        ("1e3", 1000.0),
        ("StatusActive", "StatusActive"),
        ("1 << 3", "1 << 3"),
        ("'a'", "'a'"),
    ])
    def test_literals(self, text, expected):
        assert decode_literal(text) == expected


class TestEnumExtractor:

    def test_reads_constants_from_package_sources(self, petstore_dir):
        index = discover_packages(petstore_dir)
        extractor = EnumExtractor(PackageSources(index))

        assert extractor.enum_values("example.com/petstore/models", "Status") == [0, 1, 2]
        assert extractor.enum_values("example.com/petstore/models", "Color") == ["red", "green"]
        assert extractor.enum_values("example.com/petstore/models", "User") == []

    def test_unknown_package_has_no_values(self, petstore_dir):
        extractor = EnumExtractor(PackageSources(discover_packages(petstore_dir)))
        assert extractor.enum_values("example.com/nowhere", "Status") == []
