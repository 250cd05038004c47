"""Unit tests for the regex based Go declaration parser."""

import pytest

pytestmark = pytest.mark.fast

from gospec.parser.go_parser import (
    erase_type_params,
    is_required_tag,
    json_field_name,
    parse_const_groups,
    parse_field_line,
    parse_imports,
    parse_package_clause,
    parse_type_params,
    parse_type_declarations,
    strip_comments,
)

SOURCE = '''// Package models holds the stored records.
package models

import (
	"time"

	m "example.com/app/models"
	_ "example.com/app/drivers"
	. "example.com/app/dsl"
)

import "encoding/json"

/*
type Commented struct {
	Ghost string
}
*/

type User struct {
	Base
	*audit.Trail
	ID        string            `json:"id" binding:"required"` // Public identifier
	X, Y      int               `json:"-"`
	Nick      string            `json:",omitempty"`
	Tags      map[string]string `json:"tags"`
	Meta      struct {
		Source string
	} `json:"meta"`
	CreatedAt time.Time
	hidden    bool
}

type (
	Status int
	ID = string
	Users  []User
	Anything interface{}
)

type Pair[K comparable, V any] struct {
	Key K `json:"key"`
}
'''


class TestPackageAndImports:

    def test_package_clause(self):
        assert parse_package_clause(SOURCE) == "models"

    def test_package_clause_ignores_comments(self):
        assert parse_package_clause("// package fake\npackage real\n") == "real"
        assert parse_package_clause("func main() {}") is None

    def test_imports_in_declaration_order(self):
        assert parse_imports(SOURCE) == [
            (None, "time"),
            ("m", "example.com/app/models"),
            ("_", "example.com/app/drivers"),
            (".", "example.com/app/dsl"),
            (None, "encoding/json"),
        ]


class TestTypeDeclarations:

    def setup_method(self):
        self.decls = parse_type_declarations(SOURCE)

    def test_commented_out_declarations_are_ignored(self):
        assert "Commented" not in self.decls

    def test_struct_fields(self):
        user = self.decls["User"]
        assert user.kind == "struct"
        by_name = {field.names[0]: field for field in user.fields}

        assert by_name["Base"].embedded
        assert by_name["Trail"].embedded
        assert by_name["Trail"].type_name == "*audit.Trail"
        assert by_name["ID"].tag == 'json:"id" binding:"required"'
        assert by_name["ID"].comment == "Public identifier"
        assert by_name["X"].names == ["X", "Y"]
        assert by_name["Tags"].type_name == "map[string]string"
        assert by_name["CreatedAt"].type_name == "time.Time"
        assert by_name["hidden"].type_name == "bool"

    def test_inline_anonymous_struct_is_a_generic_object(self, warnings_log):
        decls = parse_type_declarations(SOURCE)
        meta = next(field for field in decls["User"].fields if field.names == ["Meta"])
        assert meta.type_name == "interface{}"
        assert meta.tag == 'json:"meta"'
        assert any("Meta" in message for message in warnings_log)

    def test_grouped_declarations(self):
        assert self.decls["Status"].kind == "named"
        assert self.decls["Status"].underlying == "int"
        assert self.decls["ID"].underlying == "string"
        assert self.decls["Users"].underlying == "[]User"
        assert self.decls["Anything"].underlying == "interface{}"

    def test_generic_type_parameters_are_recorded(self):
        assert self.decls["Pair"].kind == "struct"
        assert self.decls["Pair"].fields[0].names == ["Key"]
        assert self.decls["Pair"].type_params == ["K", "V"]
        assert self.decls["Status"].type_params == []

    def test_array_length_is_not_a_type_parameter(self):
        decls = parse_type_declarations("package p\n\ntype Grid [4]int\n")
        assert decls["Grid"].underlying == "[4]int"
        assert decls["Grid"].type_params == []


class TestTypeParameters:

    @pytest.mark.parametrize("text,names", [
        ("T any", ["T"]),
        ("K comparable, V any", ["K", "V"]),
        ("K, V any", ["K", "V"]),
        ("", []),
    ])
    def test_parse_type_params(self, text, names):
        assert parse_type_params(text) == names

    def test_erase_type_params(self):
        assert erase_type_params("[]T", ["T"]) == "[]interface{}"
        assert erase_type_params("map[K]V", ["K", "V"]) == "map[interface{}]interface{}"
        # Qualified names and longer identifiers are left alone
        assert erase_type_params("pkg.T", ["T"]) == "pkg.T"
        assert erase_type_params("Total", ["T"]) == "Total"
        assert erase_type_params("*T", ["T"]) == "*interface{}"


class TestFieldHelpers:

    def test_parse_field_line(self):
        field = parse_field_line('Name string `json:"name"`')
        assert field.names == ["Name"]
        assert field.type_name == "string"
        assert not field.embedded

        embedded = parse_field_line("models.Base")
        assert embedded.embedded
        assert embedded.names == ["Base"]

        assert parse_field_line("") is None

    def test_json_field_name(self):
        assert json_field_name('json:"name,omitempty"') == "name"
        assert json_field_name('json:",omitempty"') is None
        assert json_field_name('json:"-"') == "-"
        assert json_field_name('json:"-,"') == "-"
        assert json_field_name('xml:"name"') is None
        assert json_field_name("") is None

    def test_required_tags(self):
        assert is_required_tag('binding:"required"')
        assert is_required_tag('validate:"required,min=1"')
        assert not is_required_tag('validate:"min=1"')
        assert not is_required_tag('json:"required"')


class TestConstGroups:

    def test_groups_and_single_line_consts(self):
        source = '''package x

const (
	A Kind = iota // first
	B
	C, D = 1, 2
)

const Answer int = 42
'''
        groups = parse_const_groups(source)
        assert len(groups) == 2

        first = groups[0]
        assert first[0].names == ["A"]
        assert first[0].type_name == "Kind"
        assert first[0].values == ["iota"]
        assert first[1].names == ["B"]
        assert first[1].type_name is None
        assert first[1].values == []
        assert first[2].names == ["C", "D"]
        assert first[2].values == ["1", "2"]

        assert groups[1][0].names == ["Answer"]
        assert groups[1][0].values == ["42"]

    def test_strings_with_commas_and_comment_markers(self):
        groups = parse_const_groups('const Greeting Word = "hello, // world"\n')
        assert groups[0][0].values == ['"hello, // world"']


class TestStripComments:

    def test_offsets_are_preserved(self):
        source = 'a := 1 // note\nb := "// not a comment"\n/* x\ny */ c'
        stripped = strip_comments(source)
        assert len(stripped) == len(source)
        assert "note" not in stripped
        assert '"// not a comment"' in stripped
        assert stripped.count("\n") == source.count("\n")
