"""Tests for the source backed type locator."""

import pytest

pytestmark = pytest.mark.fast

from gospec.config import GospecConfig
from gospec.pipeline import generate
from gospec.resolution import PackageSources, SourceTypeLocator
from gospec.scanner import discover_packages

MODELS = "example.com/petstore/models"


@pytest.fixture
def locator(petstore_dir):
    return SourceTypeLocator(discover_packages(petstore_dir))


class TestSourceTypeLocator:

    def test_struct_members_follow_json_rules(self, locator):
        user = locator.locate(MODELS, "User")

        assert user.package_path == MODELS
        assert user.package_name == "models"
        assert user.underlying is None

        names = [m.serialized_name for m in user.members]
        # Password is json:"-", secret is unexported
        assert names == ["Base", "id", "name", "email", "status", "favorite_color", "address", "labels"]

        by_name = {m.serialized_name: m for m in user.members}
        assert by_name["Base"].is_embedded
        assert by_name["id"].required
        assert by_name["id"].description == "Public identifier"
        assert by_name["name"].required
        assert not by_name["email"].required
        assert by_name["labels"].type_name == "map[string][]Label"

    def test_unexported_fields_are_dropped(self, locator):
        base = locator.locate(MODELS, "Base")
        assert [m.serialized_name for m in base.members] == ["id", "created_at"]
        assert base.members[1].description == "Creation timestamp"

    def test_scalar_named_types_are_enum_candidates(self, locator):
        status = locator.locate(MODELS, "Status")
        assert status.underlying == "int"
        assert status.is_enum_candidate
        assert status.members == []

    def test_unknown_names_and_packages(self, locator):
        assert locator.locate(MODELS, "Nope") is None
        assert locator.locate("example.com/elsewhere", "User") is None

    def test_embedded_field_with_json_name_is_a_member(self, tmp_path):
        (tmp_path / "go.mod").write_text("module example.com/app\n")
        (tmp_path / "m.go").write_text(
            "package app\n\n"
            "type Outer struct {\n"
            "\tInner `json:\"inner\"`\n"
            "\t*Other\n"
            "}\n"
        )
        located = SourceTypeLocator(discover_packages(tmp_path)).locate("example.com/app", "Outer")

        inner, other = located.members
        assert (inner.serialized_name, inner.is_embedded, inner.type_name) == ("inner", False, "Inner")
        assert (other.serialized_name, other.is_embedded, other.type_name) == ("Other", True, "*Other")


class TestPackageSources:

    def test_declarations_are_cached_per_package(self, petstore_dir):
        sources = PackageSources(discover_packages(petstore_dir))
        first = sources.type_declarations(MODELS)
        assert sources.type_declarations(MODELS) is first
        assert {"User", "Base", "Status", "Color"} <= set(first)


class TestGenericTypes:

    def test_type_parameters_become_free_form(self, tmp_path):
        (tmp_path / "go.mod").write_text("module example.com/g\n")
        (tmp_path / "page.go").write_text(
            "package g\n\n"
            "type Page[T any] struct {\n"
            "\tItems []T `json:\"items\"`\n"
            "\tNext  *T  `json:\"next\"`\n"
            "\tTotal int `json:\"total\"`\n"
            "}\n\n"
            "type Box[T any] T\n"
        )
        locator = SourceTypeLocator(discover_packages(tmp_path))

        page = locator.locate("example.com/g", "Page")
        assert [(m.serialized_name, m.type_name) for m in page.members] == [
            ("items", "[]interface{}"),
            ("next", "*interface{}"),
            ("total", "int"),
        ]

        box = locator.locate("example.com/g", "Box")
        assert box.underlying == "interface{}"
        assert not box.is_enum_candidate

    def test_generic_response_generates_a_document(self, tmp_path):
        (tmp_path / "go.mod").write_text("module example.com/g\n")
        (tmp_path / "page.go").write_text(
            "package g\n\n"
            "type Page[T any] struct {\n"
            "\tItems []T `json:\"items\"`\n"
            "}\n\n"
            "// @Title List pages\n"
            "// @Success 200 {object} Page \"A page\"\n"
            "// @Router /pages [get]\n"
            "func ListPages() {}\n"
        )
        document = generate(tmp_path, GospecConfig(naming="simple")).document

        assert document["definitions"]["Page"]["properties"]["items"] == {
            "type": "array", "items": {"type": "object"},
        }
        assert document["paths"]["/pages"]["get"]["responses"]["200"]["schema"] == {"$ref": "#/definitions/Page"}
