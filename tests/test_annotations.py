"""Tests for comment block extraction, section parsing and annotation scraping."""

import pytest

pytestmark = pytest.mark.fast

from gospec.parser import (
    detect_api_blocks,
    detect_blocks,
    detect_operation_blocks,
    detect_tag_blocks,
    extract_comment_blocks,
    parse_api_info,
    parse_operation,
    parse_sections,
    parse_tags,
    scrape_annotations,
)
from gospec.scanner import discover_packages


class TestCommentBlocks:

    def test_adjacent_line_comments_form_one_block(self):
        source = '''package api

// @Title One
// @Router /one [get]

// @Title Two
// @Router /two [get]
func Two() {}
'''
        blocks = extract_comment_blocks(source)
        assert blocks == [
            "@Title One\n@Router /one [get]\n",
            "@Title Two\n@Router /two [get]\n",
        ]

    def test_block_comment_is_its_own_block(self):
        source = '''package api

/*
OpenAPI Path:
	/items
*/
func Items() {}
'''
        assert extract_comment_blocks(source) == ["OpenAPI Path:\n\t/items\n"]

    def test_unannotated_comments_are_dropped(self):
        source = '''package api

// Items lists items.
func Items() {
	// loop over everything
}
'''
        assert extract_comment_blocks(source) == []

    def test_comment_markers_inside_strings_are_not_comments(self):
        source = 'package api\n\nvar s = "// @Router /fake [get]"\n'
        assert extract_comment_blocks(source) == []

    def test_detection_is_case_insensitive(self):
        blocks = ["openapi path:\n\t/a\n", "OpenAPI API Title:\n\tX\n", "OpenAPI Tag:\n\tUsers\n", "nothing"]
        assert detect_blocks(blocks, "OPENAPI PATH:") == [blocks[0]]
        assert detect_operation_blocks(blocks) == [blocks[0]]
        assert detect_api_blocks(blocks) == [blocks[1]]
        assert detect_tag_blocks(blocks) == [blocks[2]]

    def test_router_annotation_marks_an_operation(self):
        assert detect_operation_blocks(["@Router /a [get]\n"]) == ["@Router /a [get]\n"]


class TestSections:

    def test_sections_and_dedented_bodies(self):
        block = (
            "Intro text that belongs to no section.\n"
            "OpenAPI Summary:\n"
            "\tList users\n"
            "OpenAPI Description:\n"
            "\tFirst line.\n"
            "\n"
            "\t\tIndented detail.\n"
        )
        sections = parse_sections(block)
        assert [section.title for section in sections] == ["OpenAPI Summary", "OpenAPI Description"]
        assert sections[0].body == "List users"
        assert sections[1].body == "First line.\n\n\tIndented detail."

    def test_lines_skip_blanks(self):
        section = parse_sections("openapi responses:\n  200 A ok\n\n  404 nil missing\n")[0]
        assert section.lines() == ["200 A ok", "404 nil missing"]
        assert section.line(1) == "404 nil missing"
        assert section.line(2) is None


class TestParseOperation:

    def test_section_notation(self):
        block = '''OpenAPI Summary:
	List villages
OpenAPI Path:
	/api/villages
OpenAPI Method:
	GET
OpenAPI Query String Parameters:
	world  string  required  World UUID
	x      int     optional  X-coordinate
OpenAPI Path Parameters:
	id  int64  optional  Village id
OpenAPI Header Parameters:
	X-Token  string  required
OpenAPI Request Body:
	types.Filter
OpenAPI Responses:
	200  []types.Village  List of villages
	404  nil  Not found
OpenAPI Tags:
	Villages, Maps
OpenAPI Content Type:
	json
'''
        operation = parse_operation(block, package_path="example.com/game/rest")

        assert operation.summary == "List villages"
        assert operation.path == "/api/villages"
        assert operation.method == "GET"
        assert operation.package_path == "example.com/game/rest"
        assert operation.tags == ["Villages", "Maps"]
        assert operation.accepts == ["application/json"]

        params = {(p.location, p.name): p for p in operation.parameters}
        assert params[("query", "world")].required
        assert params[("query", "world")].description == "World UUID"
        assert not params[("query", "x")].required
        assert params[("query", "x")].type_name == "int"
        assert params[("path", "id")].required
        assert params[("header", "X-Token")].required
        assert params[("body", "body")].type_name == "types.Filter"

        assert [(r.status_code, r.type_name, r.success) for r in operation.responses] == [
            (200, "[]types.Village", True),
            (404, "nil", False),
        ]
        assert operation.responses[0].description == "List of villages"

    def test_annotation_notation(self):
        block = '''@Title Create a user
@Description Stores a new user.
@Accept json, XML, text/plain
@Param body body m.User true "The user to create"
@Param verbose query bool false "Verbose output"
@Success 201 {object} m.User "Created"
@Success 200 {array} m.User "Listed"
@Failure 400 {object} m.Error "Invalid input"
@Tags Users, Admin
@Router /users/{id} [post]
'''
        operation = parse_operation(block)

        assert operation.summary == "Create a user"
        assert operation.description == "Stores a new user."
        assert operation.accepts == ["application/json", "application/xml", "text/plain"]
        assert operation.path == "/users/{id}"
        assert operation.method == "post"
        assert operation.tags == ["Users", "Admin"]

        body, verbose = operation.parameters
        assert (body.name, body.location, body.type_name, body.required) == ("body", "body", "m.User", True)
        assert (verbose.location, verbose.required) == ("query", False)

        assert [(r.status_code, r.type_name, r.success) for r in operation.responses] == [
            (201, "m.User", True),
            (200, "[]m.User", True),
            (400, "m.Error", False),
        ]

    def test_nil_request_body_adds_no_parameter(self):
        operation = parse_operation("OpenAPI Path:\n\t/a\nOpenAPI Request Body:\n\tnil\n")
        assert operation.parameters == []

    def test_unrecognized_response_line_is_reported(self, warnings_log):
        operation = parse_operation("OpenAPI Responses:\n\tokay then\n")
        assert operation.responses == []
        assert any("Unrecognized response line" in message for message in warnings_log)


class TestApiInfoAndTags:

    def test_api_info_from_sections(self):
        api = parse_api_info([
            "OpenAPI API Title:\n\tPetstore\nOpenAPI API Version:\n\t1.0.0\n"
            "OpenAPI API Description:\n\tA store.\nOpenAPI Base Path:\n\t/api/v1\n",
        ])
        assert (api.title, api.version, api.description, api.base_path) == ("Petstore", "1.0.0", "A store.", "/api/v1")

    def test_api_info_from_annotations_later_blocks_win(self):
        api = parse_api_info([
            "@APITitle First\n@APIVersion 0.1\n",
            "@APITitle REST API\n@APIDescription EMS Rest API\n@BasePath /api/v2\n",
        ])
        assert api.title == "REST API"
        assert api.version == "0.1"
        assert api.description == "EMS Rest API"
        assert api.base_path == "/api/v2"

    def test_tags(self):
        tags = parse_tags("OpenAPI Tag:\n\tUsers\n\tOperations on users.\n\tAnd more.\nOpenAPI Tag:\n\tAdmin\n")
        assert [(tag.name, tag.description) for tag in tags] == [
            ("Users", "Operations on users.\nAnd more."),
            ("Admin", ""),
        ]


class TestScrapeAnnotations:

    def test_scrapes_the_sample_tree(self, petstore_dir):
        result = scrape_annotations(discover_packages(petstore_dir))

        assert result.api.title == "Petstore"
        assert result.api.base_path == "/api/v1"
        assert [(tag.name, tag.description) for tag in result.tags] == [("Users", "Operations on users.")]

        routes = [(op.method.lower(), op.path) for op in result.operations]
        assert routes == [("get", "/users"), ("post", "/users"), ("get", "/inventory")]
        assert all(op.package_path == "example.com/petstore/api" for op in result.operations)

    def test_test_files_and_ignored_directories_are_not_scraped(self, petstore_dir):
        result = scrape_annotations(discover_packages(petstore_dir))
        paths = {op.path for op in result.operations}
        assert "/from-tests" not in paths
        assert "/never" not in paths
