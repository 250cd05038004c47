import re

# Source files considered part of a package
GO_SOURCE_SUFFIX = ".go"
GO_TEST_SUFFIX = "_test.go"

# Go declaration patterns.
# We use re.MULTILINE to allow ^ to match the start of each line.
GO_QUERIES = {
    "package": re.compile(r"^\s*package\s+([A-Za-z_][A-Za-z0-9_]*)", re.MULTILINE),
    "import_decl": re.compile(r"^import\s*(?:\((?P<group>.*?)\)|(?P<single>[^\n]+))", re.MULTILINE | re.DOTALL),
    "import_spec": re.compile(r'^\s*(?:(?P<alias>[A-Za-z_][A-Za-z0-9_]*|\.)\s+)?"(?P<path>[^"]+)"', re.MULTILINE),
    "type_decl": re.compile(r"^type\b", re.MULTILINE),
    # Name, optional generic parameter list attached to it, optional alias '='
    "type_spec_head": re.compile(r"([A-Za-z_][A-Za-z0-9_]*)(?:\[([A-Za-z_][^\]\n]*\s[^\]\n]+)\])?[ \t]*(?:=[ \t]*)?"),
    "struct_start": re.compile(r"struct\s*\{"),
    "const_decl": re.compile(r"^const\b", re.MULTILINE),
    "const_lhs": re.compile(r"^([A-Za-z_][A-Za-z0-9_]*(?:\s*,\s*[A-Za-z_][A-Za-z0-9_]*)*)(?:\s+(.+))?$"),
}

# Struct field patterns
FIELD_QUERIES = {
    "tag": re.compile(r"`([^`]*)`\s*$"),
    "tag_pair": re.compile(r'([A-Za-z_][A-Za-z0-9_]*):"((?:[^"\\]|\\.)*)"'),
    "embedded": re.compile(r"^\*?[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)?$"),
    "named": re.compile(r"^([A-Za-z_][A-Za-z0-9_]*(?:\s*,\s*[A-Za-z_][A-Za-z0-9_]*)*)\s+(\S.*)$"),
}

# Struct tag keys whose options can mark a field as required
REQUIRED_TAG_KEYS = ("binding", "validate")

# Comment blocks worth keeping mention one of these (case-insensitive)
ANNOTATION_MARKERS = ("openapi", "@router", "@apititle", "@title", "@param", "@success", "@failure")

# Keywords identifying the kind of an annotation block
BLOCK_KEYWORDS = {
    "operation": ("OpenAPI Path:", "@Router"),
    "api": ("OpenAPI API Title:", "@APITitle"),
    "tag": ("OpenAPI Tag:",),
}

# A line opening a section, e.g. "OpenAPI Responses:"
SECTION_HEADER = re.compile(r"^openapi\b.*:$", re.IGNORECASE)

# Single-line annotations
ANNOTATION_QUERIES = {
    "accept": re.compile(r"@Accept\s+(.+)"),
    "description": re.compile(r"@Description\s+(.+)"),
    "param": re.compile(r'@Param\s+([\w-]+)\s+(\w+)\s+([\w.\[\]*]+)\s+(\w+)\s+"(.+)"'),
    "response": re.compile(r'@(Success|Failure)\s+(\d+)\s+\{(\w+)\}\s+([\w.\[\]*]+)\s+"(.+)"'),
    "router": re.compile(r"@Router\s+([/\w{}.:-]+)\s+\[(\w+)\]"),
    "title": re.compile(r"@Title\s+(.+)"),
    "tags": re.compile(r"@Tags\s+(.+)"),
    "api_title": re.compile(r"@APITitle\s+(.+)"),
    "api_version": re.compile(r"@APIVersion\s+(\S+)"),
    "api_description": re.compile(r"@APIDescription\s+(.+)"),
    "base_path": re.compile(r"@BasePath\s+([/\w.{}-]+)"),
}

# Section body lines
SECTION_QUERIES = {
    # name  type  required|optional  description
    "parameter": re.compile(r"^([\w-]+)\s+([\w.\[\]*]+)\s+(\w+)(?:\s+(.+))?$"),
    # status  type  description
    "response": re.compile(r"^(\d{3})\s+([\w.\[\]*{}]+)(?:\s+(.+))?$"),
}

# Content type shorthands
MIME_SHORTHANDS = {
    "json": "application/json",
    "xml": "application/xml",
}
