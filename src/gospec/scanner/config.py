import re

# Default patterns to ignore while walking a Go source tree
DEFAULT_IGNORE_PATTERNS = [
    ".git/",
    ".idea/",
    ".vscode/",
    "vendor/",
    "testdata/",
    "node_modules/",
    "_*/",
    ".*/",
]

GO_MOD_FILENAME = "go.mod"
GO_MOD_MODULE = re.compile(r"^\s*module\s+\"?([^\s\"]+)\"?", re.MULTILINE)

# Major version suffix of a module path, e.g. github.com/org/lib/v2
MAJOR_VERSION_SEGMENT = re.compile(r"^v\d+$")

# Aliases that bind no qualifier
NON_BINDING_ALIASES = {"_", "."}
