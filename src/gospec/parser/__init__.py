"""
This facade exposes the public API for the parser module.
Other parts of the application should only import from here,
not from internal modules.
"""
from .annotations import parse_api_info, parse_operation, parse_tags, scrape_annotations
from .comments import (
    collect_comment_blocks,
    detect_api_blocks,
    detect_blocks,
    detect_operation_blocks,
    detect_tag_blocks,
    extract_comment_blocks,
)
from .sections import parse_sections
from .go_parser import (
    GoConstSpec,
    GoField,
    GoTypeDecl,
    parse_const_groups,
    parse_imports,
    parse_package_clause,
    parse_type_declarations,
    strip_comments,
)

__all__ = [
    "parse_api_info",
    "parse_operation",
    "parse_tags",
    "scrape_annotations",
    "collect_comment_blocks",
    "detect_api_blocks",
    "detect_blocks",
    "detect_operation_blocks",
    "detect_tag_blocks",
    "extract_comment_blocks",
    "parse_sections",
    "GoConstSpec",
    "GoField",
    "GoTypeDecl",
    "parse_const_groups",
    "parse_imports",
    "parse_package_clause",
    "parse_type_declarations",
    "strip_comments",
]
