"""
Enum constant extraction for scalar-backed named types.

    type Status int

    const (
        Active Status = iota   // 0
        Suspended              // 1
        Closed                 // 2
    )
"""

import ast
import re
from typing import Any, List

from gospec.logging_config import logger
from gospec.parser.go_parser import GoConstSpec
from .locator import PackageSources

IOTA = "iota"

INT_LITERAL = re.compile(r"^[+-]?(?:0[xX][0-9a-fA-F_]+|0[bB][01_]+|0[oO][0-7_]+|0[0-7_]*|[1-9][0-9_]*)$")
LEGACY_OCTAL = re.compile(r"^([+-]?)0([0-7_]+)$")
FLOAT_LITERAL = re.compile(r"^[+-]?(?:\d[\d_]*\.\d*|\.\d+|\d[\d_]*)(?:[eE][+-]?\d+)?$")


class EnumExtractor:
    """
    Collects the values of the constants declared with a given type.

    Within a const group the declared type carries forward to specs that omit
    it. A declaration without a value takes the next value of the group's implicit
    counter; an explicit `iota` restarts the counter at 0.
    """

    def __init__(self, sources: PackageSources):
        self.sources = sources

    def enum_values(self, package_path: str, type_name: str) -> List[Any]:
        values: List[Any] = []
        for group in self.sources.const_groups(package_path):
            values.extend(values_in_group(group, type_name))

        logger.debug(f"Found {len(values)} enum values for {package_path}.{type_name}")
        return values


def values_in_group(group: List[GoConstSpec], type_name: str) -> List[Any]:
    values: List[Any] = []
    declared_type = None
    counter = 0

    for spec in group:
        if spec.type_name:
            declared_type = spec.type_name
        if declared_type != type_name:
            continue

        if len(spec.names) != 1:
            logger.warning(f"Skipping constant declaration of {type_name} with more than one name: {', '.join(spec.names)}")
            continue
        if len(spec.values) > 1:
            logger.warning(f"Skipping constant declaration {spec.names[0]} of {type_name} with more than one value")
            continue

        if not spec.values:
            counter += 1
            values.append(counter)
        elif spec.values[0] == IOTA:
            counter = 0
            values.append(0)
        else:
            values.append(decode_literal(spec.values[0]))

    return values


def decode_literal(text: str) -> Any:
    """
    Decode a Go constant literal.

    Quoted strings become str, integer literals int, float literals float.
    Anything else (identifiers, expressions, runes) is returned as written.
    """
    text = text.strip()

    if len(text) >= 2 and text[0] == text[-1] == '"':
        try:
            return ast.literal_eval(text)
        except (ValueError, SyntaxError):
            return text[1:-1]
    if len(text) >= 2 and text[0] == text[-1] == "`":
        return text[1:-1]

    if INT_LITERAL.match(text):
        legacy = LEGACY_OCTAL.match(text)
        if legacy:
            return int(legacy.group(1) + legacy.group(2).replace("_", ""), 8)
        return int(text.replace("_", ""), 0)

    if FLOAT_LITERAL.match(text):
        return float(text.replace("_", ""))

    return text
