"""
Regex-based extraction of the Go declarations gospec needs: the package
clause, imports, type declarations (with struct fields) and const groups.

Comments are blanked out before matching so that commented-out code is never
picked up; blanking preserves offsets and newlines, so positions found in the
blanked text index the original text as well.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from gospec.logging_config import logger
from .config import FIELD_QUERIES, GO_QUERIES, REQUIRED_TAG_KEYS


@dataclass
class GoComment:
    start: int
    end: int
    text: str
    block: bool


@dataclass
class GoField:
    names: List[str]
    type_name: str
    tag: str = ""
    comment: str = ""
    embedded: bool = False


@dataclass
class GoTypeDecl:
    name: str
    kind: str  # "struct" or "named"
    fields: List[GoField] = field(default_factory=list)
    underlying: Optional[str] = None
    type_params: List[str] = field(default_factory=list)


@dataclass
class GoConstSpec:
    names: List[str]
    type_name: Optional[str]
    values: List[str]


def iter_comments(content: str) -> Iterator[GoComment]:
    """
    Yield every comment in source order, skipping comment markers that
    appear inside string, raw string and rune literals.
    """
    index = 0
    length = len(content)
    while index < length:
        char = content[index]
        if char in ('"', "'"):
            index = _skip_quoted(content, index, char)
        elif char == "`":
            close = content.find("`", index + 1)
            index = length if close == -1 else close + 1
        elif content.startswith("//", index):
            end = content.find("\n", index)
            end = length if end == -1 else end
            yield GoComment(index, end, content[index:end], block=False)
            index = end
        elif content.startswith("/*", index):
            end = content.find("*/", index + 2)
            end = length if end == -1 else end + 2
            yield GoComment(index, end, content[index:end], block=True)
            index = end
        else:
            index += 1


def _skip_quoted(content: str, index: int, quote: str) -> int:
    index += 1
    while index < len(content):
        char = content[index]
        if char == "\\":
            index += 2
            continue
        if char == quote or char == "\n":
            return index + 1
        index += 1
    return index


def strip_comments(content: str) -> str:
    """Blank out comments, keeping newlines and offsets intact."""
    chunks = []
    cursor = 0
    for comment in iter_comments(content):
        chunks.append(content[cursor:comment.start])
        chunks.append(re.sub(r"[^\n]", " ", comment.text))
        cursor = comment.end
    chunks.append(content[cursor:])
    return "".join(chunks)


def parse_package_clause(content: str) -> Optional[str]:
    match = GO_QUERIES["package"].search(strip_comments(content))
    return match.group(1) if match else None


def parse_imports(content: str) -> List[Tuple[Optional[str], str]]:
    """
    Extract imports in declaration order.

    Returns:
        List of (alias, import_path); alias is None when not given explicitly.
        Blank and dot imports are reported with alias "_" and ".".
    """
    imports: List[Tuple[Optional[str], str]] = []
    code = strip_comments(content)

    for decl in GO_QUERIES["import_decl"].finditer(code):
        body = decl.group("group") if decl.group("group") is not None else decl.group("single")
        for spec in GO_QUERIES["import_spec"].finditer(body):
            imports.append((spec.group("alias"), spec.group("path")))

    return imports


def parse_type_declarations(content: str) -> Dict[str, GoTypeDecl]:
    """
    Extract top-level type declarations, both single and grouped:

        type User struct { ... }
        type Status int
        type (
            Users []User
            ID = string
        )
    """
    code = strip_comments(content)
    decls: Dict[str, GoTypeDecl] = {}

    for match in GO_QUERIES["type_decl"].finditer(code):
        cursor = _skip_space(code, match.end())
        if code.startswith("(", cursor):
            close = _find_closing(code, cursor, "(", ")")
            cursor += 1
            while True:
                cursor = _skip_space(code, cursor)
                if cursor >= close:
                    break
                decl, cursor = _parse_type_spec(code, content, cursor, close)
                if decl:
                    decls[decl.name] = decl
        else:
            decl, _ = _parse_type_spec(code, content, cursor, len(code))
            if decl:
                decls[decl.name] = decl

    return decls


def _parse_type_spec(code: str, raw: str, start: int, limit: int) -> Tuple[Optional[GoTypeDecl], int]:
    head = GO_QUERIES["type_spec_head"].match(code, start)
    if not head:
        return None, _next_line(code, start, limit)

    name = head.group(1)
    type_params = parse_type_params(head.group(2) or "")
    cursor = head.end()

    if GO_QUERIES["struct_start"].match(code, cursor):
        brace = code.index("{", cursor)
        close = _find_closing(code, brace, "{", "}")
        fields = _parse_struct_fields(code[brace + 1:close], raw[brace + 1:close], name)
        return GoTypeDecl(name=name, kind="struct", fields=fields, type_params=type_params), close + 1

    line_end = _next_line(code, cursor, limit)
    underlying = code[cursor:line_end].strip()
    if "{" in underlying:
        # interface{ ... } or a container of an anonymous struct
        brace = code.index("{", cursor)
        close = _find_closing(code, brace, "{", "}")
        text = code[cursor:close + 1].strip()
        underlying = re.sub(r"(?:struct|interface)\s*\{.*\}", "interface{}", text, flags=re.DOTALL)
        line_end = close + 1

    if not underlying:
        return None, line_end
    return GoTypeDecl(name=name, kind="named", underlying=underlying, type_params=type_params), line_end


def parse_type_params(text: str) -> List[str]:
    """
    Names declared by a type parameter list.

    Examples:
        "T any"                    -> ["T"]
        "K comparable, V any"      -> ["K", "V"]
        "K, V any"                 -> ["K", "V"]
    """
    names = []
    for part in text.split(","):
        words = part.split()
        if words:
            names.append(words[0])
    return names


def erase_type_params(type_text: str, type_params: List[str]) -> str:
    """Replace every bare use of a type parameter with interface{}."""
    for param in type_params:
        type_text = re.sub(rf"(?<![\w.]){re.escape(param)}\b", "interface{}", type_text)
    return type_text


def _parse_struct_fields(code_body: str, raw_body: str, owner: str) -> List[GoField]:
    fields: List[GoField] = []
    code_lines = code_body.split("\n")
    raw_lines = raw_body.split("\n")

    index = 0
    while index < len(code_lines):
        line = code_lines[index]
        raw_line = raw_lines[index]
        depth = line.count("{") - line.count("}")

        if depth > 0:
            # Inline anonymous struct: consume through its closing brace
            last = index
            while depth > 0 and last + 1 < len(code_lines):
                last += 1
                depth += code_lines[last].count("{") - code_lines[last].count("}")
            head = line[:line.index("{")].split()
            tag_match = FIELD_QUERIES["tag"].search(code_lines[last].strip())
            if head:
                logger.warning(f"Inline anonymous struct field '{head[0]}' of '{owner}' is documented as a generic object")
                fields.append(GoField(
                    names=[head[0]],
                    type_name=("[]" if "[]" in "".join(head[1:]) else "") + "interface{}",
                    tag=tag_match.group(1) if tag_match else "",
                ))
            index = last + 1
            continue

        parsed = parse_field_line(line.strip())
        if parsed:
            parsed.comment = _trailing_comment(line, raw_line)
            fields.append(parsed)
        index += 1

    return fields


def parse_field_line(text: str) -> Optional[GoField]:
    """
    Parse one struct field line (comments already removed).

    Examples:
        Name string `json:"name"`   -> names=["Name"], type_name="string"
        X, Y int                    -> names=["X", "Y"]
        *models.Base                -> embedded, names=["Base"]
    """
    if not text:
        return None

    tag = ""
    tag_match = FIELD_QUERIES["tag"].search(text)
    if tag_match:
        tag = tag_match.group(1)
        text = text[:tag_match.start()].strip()

    if FIELD_QUERIES["embedded"].match(text):
        name = text.lstrip("*").split(".")[-1]
        return GoField(names=[name], type_name=text, tag=tag, embedded=True)

    match = FIELD_QUERIES["named"].match(text)
    if not match:
        logger.debug(f"Unrecognized struct field line: {text!r}")
        return None

    names = [name.strip() for name in match.group(1).split(",")]
    return GoField(names=names, type_name=match.group(2).strip(), tag=tag)


def _trailing_comment(code_line: str, raw_line: str) -> str:
    for position, (code_char, raw_char) in enumerate(zip(code_line, raw_line)):
        if code_char != raw_char:
            text = raw_line[position:].strip()
            if text.startswith("//"):
                return text[2:].strip()
            return text.strip("/*").strip()
    return ""


def parse_struct_tag(tag: str) -> Dict[str, str]:
    """`json:"name,omitempty" binding:"required"` -> {"json": "name,omitempty", "binding": "required"}"""
    return {key: value for key, value in FIELD_QUERIES["tag_pair"].findall(tag or "")}


def json_field_name(tag: str) -> Optional[str]:
    """The name given by the json tag: None if absent or empty, "-" if the field is skipped."""
    options = parse_struct_tag(tag).get("json")
    if options is None:
        return None
    name = options.split(",")[0].strip()
    if options.strip() == "-":
        return "-"
    return name or None


def is_required_tag(tag: str) -> bool:
    tags = parse_struct_tag(tag)
    for key in REQUIRED_TAG_KEYS:
        options = [option.strip() for option in tags.get(key, "").split(",")]
        if "required" in options:
            return True
    return False


def parse_const_groups(content: str) -> List[List[GoConstSpec]]:
    """
    Extract const declarations; each parenthesized block is one group, a
    single-line const is a group of its own.
    """
    code = strip_comments(content)
    groups: List[List[GoConstSpec]] = []

    for match in GO_QUERIES["const_decl"].finditer(code):
        cursor = _skip_space(code, match.end())
        if code.startswith("(", cursor):
            close = _find_closing(code, cursor, "(", ")")
            lines = code[cursor + 1:close].split("\n")
        else:
            lines = [code[cursor:_next_line(code, cursor, len(code))]]

        specs = [spec for spec in (parse_const_spec(line) for line in lines) if spec]
        if specs:
            groups.append(specs)

    return groups


def parse_const_spec(line: str) -> Optional[GoConstSpec]:
    """`A, B Kind = 1, 2` -> names=["A", "B"], type_name="Kind", values=["1", "2"]"""
    text = line.strip().rstrip(";").strip()
    if not text:
        return None

    equals = _top_level_index(text, "=")
    lhs = text if equals == -1 else text[:equals].strip()
    rhs = "" if equals == -1 else text[equals + 1:].strip()

    match = GO_QUERIES["const_lhs"].match(lhs)
    if not match:
        logger.debug(f"Unrecognized const spec: {text!r}")
        return None

    names = [name.strip() for name in match.group(1).split(",")]
    type_name = match.group(2).strip() if match.group(2) else None
    values = _split_top_level(rhs) if rhs else []
    return GoConstSpec(names=names, type_name=type_name, values=values)


def _top_level_index(text: str, target: str) -> int:
    depth = 0
    index = 0
    while index < len(text):
        char = text[index]
        if char in ('"', "'"):
            index = _skip_quoted(text, index, char)
            continue
        if char == "`":
            close = text.find("`", index + 1)
            index = len(text) if close == -1 else close + 1
            continue
        if char in "([{":
            depth += 1
        elif char in ")]}":
            depth -= 1
        elif char == target and depth == 0:
            return index
        index += 1
    return -1


def _split_top_level(text: str) -> List[str]:
    parts = []
    while True:
        comma = _top_level_index(text, ",")
        if comma == -1:
            parts.append(text.strip())
            return [part for part in parts if part]
        parts.append(text[:comma].strip())
        text = text[comma + 1:]


def _skip_space(code: str, index: int) -> int:
    while index < len(code) and code[index].isspace():
        index += 1
    return index


def _next_line(code: str, index: int, limit: int) -> int:
    end = code.find("\n", index)
    if end == -1 or end > limit:
        return limit
    return end


def _find_closing(code: str, open_index: int, open_char: str, close_char: str) -> int:
    depth = 0
    index = open_index
    while index < len(code):
        char = code[index]
        if char in ('"', "'"):
            index = _skip_quoted(code, index, char)
            continue
        if char == "`":
            close = code.find("`", index + 1)
            index = len(code) if close == -1 else close + 1
            continue
        if char == open_char:
            depth += 1
        elif char == close_char:
            depth -= 1
            if depth == 0:
                return index
        index += 1
    return len(code)
