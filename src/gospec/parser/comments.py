"""
Comment block extraction.

Comment text is normalized the way `go/ast.CommentGroup.Text` does it:
comment markers are removed along with the first space after `//`, trailing
whitespace is trimmed, and leading/trailing blank lines are dropped.
"""

from pathlib import Path
from typing import Iterable, List

from gospec.exceptions import ParserError
from gospec.logging_config import logger
from gospec.schemas import PackageInfo
from .config import ANNOTATION_MARKERS, BLOCK_KEYWORDS
from .go_parser import GoComment, iter_comments


def extract_comment_blocks(content: str) -> List[str]:
    """
    Groups the comments of one Go file into blocks and keeps those that
    carry annotations. Consecutive `//` lines form one block; a `/* */`
    comment is a block of its own.
    """
    blocks: List[str] = []
    group: List[GoComment] = []

    for comment in iter_comments(content):
        if group and _continues(content, group[-1], comment):
            group.append(comment)
            continue
        if group:
            blocks.append(_group_text(group))
        group = [comment]

    if group:
        blocks.append(_group_text(group))

    return [block for block in blocks if _is_annotated(block)]


def _continues(content: str, previous: GoComment, comment: GoComment) -> bool:
    if previous.block or comment.block:
        return False
    gap = content[previous.end:comment.start]
    return not gap.strip() and gap.count("\n") == 1


def _group_text(group: List[GoComment]) -> str:
    lines: List[str] = []
    for comment in group:
        if comment.block:
            body = comment.text[2:]
            if body.endswith("*/"):
                body = body[:-2]
            lines.extend(body.splitlines())
        else:
            body = comment.text[2:]
            if body.startswith(" "):
                body = body[1:]
            lines.append(body)

    lines = [line.rstrip() for line in lines]
    while lines and not lines[0]:
        lines.pop(0)
    while lines and not lines[-1]:
        lines.pop()
    return "\n".join(lines) + "\n" if lines else ""


def _is_annotated(block: str) -> bool:
    lowered = block.lower()
    return any(marker in lowered for marker in ANNOTATION_MARKERS)


def collect_comment_blocks(package_info: PackageInfo) -> List[str]:
    """
    Annotated comment blocks of every source file of a package, in file order.

    Raises:
        ParserError: If a source file cannot be read.
    """
    blocks: List[str] = []
    for file_name in package_info.files:
        file_path = Path(package_info.directory) / file_name
        try:
            content = file_path.read_text(encoding="utf-8", errors="ignore")
        except OSError as e:
            raise ParserError(str(file_path), f"could not read source: {e}") from e
        found = extract_comment_blocks(content)
        if found:
            logger.debug(f"Found {len(found)} annotated comment blocks in '{file_path}'")
        blocks.extend(found)
    return blocks


def detect_blocks(blocks: Iterable[str], keyword: str) -> List[str]:
    """Blocks containing `keyword`, compared case-insensitively."""
    keyword = keyword.lower()
    return [block for block in blocks if keyword in block.lower()]


def _detect_any(blocks: Iterable[str], keywords) -> List[str]:
    blocks = list(blocks)
    return [block for block in blocks if any(detect_blocks([block], keyword) for keyword in keywords)]


def detect_operation_blocks(blocks: Iterable[str]) -> List[str]:
    # A block that does not name its path cannot describe an operation
    return _detect_any(blocks, BLOCK_KEYWORDS["operation"])


def detect_api_blocks(blocks: Iterable[str]) -> List[str]:
    return _detect_any(blocks, BLOCK_KEYWORDS["api"])


def detect_tag_blocks(blocks: Iterable[str]) -> List[str]:
    return _detect_any(blocks, BLOCK_KEYWORDS["tag"])
