import textwrap
from typing import List, Optional

from gospec.schemas import Section
from .config import SECTION_HEADER


def parse_sections(block: str) -> List[Section]:
    """
    Splits an annotation block into titled sections.

    A line such as "OpenAPI Path:" opens a section and the lines up to the
    next header form its body, with the indentation common to the body
    removed. Text before the first header belongs to no section.
    """
    sections: List[Section] = []
    title: Optional[str] = None
    body: List[str] = []

    for line in block.splitlines():
        stripped = line.strip()
        if SECTION_HEADER.match(stripped):
            if title is not None:
                sections.append(_build_section(title, body))
            title = stripped[:-1].strip()
            body = []
        elif title is not None:
            body.append(line)

    if title is not None:
        sections.append(_build_section(title, body))

    return sections


def _build_section(title: str, body: List[str]) -> Section:
    text = textwrap.dedent("\n".join(line.rstrip() for line in body))
    return Section(title=title, body=text.strip("\n"))
