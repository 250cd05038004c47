"""
Scrapes operations, API information and tags out of annotated comment blocks.

No type checking happens here; type names are kept exactly as written and
resolved later against the package the block was found in.
"""

from typing import Iterable, List, Optional

from gospec.logging_config import logger
from gospec.schemas import ApiInfo, Operation, Parameter, Response, ScrapeResult, Section, Tag
from gospec.tracing import trace
from .comments import collect_comment_blocks, detect_api_blocks, detect_operation_blocks, detect_tag_blocks
from .config import ANNOTATION_QUERIES, MIME_SHORTHANDS, SECTION_QUERIES
from .sections import parse_sections

PARAMETER_SECTIONS = {
    "openapi query string parameters": "query",
    "openapi path parameters": "path",
    "openapi header parameters": "header",
}


def parse_operation(block: str, package_path: str = "") -> Operation:
    """
    Builds an Operation from one comment block. Both notations are read:

        OpenAPI Path:
            /users/{id}
        OpenAPI Method:
            GET
        OpenAPI Responses:
            200  models.User  The user

    and

        @Router /users/{id} [get]
        @Success 200 {object} models.User "The user"

    Single-line annotations are applied after sections and win on conflict.
    """
    operation = Operation(package_path=package_path)

    for section in parse_sections(block):
        _apply_section(operation, section)

    for line in block.splitlines():
        _apply_annotation(operation, line)

    return operation


def _apply_section(operation: Operation, section: Section) -> None:
    title = section.title.strip().lower()

    if title == "openapi summary":
        operation.summary = section.line(0) or ""
    elif title == "openapi path":
        operation.path = section.line(0) or ""
    elif title == "openapi method":
        operation.method = section.line(0) or ""
    elif title == "openapi description":
        operation.description = section.body
    elif title in PARAMETER_SECTIONS:
        location = PARAMETER_SECTIONS[title]
        for line in section.lines():
            parameter = _parse_parameter_line(line, location)
            if parameter is None:
                logger.warning(f"Unrecognized {location} parameter line: '{line}'")
                continue
            operation.parameters.append(parameter)
    elif title == "openapi request body":
        type_name = section.line(0)
        if type_name and type_name.lower() != "nil":
            operation.parameters.append(
                Parameter(name="body", location="body", type_name=type_name, required=True)
            )
    elif title == "openapi responses":
        for line in section.lines():
            match = SECTION_QUERIES["response"].match(line)
            if match is None:
                logger.warning(f"Unrecognized response line: '{line}'")
                continue
            status_code = int(match.group(1))
            operation.responses.append(Response(
                status_code=status_code,
                type_name=match.group(2),
                success=status_code < 400,
                description=(match.group(3) or "").strip(),
            ))
    elif title == "openapi tags":
        for line in section.lines():
            _add_tags(operation, line)
    elif title == "openapi content type":
        for line in section.lines():
            _add_accepts(operation, line)
    else:
        logger.debug(f"Ignoring section '{section.title}'")


def _parse_parameter_line(line: str, location: str) -> Optional[Parameter]:
    match = SECTION_QUERIES["parameter"].match(line)
    if match is None:
        return None
    name, type_name, requirement, description = match.groups()
    return Parameter(
        name=name,
        location=location,
        type_name=type_name,
        # Path parameters are always required
        required=requirement.lower() == "required" or location == "path",
        description=(description or "").strip().strip('"'),
    )


def _apply_annotation(operation: Operation, line: str) -> None:
    queries = ANNOTATION_QUERIES

    match = queries["accept"].search(line)
    if match:
        _add_accepts(operation, match.group(1))
        return

    match = queries["description"].search(line)
    if match:
        operation.description = match.group(1).strip()
        return

    match = queries["param"].search(line)
    if match:
        name, location, type_name, required, description = match.groups()
        operation.parameters.append(Parameter(
            name=name,
            location=location.lower(),
            type_name=type_name,
            required=required.lower() == "true",
            description=description,
        ))
        return

    match = queries["response"].search(line)
    if match:
        kind, status, meta, type_name, description = match.groups()
        if meta.lower() == "array" and not type_name.startswith("[]"):
            type_name = "[]" + type_name
        operation.responses.append(Response(
            status_code=int(status),
            type_name=type_name,
            success=kind.lower() == "success",
            description=description,
        ))
        return

    match = queries["router"].search(line)
    if match:
        operation.path = match.group(1)
        operation.method = match.group(2)
        return

    match = queries["title"].search(line)
    if match:
        operation.summary = match.group(1).strip()
        return

    match = queries["tags"].search(line)
    if match:
        _add_tags(operation, match.group(1))


def _add_accepts(operation: Operation, raw: str) -> None:
    for accept in raw.split(","):
        accept = accept.strip().lower()
        if not accept:
            continue
        accept = MIME_SHORTHANDS.get(accept, accept)
        if accept not in operation.accepts:
            operation.accepts.append(accept)


def _add_tags(operation: Operation, raw: str) -> None:
    for tag in raw.split(","):
        tag = tag.strip()
        if tag and tag not in operation.tags:
            operation.tags.append(tag)


def parse_api_info(blocks: Iterable[str]) -> ApiInfo:
    """
    Condenses every API block into one ApiInfo. Later blocks override
    fields set by earlier ones.
    """
    api = ApiInfo()
    queries = ANNOTATION_QUERIES

    for block in blocks:
        for section in parse_sections(block):
            title = section.title.strip().lower()
            if title == "openapi api title":
                api.title = section.line(0) or api.title
            elif title == "openapi api version":
                api.version = section.line(0) or api.version
            elif title == "openapi api description":
                api.description = section.body or api.description
            elif title == "openapi base path":
                api.base_path = section.line(0) or api.base_path

        for line in block.splitlines():
            match = queries["api_description"].search(line)
            if match:
                api.description = match.group(1).strip()
                continue
            match = queries["api_title"].search(line)
            if match:
                api.title = match.group(1).strip()
                continue
            match = queries["api_version"].search(line)
            if match:
                api.version = match.group(1)
                continue
            match = queries["base_path"].search(line)
            if match:
                api.base_path = match.group(1)

    return api


def parse_tags(block: str) -> List[Tag]:
    """
    Tags declared in a block. The first body line of an "OpenAPI Tag:"
    section is the tag name, the remaining lines its description.
    """
    tags = []
    for section in parse_sections(block):
        if section.title.strip().lower() != "openapi tag":
            continue
        lines = section.body.split("\n")
        name = lines[0].strip()
        if not name:
            continue
        description = "\n".join(lines[1:]).strip()
        tags.append(Tag(name=name, description=description))
    return tags


@trace
def scrape_annotations(index) -> ScrapeResult:
    """
    Scrapes every package of a PackageIndex.

    Args:
        index: The PackageIndex to read.

    Returns:
        ScrapeResult with the API information, operations and tags found.
    """
    operations: List[Operation] = []
    api_blocks: List[str] = []
    tags: List[Tag] = []
    seen_tags = set()

    for import_path in index.import_paths():
        package_info = index.package_info(import_path)
        blocks = collect_comment_blocks(package_info)
        if not blocks:
            continue

        for block in detect_operation_blocks(blocks):
            operation = parse_operation(block, package_path=import_path)
            if not operation.path or not operation.method:
                logger.warning(f"Skipping operation block without path or method in '{import_path}'")
                continue
            operations.append(operation)

        api_blocks.extend(detect_api_blocks(blocks))

        for block in detect_tag_blocks(blocks):
            for tag in parse_tags(block):
                if tag.name in seen_tags:
                    logger.warning(f"Tag '{tag.name}' declared more than once; keeping the first declaration")
                    continue
                seen_tags.add(tag.name)
                tags.append(tag)

    result = ScrapeResult(api=parse_api_info(api_blocks), operations=operations, tags=tags)
    logger.info(f"Scraped {len(result.operations)} operations and {len(result.tags)} tags.")
    return result
