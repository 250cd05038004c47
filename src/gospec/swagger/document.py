import json
from typing import Any, Dict, Iterable

from gospec.logging_config import logger
from gospec.resolution import DefinitionStore, Primitive, classify
from gospec.schemas import ApiInfo, Operation, Parameter, Response, Tag
from gospec.tracing import trace
from .config import HTTP_METHODS, SERIALIZATION_CONFIG, SWAGGER_VERSION
from .naming import definition_names
from .schema import SchemaBuilder, primitive_schema


@trace
def build_document(
    api: ApiInfo,
    operations: Iterable[Operation],
    tags: Iterable[Tag],
    store: DefinitionStore,
    naming: str = "full",
) -> Dict[str, Any]:
    """
    Assembles a Swagger 2.0 document.

    Args:
        api: Document-level information.
        operations: Operations whose parameter and response types were resolved into `store`.
        tags: Declared tags.
        store: Converged definition store.
        naming: Definition naming convention: "full", "partial" or "simple".

    Returns:
        The document as plain JSON-serializable data.
    """
    records = store.records()
    names = definition_names(records, naming)
    builder = SchemaBuilder(store, names)

    info = {"title": api.title, "version": api.version}
    if api.description:
        info["description"] = api.description

    document: Dict[str, Any] = {"swagger": SWAGGER_VERSION, "info": info}
    if api.base_path:
        document["basePath"] = api.base_path

    tag_objects = [_tag_object(tag) for tag in tags]
    if tag_objects:
        document["tags"] = tag_objects

    paths: Dict[str, Dict[str, Any]] = {}
    for operation in operations:
        method = operation.method.lower()
        if method not in HTTP_METHODS:
            logger.warning(f"Skipping operation '{operation.path}' with unsupported method '{operation.method}'")
            continue
        path_item = paths.setdefault(operation.path, {})
        if method in path_item:
            logger.warning(f"Operation {operation.method.upper()} '{operation.path}' is declared more than once")
        path_item[method] = _operation_object(builder, operation)

    document["paths"] = paths
    document["definitions"] = {names[record.key]: builder.definition_schema(record) for record in records}

    logger.info(f"Built document with {len(paths)} paths and {len(records)} definitions.")
    return document


def _tag_object(tag: Tag) -> Dict[str, Any]:
    tag_object = {"name": tag.name}
    if tag.description:
        tag_object["description"] = tag.description
    return tag_object


def _operation_object(builder: SchemaBuilder, operation: Operation) -> Dict[str, Any]:
    operation_object: Dict[str, Any] = {}
    if operation.summary:
        operation_object["summary"] = operation.summary
    if operation.description:
        operation_object["description"] = operation.description
    if operation.accepts:
        operation_object["consumes"] = list(operation.accepts)
        operation_object["produces"] = list(operation.accepts)
    if operation.tags:
        operation_object["tags"] = list(operation.tags)

    parameters = [_parameter_object(builder, operation, parameter) for parameter in operation.parameters]
    if parameters:
        operation_object["parameters"] = parameters

    operation_object["responses"] = {
        str(response.status_code): _response_object(builder, operation, response)
        for response in operation.responses
    }
    return operation_object


def _parameter_object(builder: SchemaBuilder, operation: Operation, parameter: Parameter) -> Dict[str, Any]:
    parameter_object: Dict[str, Any] = {"name": parameter.name, "in": parameter.location}
    if parameter.description:
        parameter_object["description"] = parameter.description
    parameter_object["required"] = parameter.required

    if parameter.location == "body":
        parameter_object["schema"] = builder.type_schema(operation.package_path, parameter.type_name)
        return parameter_object

    shape = classify(parameter.type_name)
    if isinstance(shape, Primitive):
        parameter_object.update(primitive_schema(shape))
    else:
        logger.warning(
            f"Non-primitive {parameter.location} parameter '{parameter.name}' of type "
            f"'{parameter.type_name}' in {operation.method.upper()} '{operation.path}'; typed as string"
        )
        parameter_object["type"] = "string"
    return parameter_object


def _response_object(builder: SchemaBuilder, operation: Operation, response: Response) -> Dict[str, Any]:
    response_object: Dict[str, Any] = {"description": response.description}
    schema = builder.type_schema(operation.package_path, response.type_name)
    if schema:
        response_object["schema"] = schema
    return response_object


def to_json(document: Dict[str, Any]) -> str:
    return json.dumps(
        document,
        indent=SERIALIZATION_CONFIG["indent"],
        sort_keys=SERIALIZATION_CONFIG["sort_keys"],
    )
