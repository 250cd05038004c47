"""
Swagger definition names.

    full     example.com.petstore.models.User
    partial  models.User
    simple   User
"""

from typing import Dict, Iterable

from gospec.config import NAMING_CONVENTIONS
from gospec.exceptions import ConfigError
from gospec.logging_config import logger
from gospec.schemas import DefinitionKey, DefinitionRecord


def swagger_name(record: DefinitionRecord, naming: str) -> str:
    if naming == "full":
        return f"{record.package_path}.{record.name}".replace("/", ".")
    if naming == "partial":
        return f"{record.package_name}.{record.name}"
    if naming == "simple":
        return record.name
    raise ConfigError(f"Unknown naming convention '{naming}'. Expected one of: {', '.join(NAMING_CONVENTIONS)}")


def definition_names(records: Iterable[DefinitionRecord], naming: str) -> Dict[DefinitionKey, str]:
    """
    Assigns every record a unique definition name. A record whose short name
    is already taken by a different definition keeps its full name instead.
    """
    names: Dict[DefinitionKey, str] = {}
    taken: Dict[str, DefinitionKey] = {}

    for record in records:
        name = swagger_name(record, naming)
        if name in taken and taken[name] != record.key:
            full_name = swagger_name(record, "full")
            logger.warning(
                f"Definition name '{name}' of {record.key} collides with {taken[name]}; using '{full_name}'"
            )
            name = full_name
        taken[name] = record.key
        names[record.key] = name

    return names
