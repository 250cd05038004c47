"""
Schema objects for type texts and stored definitions.
"""

from typing import Any, Dict

from gospec.exceptions import UnresolvedTypeError
from gospec.resolution import DefinitionStore, MapOf, Named, NoType, Primitive, Sequence, classify
from gospec.schemas import DefinitionKey, DefinitionRecord
from .config import DEFINITION_REF_PREFIX


class SchemaBuilder:
    """
    Turns Go type texts into Swagger schemas. Named types become `$ref`s to
    the definition the reference was bound to during resolution.
    """

    def __init__(self, store: DefinitionStore, names: Dict[DefinitionKey, str]):
        self.store = store
        self.names = names

    def type_schema(self, referring_package: str, type_name: str) -> Dict[str, Any]:
        shape = classify(type_name)

        if isinstance(shape, NoType):
            return {}
        if isinstance(shape, Primitive):
            return primitive_schema(shape)
        if isinstance(shape, Sequence):
            return {"type": "array", "items": self.type_schema(referring_package, shape.element)}
        if isinstance(shape, MapOf):
            return {
                "type": "object",
                "additionalProperties": self.type_schema(referring_package, shape.value),
            }
        if isinstance(shape, Named):
            return {"$ref": DEFINITION_REF_PREFIX + self._definition_name(referring_package, shape)}
        raise TypeError(f"Unhandled type shape: {shape!r}")

    def _definition_name(self, referring_package: str, named: Named) -> str:
        key = self.store.binding(referring_package, named.text)
        if key is None or key not in self.names:
            raise UnresolvedTypeError(named.text, referring_package)
        return self.names[key]

    def definition_schema(self, record: DefinitionRecord) -> Dict[str, Any]:
        """
        Structs become objects with one property per member; other named
        types take the schema of their underlying type plus any enum values.
        """
        if record.underlying is not None:
            schema = self.type_schema(record.package_path, record.underlying)
            if record.enum_values:
                schema["enum"] = list(record.enum_values)
            return schema

        properties = {}
        required = []
        for member in record.members:
            referring = member.override_package_path or record.package_path
            prop = self.type_schema(referring, member.type_name)
            # Siblings of $ref are ignored by Swagger 2.0 readers
            if member.description and "$ref" not in prop:
                prop["description"] = member.description
            properties[member.serialized_name] = prop
            if member.required:
                required.append(member.serialized_name)

        schema: Dict[str, Any] = {"type": "object", "properties": properties}
        if required:
            schema["required"] = required
        return schema


def primitive_schema(shape: Primitive) -> Dict[str, Any]:
    schema = {"type": shape.kind}
    if shape.format:
        schema["format"] = shape.format
    return schema
