"""
This facade exposes the public API for the swagger module.
"""
from .document import build_document, to_json
from .naming import definition_names, swagger_name
from .schema import SchemaBuilder

__all__ = ["build_document", "to_json", "definition_names", "swagger_name", "SchemaBuilder"]
