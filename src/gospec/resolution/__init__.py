"""
Resolution package: type definition resolution.

Provides primitive classification, import alias resolution, type location,
enum extraction and the closure engine.
"""

from .facade import resolve_definitions
from .classifier import (
    MapOf,
    Named,
    NoType,
    Primitive,
    Sequence,
    TypeShape,
    classify,
    component_types,
    named_components,
)
from .resolver import ReferenceResolver
from .store import DefinitionStore
from .locator import PackageSources, SourceTypeLocator, TypeLocator
from .enums import EnumExtractor
from .engine import EngineState, ResolutionEngine

__all__ = [
    "resolve_definitions",
    "MapOf",
    "Named",
    "NoType",
    "Primitive",
    "Sequence",
    "TypeShape",
    "classify",
    "component_types",
    "named_components",
    "ReferenceResolver",
    "DefinitionStore",
    "PackageSources",
    "SourceTypeLocator",
    "TypeLocator",
    "EnumExtractor",
    "EngineState",
    "ResolutionEngine",
]
