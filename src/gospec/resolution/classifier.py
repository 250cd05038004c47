"""
Primitive classification and generic decomposition of Go type expressions.

Every type text is classified once into a closed set of shapes; the rest of
the resolution package matches on the shape instead of re-inspecting text.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional, Union

from .config import ENUM_BACKING_KINDS, NO_TYPE_SENTINEL, PRIMITIVE_TYPES


@dataclass(frozen=True)
class NoType:
    """The "nil" sentinel: no body, no response."""


@dataclass(frozen=True)
class Primitive:
    """A built-in scalar with its swagger serialization kind."""
    kind: str
    format: str = ""


@dataclass(frozen=True)
class Sequence:
    """Slice or array of `element`."""
    element: str


@dataclass(frozen=True)
class MapOf:
    key: str
    value: str


@dataclass(frozen=True)
class Named:
    """A user-defined type, optionally qualified by an import alias."""
    qualifier: Optional[str]
    name: str

    @property
    def text(self) -> str:
        if self.qualifier:
            return f"{self.qualifier}.{self.name}"
        return self.name


TypeShape = Union[NoType, Primitive, Sequence, MapOf, Named]

# [], [4], [...], [size]
ARRAY_PREFIX = re.compile(r"^\[[^\[\]]*\]")


@lru_cache(maxsize=4096)
def classify(type_name: str) -> TypeShape:
    """
    Classify a Go type expression.

    Pointer stars are ignored. Unrecognized syntax is classified as Named
    (best-effort), so this never fails.

    Examples:
        "nil"                -> NoType()
        "*int64"             -> Primitive("integer", "int64")
        "[]models.User"      -> Sequence("models.User")
        "map[string][]Item"  -> MapOf("string", "[]Item")
        "m.User"             -> Named("m", "User")
    """
    text = (type_name or "").strip()
    if not text or text.lower() == NO_TYPE_SENTINEL:
        return NoType()

    text = text.lstrip("*").strip()

    if text in PRIMITIVE_TYPES:
        kind, fmt = PRIMITIVE_TYPES[text]
        return Primitive(kind, fmt)

    match = ARRAY_PREFIX.match(text)
    if match:
        return Sequence(text[match.end():].strip())

    if text.startswith("map["):
        key, value = _split_map(text)
        return MapOf(key, value)

    if "." in text:
        qualifier, name = text.split(".", 1)
        return Named(qualifier, name)

    return Named(None, text)


def _split_map(text: str):
    """Split "map[K]V" into (K, V), honoring brackets nested inside K."""
    depth = 0
    for index in range(3, len(text)):
        char = text[index]
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
            if depth == 0:
                return text[4:index].strip(), text[index + 1:].strip()
    # Unbalanced: best effort, value classifies as NoType
    return text[4:].strip(), ""


def component_types(shape: TypeShape) -> List[str]:
    """
    One level of generic decomposition.

    Primitive and NoType need no lookup; a sequence yields its element, a map
    its key and value, a named type itself.
    """
    if isinstance(shape, (NoType, Primitive)):
        return []
    if isinstance(shape, Sequence):
        return [shape.element]
    if isinstance(shape, MapOf):
        return [shape.key, shape.value]
    if isinstance(shape, Named):
        return [shape.text]
    raise TypeError(f"Unknown type shape: {shape!r}")


def named_components(type_name: str) -> List[Named]:
    """Re-apply decomposition until only named types remain."""
    shape = classify(type_name)
    if isinstance(shape, Named):
        return [shape]

    named: List[Named] = []
    for component in component_types(shape):
        named.extend(named_components(component))
    return named


def is_scalar(type_name: Optional[str]) -> bool:
    """True if the type is a scalar that can back an enum."""
    if not type_name:
        return False
    shape = classify(type_name)
    return isinstance(shape, Primitive) and shape.kind in ENUM_BACKING_KINDS
