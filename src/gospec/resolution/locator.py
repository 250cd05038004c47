"""
Type location: find the declaration of a named type in a package of the
analyzed source tree.
"""

from pathlib import Path
from typing import Dict, List, Optional, Protocol

from gospec.exceptions import ParserError
from gospec.logging_config import logger
from gospec.parser.go_parser import (
    GoConstSpec,
    GoTypeDecl,
    erase_type_params,
    is_required_tag,
    json_field_name,
    parse_const_groups,
    parse_type_declarations,
)
from gospec.scanner.package_index import PackageIndex
from gospec.schemas import LocatedType, MemberRecord
from .classifier import is_scalar


class TypeLocator(Protocol):
    """Contract consumed by the resolution engine."""

    def locate(self, import_path: str, type_name: str) -> Optional[LocatedType]:
        ...


class PackageSources:
    """
    Reads and caches the Go sources of indexed packages.

    Each package is read at most once per run; the parsed declarations and
    const groups are shared by the type locator and the enum extractor.
    """

    def __init__(self, index: PackageIndex):
        self.index = index
        self._contents: Dict[str, List[str]] = {}
        self._types: Dict[str, Dict[str, GoTypeDecl]] = {}
        self._consts: Dict[str, List[List[GoConstSpec]]] = {}

    def contents(self, import_path: str) -> List[str]:
        if import_path not in self._contents:
            info = self.index.get(import_path)
            if info is None:
                self._contents[import_path] = []
            else:
                self._contents[import_path] = [
                    _read_source(Path(info.directory) / file_name) for file_name in info.files
                ]
        return self._contents[import_path]

    def type_declarations(self, import_path: str) -> Dict[str, GoTypeDecl]:
        if import_path not in self._types:
            decls: Dict[str, GoTypeDecl] = {}
            for content in self.contents(import_path):
                decls.update(parse_type_declarations(content))
            self._types[import_path] = decls
            logger.debug(f"Parsed {len(decls)} type declarations in {import_path}")
        return self._types[import_path]

    def const_groups(self, import_path: str) -> List[List[GoConstSpec]]:
        if import_path not in self._consts:
            groups: List[List[GoConstSpec]] = []
            for content in self.contents(import_path):
                groups.extend(parse_const_groups(content))
            self._consts[import_path] = groups
        return self._consts[import_path]


def _read_source(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (IOError, UnicodeDecodeError) as e:
        raise ParserError(str(path), str(e)) from e


class SourceTypeLocator:
    """
    Locates named types by parsing the package's Go files.

    A struct yields its serialized members; any other named type yields its
    underlying type text and is an enum candidate when that is a scalar.
    """

    def __init__(self, index: PackageIndex, sources: Optional[PackageSources] = None):
        self.index = index
        self.sources = sources or PackageSources(index)

    def locate(self, import_path: str, type_name: str) -> Optional[LocatedType]:
        info = self.index.get(import_path)
        if info is None:
            logger.debug(f"Package {import_path} is not part of the source tree")
            return None

        decl = self.sources.type_declarations(import_path).get(type_name)
        if decl is None:
            return None

        if decl.kind == "struct":
            return LocatedType(
                name=type_name,
                package_path=import_path,
                package_name=info.name,
                members=struct_members(decl),
            )

        return LocatedType(
            name=type_name,
            package_path=import_path,
            package_name=info.name,
            underlying=erase_type_params(decl.underlying, decl.type_params),
            is_enum_candidate=not decl.type_params and is_scalar(decl.underlying),
        )


def struct_members(decl: GoTypeDecl) -> List[MemberRecord]:
    """
    Serialized members of a struct, following encoding/json field rules:
    unexported fields and json:"-" are dropped, the json tag names the member,
    and an embedded field with an explicit json name is an ordinary member.
    Type parameters of a generic struct are documented as free-form objects.
    """
    members: List[MemberRecord] = []

    for go_field in decl.fields:
        json_name = json_field_name(go_field.tag)
        if json_name == "-":
            continue

        embedded = go_field.embedded and json_name is None
        for name in go_field.names:
            if not embedded and not name[:1].isupper():
                continue
            members.append(MemberRecord(
                exported_name=name,
                serialized_name=json_name or name,
                type_name=erase_type_params(go_field.type_name, decl.type_params),
                is_embedded=embedded,
                description=go_field.comment,
                required=is_required_tag(go_field.tag),
            ))

    return members
