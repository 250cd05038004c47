"""
Type definition resolution engine.

Computes the closure of named types reachable from operation parameters and
responses: every definition is located once, flattened, stored under its
(package path, name) key, and its members are rescanned until nothing new is
found.
"""

from contextlib import contextmanager
from enum import Enum
from typing import Dict, Iterable, List, Optional, Set, Tuple

from gospec.exceptions import (
    GospecError,
    InvalidReferenceError,
    ResolutionError,
    UnresolvedEmbeddedTypeError,
    UnresolvedTypeError,
)
from gospec.logging_config import logger
from gospec.scanner.package_index import PackageIndex
from gospec.schemas import DefinitionKey, DefinitionRecord, LocatedType, Operation
from .classifier import MapOf, Named, NoType, Primitive, Sequence, classify, component_types, named_components
from .config import RESOLUTION_CONFIG
from .enums import EnumExtractor
from .locator import TypeLocator
from .resolver import ReferenceResolver
from .store import DefinitionStore


class EngineState(Enum):
    SEEDING = "seeding"
    EXPANDING = "expanding"
    CONVERGED = "converged"
    FAILED = "failed"


class ResolutionEngine:
    """
    Resolves operation roots into a closed DefinitionStore.

    One engine per run: it owns its store until `resolve` returns, and a
    failed run leaves the engine in FAILED with the error re-raised.
    """

    def __init__(
        self,
        index: PackageIndex,
        locator: TypeLocator,
        enums: Optional[EnumExtractor] = None,
        resolver: Optional[ReferenceResolver] = None,
    ):
        self.index = index
        self.locator = locator
        self.enums = enums
        self.resolver = resolver or ReferenceResolver()
        self.store = DefinitionStore()
        self.state = EngineState.SEEDING
        self.passes = 0
        # Every record built so far, stored or consumed by embedding
        self._built: Dict[DefinitionKey, DefinitionRecord] = {}
        # Records under construction, outermost first
        self._flattening: List[DefinitionKey] = []
        # Records built inside an embedding cycle, missing the members the cycle cut off
        self._truncated: Set[DefinitionKey] = set()
        self._chain: List[str] = []

    def resolve(self, operations: Iterable[Operation]) -> DefinitionStore:
        """
        Seed the store from every operation's parameters and responses, then
        expand it to a fixed point.

        Raises:
            ResolutionError: On the first reference that cannot be resolved.
        """
        try:
            self.state = EngineState.SEEDING
            for operation in operations:
                self._seed(operation)

            self.state = EngineState.EXPANDING
            self._expand()
        except ResolutionError as e:
            self.state = EngineState.FAILED
            if not e.chain:
                e.chain = list(self._chain)
            logger.error(f"Resolution failed: {e}")
            raise
        except GospecError:
            self.state = EngineState.FAILED
            raise

        self.state = EngineState.CONVERGED
        logger.info(f"Resolved {len(self.store)} definitions in {self.passes} expansion passes")
        return self.store

    def _seed(self, operation: Operation):
        label = f"{operation.method.upper()} {operation.path}".strip() or operation.package_path
        for parameter in operation.parameters:
            with self._frame(f"{label} parameter '{parameter.name}'"):
                records = self.resolve_name(operation.package_path, parameter.type_name)
            if records:
                parameter.package_path = records[-1].package_path
                parameter.package_name = records[-1].package_name

        for response in operation.responses:
            with self._frame(f"{label} response {response.status_code}"):
                records = self.resolve_name(operation.package_path, response.type_name)
            if records:
                response.package_path = records[-1].package_path
                response.package_name = records[-1].package_name

    def _expand(self):
        while True:
            self.passes += 1
            pending = self._find_unresolved()
            if pending is None:
                return

            record, referring_package, type_text = pending
            with self._frame(f"{record.package_path}.{record.name}"):
                self.resolve_name(referring_package, type_text)

    def _find_unresolved(self) -> Optional[Tuple[DefinitionRecord, str, str]]:
        """First named component of any stored record that is not yet bound."""
        for record in self.store.records():
            references = [
                (member.override_package_path or record.package_path, member.type_name)
                for member in record.members
            ]
            if record.underlying:
                references.append((record.package_path, record.underlying))

            for referring_package, type_text in references:
                for named in named_components(type_text):
                    if not self.store.is_resolved(referring_package, named.text):
                        return record, referring_package, named.text
        return None

    def resolve_name(self, referring_package: str, type_name: str) -> List[DefinitionRecord]:
        """
        Resolve one type reference written in `referring_package`.

        Returns:
            The stored records for every named component ([] for nil and primitives).
        """
        if not referring_package:
            raise InvalidReferenceError(type_name)

        shape = classify(type_name)
        if isinstance(shape, (NoType, Primitive)):
            return []

        if isinstance(shape, (Sequence, MapOf)):
            records: List[DefinitionRecord] = []
            for component in component_types(shape):
                records.extend(self.resolve_name(referring_package, component))
            return records

        record = self._lookup(referring_package, shape)
        if self.store.add(record):
            logger.debug(f"Stored definition {record.key}")
        self.store.bind(referring_package, shape.text, record.key)
        return [record]

    def _lookup(self, referring_package: str, named: Named) -> DefinitionRecord:
        """
        Find or build the flattened record for a named type, without storing it.
        """
        bound = self.store.binding(referring_package, named.text)
        if bound is not None and bound in self._built:
            return self._built[bound]

        package_info = self.index.package_info(referring_package)
        candidates = self.resolver.candidate_import_paths(package_info, named)

        for import_path in candidates:
            key = DefinitionKey(import_path, named.name)
            if key in self._built:
                self.store.bind(referring_package, named.text, key)
                return self._built[key]

        for import_path in candidates:
            located = self.locator.locate(import_path, named.name)
            if located is not None:
                break
        else:
            raise UnresolvedTypeError(named.text, referring_package, candidates)

        record = self._build(located)
        self.store.bind(referring_package, named.text, record.key)
        return record

    def _build(self, located: LocatedType) -> DefinitionRecord:
        record = DefinitionRecord(
            name=located.name,
            package_path=located.package_path,
            package_name=located.package_name,
            members=[member for member in located.members if not member.is_embedded],
            underlying=located.underlying,
        )

        self._flattening.append(record.key)
        try:
            for member in located.members:
                if member.is_embedded:
                    self._flatten(record, member.type_name)
        finally:
            self._flattening.pop()

        if located.is_enum_candidate and self.enums is not None:
            values = self.enums.enum_values(record.package_path, record.name)
            if values:
                record.enum_values = values
            elif RESOLUTION_CONFIG["warn_on_enum_miss"]:
                logger.warning(f"No constants found for enum candidate {record.key}")

        if record.key in self._truncated:
            # Rebuilt in full when it is looked up on its own
            self._truncated.discard(record.key)
        else:
            self._built[record.key] = record
        return record

    def _flatten(self, owner: DefinitionRecord, embedded_type: str):
        """Promote the members of an embedded type into its owner."""
        shape = classify(embedded_type)
        if not isinstance(shape, Named):
            logger.debug(f"Ignoring non-struct embedded member {embedded_type} of {owner.name}")
            return

        try:
            package_info = self.index.package_info(owner.package_path)
            candidates = self.resolver.candidate_import_paths(package_info, shape)
        except ResolutionError as e:
            raise UnresolvedEmbeddedTypeError(embedded_type, owner.name, owner.package_path) from e

        keys = [DefinitionKey(path, shape.name) for path in candidates]
        cycle = [key for key in keys if key in self._flattening]
        if cycle:
            logger.warning(f"Embedding cycle through {embedded_type} in {owner.name}; skipping member")
            # Everything nested inside the cycle's root lacks the root's members
            start = self._flattening.index(cycle[0])
            self._truncated.update(self._flattening[start + 1:])
            return

        with self._frame(f"{owner.package_path}.{owner.name} embeds {embedded_type}"):
            try:
                embedded = self._lookup(owner.package_path, shape)
            except UnresolvedTypeError as e:
                raise UnresolvedEmbeddedTypeError(embedded_type, owner.name, owner.package_path) from e

        declared = {member.serialized_name for member in owner.members}
        for member in embedded.members:
            if member.serialized_name in declared:
                continue
            owner.members.append(member.model_copy(update={
                "override_package_path": member.override_package_path or embedded.package_path,
            }))

        owner.embedded_type_names.append(shape.name)
        owner.embedded_type_names.extend(embedded.embedded_type_names)

    @contextmanager
    def _frame(self, label: str):
        self._chain.append(label)
        try:
            yield
        except ResolutionError as e:
            if not e.chain:
                e.chain = list(self._chain)
            raise
        finally:
            self._chain.pop()
