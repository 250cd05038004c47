"""
The de-duplicated collection of resolved definitions.
"""

from typing import Dict, Iterator, List, Optional, Tuple

from gospec.schemas import DefinitionKey, DefinitionRecord


class DefinitionStore:
    """
    Definitions keyed by (package path, name), plus the bindings that record
    which definition each reference site resolved to.

    Only named types are ever keyed; sequences and maps are decomposed before
    insertion, and types consumed purely by embedding are never added.
    """

    def __init__(self):
        self._records: Dict[DefinitionKey, DefinitionRecord] = {}
        self._bindings: Dict[Tuple[str, str], DefinitionKey] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, key: DefinitionKey) -> bool:
        return key in self._records

    def __iter__(self) -> Iterator[DefinitionRecord]:
        return iter(list(self._records.values()))

    def get(self, key: DefinitionKey) -> Optional[DefinitionRecord]:
        return self._records.get(key)

    def exists(self, package_path: str, name: str) -> bool:
        return DefinitionKey(package_path, name) in self._records

    def add(self, record: DefinitionRecord) -> bool:
        """
        Insert a record unless its key is already present.

        Returns:
            True if the record was inserted, False if the key existed.
        """
        if record.key in self._records:
            return False
        self._records[record.key] = record
        return True

    def records(self) -> List[DefinitionRecord]:
        """Snapshot of the stored records, in insertion order."""
        return list(self._records.values())

    def keys(self) -> List[DefinitionKey]:
        return list(self._records.keys())

    def bind(self, referring_package: str, type_text: str, key: DefinitionKey) -> None:
        """Record that `type_text`, written in `referring_package`, denotes `key`."""
        self._bindings[(referring_package, type_text)] = key

    def binding(self, referring_package: str, type_text: str) -> Optional[DefinitionKey]:
        return self._bindings.get((referring_package, type_text))

    def lookup(self, referring_package: str, type_text: str) -> Optional[DefinitionRecord]:
        """
        The stored definition a reference site resolved to, if it was stored.
        """
        key = self._bindings.get((referring_package, type_text))
        if key is None:
            return None
        return self._records.get(key)

    def is_resolved(self, referring_package: str, type_text: str) -> bool:
        return self.lookup(referring_package, type_text) is not None
