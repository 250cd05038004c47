"""
Public API for type definition resolution.
"""

from typing import Iterable, Optional

from gospec.logging_config import logger
from gospec.scanner.package_index import PackageIndex
from gospec.schemas import Operation
from gospec.tracing import trace
from .engine import ResolutionEngine
from .enums import EnumExtractor
from .locator import PackageSources, SourceTypeLocator, TypeLocator
from .store import DefinitionStore


@trace
def resolve_definitions(
    operations: Iterable[Operation],
    index: PackageIndex,
    locator: Optional[TypeLocator] = None,
) -> DefinitionStore:
    """
    Resolve every type reachable from the operations' parameters and responses.

    This is the main entry point for resolution. It:
    1. Builds a source-backed type locator and enum extractor over the index
       (unless a locator is supplied)
    2. Runs a fresh ResolutionEngine to a fixed point
    3. Returns the finished store, read-only from here on

    Args:
        operations: Scraped operations, each tagged with its package path
        index: Package index of the analyzed source tree
        locator: Optional replacement type locator

    Returns:
        DefinitionStore holding one record per reachable named type

    Raises:
        ResolutionError: On the first unresolvable reference; nothing partial is returned.
    """
    sources = PackageSources(index)
    engine = ResolutionEngine(
        index,
        locator or SourceTypeLocator(index, sources),
        enums=EnumExtractor(sources),
    )

    store = engine.resolve(operations)
    logger.debug(f"Definition store holds: {', '.join(str(key) for key in store.keys())}")
    return store
