"""
End-to-end generation: discover packages, scrape annotations, resolve the
referenced types and assemble the Swagger document.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from gospec.config import GospecConfig
from gospec.logging_config import logger
from gospec.parser import scrape_annotations
from gospec.resolution import DefinitionStore, resolve_definitions
from gospec.scanner import PackageIndex, discover_packages
from gospec.schemas import ScrapeResult
from gospec.swagger import build_document
from gospec.tracing import trace


@dataclass
class GenerationResult:
    index: PackageIndex
    scrape: ScrapeResult
    store: DefinitionStore
    document: Dict[str, Any]


@trace
def generate(directory: Path, config: Optional[GospecConfig] = None) -> GenerationResult:
    """
    Runs every stage over one Go source tree.

    Raises:
        GospecError: From any stage. Resolution is fail-fast, so no document
            is produced when a single reference cannot be resolved.
    """
    config = config or GospecConfig()
    logger.info(f"Generating Swagger document for '{directory}' (naming: {config.naming})")

    index = discover_packages(
        Path(directory),
        module_path=config.module_path,
        ignored_packages=config.ignored_packages,
    )
    scrape = scrape_annotations(index)
    store = resolve_definitions(scrape.operations, index)
    document = build_document(scrape.api, scrape.operations, scrape.tags, store, naming=config.naming)

    return GenerationResult(index=index, scrape=scrape, store=store, document=document)
