"""
gospec - Swagger 2.0 documents from annotated Go source

Discovers a Go source tree, scrapes operation annotations and resolves every
type they reference into a closed set of definitions.
"""

__version__ = "0.1.0"

# Core exports
from gospec.scanner import discover_packages, PackageIndex
from gospec.parser import scrape_annotations
from gospec.resolution import resolve_definitions, DefinitionStore, ResolutionEngine
from gospec.swagger import build_document
from gospec.pipeline import generate, GenerationResult
from gospec.config import GospecConfig

__all__ = [
    "__version__",
    "discover_packages",
    "PackageIndex",
    "scrape_annotations",
    "resolve_definitions",
    "DefinitionStore",
    "ResolutionEngine",
    "build_document",
    "generate",
    "GenerationResult",
    "GospecConfig",
]
