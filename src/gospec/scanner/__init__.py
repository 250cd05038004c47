"""
This facade exposes the public API for the scanner module.
Other parts of the application should only import from here,
not from internal modules.
"""
from .facade import discover_packages, read_module_path
from .package_index import PackageIndex

__all__ = ["discover_packages", "read_module_path", "PackageIndex"]
