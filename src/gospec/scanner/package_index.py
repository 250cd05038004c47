"""
Read-only table of the packages of one analyzed source tree.
"""

from typing import Dict, Iterable, Iterator, List, Optional

from gospec.exceptions import UnknownPackageError
from gospec.schemas import PackageInfo


class PackageIndex:
    """
    Maps each package's import path to its PackageInfo (declared name,
    directory, files and aliased imports). Built once by discovery.
    """

    def __init__(self, packages: Iterable[PackageInfo], module_path: str = "", root: str = ""):
        self.module_path = module_path
        self.root = root
        self._packages: Dict[str, PackageInfo] = {package.import_path: package for package in packages}

    def __len__(self) -> int:
        return len(self._packages)

    def __contains__(self, import_path: str) -> bool:
        return import_path in self._packages

    def __iter__(self) -> Iterator[PackageInfo]:
        return iter(self._packages.values())

    def get(self, import_path: str) -> Optional[PackageInfo]:
        return self._packages.get(import_path)

    def package_info(self, import_path: str) -> PackageInfo:
        """
        Raises:
            UnknownPackageError: If the import path is not part of the tree.
        """
        info = self._packages.get(import_path)
        if info is None:
            raise UnknownPackageError(import_path)
        return info

    def import_paths(self) -> List[str]:
        return sorted(self._packages)
