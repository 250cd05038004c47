"""
Reference resolution: which packages could declare a (possibly qualified) type name?
"""

from typing import List

from gospec.exceptions import UnresolvedAliasError
from gospec.logging_config import logger
from gospec.schemas import PackageInfo
from .classifier import Named


class ReferenceResolver:
    """
    Maps a type reference written inside a package to the ordered candidate
    import paths that could define it.

    Handles:
    - Unqualified names: User -> the referring package itself
    - Qualified names: models.User -> every import registered under "models"
    - Aliased imports: m "example.com/app/models"; m.User -> example.com/app/models
    """

    def candidate_import_paths(self, package_info: PackageInfo, named: Named) -> List[str]:
        """
        Args:
            package_info: Package in which the reference is written
            named: Classified named type

        Returns:
            Candidate import paths in discovery order.

        Raises:
            UnresolvedAliasError: If the qualifier matches no import.
        """
        if not named.qualifier:
            return [package_info.import_path]

        candidates = []
        for import_path, aliases in package_info.imports.items():
            if named.qualifier in aliases and import_path not in candidates:
                candidates.append(import_path)

        if not candidates:
            raise UnresolvedAliasError(named.qualifier, named.text, package_info.import_path)

        if len(candidates) > 1:
            logger.warning(
                f"Multiple package candidates for '{named.text}' in {package_info.import_path}: "
                f"{', '.join(candidates)}. Trying them in order."
            )

        return candidates
