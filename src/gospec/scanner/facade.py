import os
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pathspec

from gospec.logging_config import logger
from gospec.parser.config import GO_SOURCE_SUFFIX, GO_TEST_SUFFIX
from gospec.parser.go_parser import parse_imports, parse_package_clause
from gospec.schemas import PackageInfo
from gospec.tracing import trace
from .config import (
    DEFAULT_IGNORE_PATTERNS,
    GO_MOD_FILENAME,
    GO_MOD_MODULE,
    MAJOR_VERSION_SEGMENT,
    NON_BINDING_ALIASES,
)
from .package_index import PackageIndex


@trace
def discover_packages(
    directory: Path,
    module_path: Optional[str] = None,
    ignored_packages: Optional[List[str]] = None,
    respect_gitignore: bool = True,
) -> PackageIndex:
    """
    Walks a Go source tree and builds its package index.

    Args:
        directory: Root of the source tree.
        module_path: Import path of the root directory. Read from go.mod when omitted.
        ignored_packages: Import paths to leave out; "path/..." also drops sub-packages.
        respect_gitignore: If True, paths listed in .gitignore are skipped.

    Returns:
        PackageIndex of every directory holding non-test Go files.
    """
    directory = Path(directory)
    module_path = module_path or read_module_path(directory)
    ignored_packages = ignored_packages or []
    logger.info(f"Discovering Go packages of module '{module_path}' in '{directory}'")

    all_patterns = list(DEFAULT_IGNORE_PATTERNS)
    gitignore_path = directory / ".gitignore"
    if respect_gitignore and gitignore_path.is_file():
        try:
            gitignore_patterns = gitignore_path.read_text().splitlines()
            all_patterns.extend(gitignore_patterns)
            logger.debug(f"Loaded {len(gitignore_patterns)} patterns from '{gitignore_path}'")
        except OSError as e:
            logger.warning(f"Could not read .gitignore file at '{gitignore_path}'. Error: {e}")

    spec = pathspec.PathSpec.from_lines("gitwildmatch", all_patterns)

    raw_packages: List[Tuple[PackageInfo, List[Tuple[Optional[str], str]]]] = []

    for root, dirs, files in os.walk(directory):
        root_path = Path(root)
        relative_dir = root_path.relative_to(directory)

        # Prune ignored directories in place so os.walk does not descend into them
        kept_dirs = []
        for d in sorted(dirs):
            dir_path_to_check = (relative_dir / d).as_posix() + "/"
            if spec.match_file(dir_path_to_check):
                logger.debug(f"Ignoring directory '{dir_path_to_check}' due to ignore rules.")
            else:
                kept_dirs.append(d)
        dirs[:] = kept_dirs

        go_files = sorted(
            name for name in files
            if name.endswith(GO_SOURCE_SUFFIX)
            and not name.endswith(GO_TEST_SUFFIX)
            and not spec.match_file((relative_dir / name).as_posix())
        )
        if not go_files:
            continue

        import_path = _import_path(module_path, relative_dir)
        if _is_ignored(import_path, ignored_packages):
            logger.debug(f"Ignoring package '{import_path}'")
            continue

        package = _read_package(root_path, import_path, go_files)
        if package is not None:
            raw_packages.append(package)

    index = PackageIndex(_bind_aliases(raw_packages), module_path=module_path, root=str(directory))
    logger.info(f"Discovered {len(index)} packages.")
    return index


def read_module_path(directory: Path) -> str:
    """Module path from go.mod, falling back to the directory name."""
    go_mod = Path(directory) / GO_MOD_FILENAME
    if go_mod.is_file():
        match = GO_MOD_MODULE.search(go_mod.read_text(encoding="utf-8", errors="ignore"))
        if match:
            return match.group(1)
        logger.warning(f"No module directive found in '{go_mod}'")
    return Path(directory).resolve().name


def _import_path(module_path: str, relative_dir: Path) -> str:
    relative = relative_dir.as_posix()
    if relative in ("", "."):
        return module_path
    return f"{module_path}/{relative}"


def _is_ignored(import_path: str, ignored_packages: List[str]) -> bool:
    for ignored in ignored_packages:
        if ignored.endswith("/..."):
            prefix = ignored[:-4]
            if import_path == prefix or import_path.startswith(prefix + "/"):
                return True
        elif import_path == ignored:
            return True
    return False


def _read_package(
    directory: Path,
    import_path: str,
    go_files: List[str],
) -> Optional[Tuple[PackageInfo, List[Tuple[Optional[str], str]]]]:
    name = None
    imports: List[Tuple[Optional[str], str]] = []

    for file_name in go_files:
        file_path = directory / file_name
        try:
            content = file_path.read_text(encoding="utf-8", errors="ignore")
        except OSError as e:
            logger.warning(f"Could not read '{file_path}'. Skipping. Error: {e}")
            continue

        declared = parse_package_clause(content)
        if declared is None:
            logger.warning(f"No package clause in '{file_path}'. Skipping.")
            continue
        if name is None:
            name = declared
        elif declared != name:
            logger.warning(f"'{file_path}' declares package '{declared}', expected '{name}'")

        imports.extend(parse_imports(content))

    if name is None:
        return None

    info = PackageInfo(import_path=import_path, name=name, directory=str(directory), files=go_files)
    return info, imports


def _bind_aliases(raw_packages) -> List[PackageInfo]:
    """
    Fill each package's import table. Imports without an explicit alias are
    referenced by the imported package's declared name when it is part of the
    tree, else by the last segment of its path.
    """
    declared_names: Dict[str, str] = {info.import_path: info.name for info, _ in raw_packages}
    packages = []

    for info, imports in raw_packages:
        table: Dict[str, List[str]] = {}
        for alias, path in imports:
            aliases = table.setdefault(path, [])
            if alias in NON_BINDING_ALIASES:
                continue
            alias = alias or declared_names.get(path) or default_alias(path)
            if alias not in aliases:
                aliases.append(alias)
        info.imports = table
        packages.append(info)

    return packages


def default_alias(import_path: str) -> str:
    """
    Package name Go would assume for an import path:

        "encoding/json"              -> "json"
        "github.com/org/lib/v2"      -> "lib"
        "gopkg.in/yaml.v3"           -> "yaml"
    """
    segments = [segment for segment in import_path.split("/") if segment]
    if len(segments) > 1 and MAJOR_VERSION_SEGMENT.match(segments[-1]):
        segments.pop()
    last = segments[-1] if segments else import_path
    return last.split(".")[0].replace("-", "_")
