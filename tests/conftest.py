"""
Pytest configuration for the gospec test suite.

This conftest.py provides:
- Machine-mode logging (suppresses console output)
- Paths to the sample Go source trees
- Builders for in-memory package indexes and type locators
- Capture of logged warnings
"""

import os
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest

from gospec.logging_config import logger, reset_logging, setup_logging
from gospec.scanner import PackageIndex
from gospec.schemas import LocatedType, MemberRecord, PackageInfo

TEST_FILES_DIR = Path(__file__).parent / "test_files"


# ============================================================================
# GLOBAL CONFIGURATION
# ============================================================================

def pytest_configure(config):
    os.environ.setdefault("GOSPEC_MACHINE_MODE", "1")


# ============================================================================
# LOGGING FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def setup_test_logging():
    """
    Machine mode by default - suppress console logs for clean test output.
    """
    reset_logging()
    setup_logging(level="DEBUG", suppress_console=True)


@pytest.fixture
def warnings_log():
    """
    Collects the messages of every WARNING (or higher) record logged
    during the test.
    """
    messages: List[str] = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="WARNING")
    yield messages
    logger.remove(handler_id)


# ============================================================================
# SOURCE TREE FIXTURES
# ============================================================================

@pytest.fixture
def petstore_dir() -> Path:
    return TEST_FILES_DIR / "petstore"


@pytest.fixture
def broken_dir() -> Path:
    return TEST_FILES_DIR / "broken"


# ============================================================================
# IN-MEMORY RESOLUTION FIXTURES
# ============================================================================

class FakeLocator:
    """
    Type locator backed by a dict, counting every lookup it serves.
    """

    def __init__(self, types: Dict[Tuple[str, str], LocatedType]):
        self.types = types
        self.calls: List[Tuple[str, str]] = []

    def locate(self, import_path: str, type_name: str) -> Optional[LocatedType]:
        self.calls.append((import_path, type_name))
        return self.types.get((import_path, type_name))


def make_index(*packages: PackageInfo) -> PackageIndex:
    return PackageIndex(packages, module_path="example.com/app")


def package(import_path: str, name: Optional[str] = None, imports: Optional[Dict[str, List[str]]] = None) -> PackageInfo:
    return PackageInfo(
        import_path=import_path,
        name=name or import_path.rsplit("/", 1)[-1],
        directory="",
        imports=imports or {},
    )


def struct(package_path: str, name: str, *members: MemberRecord) -> LocatedType:
    return LocatedType(
        name=name,
        package_path=package_path,
        package_name=package_path.rsplit("/", 1)[-1],
        members=list(members),
    )


def named_type(package_path: str, name: str, underlying: str, enum_candidate: bool = False) -> LocatedType:
    return LocatedType(
        name=name,
        package_path=package_path,
        package_name=package_path.rsplit("/", 1)[-1],
        underlying=underlying,
        is_enum_candidate=enum_candidate,
    )


def member(name: str, type_name: str, serialized_name: Optional[str] = None, embedded: bool = False) -> MemberRecord:
    return MemberRecord(
        exported_name=name,
        serialized_name=serialized_name or name.lower(),
        type_name=type_name,
        is_embedded=embedded,
    )
