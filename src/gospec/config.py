"""
Run configuration.

All values configurable via GOSPEC_* environment variables; CLI flags
override them per invocation.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from gospec.exceptions import ConfigError


NAMING_CONVENTIONS = ("full", "partial", "simple")

DEFAULT_NAMING = "full"


def _env_str(key: str, default: Optional[str]) -> Optional[str]:
    """Read a non-empty string from environment variable."""
    value = os.getenv(key, "").strip()
    return value or default


def _env_list(key: str) -> List[str]:
    """Read a comma separated list from environment variable."""
    return [item.strip() for item in os.getenv(key, "").split(",") if item.strip()]


@dataclass
class GospecConfig:
    """
    Settings for one generation run.

    Environment Variables:
        GOSPEC_MODULE: Module path of the source tree (default: read go.mod)
        GOSPEC_NAMING: Definition naming convention, one of full/partial/simple (default: full)
        GOSPEC_IGNORE: Comma separated import paths to leave out of the analysis
    """

    module_path: Optional[str] = field(default_factory=lambda: _env_str("GOSPEC_MODULE", None))
    naming: str = field(default_factory=lambda: _env_str("GOSPEC_NAMING", DEFAULT_NAMING))
    ignored_packages: List[str] = field(default_factory=lambda: _env_list("GOSPEC_IGNORE"))

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """
        Raises:
            ConfigError: If the naming convention is not recognized.
        """
        if self.naming not in NAMING_CONVENTIONS:
            supported = ", ".join(NAMING_CONVENTIONS)
            raise ConfigError(
                f"Unrecognized naming convention '{self.naming}'. Supported conventions: {supported}"
            )

    def with_overrides(
        self,
        module_path: Optional[str] = None,
        naming: Optional[str] = None,
        ignored_packages: Optional[List[str]] = None,
    ) -> "GospecConfig":
        """Return a copy with CLI-provided values taking precedence."""
        return GospecConfig(
            module_path=module_path or self.module_path,
            naming=naming or self.naming,
            ignored_packages=ignored_packages if ignored_packages else list(self.ignored_packages),
        )


def parse_ignore_list(raw: Optional[str]) -> List[str]:
    """Split a comma separated --ignore value, dropping blanks."""
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]
