# Custom exceptions for gospec

from typing import List, Optional


class GospecError(Exception):
    """Base exception for all application-specific errors."""
    pass


class ConfigError(GospecError):
    """Raised for configuration-related problems."""
    pass


class ParserError(GospecError):
    """Raised when a Go source file cannot be read or scanned."""
    def __init__(self, file_path: str, message: str):
        self.file_path = file_path
        self.message = message
        super().__init__(f"Failed to parse {file_path}: {message}")


class UnknownPackageError(GospecError):
    """Raised when an import path is not part of the analyzed source tree."""
    def __init__(self, import_path: str):
        self.import_path = import_path
        super().__init__(f"Package '{import_path}' is not in the package index.")


class ResolutionError(GospecError):
    """
    Base class for fatal type resolution failures.

    `chain` lists the resolution frames (operation, definition, member) that
    were active when the failure happened, outermost first.
    """

    def __init__(self, message: str, type_name: str = "", referring_package: str = ""):
        self.type_name = type_name
        self.referring_package = referring_package
        self.chain: List[str] = []
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        if not self.chain:
            return self.message
        return f"{self.message} (via {' -> '.join(self.chain)})"


class InvalidReferenceError(ResolutionError):
    """Raised when a resolution is attempted without a referring package."""
    def __init__(self, type_name: str):
        super().__init__(
            f"Cannot resolve '{type_name}': referring package path is empty.",
            type_name=type_name,
        )


class UnresolvedAliasError(ResolutionError):
    """Raised when a qualifier matches no import of the referring package."""
    def __init__(self, alias: str, type_name: str, referring_package: str):
        self.alias = alias
        super().__init__(
            f"Import alias '{alias}' of type '{type_name}' matches no import in package '{referring_package}'.",
            type_name=type_name,
            referring_package=referring_package,
        )


class UnresolvedTypeError(ResolutionError):
    """Raised when no candidate package declares the referenced type."""
    def __init__(self, type_name: str, referring_package: str, candidates: Optional[List[str]] = None):
        self.candidates = candidates or []
        tried = f" (tried: {', '.join(self.candidates)})" if self.candidates else ""
        super().__init__(
            f"Type '{type_name}' referenced from package '{referring_package}' could not be located{tried}.",
            type_name=type_name,
            referring_package=referring_package,
        )


class UnresolvedEmbeddedTypeError(ResolutionError):
    """Raised when an embedded member's type cannot be located."""
    def __init__(self, type_name: str, owner_name: str, referring_package: str = ""):
        self.owner_name = owner_name
        super().__init__(
            f"Embedded type '{type_name}' of '{owner_name}' could not be located.",
            type_name=type_name,
            referring_package=referring_package,
        )
