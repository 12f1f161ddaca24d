"""Error classes for the goimpl structural conformance engine.

This module provides:
- GoImplError: Base exception class for all engine errors
- ConfigurationError and subclasses: project root, manifest and settings errors
- InterfaceResolutionError and subclasses: the required interface cannot be established
- ScanError and subclasses: directory walk and per-package errors
"""


class GoImplError(Exception):
    """Base exception for all goimpl errors."""

    pass


# Configuration errors - fatal, abort the whole run
class ConfigurationError(GoImplError):
    """Base exception for configuration-related errors."""

    pass


class RootNotFoundError(ConfigurationError):
    """Raised when go.mod is not present in the working directory."""

    pass


class NoModuleDeclarationError(ConfigurationError):
    """Raised when go.mod contains no module declaration line."""

    pass


class FinderConfigError(ConfigurationError):
    """Raised when finder configuration is invalid."""

    pass


class InterfaceFileNotFoundError(ConfigurationError):
    """Raised when the interface declaration file does not exist."""

    pass


# Interface resolution errors - fatal, the contract cannot be established
class InterfaceResolutionError(GoImplError):
    """Base exception for interface extraction errors."""

    pass


class NotFoundError(InterfaceResolutionError):
    """Raised when no top-level type declaration has the requested name."""

    pass


class WrongKindError(InterfaceResolutionError):
    """Raised when the named declaration exists but is not an interface."""

    pass


class ParseError(InterfaceResolutionError):
    """Raised when a source file cannot be parsed."""

    pass


# Scan errors - fatal only for the search root, recovered per directory otherwise
class ScanError(GoImplError):
    """Base exception for directory scan errors."""

    pass


class RootDirectoryNotFoundError(ScanError):
    """Raised when the top-level search directory does not exist."""

    pass


class PackageLoadError(ScanError):
    """Raised when a package directory cannot be read."""

    pass


class NoFilesError(ScanError):
    """Raised when the resolver is given no files to resolve."""

    pass


class ScanCancelledError(ScanError):
    """Raised when a scan is cancelled at a directory boundary."""

    pass


class ScanTimeoutError(ScanCancelledError):
    """Raised when a scan exceeds its configured timeout."""

    pass
