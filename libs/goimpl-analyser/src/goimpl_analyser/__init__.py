"""Structural conformance engine for Go source trees.

This package provides ImplementationFinder, which finds every Go struct
under a directory tree that declares all methods named by an interface.

Pipeline per directory: PackageLoader → TolerantResolver → ConformanceMatcher
"""

from .aggregator import ResultAggregator
from .config import FinderConfig
from .errors import (
    ConfigurationError,
    FinderConfigError,
    GoImplError,
    InterfaceFileNotFoundError,
    InterfaceResolutionError,
    NoFilesError,
    NoModuleDeclarationError,
    NotFoundError,
    PackageLoadError,
    ParseError,
    RootDirectoryNotFoundError,
    RootNotFoundError,
    ScanCancelledError,
    ScanError,
    ScanTimeoutError,
    WrongKindError,
)
from .finder import ImplementationFinder
from .interface_extractor import InterfaceExtractor
from .matcher import ConformanceMatcher
from .models import (
    DirectoryError,
    Implementation,
    InterfaceSpec,
    PackageUnit,
    ResolvedScope,
    ScanReport,
)
from .module_path import ModuleRoot
from .package_loader import PackageLoader
from .parser import GoSourceParser
from .resolver import TolerantResolver
from .walker import DirectoryWalker

__all__ = [
    "ConfigurationError",
    "ConformanceMatcher",
    "DirectoryError",
    "DirectoryWalker",
    "FinderConfig",
    "FinderConfigError",
    "GoImplError",
    "GoSourceParser",
    "Implementation",
    "ImplementationFinder",
    "InterfaceExtractor",
    "InterfaceFileNotFoundError",
    "InterfaceResolutionError",
    "InterfaceSpec",
    "ModuleRoot",
    "NoFilesError",
    "NoModuleDeclarationError",
    "NotFoundError",
    "PackageLoadError",
    "PackageUnit",
    "ParseError",
    "ResolvedScope",
    "ResultAggregator",
    "RootDirectoryNotFoundError",
    "RootNotFoundError",
    "ScanCancelledError",
    "ScanError",
    "ScanReport",
    "ScanTimeoutError",
    "TolerantResolver",
    "WrongKindError",
]
