"""Data models for interface discovery.

Records that leave the engine (the interface specification, implementations
and the scan report) are frozen pydantic models. Per-directory structures
that hold syntax trees are plain dataclasses and are discarded once the
directory has been processed.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict
from tree_sitter import Node


class InterfaceSpec(BaseModel):
    """The method names a type must declare to satisfy an interface."""

    model_config = ConfigDict(frozen=True)

    name: str
    required_methods: tuple[str, ...]
    source_file: str = ""
    embedded: tuple[str, ...] = ()  # embedded members that were not flattened


class Implementation(BaseModel):
    """A struct type that satisfies the interface.

    The field names are the JSON output contract.
    """

    model_config = ConfigDict(frozen=True)

    package: str
    struct: str
    package_path: str


class DirectoryError(BaseModel):
    """A recovered error for one directory of the walk."""

    model_config = ConfigDict(frozen=True)

    directory: str
    message: str


class ScanReport(BaseModel):
    """Outcome of a full scan."""

    interface: InterfaceSpec
    implementations: list[Implementation] = []
    errors: list[DirectoryError] = []
    directories_visited: int = 0
    packages_analysed: int = 0


@dataclass
class ParsedFile:
    """A Go file and its syntax tree."""

    path: Path
    source: bytes
    root: Node
    package_name: str | None
    syntax_error_line: int | None = None

    @property
    def has_syntax_error(self) -> bool:
        """Whether tree-sitter had to recover from a syntax error."""
        return self.syntax_error_line is not None


@dataclass
class SkippedFile:
    """A source file the package loader could not use."""

    path: Path
    reason: str


@dataclass
class PackageUnit:
    """The parsed non-test files of one directory."""

    directory: Path
    package_name: str | None = None
    files: list[ParsedFile] = field(default_factory=list)
    skipped: list[SkippedFile] = field(default_factory=list)


class TypeKind(StrEnum):
    """What a declared type denotes once its underlying type is resolved."""

    STRUCT = "struct"
    INTERFACE = "interface"
    ALIAS = "alias"
    BASIC = "basic"
    OTHER = "other"
    INVALID = "invalid"


class SymbolKind(StrEnum):
    """Kinds of package-level declarations."""

    TYPE = "type"
    FUNC = "func"
    VAR = "var"
    CONST = "const"


@dataclass
class Symbol:
    """A package-level declaration."""

    name: str
    kind: SymbolKind
    file: ParsedFile
    node: Node
    type_kind: TypeKind | None = None  # set for TYPE symbols only


@dataclass
class Diagnostic:
    """A resolution error that was suppressed instead of aborting."""

    file: Path | None
    line: int | None
    message: str

    def __str__(self) -> str:
        """Return the diagnostic in file:line: message form."""
        location = str(self.file) if self.file is not None else "<package>"
        if self.line is not None:
            location = f"{location}:{self.line}"
        return f"{location}: {self.message}"


@dataclass
class ResolvedScope:
    """Package-level symbols of one package, with the method-set registry."""

    package_name: str
    symbols: dict[str, Symbol] = field(default_factory=dict)
    method_sets: dict[str, frozenset[str]] = field(default_factory=dict)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def lookup(self, name: str) -> Symbol | None:
        """Return the symbol declared under name, if any."""
        return self.symbols.get(name)

    def names(self) -> list[str]:
        """Return the declared names in declaration order."""
        return list(self.symbols)

    def method_set(self, name: str) -> frozenset[str]:
        """Return the effective method names of a struct type (empty if unknown)."""
        return self.method_sets.get(name, frozenset())
