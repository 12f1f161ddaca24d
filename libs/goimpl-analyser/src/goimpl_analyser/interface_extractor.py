"""Extraction of interface method names from a Go declaration file."""

import logging
from pathlib import Path

from tree_sitter import Node

from goimpl_analyser.errors import (
    InterfaceFileNotFoundError,
    NotFoundError,
    ParseError,
    WrongKindError,
)
from goimpl_analyser.languages.base import get_node_text
from goimpl_analyser.languages.go import (
    INTERFACE_TYPE,
    PREDECLARED_INTERFACE_METHODS,
    TYPE_ALIAS,
    declared_name,
    embedded_type_of,
    interface_members,
    iter_type_specs,
)
from goimpl_analyser.models import InterfaceSpec, ParsedFile
from goimpl_analyser.parser import GoSourceParser

logger = logging.getLogger(__name__)


class InterfaceExtractor:
    """Reads one Go file and returns the ordered method names of an interface.

    Only method elements declared directly in the interface are collected.
    Embedded members (other interfaces, type constraints) are reported in
    `InterfaceSpec.embedded`, unless `flatten_embedded` is set, in which case
    interfaces declared in the same file and the predeclared `error` are
    expanded in place.
    """

    def __init__(
        self, parser: GoSourceParser | None = None, flatten_embedded: bool = False
    ) -> None:
        """Initialise the extractor.

        Args:
            parser: Go parser to use (default: a new GoSourceParser)
            flatten_embedded: Expand embedded interfaces declared in the same file

        """
        self._parser = parser or GoSourceParser()
        self._flatten_embedded = flatten_embedded

    def extract(self, file_path: Path, interface_name: str) -> InterfaceSpec:
        """Extract the interface specification.

        Args:
            file_path: Go file declaring the interface
            interface_name: Name of the interface type

        Returns:
            InterfaceSpec with method names in declaration order

        Raises:
            InterfaceFileNotFoundError: If the file does not exist
            ParseError: If the file cannot be read or has syntax errors
            NotFoundError: If no top-level type has that name
            WrongKindError: If the named type is not an interface

        """
        try:
            parsed = self._parser.parse_file(file_path)
        except FileNotFoundError as e:
            raise InterfaceFileNotFoundError(
                f"interface file does not exist: {file_path}"
            ) from e
        except OSError as e:
            raise ParseError(f"failed to parse interface file {file_path}: {e}") from e

        if parsed.has_syntax_error:
            raise ParseError(
                f"failed to parse interface file {file_path}: "
                f"syntax error at line {parsed.syntax_error_line}"
            )
        if parsed.package_name is None:
            raise ParseError(
                f"failed to parse interface file {file_path}: missing package clause"
            )

        declarations = self._type_declarations(parsed)
        spec_node = declarations.get(interface_name)
        if spec_node is None:
            raise NotFoundError(f"interface not found: {interface_name} in {file_path}")

        interface = self._interface_type_of(spec_node, interface_name)

        methods: list[str] = []
        embedded: list[str] = []
        self._collect_methods(
            interface, parsed, declarations, methods, embedded, {interface_name}
        )

        if not methods:
            logger.warning(
                "Interface %s declares no methods; no type will be reported",
                interface_name,
            )
        logger.debug("Interface %s requires methods %s", interface_name, methods)

        return InterfaceSpec(
            name=interface_name,
            required_methods=tuple(methods),
            source_file=str(file_path),
            embedded=tuple(embedded),
        )

    def _type_declarations(self, parsed: ParsedFile) -> dict[str, Node]:
        declarations: dict[str, Node] = {}
        for spec in iter_type_specs(parsed.root):
            name = declared_name(spec, parsed.source)
            if name is not None and name not in declarations:
                declarations[name] = spec
        return declarations

    def _interface_type_of(self, spec_node: Node, name: str) -> Node:
        if spec_node.type == TYPE_ALIAS:
            raise WrongKindError(f"type {name} is an alias, not an interface")
        type_node = spec_node.child_by_field_name("type")
        if type_node is None or type_node.type != INTERFACE_TYPE:
            kind = type_node.type if type_node is not None else "unknown"
            raise WrongKindError(f"type {name} is not an interface (found {kind})")
        return type_node

    def _collect_methods(  # noqa: PLR0913 - recursive walk state
        self,
        interface: Node,
        parsed: ParsedFile,
        declarations: dict[str, Node],
        methods: list[str],
        embedded: list[str],
        visiting: set[str],
    ) -> None:
        for is_method, member in interface_members(interface):
            if is_method:
                name = declared_name(member, parsed.source)
                if name is not None and name not in methods:
                    methods.append(name)
                continue

            member_text = get_node_text(member, parsed.source)
            target = embedded_type_of(member)
            if not self._flatten_embedded or target is None:
                embedded.append(member_text)
                continue

            if target.type != "type_identifier":
                logger.debug("Cannot flatten imported interface %s", member_text)
                embedded.append(member_text)
                continue

            target_name = get_node_text(target, parsed.source)
            if target_name in PREDECLARED_INTERFACE_METHODS:
                for name in PREDECLARED_INTERFACE_METHODS[target_name]:
                    if name not in methods:
                        methods.append(name)
                continue

            target_spec = declarations.get(target_name)
            target_type = (
                target_spec.child_by_field_name("type")
                if target_spec is not None and target_spec.type != TYPE_ALIAS
                else None
            )
            if (
                target_type is None
                or target_type.type != INTERFACE_TYPE
                or target_name in visiting
            ):
                embedded.append(member_text)
                continue

            self._collect_methods(
                target_type,
                parsed,
                declarations,
                methods,
                embedded,
                visiting | {target_name},
            )
