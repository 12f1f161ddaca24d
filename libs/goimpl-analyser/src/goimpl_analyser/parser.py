"""Go source parser using tree-sitter."""

from pathlib import Path

from tree_sitter import Node, Parser

from goimpl_analyser.languages.base import line_of
from goimpl_analyser.languages.go import (
    GoLanguageSupport,
    find_syntax_error,
    package_name,
)
from goimpl_analyser.models import ParsedFile


class GoSourceParser:
    """Parser for Go source files using tree-sitter.

    tree-sitter always produces a tree, recovering from syntax errors with
    ERROR and MISSING nodes. Callers decide whether such a tree is usable;
    `parse_file` reports it through `ParsedFile.syntax_error_line`.

    A parser instance is not thread-safe. Create one per worker thread.
    """

    def __init__(self, language: GoLanguageSupport | None = None) -> None:
        """Initialise the parser.

        Args:
            language: Go language support (default: a new GoLanguageSupport)

        """
        self.language = language or GoLanguageSupport()
        self.parser = Parser()
        self.parser.language = self.language.get_tree_sitter_language()

    def parse(self, source: bytes) -> Node:
        """Parse Go source bytes.

        Args:
            source: Source code to parse

        Returns:
            AST root node

        """
        tree = self.parser.parse(source)
        return tree.root_node

    def parse_file(self, path: Path, source: bytes | None = None) -> ParsedFile:
        """Parse a Go file into a ParsedFile.

        Args:
            path: Path of the file
            source: File content; read from disk when omitted

        Returns:
            ParsedFile with the syntax tree and declared package name

        Raises:
            OSError: If the file cannot be read

        """
        if source is None:
            source = path.read_bytes()
        root = self.parse(source)
        error_node = find_syntax_error(root)
        return ParsedFile(
            path=path,
            source=source,
            root=root,
            package_name=package_name(root, source),
            syntax_error_line=line_of(error_node) if error_node is not None else None,
        )

    def is_supported_file(self, file_path: Path) -> bool:
        """Check if file is a non-test Go source file.

        Args:
            file_path: Path to check

        Returns:
            True if the file should be parsed as package source

        """
        return self.language.is_source_file(file_path.name)
