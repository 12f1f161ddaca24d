"""Base utility functions for AST traversal.

These functions are grammar-agnostic and wrap common tree-sitter operations
used by the Go declaration helpers.
"""

from tree_sitter import Node

_DEFAULT_ENCODING = "utf-8"


def get_node_text(node: Node, source: bytes) -> str:
    """Get the text content of an AST node.

    Args:
        node: Tree-sitter node with start_byte and end_byte attributes
        source: Original source bytes the tree was parsed from

    Returns:
        Text content of the node

    """
    return source[node.start_byte : node.end_byte].decode(
        _DEFAULT_ENCODING, errors="replace"
    )


def find_child_by_type(node: Node, child_type: str) -> Node | None:
    """Find the first direct child of a specific type.

    Args:
        node: Parent node to search in
        child_type: Type of child node to find

    Returns:
        First matching child node or None

    """
    for child in node.children:
        if child.type == child_type:
            return child
    return None


def find_children_by_type(node: Node, *child_types: str) -> list[Node]:
    """Find all direct children matching any of the given types.

    Args:
        node: Parent node to search in
        child_types: Types of children to find

    Returns:
        List of matching child nodes in source order

    """
    return [child for child in node.children if child.type in child_types]


def line_of(node: Node) -> int:
    """Return the 1-based line a node starts on."""
    return node.start_point[0] + 1
