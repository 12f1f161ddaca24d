"""Language support for the structural conformance engine."""

from goimpl_analyser.languages.base import (
    find_child_by_type,
    find_children_by_type,
    get_node_text,
    line_of,
)
from goimpl_analyser.languages.go import GoLanguageSupport

__all__ = [
    # Base utilities
    "find_child_by_type",
    "find_children_by_type",
    "get_node_text",
    "line_of",
    # Go
    "GoLanguageSupport",
]
