"""CLI command implementations for goimpl."""

from goimpl.cli.errors import CLIError
from goimpl.cli.find import find_command, methods_command, parse_interface_spec

__all__ = [
    "CLIError",
    "find_command",
    "methods_command",
    "parse_interface_spec",
]
