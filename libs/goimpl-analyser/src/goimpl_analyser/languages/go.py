"""Go language support: grammar binding and declaration helpers.

The helpers here understand the node layout produced by tree-sitter-go for
package clauses, imports, type declarations, struct fields, interface
members and method receivers. Everything else in the engine talks to the
syntax tree through these functions.
"""

from collections.abc import Iterator

import tree_sitter_go as tsgo
from tree_sitter import Language, Node

from goimpl_analyser.languages.base import (
    find_child_by_type,
    find_children_by_type,
    get_node_text,
)

# Go source conventions
GO_FILE_EXTENSION = ".go"
TEST_FILE_SUFFIX = "_test.go"

# Predeclared identifiers of the universe scope, grouped by the kind of type
# they denote
PREDECLARED_INTERFACES = frozenset({"error", "any", "comparable"})
PREDECLARED_BASIC_TYPES = frozenset(
    {
        "bool",
        "byte",
        "complex64",
        "complex128",
        "float32",
        "float64",
        "int",
        "int8",
        "int16",
        "int32",
        "int64",
        "rune",
        "string",
        "uint",
        "uint8",
        "uint16",
        "uint32",
        "uint64",
        "uintptr",
    }
)

# Methods contributed by predeclared interfaces when embedded
PREDECLARED_INTERFACE_METHODS: dict[str, tuple[str, ...]] = {
    "error": ("Error",),
    "any": (),
    "comparable": (),
}

# Go AST node types
TYPE_DECLARATION = "type_declaration"
TYPE_SPEC = "type_spec"
TYPE_ALIAS = "type_alias"
FUNCTION_DECLARATION = "function_declaration"
METHOD_DECLARATION = "method_declaration"
VAR_DECLARATION = "var_declaration"
CONST_DECLARATION = "const_declaration"
STRUCT_TYPE = "struct_type"
INTERFACE_TYPE = "interface_type"

# tree-sitter-go >= 0.21 emits method_elem, older grammars emit method_spec
_INTERFACE_METHOD_TYPES = ("method_elem", "method_spec")
_TRIVIAL_MEMBER_TYPES = frozenset({"comment", "{", "}", ";", "\n"})


class GoLanguageSupport:
    """Go language support implementation.

    Provides the tree-sitter Go grammar and the file naming conventions used
    to recognise package sources.
    """

    @property
    def name(self) -> str:
        """Return the canonical language name."""
        return "go"

    @property
    def file_extensions(self) -> list[str]:
        """Return supported file extensions."""
        return [GO_FILE_EXTENSION]

    def get_tree_sitter_language(self) -> Language:
        """Return the tree-sitter Go language binding."""
        return Language(tsgo.language())

    def is_source_file(self, file_name: str) -> bool:
        """Check whether a file name denotes a non-test Go source file."""
        return file_name.endswith(GO_FILE_EXTENSION) and not file_name.endswith(
            TEST_FILE_SUFFIX
        )


def find_syntax_error(root: Node) -> Node | None:
    """Return the first ERROR or MISSING node in a tree, if any.

    A file without a final newline parses with a zero-width MISSING
    terminator after its last declaration. The Go compiler accepts such
    files, so that node is not reported.
    """
    if not root.has_error:
        return None
    if root.is_error or root.is_missing:
        return root
    children = root.children
    skipped = False
    for index, child in enumerate(children):
        if root.type == "source_file" and _is_final_terminator(children, index):
            skipped = True
            continue
        if child.has_error or child.is_missing:
            found = find_syntax_error(child)
            if found is not None:
                return found
    return None if skipped else root


def _is_final_terminator(children: list[Node], index: int) -> bool:
    node = children[index]
    if not node.is_missing or node.start_byte != node.end_byte:
        return False
    return all(sibling.type == "comment" for sibling in children[index + 1 :])


def package_name(root: Node, source: bytes) -> str | None:
    """Return the name declared by the file's package clause."""
    clause = find_child_by_type(root, "package_clause")
    if clause is None:
        return None
    ident = find_child_by_type(clause, "package_identifier")
    return get_node_text(ident, source) if ident is not None else None


def import_paths(root: Node, source: bytes) -> list[str]:
    """Return the import paths of a file in source order."""
    paths: list[str] = []
    for decl in find_children_by_type(root, "import_declaration"):
        specs = find_children_by_type(decl, "import_spec")
        for spec_list in find_children_by_type(decl, "import_spec_list"):
            specs.extend(find_children_by_type(spec_list, "import_spec"))
        for spec in specs:
            path_node = spec.child_by_field_name("path")
            if path_node is not None:
                paths.append(get_node_text(path_node, source).strip("\"`"))
    return paths


def type_specs_of(declaration: Node) -> list[Node]:
    """Return the type_spec and type_alias nodes of one type declaration."""
    return find_children_by_type(declaration, TYPE_SPEC, TYPE_ALIAS)


def iter_type_specs(root: Node) -> Iterator[Node]:
    """Yield top-level type_spec and type_alias nodes, grouped blocks included."""
    for decl in find_children_by_type(root, TYPE_DECLARATION):
        yield from type_specs_of(decl)


def iter_value_names(decl: Node, source: bytes) -> Iterator[tuple[str, Node]]:
    """Yield (name, spec) for each identifier declared by a var or const declaration."""
    spec_type = "var_spec" if decl.type == VAR_DECLARATION else "const_spec"
    specs = find_children_by_type(decl, spec_type)
    # Grouped var declarations are wrapped in var_spec_list by newer grammars
    for spec_list in find_children_by_type(decl, "var_spec_list"):
        specs.extend(find_children_by_type(spec_list, spec_type))
    for spec in specs:
        for name_node in spec.children_by_field_name("name"):
            yield get_node_text(name_node, source), spec


def declared_name(node: Node, source: bytes) -> str | None:
    """Return the text of a declaration's name field."""
    name_node = node.child_by_field_name("name")
    return get_node_text(name_node, source) if name_node is not None else None


def type_reference(type_node: Node | None, source: bytes) -> tuple[str | None, str] | None:
    """Resolve a type expression to a (package qualifier, type name) reference.

    Pointers, parentheses and generic instantiations are unwrapped. Returns
    None for type literals (struct, slice, map, func, ...) that are not
    references to a named type.
    """
    node = type_node
    while node is not None:
        if node.type in ("pointer_type", "parenthesized_type"):
            named = node.named_children
            node = named[0] if named else None
        elif node.type == "generic_type":
            node = node.child_by_field_name("type")
        elif node.type == "type_identifier":
            return None, get_node_text(node, source)
        elif node.type == "qualified_type":
            package = node.child_by_field_name("package")
            name = node.child_by_field_name("name")
            if package is None or name is None:
                return None
            return get_node_text(package, source), get_node_text(name, source)
        else:
            return None
    return None


def receiver_type_name(method: Node, source: bytes) -> str | None:
    """Return the base type name of a method receiver (T for T, *T, T[K], *T[K])."""
    receiver = method.child_by_field_name("receiver")
    if receiver is None:
        return None
    params = find_children_by_type(receiver, "parameter_declaration")
    if not params:
        return None
    ref = type_reference(params[0].child_by_field_name("type"), source)
    if ref is None or ref[0] is not None:
        return None
    return ref[1]


def interface_members(interface: Node) -> Iterator[tuple[bool, Node]]:
    """Yield (is_method, node) for each member of an interface type in source order."""
    for child in interface.named_children:
        if child.type in _TRIVIAL_MEMBER_TYPES:
            continue
        yield child.type in _INTERFACE_METHOD_TYPES, child


def embedded_type_of(member: Node) -> Node | None:
    """Return the single type named by an embedded interface member, if it is one."""
    if member.type in ("type_identifier", "qualified_type"):
        return member
    named = [c for c in member.named_children if c.type not in _TRIVIAL_MEMBER_TYPES]
    if len(named) == 1 and named[0].type in ("type_identifier", "qualified_type"):
        return named[0]
    return None


def struct_embedded_types(struct: Node) -> list[Node]:
    """Return the type nodes of the embedded (anonymous) fields of a struct type."""
    embedded: list[Node] = []
    field_list = find_child_by_type(struct, "field_declaration_list")
    if field_list is None:
        return embedded
    for field in find_children_by_type(field_list, "field_declaration"):
        if field.child_by_field_name("name") is not None:
            continue
        field_type = field.child_by_field_name("type")
        if field_type is not None:
            embedded.append(field_type)
    return embedded
