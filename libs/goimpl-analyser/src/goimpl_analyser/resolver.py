"""Tolerant package-level resolution.

The resolver reads the declarations of one package and answers two
questions for the matcher: what kind of type each declared name denotes, and
which method names each struct type exposes. Packages are resolved in
isolation, so anything that lives in another package (imports, qualified
types, embedded fields from other packages) cannot be resolved. Those
problems are recorded as diagnostics on the scope instead of aborting.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from tree_sitter import Node

from goimpl_analyser.errors import NoFilesError
from goimpl_analyser.languages.base import get_node_text, line_of
from goimpl_analyser.languages.go import (
    CONST_DECLARATION,
    FUNCTION_DECLARATION,
    INTERFACE_TYPE,
    METHOD_DECLARATION,
    PREDECLARED_BASIC_TYPES,
    PREDECLARED_INTERFACE_METHODS,
    PREDECLARED_INTERFACES,
    STRUCT_TYPE,
    TYPE_ALIAS,
    TYPE_DECLARATION,
    VAR_DECLARATION,
    declared_name,
    embedded_type_of,
    import_paths,
    interface_members,
    iter_value_names,
    receiver_type_name,
    struct_embedded_types,
    type_reference,
    type_specs_of,
)
from goimpl_analyser.models import (
    Diagnostic,
    ParsedFile,
    ResolvedScope,
    Symbol,
    SymbolKind,
    TypeKind,
)

logger = logging.getLogger(__name__)

_BLANK_IDENTIFIER = "_"
_INIT_FUNCTION = "init"


@dataclass
class _Underlying:
    """The resolved underlying type of a declared type."""

    kind: TypeKind
    node: Node | None = None  # struct_type or interface_type node
    file: ParsedFile | None = None


@dataclass
class _ResolutionContext:
    """Internal state for resolving a single package."""

    scope: ResolvedScope
    methods: dict[str, list[str]] = field(default_factory=dict)
    receivers: list[tuple[str, str, ParsedFile, Node]] = field(default_factory=list)
    underlying: dict[str, _Underlying] = field(default_factory=dict)
    reported: set[tuple[str, int | None, str]] = field(default_factory=set)

    def report(self, file: ParsedFile | None, node: Node | None, message: str) -> None:
        """Record a suppressed diagnostic once."""
        path = file.path if file is not None else None
        line = line_of(node) if node is not None else None
        key = (str(path), line, message)
        if key in self.reported:
            return
        self.reported.add(key)
        self.scope.diagnostics.append(Diagnostic(file=path, line=line, message=message))


class TolerantResolver:
    """Builds the scope of one package without loading its dependencies.

    The returned scope holds every package-level declaration in declaration
    order, the TypeKind of each type and a registry of effective method-name
    sets for struct types: value- and pointer-receiver methods combined, plus
    methods promoted from embedded fields that resolve inside the package.
    """

    def resolve(self, files: Sequence[ParsedFile]) -> ResolvedScope:
        """Resolve package-level declarations.

        Args:
            files: Parsed files of one package, in file name order

        Returns:
            ResolvedScope; resolution problems are listed in its diagnostics

        Raises:
            NoFilesError: If no files are given

        """
        if not files:
            raise NoFilesError("no files to resolve")

        package_name = files[0].package_name or ""
        ctx = _ResolutionContext(scope=ResolvedScope(package_name=package_name))

        for parsed in files:
            if parsed.package_name != package_name:
                ctx.report(
                    parsed,
                    None,
                    f"package {parsed.package_name}; expected package {package_name}",
                )
                continue
            for path in import_paths(parsed.root, parsed.source):
                ctx.report(
                    parsed, None, f'could not import "{path}" (dependencies are not loaded)'
                )
            self._declare(parsed, ctx)

        for symbol in ctx.scope.symbols.values():
            if symbol.kind is SymbolKind.TYPE:
                symbol.type_kind = self._type_kind(symbol, ctx)

        for receiver, method_name, file, node in ctx.receivers:
            self._register_method(receiver, method_name, file, node, ctx)

        for symbol in ctx.scope.symbols.values():
            if symbol.type_kind is TypeKind.STRUCT:
                ctx.scope.method_sets[symbol.name] = frozenset(
                    self._method_names(symbol.name, ctx, frozenset())
                )

        if ctx.scope.diagnostics:
            logger.debug(
                "Suppressed %d resolution error(s) in package %s",
                len(ctx.scope.diagnostics),
                package_name,
            )
        return ctx.scope

    # Declarations

    def _declare(self, parsed: ParsedFile, ctx: _ResolutionContext) -> None:
        for node in parsed.root.children:
            if node.type == TYPE_DECLARATION:
                for spec in type_specs_of(node):
                    self._add_symbol(parsed, spec, SymbolKind.TYPE, ctx)
            elif node.type == FUNCTION_DECLARATION:
                name = declared_name(node, parsed.source)
                if name != _INIT_FUNCTION:
                    self._add_symbol(parsed, node, SymbolKind.FUNC, ctx, name)
            elif node.type == METHOD_DECLARATION:
                self._add_method(parsed, node, ctx)
            elif node.type in (VAR_DECLARATION, CONST_DECLARATION):
                kind = SymbolKind.VAR if node.type == VAR_DECLARATION else SymbolKind.CONST
                for name, spec in iter_value_names(node, parsed.source):
                    self._add_symbol(parsed, spec, kind, ctx, name)

    def _add_symbol(  # noqa: PLR0913 - declaration site details
        self,
        parsed: ParsedFile,
        node: Node,
        kind: SymbolKind,
        ctx: _ResolutionContext,
        name: str | None = None,
    ) -> None:
        if name is None:
            name = declared_name(node, parsed.source)
        if name is None or name == _BLANK_IDENTIFIER:
            return
        existing = ctx.scope.lookup(name)
        if existing is not None:
            ctx.report(parsed, node, f"{name} redeclared in this block")
            return
        ctx.scope.symbols[name] = Symbol(name=name, kind=kind, file=parsed, node=node)

    def _add_method(
        self, parsed: ParsedFile, node: Node, ctx: _ResolutionContext
    ) -> None:
        method_name = declared_name(node, parsed.source)
        receiver = receiver_type_name(node, parsed.source)
        if method_name is None:
            return
        if receiver is None:
            ctx.report(parsed, node, f"cannot resolve receiver of method {method_name}")
            return
        ctx.receivers.append((receiver, method_name, parsed, node))

    def _register_method(  # noqa: PLR0913 - declaration site details
        self,
        receiver: str,
        method_name: str,
        parsed: ParsedFile,
        node: Node,
        ctx: _ResolutionContext,
    ) -> None:
        symbol = ctx.scope.lookup(receiver)
        if symbol is None or symbol.kind is not SymbolKind.TYPE:
            ctx.report(parsed, node, f"invalid receiver type {receiver}")
            return
        base = self._receiver_base(receiver, ctx)
        if base is None:
            ctx.report(
                parsed, node, f"cannot define new methods on non-local type {receiver}"
            )
            return
        names = ctx.methods.setdefault(base, [])
        if method_name in names:
            ctx.report(parsed, node, f"method {base}.{method_name} already declared")
            return
        names.append(method_name)

    def _receiver_base(self, name: str, ctx: _ResolutionContext) -> str | None:
        """Follow alias declarations to the local type a method attaches to."""
        seen: set[str] = set()
        while name not in seen:
            symbol = ctx.scope.lookup(name)
            if symbol is None or symbol.kind is not SymbolKind.TYPE:
                return None
            if symbol.node.type != TYPE_ALIAS:
                return name
            seen.add(name)
            target = symbol.node.child_by_field_name("type")
            if target is None or target.type not in ("type_identifier", "generic_type"):
                return None
            ref = type_reference(target, symbol.file.source)
            if ref is None or ref[0] is not None:
                return None
            name = ref[1]
        return None

    # Type kinds

    def _type_kind(self, symbol: Symbol, ctx: _ResolutionContext) -> TypeKind:
        if symbol.node.type == TYPE_ALIAS:
            return TypeKind.ALIAS
        return self._underlying_of(symbol.name, ctx, frozenset()).kind

    def _underlying_of(
        self, name: str, ctx: _ResolutionContext, seen: frozenset[str]
    ) -> _Underlying:
        cached = ctx.underlying.get(name)
        if cached is not None:
            return cached

        symbol = ctx.scope.lookup(name)
        if symbol is None or symbol.kind is not SymbolKind.TYPE:
            return _Underlying(TypeKind.INVALID)
        if name in seen:
            ctx.report(symbol.file, symbol.node, f"invalid recursive type {name}")
            return _Underlying(TypeKind.INVALID)

        result = self._resolve_type_expr(
            symbol.node.child_by_field_name("type"), symbol.file, ctx, seen | {name}
        )
        ctx.underlying[name] = result
        return result

    def _resolve_type_expr(
        self,
        node: Node | None,
        parsed: ParsedFile,
        ctx: _ResolutionContext,
        seen: frozenset[str],
    ) -> _Underlying:
        if node is None:
            return _Underlying(TypeKind.INVALID)
        if node.type == STRUCT_TYPE:
            return _Underlying(TypeKind.STRUCT, node, parsed)
        if node.type == INTERFACE_TYPE:
            return _Underlying(TypeKind.INTERFACE, node, parsed)
        if node.type == "parenthesized_type":
            inner = node.named_children
            return self._resolve_type_expr(inner[0] if inner else None, parsed, ctx, seen)
        if node.type == "generic_type":
            return self._resolve_type_expr(
                node.child_by_field_name("type"), parsed, ctx, seen
            )
        if node.type == "qualified_type":
            ctx.report(
                parsed,
                node,
                f"cannot resolve {get_node_text(node, parsed.source)} "
                "(package not loaded)",
            )
            return _Underlying(TypeKind.INVALID)
        if node.type == "type_identifier":
            return self._resolve_identifier(
                get_node_text(node, parsed.source), node, parsed, ctx, seen
            )
        return _Underlying(TypeKind.OTHER)

    def _resolve_identifier(  # noqa: PLR0913 - reference site details
        self,
        name: str,
        node: Node,
        parsed: ParsedFile,
        ctx: _ResolutionContext,
        seen: frozenset[str],
    ) -> _Underlying:
        symbol = ctx.scope.lookup(name)
        if symbol is not None and symbol.kind is SymbolKind.TYPE:
            return self._underlying_of(name, ctx, seen)
        if name in PREDECLARED_INTERFACES:
            return _Underlying(TypeKind.INTERFACE)
        if name in PREDECLARED_BASIC_TYPES:
            return _Underlying(TypeKind.BASIC)
        # Type parameters of generic declarations land here as well
        ctx.report(parsed, node, f"undefined: {name}")
        return _Underlying(TypeKind.INVALID)

    # Method sets

    def _method_names(
        self, name: str, ctx: _ResolutionContext, seen: frozenset[str]
    ) -> list[str]:
        """Return declared plus promoted method names of a local type."""
        if name in seen:
            return []
        seen = seen | {name}

        symbol = ctx.scope.lookup(name)
        if symbol is not None and symbol.node.type == TYPE_ALIAS:
            ref = type_reference(symbol.node.child_by_field_name("type"), symbol.file.source)
            if ref is None or ref[0] is not None:
                return []
            return self._method_names(ref[1], ctx, seen)

        names = list(ctx.methods.get(name, []))
        underlying = self._underlying_of(name, ctx, frozenset())
        if (
            underlying.kind is TypeKind.STRUCT
            and underlying.node is not None
            and underlying.file is not None
        ):
            for embedded in struct_embedded_types(underlying.node):
                for promoted in self._embedded_methods(embedded, underlying.file, ctx, seen):
                    if promoted not in names:
                        names.append(promoted)
        return names

    def _embedded_methods(
        self,
        type_node: Node,
        parsed: ParsedFile,
        ctx: _ResolutionContext,
        seen: frozenset[str],
    ) -> list[str]:
        ref = type_reference(type_node, parsed.source)
        if ref is None:
            return []
        qualifier, name = ref
        if qualifier is not None:
            ctx.report(
                parsed,
                type_node,
                f"cannot resolve embedded field {qualifier}.{name} (package not loaded)",
            )
            return []
        if name in PREDECLARED_INTERFACE_METHODS:
            return list(PREDECLARED_INTERFACE_METHODS[name])

        symbol = ctx.scope.lookup(name)
        if symbol is None or symbol.kind is not SymbolKind.TYPE:
            ctx.report(parsed, type_node, f"undefined: {name}")
            return []

        underlying = self._underlying_of(name, ctx, frozenset())
        if underlying.kind is TypeKind.INTERFACE:
            if underlying.node is None or underlying.file is None:
                # Defined from a predeclared interface, e.g. `type E error`
                return self._embedded_methods(
                    symbol.node.child_by_field_name("type"),
                    symbol.file,
                    ctx,
                    seen | {name},
                )
            return self._interface_methods(underlying.node, underlying.file, ctx, seen)
        return self._method_names(name, ctx, seen)

    def _interface_methods(
        self,
        interface: Node,
        parsed: ParsedFile,
        ctx: _ResolutionContext,
        seen: frozenset[str],
    ) -> list[str]:
        names: list[str] = []
        for is_method, member in interface_members(interface):
            if is_method:
                method = declared_name(member, parsed.source)
                if method is not None and method not in names:
                    names.append(method)
                continue
            target = embedded_type_of(member)
            if target is None:
                continue
            ref = type_reference(target, parsed.source)
            if ref is None or ref[1] in seen:
                continue
            for method in self._embedded_methods(target, parsed, ctx, seen | {ref[1]}):
                if method not in names:
                    names.append(method)
        return names

