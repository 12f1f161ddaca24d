"""Name-based structural conformance matching."""

import logging

from goimpl_analyser.models import InterfaceSpec, ResolvedScope, Symbol, SymbolKind, TypeKind

logger = logging.getLogger(__name__)


class ConformanceMatcher:
    """Tests struct types of a resolved scope against an interface.

    A struct conforms when its effective method-name set contains every
    required method name. Parameter and result types are not compared. An
    interface without methods is never satisfied, so it yields no matches.
    """

    def __init__(self, interface: InterfaceSpec) -> None:
        """Initialise the matcher.

        Args:
            interface: The interface whose method names are required

        """
        self._interface = interface
        self._required = frozenset(interface.required_methods)

    @property
    def interface(self) -> InterfaceSpec:
        """Return the interface being matched."""
        return self._interface

    def candidates(self, scope: ResolvedScope) -> list[Symbol]:
        """Return the struct types of a scope in declaration order.

        Values, functions, constants, interfaces, aliases and other defined
        types are never candidates.
        """
        return [
            symbol
            for symbol in scope.symbols.values()
            if symbol.kind is SymbolKind.TYPE and symbol.type_kind is TypeKind.STRUCT
        ]

    def conforms(self, scope: ResolvedScope, name: str) -> bool:
        """Check whether the named struct type declares every required method."""
        if not self._required:
            return False
        symbol = scope.lookup(name)
        if symbol is None or symbol.type_kind is not TypeKind.STRUCT:
            return False
        return self._required <= scope.method_set(name)

    def match(self, scope: ResolvedScope) -> list[Symbol]:
        """Return the conforming struct types of a scope in declaration order."""
        if not self._required:
            return []

        matches: list[Symbol] = []
        for symbol in self.candidates(scope):
            if self.conforms(scope, symbol.name):
                matches.append(symbol)
            else:
                missing = sorted(self._required - scope.method_set(symbol.name))
                logger.debug(
                    "%s.%s does not implement %s (missing %s)",
                    scope.package_name,
                    symbol.name,
                    self._interface.name,
                    ", ".join(missing),
                )
        return matches
