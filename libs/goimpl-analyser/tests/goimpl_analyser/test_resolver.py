"""Tests for TolerantResolver."""

from collections.abc import Callable
from pathlib import Path

import pytest

from goimpl_analyser.errors import NoFilesError
from goimpl_analyser.models import ResolvedScope, SymbolKind, TypeKind
from goimpl_analyser.package_loader import PackageLoader
from goimpl_analyser.resolver import TolerantResolver

ResolveSources = Callable[[dict[str, str]], ResolvedScope]


@pytest.fixture
def resolve_sources(tmp_path: Path) -> ResolveSources:
    """Return a helper that writes a package and resolves it."""

    def _resolve(sources: dict[str, str]) -> ResolvedScope:
        package_dir = tmp_path / "pkg"
        package_dir.mkdir(exist_ok=True)
        for name, content in sources.items():
            (package_dir / name).write_text(content)
        unit = PackageLoader().load(package_dir)
        return TolerantResolver().resolve(unit.files)

    return _resolve


class TestDeclarations:
    """Test collection of package-level symbols."""

    def test_symbols_in_declaration_order(self, resolve_sources: ResolveSources) -> None:
        """Test that symbols follow file name order, then source order."""
        scope = resolve_sources(
            {
                "b.go": "package pkg\n\ntype Beta struct{}\n\nfunc helper() {}\n",
                "a.go": "package pkg\n\nvar count int\n\nconst Limit = 3\n\ntype Alpha struct{}\n",
            }
        )

        assert scope.package_name == "pkg"
        assert scope.names() == ["count", "Limit", "Alpha", "Beta", "helper"]
        assert scope.lookup("count").kind is SymbolKind.VAR
        assert scope.lookup("Limit").kind is SymbolKind.CONST
        assert scope.lookup("helper").kind is SymbolKind.FUNC
        assert scope.lookup("Missing") is None

    def test_init_and_blank_are_not_declared(self, resolve_sources: ResolveSources) -> None:
        """Test that init functions and the blank identifier are not symbols."""
        scope = resolve_sources(
            {"a.go": "package pkg\n\nfunc init() {}\n\nfunc init() {}\n\nvar _ = 1\n"}
        )

        assert scope.names() == []
        assert scope.diagnostics == []

    def test_redeclaration_keeps_first(self, resolve_sources: ResolveSources) -> None:
        """Test that a duplicate name is diagnosed and the first kept."""
        scope = resolve_sources(
            {
                "a.go": "package pkg\n\ntype Thing struct{}\n",
                "b.go": "package pkg\n\nfunc Thing() {}\n",
            }
        )

        assert scope.lookup("Thing").kind is SymbolKind.TYPE
        assert any("Thing redeclared" in d.message for d in scope.diagnostics)

    def test_foreign_package_file_is_excluded(self, resolve_sources: ResolveSources) -> None:
        """Test that files of another package are diagnosed and ignored."""
        scope = resolve_sources(
            {
                "a.go": "package pkg\n\ntype Mine struct{}\n",
                "b.go": "package other\n\ntype Theirs struct{}\n",
            }
        )

        assert scope.names() == ["Mine"]
        assert any("expected package pkg" in d.message for d in scope.diagnostics)

    def test_no_files_raises(self) -> None:
        """Test that resolving nothing raises NoFilesError."""
        with pytest.raises(NoFilesError):
            TolerantResolver().resolve([])


class TestTypeKinds:
    """Test classification of declared types."""

    def test_type_kinds(self, resolve_sources: ResolveSources) -> None:
        """Test each kind of type declaration."""
        scope = resolve_sources(
            {
                "types.go": """package pkg

type Plain struct{}
type Shape interface{ Area() int }
type Alias = Plain
type Celsius float64
type Names []string
type Handler func()
type Named Plain
type Failure error
type Pair[K comparable, V any] struct{ key K; value V }
""",
            }
        )

        kinds = {name: scope.lookup(name).type_kind for name in scope.names()}

        assert kinds == {
            "Plain": TypeKind.STRUCT,
            "Shape": TypeKind.INTERFACE,
            "Alias": TypeKind.ALIAS,
            "Celsius": TypeKind.BASIC,
            "Names": TypeKind.OTHER,
            "Handler": TypeKind.OTHER,
            "Named": TypeKind.STRUCT,
            "Failure": TypeKind.INTERFACE,
            "Pair": TypeKind.STRUCT,
        }

    def test_imported_type_is_invalid_and_suppressed(
        self, resolve_sources: ResolveSources
    ) -> None:
        """Test that types defined from imported types resolve to INVALID."""
        scope = resolve_sources(
            {
                "a.go": 'package pkg\n\nimport "time"\n\ntype Stamp time.Time\n',
            }
        )

        assert scope.lookup("Stamp").type_kind is TypeKind.INVALID
        messages = [d.message for d in scope.diagnostics]
        assert any('could not import "time"' in m for m in messages)
        assert any("time.Time" in m for m in messages)

    def test_undefined_type_is_invalid(self, resolve_sources: ResolveSources) -> None:
        """Test that a reference to an undeclared name is diagnosed."""
        scope = resolve_sources({"a.go": "package pkg\n\ntype Ghost Phantom\n"})

        assert scope.lookup("Ghost").type_kind is TypeKind.INVALID
        assert any("undefined: Phantom" in d.message for d in scope.diagnostics)

    def test_recursive_definition_terminates(self, resolve_sources: ResolveSources) -> None:
        """Test that cyclic type definitions resolve to INVALID."""
        scope = resolve_sources({"a.go": "package pkg\n\ntype A B\n\ntype B A\n"})

        assert scope.lookup("A").type_kind is TypeKind.INVALID
        assert scope.lookup("B").type_kind is TypeKind.INVALID


class TestMethodSets:
    """Test the effective method-name registry."""

    def test_value_and_pointer_receivers_combine(
        self, resolve_sources: ResolveSources
    ) -> None:
        """Test that both receiver forms count, across files."""
        scope = resolve_sources(
            {
                "a.go": "package pkg\n\ntype Server struct{}\n\nfunc (s Server) Start() error { return nil }\n",
                "b.go": "package pkg\n\nfunc (s *Server) Stop() error { return nil }\n",
            }
        )

        assert scope.method_set("Server") == frozenset({"Start", "Stop"})

    def test_generic_receiver(self, resolve_sources: ResolveSources) -> None:
        """Test that methods on generic structs are attached to the base name."""
        scope = resolve_sources(
            {
                "a.go": """package pkg

type List[T any] struct{ items []T }

func (l *List[T]) Push(item T) { l.items = append(l.items, item) }
""",
            }
        )

        assert scope.method_set("List") == frozenset({"Push"})

    def test_embedded_struct_methods_are_promoted(
        self, resolve_sources: ResolveSources
    ) -> None:
        """Test promotion through value and pointer embedding, recursively."""
        scope = resolve_sources(
            {
                "a.go": """package pkg

type Base struct{}

func (b *Base) Start() error { return nil }

type Middle struct {
	*Base
}

func (m Middle) Stop() error { return nil }

type Top struct {
	Middle
	name string
}

func (t Top) GetName() string { return t.name }
""",
            }
        )

        assert scope.method_set("Middle") == frozenset({"Start", "Stop"})
        assert scope.method_set("Top") == frozenset({"Start", "Stop", "GetName"})

    def test_embedded_interface_contributes_methods(
        self, resolve_sources: ResolveSources
    ) -> None:
        """Test that embedded interfaces and error contribute their method names."""
        scope = resolve_sources(
            {
                "a.go": """package pkg

type Runner interface {
	Run()
	Namer
}

type Namer interface{ Name() string }

type Job struct {
	Runner
	error
}
""",
            }
        )

        assert scope.method_set("Job") == frozenset({"Run", "Name", "Error"})

    def test_embedded_imported_type_contributes_nothing(
        self, resolve_sources: ResolveSources
    ) -> None:
        """Test that imported embedded fields are diagnosed but do not fail."""
        scope = resolve_sources(
            {
                "a.go": """package pkg

import "sync"

type Guarded struct {
	sync.Mutex
}

func (g *Guarded) Stop() error { return nil }
""",
            }
        )

        assert scope.method_set("Guarded") == frozenset({"Stop"})
        assert any("sync.Mutex" in d.message for d in scope.diagnostics)

    def test_self_embedding_terminates(self, resolve_sources: ResolveSources) -> None:
        """Test that cyclic embedding does not recurse forever."""
        scope = resolve_sources(
            {
                "a.go": """package pkg

type Node struct {
	*Node
}

func (n *Node) Next() {}
""",
            }
        )

        assert scope.method_set("Node") == frozenset({"Next"})

    def test_methods_on_undeclared_receiver_are_diagnosed(
        self, resolve_sources: ResolveSources
    ) -> None:
        """Test that a method whose receiver is not declared is suppressed."""
        scope = resolve_sources(
            {"a.go": "package pkg\n\nfunc (g *Ghost) Haunt() {}\n"}
        )

        assert scope.method_sets == {}
        assert any("invalid receiver type Ghost" in d.message for d in scope.diagnostics)

    def test_alias_receiver_methods_attach_to_target(
        self, resolve_sources: ResolveSources
    ) -> None:
        """Test that methods declared on an alias belong to the aliased struct."""
        scope = resolve_sources(
            {
                "a.go": "package pkg\n\ntype Server struct{}\n\nfunc (s *Server) Start() error { return nil }\n",
                "b.go": "package pkg\n\ntype S = Server\n\ntype T = S\n\nfunc (s *S) Stop() error { return nil }\n\nfunc (t T) Name() string { return \"\" }\n",
            }
        )

        assert scope.method_set("Server") == frozenset({"Start", "Stop", "Name"})
        assert "S" not in scope.method_sets
        assert scope.diagnostics == []

    def test_duplicate_method_through_alias_is_diagnosed(
        self, resolve_sources: ResolveSources
    ) -> None:
        """Test that redeclaring a method via an alias keeps the first one."""
        scope = resolve_sources(
            {
                "a.go": "package pkg\n\ntype Server struct{}\n\ntype S = Server\n\nfunc (s Server) Start() error { return nil }\n\nfunc (s *S) Start() error { return nil }\n",
            }
        )

        assert scope.method_set("Server") == frozenset({"Start"})
        assert any(
            "method Server.Start already declared" in d.message for d in scope.diagnostics
        )

    def test_alias_of_imported_type_cannot_have_methods(
        self, resolve_sources: ResolveSources
    ) -> None:
        """Test that a method on an alias of a non-local type is diagnosed."""
        scope = resolve_sources(
            {
                "a.go": "package pkg\n\nimport \"bytes\"\n\ntype Buf = bytes.Buffer\n\nfunc (b *Buf) Start() error { return nil }\n",
            }
        )

        assert any(
            "cannot define new methods on non-local type Buf" in d.message
            for d in scope.diagnostics
        )

    def test_only_struct_types_are_registered(self, resolve_sources: ResolveSources) -> None:
        """Test that non-struct types have no registry entry."""
        scope = resolve_sources(
            {
                "a.go": """package pkg

type Celsius float64

func (c Celsius) Start() error { return nil }

type Shape interface{ Start() error }
""",
            }
        )

        assert scope.method_sets == {}
        assert scope.method_set("Celsius") == frozenset()
