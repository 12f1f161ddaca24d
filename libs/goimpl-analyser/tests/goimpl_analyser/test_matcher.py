"""Tests for ConformanceMatcher."""

from collections.abc import Callable
from pathlib import Path

import pytest

from goimpl_analyser.matcher import ConformanceMatcher
from goimpl_analyser.models import InterfaceSpec, ResolvedScope
from goimpl_analyser.package_loader import PackageLoader
from goimpl_analyser.resolver import TolerantResolver

SERVICE = InterfaceSpec(name="Service", required_methods=("Start", "Stop"))

PACKAGE_SOURCE = """package services

type Full struct{}

func (f *Full) Start() error { return nil }
func (f *Full) Stop() error  { return nil }
func (f *Full) Extra()       {}

type Partial struct{}

func (p Partial) Start() error { return nil }

type Mismatched struct{}

// Signatures differ from the interface; only names are compared
func (m Mismatched) Start(force bool) int { return 0 }
func (m Mismatched) Stop() string         { return "" }

type Runner interface {
	Start() error
	Stop() error
}

type FullAlias = Full

type Counter int

func (c Counter) Start() error { return nil }
func (c Counter) Stop() error  { return nil }

var Instance = Full{}

func Start() error { return nil }
"""


@pytest.fixture
def scope(write_go: Callable[[str, str], Path]) -> ResolvedScope:
    """Resolve the services package."""
    path = write_go("services/services.go", PACKAGE_SOURCE)
    return TolerantResolver().resolve(PackageLoader().load(path.parent).files)


class TestCandidates:
    """Test selection of candidate struct types."""

    def test_only_struct_types_are_candidates(self, scope: ResolvedScope) -> None:
        """Test that interfaces, aliases, defined basics, vars and funcs are skipped."""
        names = [s.name for s in ConformanceMatcher(SERVICE).candidates(scope)]

        assert names == ["Full", "Partial", "Mismatched"]


class TestConforms:
    """Test the per-type conformance check."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Full", True),
            ("Partial", False),
            ("Mismatched", True),
            ("Runner", False),
            ("FullAlias", False),
            ("Counter", False),
            ("Instance", False),
            ("Missing", False),
        ],
        ids=["superset", "strict-subset", "names-only", "interface", "alias", "defined-basic", "var", "undeclared"],
    )
    def test_conforms(self, scope: ResolvedScope, name: str, expected: bool) -> None:
        """Test conformance of each declaration."""
        assert ConformanceMatcher(SERVICE).conforms(scope, name) is expected

    def test_empty_interface_is_unsatisfiable(self, scope: ResolvedScope) -> None:
        """Test that an interface without methods matches nothing."""
        matcher = ConformanceMatcher(InterfaceSpec(name="Any", required_methods=()))

        assert matcher.conforms(scope, "Full") is False
        assert matcher.match(scope) == []


class TestMatch:
    """Test matching a whole scope."""

    def test_match_returns_conforming_structs_in_order(self, scope: ResolvedScope) -> None:
        """Test that matches keep declaration order."""
        matches = ConformanceMatcher(SERVICE).match(scope)

        assert [s.name for s in matches] == ["Full", "Mismatched"]

    def test_every_match_has_superset_method_set(self, scope: ResolvedScope) -> None:
        """Test that each match declares every required method."""
        for symbol in ConformanceMatcher(SERVICE).match(scope):
            assert set(SERVICE.required_methods) <= scope.method_set(symbol.name)

    def test_interface_property(self) -> None:
        """Test that the matcher exposes its interface."""
        assert ConformanceMatcher(SERVICE).interface is SERVICE

    def test_methods_declared_through_alias_receiver_count(
        self, write_go: Callable[[str, str], Path]
    ) -> None:
        """Test that a method on an alias receiver completes the target struct."""
        path = write_go(
            "aliased/server.go",
            """package aliased

type Server struct{}

type S = Server

func (s *Server) Start() error { return nil }
func (s *S) Stop() error       { return nil }
""",
        )
        scope = TolerantResolver().resolve(PackageLoader().load(path.parent).files)

        matches = ConformanceMatcher(SERVICE).match(scope)

        assert [s.name for s in matches] == ["Server"]
