"""Accumulation of scan results in discovery order."""

from goimpl_analyser.models import (
    DirectoryError,
    Implementation,
    InterfaceSpec,
    ScanReport,
)


class ResultAggregator:
    """Collects implementations and recovered errors of one scan.

    Implementations are kept in the order they are added, which the walker
    guarantees to be directory-visit order, then declaration order.
    """

    def __init__(self) -> None:
        """Initialise an empty aggregator."""
        self._implementations: list[Implementation] = []
        self._errors: list[DirectoryError] = []
        self._directories_visited = 0
        self._packages_analysed = 0

    def add(self, implementation: Implementation) -> None:
        """Append an implementation."""
        self._implementations.append(implementation)

    def record_error(self, directory: str, message: str) -> None:
        """Record an error that was recovered for one directory."""
        self._errors.append(DirectoryError(directory=directory, message=message))

    def mark_visited(self, analysed: bool) -> None:
        """Count a visited directory, and whether it held a package that was analysed."""
        self._directories_visited += 1
        if analysed:
            self._packages_analysed += 1

    @property
    def implementations(self) -> list[Implementation]:
        """Return the implementations found so far, in discovery order."""
        return list(self._implementations)

    @property
    def errors(self) -> list[DirectoryError]:
        """Return the recovered directory errors."""
        return list(self._errors)

    def __len__(self) -> int:
        """Return the number of implementations."""
        return len(self._implementations)

    def to_report(self, interface: InterfaceSpec) -> ScanReport:
        """Build the final scan report."""
        return ScanReport(
            interface=interface,
            implementations=self.implementations,
            errors=self.errors,
            directories_visited=self._directories_visited,
            packages_analysed=self._packages_analysed,
        )
