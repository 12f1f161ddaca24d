"""Tests for ResultAggregator."""

from goimpl_analyser.aggregator import ResultAggregator
from goimpl_analyser.models import DirectoryError, Implementation, InterfaceSpec


class TestResultAggregator:
    """Test accumulation of scan results."""

    def test_keeps_discovery_order(self) -> None:
        """Test that implementations are returned in the order added."""
        aggregator = ResultAggregator()
        first = Implementation(package="b", struct="Zeta", package_path="m/b")
        second = Implementation(package="a", struct="Alpha", package_path="m/a")

        aggregator.add(first)
        aggregator.add(second)

        assert aggregator.implementations == [first, second]
        assert len(aggregator) == 2

    def test_report(self) -> None:
        """Test that the report carries errors and counters."""
        aggregator = ResultAggregator()
        aggregator.mark_visited(analysed=True)
        aggregator.mark_visited(analysed=False)
        aggregator.record_error("pkg/broken", "cannot read directory")
        interface = InterfaceSpec(name="App", required_methods=("Start",))

        report = aggregator.to_report(interface)

        assert report.interface == interface
        assert report.implementations == []
        assert report.errors == [
            DirectoryError(directory="pkg/broken", message="cannot read directory")
        ]
        assert report.directories_visited == 2
        assert report.packages_analysed == 1

    def test_returned_lists_are_copies(self) -> None:
        """Test that callers cannot mutate the aggregator state."""
        aggregator = ResultAggregator()
        aggregator.implementations.append(
            Implementation(package="a", struct="A", package_path="m/a")
        )

        assert len(aggregator) == 0
