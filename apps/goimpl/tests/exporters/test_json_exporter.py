"""Tests for JSON exporter."""

import json
from pathlib import Path

import pytest
from goimpl_analyser import Implementation, InterfaceSpec, ScanReport

from goimpl.exporters import JsonExporter


class TestJsonExporter:
    """Test suite for JsonExporter."""

    @pytest.fixture
    def report(self) -> ScanReport:
        """Create a report with two implementations."""
        return ScanReport(
            interface=InterfaceSpec(name="App", required_methods=("Start", "Stop")),
            implementations=[
                Implementation(package="api", struct="Server", package_path="m/pkg/api"),
                Implementation(package="jobs", struct="Runner", package_path="m/pkg/jobs"),
            ],
            directories_visited=4,
            packages_analysed=2,
        )

    def test_name(self) -> None:
        """Test exporter identifier."""
        assert JsonExporter().name == "json"

    def test_export_returns_flat_records_in_order(self, report: ScanReport) -> None:
        """Test that only the three record fields are exported, in order."""
        assert JsonExporter().export(report) == [
            {"package": "api", "struct": "Server", "package_path": "m/pkg/api"},
            {"package": "jobs", "struct": "Runner", "package_path": "m/pkg/jobs"},
        ]

    def test_render_is_valid_json(self, report: ScanReport) -> None:
        """Test that rendered text parses back to the exported records."""
        exporter = JsonExporter()

        assert json.loads(exporter.render(report)) == exporter.export(report)

    def test_render_empty_report(self) -> None:
        """Test that no implementations render as an empty array."""
        report = ScanReport(interface=InterfaceSpec(name="App", required_methods=("Start",)))

        assert JsonExporter(indent=None).render(report) == "[]"

    def test_write_creates_parent_directories(
        self, report: ScanReport, tmp_path: Path
    ) -> None:
        """Test that write creates missing directories."""
        output = tmp_path / "nested" / "out.json"

        JsonExporter().write(report, output)

        assert [r["struct"] for r in json.loads(output.read_text())] == ["Server", "Runner"]
