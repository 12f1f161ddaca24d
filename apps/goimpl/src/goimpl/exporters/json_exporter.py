"""JSON exporter for implementation scan results."""

import json
import logging
from pathlib import Path
from typing import Any

from goimpl_analyser import ScanReport

logger = logging.getLogger(__name__)


class JsonExporter:
    """Formats implementations as a JSON array of flat records.

    Each record has exactly the keys `package`, `struct` and `package_path`,
    in discovery order.
    """

    def __init__(self, indent: int | None = 2) -> None:
        """Initialise the exporter.

        Args:
            indent: JSON indentation (None for compact output)

        """
        self._indent = indent

    @property
    def name(self) -> str:
        """Return exporter identifier."""
        return "json"

    def export(self, report: ScanReport) -> list[dict[str, Any]]:
        """Export implementations to a JSON-serializable list.

        Args:
            report: Scan report with implementations in discovery order

        Returns:
            List of implementation records

        """
        return [implementation.model_dump() for implementation in report.implementations]

    def render(self, report: ScanReport) -> str:
        """Render implementations as JSON text."""
        return json.dumps(self.export(report), indent=self._indent)

    def write(self, report: ScanReport, output_path: Path) -> None:
        """Write implementations as JSON to a file, creating parent directories.

        Raises:
            OSError: If the file cannot be written

        """
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with output_path.open("w", encoding="utf-8") as f:
            f.write(self.render(report))
            f.write("\n")
        logger.info("Results saved to JSON file: %s", output_path)
