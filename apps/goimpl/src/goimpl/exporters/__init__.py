"""Exporters for goimpl scan results."""

from goimpl.exporters.json_exporter import JsonExporter

__all__ = ["JsonExporter"]
