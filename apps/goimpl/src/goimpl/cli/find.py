"""CLI command implementations for finding implementations of an interface."""

import json
import logging
from pathlib import Path

import typer
from goimpl_analyser import FinderConfig, ImplementationFinder, ScanReport

from goimpl.cli.errors import CLIError, cli_error_handler
from goimpl.exporters import JsonExporter
from goimpl.logging import setup_logging

logger = logging.getLogger(__name__)

_SPEC_SEPARATOR = ":"


def parse_interface_spec(spec: str) -> tuple[Path, str]:
    """Split an interface specification of the form PATH:NAME.

    Both parts are stripped of surrounding whitespace and must be non-empty.

    Args:
        spec: Interface specification, e.g. "internal/app/server.go:Server"

    Returns:
        Tuple of (interface file path, interface name)

    Raises:
        CLIError: If the specification is malformed

    """
    parts = spec.split(_SPEC_SEPARATOR)
    if len(parts) != 2:  # noqa: PLR2004 - PATH and NAME
        raise CLIError(
            f"invalid interface specification '{spec}': expected PATH:NAME"
        )
    file_part, name_part = (part.strip() for part in parts)
    if not file_part or not name_part:
        raise CLIError(
            f"invalid interface specification '{spec}': "
            "file path and interface name must not be empty"
        )
    return Path(file_part), name_part


def _effective_level(debug: bool, log_level: str | None) -> str | None:
    return "DEBUG" if debug else log_level


def _log_report(report: ScanReport) -> None:
    for error in report.errors:
        logger.warning("Skipped %s: %s", error.directory, error.message)
    logger.info(
        "Visited %d directories, analysed %d packages, found %d implementation(s)",
        report.directories_visited,
        report.packages_analysed,
        len(report.implementations),
    )


def find_command(  # noqa: PLR0913 - Matches CLI entry point signature
    interface: str,
    directory: Path,
    output: Path | None = None,
    workers: int = 1,
    timeout: float | None = None,
    exclude: list[str] | None = None,
    flatten_embedded: bool = False,
    debug: bool = False,
    log_level: str | None = None,
) -> None:
    """CLI command implementation for finding implementations.

    Prints the implementations as a JSON array, or writes them to `output`.

    Args:
        interface: Interface specification PATH:NAME
        directory: Search root directory
        output: Optional JSON output file
        workers: Number of directories analysed concurrently
        timeout: Abort the scan after this many seconds
        exclude: Directory names to skip
        flatten_embedded: Expand embedded interfaces declared in the interface file
        debug: Enable debug logging
        log_level: Logging level override when debug is not set (default: the
            level of the selected logging configuration)

    """
    setup_logging(level=_effective_level(debug, log_level))

    with cli_error_handler("find", "Search failed"):
        interface_file, interface_name = parse_interface_spec(interface)
        config = FinderConfig.from_properties(
            {
                "max_workers": workers,
                "timeout": timeout,
                "exclude_dirs": exclude or [],
                "flatten_embedded": flatten_embedded,
            }
        )
        logger.debug(
            "Searching %s for implementations of %s:%s",
            directory,
            interface_file,
            interface_name,
        )

        report = ImplementationFinder(config).find(interface_file, interface_name, directory)
        _log_report(report)

        exporter = JsonExporter()
        if output is None:
            typer.echo(exporter.render(report))
            return
        try:
            exporter.write(report, output)
        except OSError as e:
            raise CLIError(
                f"Failed to save results to {output}: {e}",
                command="find",
                original_error=e,
            ) from e


def methods_command(
    interface: str,
    flatten_embedded: bool = False,
    debug: bool = False,
    log_level: str | None = None,
) -> None:
    """CLI command implementation for listing the methods an interface requires.

    Args:
        interface: Interface specification PATH:NAME
        flatten_embedded: Expand embedded interfaces declared in the interface file
        debug: Enable debug logging
        log_level: Logging level override when debug is not set (default: the
            level of the selected logging configuration)

    """
    setup_logging(level=_effective_level(debug, log_level))

    with cli_error_handler("methods", "Interface extraction failed"):
        interface_file, interface_name = parse_interface_spec(interface)
        config = FinderConfig(flatten_embedded=flatten_embedded)
        spec = ImplementationFinder(config).extract_interface(interface_file, interface_name)
        for embedded in spec.embedded:
            logger.warning("Embedded member %s of %s is not expanded", embedded, spec.name)
        typer.echo(json.dumps(list(spec.required_methods), indent=2))
