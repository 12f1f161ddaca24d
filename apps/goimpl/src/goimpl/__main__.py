"""Main entry point for goimpl.

This module provides the command-line interface for finding Go structs that
satisfy an interface, including commands for:
- Finding implementations across a directory tree
- Listing the methods an interface requires
"""

from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv

from goimpl.cli import find_command, methods_command

# Load environment variables (e.g. GOIMPL_ENV) from .env files
# Working directory first, then the app directory for values not yet set
_goimpl_app_dir = Path(__file__).parent.parent.parent
load_dotenv(Path.cwd() / ".env")
load_dotenv(_goimpl_app_dir / ".env")

app = typer.Typer(
    name="goimpl",
    help="Find Go structs that implement an interface by method names.",
    no_args_is_help=True,
)

InterfaceOption = Annotated[
    str,
    typer.Option(
        "--interface",
        "-i",
        help="Interface to match, as PATH:NAME (e.g. internal/app/app.go:App)",
    ),
]
DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Enable debug logging (sets log level to DEBUG)",
    ),
]
LogLevelOption = Annotated[
    str | None,
    typer.Option(
        "--log-level",
        help="Override the configured logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        case_sensitive=False,
    ),
]
FlattenOption = Annotated[
    bool,
    typer.Option(
        "--flatten-embedded",
        help="Expand embedded interfaces declared in the same file",
    ),
]


@app.command()
def find(  # noqa: PLR0913 - CLI entry point with many options
    interface: InterfaceOption,
    directory: Annotated[
        Path,
        typer.Option(
            "--dir",
            "-d",
            help="Directory to search for implementations",
            file_okay=False,
            dir_okay=True,
        ),
    ] = Path("."),
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the JSON result to a file instead of stdout",
            file_okay=True,
            dir_okay=False,
            rich_help_panel="Output",
        ),
    ] = None,
    workers: Annotated[
        int,
        typer.Option(
            "--workers",
            "-w",
            help="Number of directories analysed concurrently",
            min=1,
            rich_help_panel="Scan",
        ),
    ] = 1,
    timeout: Annotated[
        float | None,
        typer.Option(
            "--timeout",
            help="Abort the scan after this many seconds",
            rich_help_panel="Scan",
        ),
    ] = None,
    exclude: Annotated[
        list[str] | None,
        typer.Option(
            "--exclude",
            "-x",
            help="Directory name to skip (repeatable, e.g. vendor)",
            rich_help_panel="Scan",
        ),
    ] = None,
    flatten_embedded: FlattenOption = False,
    debug: DebugOption = False,
    log_level: LogLevelOption = None,
) -> None:
    """Find every struct that declares all methods of an interface.

    Run from the project root (the directory holding go.mod). Results are
    printed as a JSON array of {package, struct, package_path} records.

    Example:
        goimpl find --interface internal/app/app.go:App --dir ./pkg
        goimpl find -i internal/app/app.go:App -x vendor -w 4 -o impls.json

    """
    find_command(
        interface,
        directory,
        output=output,
        workers=workers,
        timeout=timeout,
        exclude=exclude,
        flatten_embedded=flatten_embedded,
        debug=debug,
        log_level=log_level,
    )


@app.command()
def methods(
    interface: InterfaceOption,
    flatten_embedded: FlattenOption = False,
    debug: DebugOption = False,
    log_level: LogLevelOption = None,
) -> None:
    """Print the method names an interface requires as a JSON array.

    Example:
        goimpl methods --interface internal/app/app.go:App

    """
    methods_command(
        interface,
        flatten_embedded=flatten_embedded,
        debug=debug,
        log_level=log_level,
    )


if __name__ == "__main__":
    app()
