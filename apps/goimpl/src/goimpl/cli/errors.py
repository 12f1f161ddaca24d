"""CLI error handling for goimpl.

Engine errors are reported by category, each with its own panel title, and
their message is printed as raised. Anything else is wrapped with the name of
the command that failed. Every failure exits with status 1.
"""

import logging
from collections.abc import Generator
from contextlib import contextmanager

import typer
from goimpl_analyser.errors import (
    ConfigurationError,
    GoImplError,
    InterfaceResolutionError,
    ScanCancelledError,
    ScanError,
)
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

logger = logging.getLogger(__name__)
console = Console(stderr=True)

# Most specific first
ENGINE_ERROR_TITLES: tuple[tuple[type[GoImplError], str], ...] = (
    (ConfigurationError, "Configuration error"),
    (InterfaceResolutionError, "Interface resolution failed"),
    (ScanCancelledError, "Scan aborted"),
    (ScanError, "Scan failed"),
)


class CLIError(Exception):
    """Error raised by the CLI layer itself, such as a malformed option value.

    The message is shown to the user as is. `command` and `original_error`
    keep the context for logging.
    """

    def __init__(
        self,
        message: str,
        command: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialise CLI error with context.

        Args:
            message: Human-readable error message describing what went wrong
            command: Name of the CLI command that failed (e.g., "find", "methods")
            original_error: The underlying exception that caused this CLI error

        """
        super().__init__(message)
        self.command = command
        self.original_error = original_error


def engine_error_title(error: GoImplError) -> str:
    """Return the panel title for an engine error category."""
    for error_type, title in ENGINE_ERROR_TITLES:
        if isinstance(error, error_type):
            return title
    return "goimpl error"


def _print_error(title: str, message: str) -> None:
    # Text keeps brackets in Go type names from being read as markup
    console.print(
        Panel(Text(message, style="red"), title=f"❌ {title}", border_style="red")
    )


@contextmanager
def cli_error_handler(command: str, title: str) -> Generator[None]:
    """Context manager for unified CLI error handling.

    Displays errors as Rich panels on stderr and exits with code 1.

    Args:
        command: CLI command name, used to wrap unexpected errors
        title: Panel title for CLI errors and unexpected errors

    """
    try:
        yield
    except CLIError as e:
        logger.debug("%s: %s", title, e)
        _print_error(title, str(e))
        raise typer.Exit(1) from e
    except GoImplError as e:
        category = engine_error_title(e)
        logger.debug("%s (%s): %s", category, type(e).__name__, e)
        _print_error(category, str(e))
        raise typer.Exit(1) from e
    except Exception as e:
        cli_error = CLIError(
            f"CLI command '{command}' failed: {e}", command=command, original_error=e
        )
        logger.error("%s: %s", title, cli_error)
        _print_error(title, str(cli_error))
        raise typer.Exit(1) from cli_error
