"""
Standardized error handling and exit codes for the mango CLI.
"""

from enum import IntEnum
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from busymango.core.errors import DocumentParseError, StateError

console = Console()


class ExitCode(IntEnum):
    """Standard exit codes for mango CLI operations."""

    SUCCESS = 0
    """Operation completed successfully."""

    GENERAL_ERROR = 1
    """Any failure: unreadable documents, bad state file, missing folder."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    Example:
        >>> print_error(
        ...     "Projects folder not found: /tmp/nope",
        ...     solution="mango root ~/notes/projects",
        ... )
    """
    console.print(f"[red]Error: {escape(problem)}[/red]")

    if reason:
        console.print(f"[dim]{reason}[/dim]")

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {solution}")


def fail(error: Exception, debug: bool = False) -> NoReturn:
    """Report an exception raised by a command and exit."""
    if isinstance(error, FileNotFoundError):
        print_error(str(error), solution="mango root <folder>")
    elif isinstance(error, DocumentParseError):
        print_error(
            str(error),
            reason="Every project document needs at least one '##' heading",
        )
    elif isinstance(error, StateError):
        print_error(str(error), solution="Fix or delete the state file")
    else:
        print_error(str(error))

    if debug:
        import traceback

        console.print(traceback.format_exc(), markup=False)
    raise typer.Exit(ExitCode.GENERAL_ERROR)
