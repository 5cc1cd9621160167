"""
Mango CLI - Root command.
"""

from pathlib import Path

import typer
from rich.console import Console

from busymango.cli.common import is_debug, open_workspace
from busymango.cli.errors import fail, print_error

console = Console()


def root(
    ctx: typer.Context,
    path: Path | None = typer.Argument(
        None,
        help="Folder holding the project documents",
    ),
) -> None:
    """
    Show or set the projects folder.

    Examples:
        mango root                      # Show the folder in use
        mango root ~/notes/projects     # Remember a new folder
    """
    debug = is_debug(ctx)
    try:
        workspace = open_workspace(ctx, load=False)
        if path is None:
            console.print(str(workspace.root))
            return

        if not path.expanduser().is_dir():
            print_error(f"Not a directory: {path}")
            raise typer.Exit(1)
        resolved = workspace.set_root(path)
    except typer.Exit:
        raise
    except Exception as e:
        fail(e, debug)

    console.print(f"[green]✓[/green] Projects folder set to {resolved}")
