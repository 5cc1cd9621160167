"""
Mango CLI - Reconcile command.

Load every project document, assign missing ids and write them back.
"""

import typer
from rich.console import Console

from busymango.cli.common import is_debug, open_workspace
from busymango.cli.errors import fail

console = Console()


def reconcile(ctx: typer.Context) -> None:
    """
    Assign ids to new projects, boards and todos.

    Ids are written into the documents: projects get an `id` metadata
    entry, boards and todos get a trailing `<!-- id: N -->` comment.
    Running it again on unchanged documents writes nothing.
    """
    debug = is_debug(ctx)
    try:
        workspace = open_workspace(ctx)
    except typer.Exit:
        raise
    except Exception as e:
        fail(e, debug)

    report = workspace.report
    console.print(
        f"Loaded [bold]{len(workspace.library.projects)}[/bold] projects "
        f"from {workspace.root}"
    )
    if report.total == 0:
        console.print("[green]✓[/green] All ids already assigned")
        return

    console.print(
        f"[green]✓[/green] Assigned {report.projects} project, "
        f"{report.boards} board and {report.todos} todo ids"
    )
    for path in report.flushed:
        console.print(f"  [dim]updated[/dim] {path.name}")
