"""
Mango CLI - Project listing commands.
"""

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from busymango.cli.common import capitalize, is_debug, open_workspace
from busymango.cli.errors import fail
from busymango.core.documents.models import Priority

console = Console()

PRIORITY_STYLES = {
    Priority.URGENT: "bold red",
    Priority.HIGH: "red",
    Priority.NORMAL: "yellow",
    Priority.LOW: "dim",
    Priority.NONE: "dim",
}


def _priority(priority: Priority) -> str:
    style = PRIORITY_STYLES[priority]
    return f"[{style}]{priority.name.lower()}[/{style}]"


def projects(ctx: typer.Context) -> None:
    """
    List projects with their priorities and available todos.
    """
    debug = is_debug(ctx)
    try:
        workspace = open_workspace(ctx)
    except typer.Exit:
        raise
    except Exception as e:
        fail(e, debug)

    if not workspace.library.projects:
        console.print(f"[yellow]No projects found in {workspace.root}[/yellow]")
        return

    table = Table(title=f"Projects in {escape(str(workspace.root))}")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Type")
    table.add_column("Urgency")
    table.add_column("Strategy")
    table.add_column("Interest")
    table.add_column("Areas")
    table.add_column("Available", justify="right")

    for project in workspace.library.projects:
        table.add_row(
            str(project.id),
            escape(capitalize(project.name)),
            project.type.value,
            _priority(project.urgency),
            _priority(project.strategy),
            _priority(project.interest),
            escape(", ".join(project.areas)),
            str(len(project.get_available_todos())),
        )

    console.print(table)


def areas(ctx: typer.Context) -> None:
    """List every area tag used by a project."""
    debug = is_debug(ctx)
    try:
        workspace = open_workspace(ctx)
        names = workspace.library.get_all_areas()
    except typer.Exit:
        raise
    except Exception as e:
        fail(e, debug)

    if not names:
        console.print("[dim]No areas defined.[/dim]")
        return
    for name in names:
        console.print(escape(name))
