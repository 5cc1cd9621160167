"""
Mango CLI - History commands.

Show the recency log and settle the pending candidate.
"""

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from busymango.cli.common import capitalize, is_debug, open_workspace
from busymango.cli.errors import fail
from busymango.core.services import Workspace

console = Console()


def ask_about_candidate(workspace: Workspace) -> None:
    """Ask whether the last accepted suggestion was finished, if there is one."""
    if not workspace.history.has_candidate():
        return

    project_name, description = workspace.history.candidate_label()
    finished = typer.confirm(
        f"Did you finish {capitalize(project_name)}: {description}?",
        default=False,
    )
    workspace.confirm_candidate(finished)


def history(ctx: typer.Context) -> None:
    """
    Show recently worked-on projects.

    The most recent project is listed last; it is the least likely to be
    suggested again soon.
    """
    debug = is_debug(ctx)
    try:
        workspace = open_workspace(ctx)
        projects = workspace.history.history_projects()
        workspace.save_state()
        has_candidate = workspace.history.has_candidate()
        project_name, description = workspace.history.candidate_label()
    except typer.Exit:
        raise
    except Exception as e:
        fail(e, debug)

    if projects:
        table = Table(title="Recently Worked On")
        table.add_column("#", justify="right", style="dim")
        table.add_column("ID", justify="right")
        table.add_column("Project", style="bold")
        for index, project in enumerate(projects, start=1):
            table.add_row(str(index), str(project.id), escape(project.name))
        console.print(table)
    else:
        console.print("[dim]No history yet.[/dim]")

    if has_candidate:
        console.print(
            f"\nPending: [cyan]{escape(capitalize(project_name))}[/cyan]: "
            f"{escape(description)}"
        )


def _settle(ctx: typer.Context, finished: bool) -> None:
    debug = is_debug(ctx)
    try:
        workspace = open_workspace(ctx)
        if not workspace.history.has_candidate():
            console.print("[yellow]No pending suggestion.[/yellow]")
            return
        project_name, description = workspace.history.candidate_label()
        workspace.confirm_candidate(finished)
    except typer.Exit:
        raise
    except Exception as e:
        fail(e, debug)

    label = f"{escape(capitalize(project_name))}: {escape(description)}"
    if finished:
        console.print(f"[green]✓[/green] Done: {label}")
    else:
        console.print(f"[dim]Skipped: {label}[/dim]")


def done(ctx: typer.Context) -> None:
    """Mark the pending suggestion as finished."""
    _settle(ctx, finished=True)


def skip(ctx: typer.Context) -> None:
    """Drop the pending suggestion without recording it."""
    _settle(ctx, finished=False)
