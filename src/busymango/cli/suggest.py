"""
Mango CLI - Suggest command.

Offer todos one at a time until one is accepted or the list runs out.
"""

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from busymango.cli.common import capitalize, is_debug, open_workspace
from busymango.cli.errors import fail
from busymango.cli.history import ask_about_candidate
from busymango.core.documents.models import Todo
from busymango.core.suggestions import Filter, SuggestionOutcome

app = typer.Typer(
    name="suggest",
    help="Suggest what to work on next",
    no_args_is_help=False,
)

console = Console()


def _render_todo(todo: Todo, position: int, total: int) -> Panel:
    project_name = todo.project.name if todo.project is not None else "Unknown Project"
    details = [f"[bold]{escape(todo.description)}[/bold]"]
    if todo.board is not None:
        details.append(f"[dim]{escape(todo.board.label)}[/dim]")
    return Panel(
        "\n".join(details),
        title=escape(capitalize(project_name)),
        subtitle=f"{position + 1}/{total}",
        border_style="red" if todo.is_urgent else "cyan",
    )


@app.callback(invoke_without_command=True)
def suggest(
    ctx: typer.Context,
    ultra_urgent: bool = typer.Option(
        False,
        "--ultra-urgent",
        help="Only todos with urgent urgency",
    ),
    urgent: bool = typer.Option(
        False,
        "--urgent",
        help="Todos with normal urgency or better",
    ),
    strategic: bool = typer.Option(
        False,
        "--strategic",
        help="Todos with normal strategy or better",
    ),
    interesting: bool = typer.Option(
        False,
        "--interesting",
        help="Todos with normal interest or better",
    ),
    area: str = typer.Option(
        "",
        "--area",
        "-a",
        help="Only projects tagged with this area (overrides priority switches)",
    ),
    project: str = typer.Option(
        "",
        "--project",
        "-p",
        help="Only this project (overrides everything else)",
    ),
) -> None:
    """
    Suggest a todo to work on.

    Asks about the previous suggestion first, then offers candidates one by
    one. Projects you haven't touched lately come first.

    Examples:
        mango suggest                   # Anything goes
        mango suggest --urgent          # Urgent work only
        mango suggest --strategic --interesting
        mango suggest --area health     # One area
        mango suggest -p Garden         # One project
    """
    debug = is_debug(ctx)
    todo_filter = Filter(
        ultra_urgent=ultra_urgent,
        urgent=urgent,
        strategic=strategic,
        interesting=interesting,
        area_name=area,
        project_name=project,
    )

    if debug:
        console.print("[dim]Debug mode enabled[/dim]")
        console.print(f"[dim]Filter: {todo_filter.describe()}[/dim]")

    try:
        workspace = open_workspace(ctx)
        ask_about_candidate(workspace)

        session = workspace.suggest(todo_filter)
        total = len(session.candidates)
        while session.pending is not None:
            console.print(_render_todo(session.pending, session.position, total))
            session.answer(typer.confirm("Take it?", default=False))
    except typer.Exit:
        raise
    except typer.Abort:
        raise
    except Exception as e:
        fail(e, debug)

    outcome = session.outcome
    if outcome == SuggestionOutcome.ACCEPTED:
        console.print(f"[green]{outcome.message}[/green]")
    else:
        console.print(f"[yellow]{outcome.message}[/yellow]")
