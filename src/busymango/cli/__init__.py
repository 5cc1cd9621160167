"""
Mango CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import logging
from pathlib import Path

import typer
from rich.console import Console

from busymango import __version__
from busymango.cli import history, projects, reconcile, root, suggest
from busymango.core.config.env import load_layered_env

app = typer.Typer(
    name="mango",
    help="Pick what to work on next from your Markdown project notes",
    no_args_is_help=False,
    invoke_without_command=True,
    add_completion=True,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
    root_path: Path | None = typer.Option(
        None,
        "--root",
        "-r",
        help="Projects folder (overrides config and the saved folder)",
    ),
) -> None:
    """
    Busy Mango - a todo picker for Markdown projects.

    Every Markdown file in the projects folder is a project. Its front
    matter holds priorities and areas; its '##' headings are boards and
    its '- [ ]' lines are todos.

    Quick Start:
        1. mango root ~/notes/projects  # Point at your notes
        2. mango suggest                # Get something to do
        3. mango done                   # Finished it

    Common Workflows:
        mango suggest --urgent          # Urgent work only
        mango suggest --area health     # One area
        mango projects                  # Overview
        mango history                   # Recently worked on
    """
    # Precedence: OS env > project .env > user .env
    load_layered_env()

    if debug:
        logging.basicConfig(level=logging.DEBUG)

    ctx.obj = {"debug": debug, "root": root_path}

    if ctx.invoked_subcommand is not None:
        return

    typer.echo(ctx.get_help())


app.add_typer(suggest.app, name="suggest")
app.command(name="projects")(projects.projects)
app.command(name="areas")(projects.areas)
app.command(name="history")(history.history)
app.command(name="done")(history.done)
app.command(name="skip")(history.skip)
app.command(name="reconcile")(reconcile.reconcile)
app.command(name="root")(root.root)


@app.command()
def version() -> None:
    """Show mango version."""
    console.print(f"mango version {__version__}")


def cli_main() -> None:
    app()


__all__ = ["app", "main", "cli_main"]
