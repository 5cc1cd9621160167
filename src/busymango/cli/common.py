"""
Helpers shared by mango commands.
"""

from pathlib import Path

import typer

from busymango.core.services import Workspace


def open_workspace(ctx: typer.Context, load: bool = True) -> Workspace:
    """Open the workspace using the global --root option, if any."""
    obj = ctx.obj or {}
    root: Path | None = obj.get("root")
    return Workspace.open(root=root, load=load)


def is_debug(ctx: typer.Context) -> bool:
    return bool((ctx.obj or {}).get("debug", False))


def capitalize(word: str) -> str:
    if not word:
        return ""
    return word[0].upper() + word[1:].lower()
