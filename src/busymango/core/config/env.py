"""
.env file support.

The MANGO_* overrides read by the config loader may live in .env files as
well as in the shell. Files are layered: user file
(`$XDG_CONFIG_HOME/busymango/.env`) first, then `.env` and `.env.local`
in the working directory, later files winning. Variables already exported
in the process environment are never replaced.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable

from dotenv import dotenv_values

from .loader import get_xdg_config_home

logger = logging.getLogger(__name__)


def get_user_env_path() -> Path:
    return get_xdg_config_home() / "busymango" / ".env"


def get_project_env_paths(project_dir: Path | None = None) -> list[Path]:
    base = project_dir if project_dir is not None else Path.cwd()
    return [base / ".env", base / ".env.local"]


def read_env_files(paths: Iterable[Path]) -> dict[str, str]:
    """Merge key/value pairs from existing env files, later files winning."""
    merged: dict[str, str] = {}
    for path in paths:
        path = Path(path)
        if not path.is_file():
            continue
        merged.update(
            {key: value for key, value in dotenv_values(path).items() if value is not None}
        )
    return merged


def load_layered_env(
    *,
    project_dir: Path | None = None,
    user_env_paths: Iterable[Path] | None = None,
    project_env_paths: Iterable[Path] | None = None,
) -> dict[str, str]:
    """
    Export variables from user and project .env files.

    Args:
        project_dir: Directory holding the project .env files (cwd if None)
        user_env_paths: User env files (defaults to the XDG location)
        project_env_paths: Project env files (defaults to .env, .env.local)

    Returns:
        The variables that were exported
    """
    if user_env_paths is None:
        user_env_paths = [get_user_env_path()]
    if project_env_paths is None:
        project_env_paths = get_project_env_paths(project_dir)

    values = read_env_files([*user_env_paths, *project_env_paths])
    exported = {key: value for key, value in values.items() if key not in os.environ}
    os.environ.update(exported)

    if exported:
        logger.debug("Loaded %s from .env files", ", ".join(sorted(exported)))
    return exported
