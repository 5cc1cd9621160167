"""
JSON persistence for AppState.

The state file lives at `$XDG_DATA_HOME/busymango/state.json` unless the
configuration points elsewhere. Writes are atomic (temp file + rename).
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from busymango.core.errors import StateError
from busymango.core.history.models import AppState

logger = logging.getLogger(__name__)


def get_xdg_data_home() -> Path:
    if xdg_home := os.environ.get("XDG_DATA_HOME"):
        return Path(xdg_home)
    return Path.home() / ".local" / "share"


def get_default_state_path() -> Path:
    return get_xdg_data_home() / "busymango" / "state.json"


class StateStore:
    """
    Loads and saves AppState.

    Example:
        >>> store = StateStore(tmp_path / "state.json")
        >>> state = store.load()
        >>> state.projects_history.append(3)
        >>> store.save(state)
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = Path(path) if path is not None else get_default_state_path()

    def load(self) -> AppState:
        """
        Read state; a missing file yields fresh defaults.

        Raises:
            StateError: If the file exists but isn't valid state JSON
        """
        if not self.path.exists():
            logger.debug("No state file at %s, using defaults", self.path)
            return AppState()

        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
            return AppState.model_validate(data)
        except json.JSONDecodeError as e:
            raise StateError(f"Invalid JSON in state file {self.path}: {e}") from e
        except ValidationError as e:
            raise StateError(f"Invalid state in {self.path}: {e}") from e
        except OSError as e:
            raise StateError(f"Failed to read state file {self.path}: {e}") from e

    def save(self, state: AppState) -> None:
        """Write state atomically."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        content = json.dumps(state.model_dump(by_alias=True), indent=2, ensure_ascii=False)

        fd, temp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".state_", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(temp_path, self.path)
        except OSError as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise StateError(f"Failed to write state file {self.path}: {e}") from e
        logger.debug("Saved state to %s", self.path)
