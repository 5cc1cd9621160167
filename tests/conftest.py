"""
Pytest configuration and shared fixtures.

Provides isolated XDG directories, sample project documents, and a
workspace wired to them.
"""

import random
from pathlib import Path

import pytest

from busymango.core.config import clear_cache
from busymango.core.config.models import (
    DocumentsConfig,
    LoggingConfig,
    MangoConfig,
    StateFileConfig,
)
from busymango.core.documents.models import (
    Board,
    Priority,
    Project,
    ProjectType,
    Todo,
)
from busymango.core.services import Workspace

GARDEN_DOC = """---
kanban-plugin: basic
urgency: high
areas:
  - home
---

## In Work

- [ ] prune roses

## Todo

- [ ] plant tulips
- [ ] !fix fence

## Deep Todo

- [ ] build greenhouse

## Repetitive

- [ ] water plants

%% kanban:settings %%
"""

READING_DOC = """---
interest: normal
areas: [leisure, home]
---
Books I want to get through.

## Fiction
- [ ] read [[Dune]]
  - [ ] reread the appendix

## Non-fiction
- [ ] read SICP

Last updated in spring.
"""


# ==============================================================================
# Isolation
# ==============================================================================


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Point XDG dirs at tmp_path and drop MANGO_* overrides."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg-data"))
    for var in ("MANGO_ROOT", "MANGO_STATE_FILE", "MANGO_LOG_ENABLED"):
        monkeypatch.delenv(var, raising=False)
    clear_cache()
    yield
    clear_cache()


# ==============================================================================
# Document Fixtures
# ==============================================================================


@pytest.fixture
def projects_dir(tmp_path):
    """
    Provide a projects folder with two documents.

    Creates:
    - garden.md (kanban, urgency high, area home)
    - reading.md (freeform, interest normal, areas leisure/home)
    """
    folder = tmp_path / "projects"
    folder.mkdir()
    (folder / "garden.md").write_text(GARDEN_DOC, encoding="utf-8")
    (folder / "reading.md").write_text(READING_DOC, encoding="utf-8")
    return folder


@pytest.fixture
def write_doc(projects_dir):
    """Return a helper writing a document into the projects folder."""

    def _write(name: str, text: str) -> Path:
        path = projects_dir / f"{name}.md"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


# ==============================================================================
# Workspace Fixtures
# ==============================================================================


@pytest.fixture
def mango_config(tmp_path, projects_dir):
    """Configuration pointing at the sample folder, state and logs in tmp_path."""
    return MangoConfig(
        documents=DocumentsConfig(root=str(projects_dir)),
        state=StateFileConfig(path=str(tmp_path / "state" / "state.json")),
        logging=LoggingConfig(enabled=True, dir=str(tmp_path / "logs")),
    )


@pytest.fixture
def workspace(mango_config):
    """A loaded workspace with a seeded random source."""
    return Workspace.open(config=mango_config, rng=random.Random(1234))


# ==============================================================================
# In-memory Model Fixtures
# ==============================================================================


@pytest.fixture
def make_project():
    """Return a factory for attached freeform projects with one topic board."""

    def _make(
        name: str,
        project_id: int | None,
        todos: list[str],
        urgency: Priority = Priority.NONE,
        strategy: Priority = Priority.NONE,
        interest: Priority = Priority.NONE,
        areas: list[str] | None = None,
        first_todo_id: int = 0,
    ) -> Project:
        board = Board.topic("Default", id=0)
        board.todos = [
            Todo(id=first_todo_id + index, description=description)
            for index, description in enumerate(todos)
        ]
        project = Project(
            name=name,
            type=ProjectType.FREEFORM,
            id=project_id,
            boards=[board],
            urgency=urgency,
            strategy=strategy,
            interest=interest,
            areas=areas or [],
        )
        project.attach()
        return project

    return _make
