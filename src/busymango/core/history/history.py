"""
Work history: the pending candidate and the recency log.

When the user accepts a suggestion it becomes the *candidate*. Next time
the app starts the user confirms whether they actually worked on it; a
confirmation appends the candidate's project to the recency log, which
the suggestion engine uses to push recently worked projects back.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from busymango.core.documents.models import Project, Todo
from busymango.core.history.models import AppState

logger = logging.getLogger(__name__)

ProjectLookup = Callable[[int | None], Project | None]
TodoLookup = Callable[[int | None], Todo | None]


class History:
    """
    History operations over a shared AppState.

    The state is held by reference and mutated in place; `save()` hands it
    to the persistence callable.

    Example:
        history = History(
            state,
            get_project_by_id=library.get_project_by_id,
            get_todo_by_id=library.get_todo_by_id,
            save=lambda: state_store.save(state),
        )
    """

    def __init__(
        self,
        state: AppState,
        get_project_by_id: ProjectLookup,
        get_todo_by_id: TodoLookup,
        save: Callable[[], None] | None = None,
    ) -> None:
        self.state = state
        self._get_project_by_id = get_project_by_id
        self._get_todo_by_id = get_todo_by_id
        self._save = save

    # ------------------------------------------------------------------
    # Candidate
    # ------------------------------------------------------------------

    def has_candidate(self) -> bool:
        return self.state.curr_todo is not None

    def get_candidate_todo(self) -> Todo | None:
        """Resolve the candidate todo; None if it no longer exists."""
        return self._get_todo_by_id(self.state.curr_todo)

    def candidate_label(self) -> tuple[str, str]:
        """(project name, description) of the candidate, live if possible."""
        todo = self.get_candidate_todo()
        if todo is not None and todo.project is not None:
            return todo.project.name, todo.description
        project = self._get_project_by_id(self.state.curr_project)
        return (project.name if project else "Unknown Project"), self.state.curr_todo_name

    def set_candidate(self, todo: Todo) -> None:
        self.state.curr_todo = todo.id if isinstance(todo.id, int) else None
        self.state.curr_todo_name = todo.description
        project_id = todo.project.id if todo.project is not None else None
        self.state.curr_project = project_id if isinstance(project_id, int) else None
        logger.debug("Candidate set to todo %s (%s)", self.state.curr_todo, todo)

    def accept(self) -> int | None:
        """
        Record the candidate's project as worked on.

        Uses the todo's current project when the todo still exists, falling
        back to the project stored with the candidate.

        Returns:
            The project id appended to the log (None if unknown)
        """
        project_id: int | None = None
        todo = self.get_candidate_todo()
        if todo is not None and todo.project is not None and isinstance(todo.project.id, int):
            project_id = todo.project.id
        if project_id is None:
            project_id = self.state.curr_project

        if project_id is not None:
            self.state.projects_history.append(project_id)
        self.state.clear_candidate()
        self.normalize()
        logger.debug("Accepted candidate for project %s", project_id)
        return project_id

    def reject(self) -> None:
        self.state.clear_candidate()

    def save(self) -> None:
        if self._save is not None:
            self._save()

    # ------------------------------------------------------------------
    # Recency log
    # ------------------------------------------------------------------

    def normalize(self) -> list[int]:
        """
        Deduplicate the log and drop projects that no longer exist.

        The log is ordered oldest to most recent. Only the most recent
        occurrence of each project survives, and the surviving ids keep
        their relative order: [A, B, A, C] becomes [B, A, C].
        """
        kept: list[int] = []
        seen: set[int] = set()
        for project_id in reversed(self.state.projects_history):
            if project_id in seen:
                continue
            seen.add(project_id)
            if self._get_project_by_id(project_id) is not None:
                kept.append(project_id)
        kept.reverse()
        self.state.projects_history = kept
        return kept

    def history_projects(self) -> list[Project]:
        """Normalize, then resolve the log to live projects (oldest first)."""
        projects = []
        for project_id in self.normalize():
            project = self._get_project_by_id(project_id)
            if project is not None:
                projects.append(project)
        return projects
