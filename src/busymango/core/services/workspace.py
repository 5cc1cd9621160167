"""
Workspace service: one loaded library plus its history and engine.

Wires configuration, persisted state, the document library, the history
and the suggestion engine together so any interface (CLI, tests, a
future UI) gets the same behavior from one call.

Usage:
    >>> from busymango.core.services import Workspace
    >>> workspace = Workspace.open()
    >>> session = workspace.suggest(Filter(urgent=True))
"""

from __future__ import annotations

import logging
import random
from datetime import datetime
from pathlib import Path

from busymango.core.config import MangoConfig, load_config
from busymango.core.documents.parser import DocumentParser
from busymango.core.documents.store import DocumentStore
from busymango.core.history.history import History
from busymango.core.history.models import AppState
from busymango.core.history.store import StateStore
from busymango.core.library.library import Library, ReconcileReport
from busymango.core.suggestions.engine import SuggestionEngine, SuggestionSession
from busymango.core.suggestions.filter import Filter
from busymango.utils.logging import MangoLogger

logger = logging.getLogger(__name__)


def resolve_root(
    explicit: Path | str | None, config: MangoConfig, state: AppState
) -> Path:
    """
    Pick the projects folder.

    Precedence: explicit argument > config documents.root > persisted
    rootPath > current directory.
    """
    for candidate in (explicit, config.documents.root, state.root_path):
        if candidate:
            return Path(candidate).expanduser()
    return Path.cwd()


def generate_session_id() -> str:
    return datetime.now().strftime("%Y%m%d-%H%M%S")


class Workspace:
    """
    A loaded library with history and suggestions.

    Example:
        >>> workspace = Workspace.open(root=Path("~/notes/projects"))
        >>> workspace.library.get_all_areas()
        ['health', 'work']
    """

    def __init__(
        self,
        config: MangoConfig,
        state: AppState,
        state_store: StateStore,
        library: Library,
        event_logger: MangoLogger | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config
        self.state = state
        self.state_store = state_store
        self.library = library
        self.event_logger = event_logger
        self.history = History(
            state,
            get_project_by_id=library.get_project_by_id,
            get_todo_by_id=library.get_todo_by_id,
            save=self.save_state,
        )
        self.engine = SuggestionEngine(
            library, self.history, rng=rng, event_logger=event_logger
        )
        self.report = ReconcileReport()

    @classmethod
    def open(
        cls,
        root: Path | str | None = None,
        config: MangoConfig | None = None,
        load: bool = True,
        rng: random.Random | None = None,
    ) -> Workspace:
        """
        Build a workspace from configuration and persisted state.

        Args:
            root: Projects folder override
            config: Configuration (loaded from the usual layers if None)
            load: Load and reconcile the library right away
            rng: Random source for suggestion ordering

        Raises:
            StateError: If the state file is unreadable
            DocumentParseError: If a project document can't be parsed
            FileNotFoundError: If the projects folder doesn't exist
        """
        if config is None:
            config = load_config()

        state_path = Path(config.state.path).expanduser() if config.state.path else None
        state_store = StateStore(state_path)
        state = state_store.load()

        event_logger = None
        if config.logging.enabled:
            log_dir = Path(config.logging.dir).expanduser() if config.logging.dir else None
            event_logger = MangoLogger.init(generate_session_id(), log_dir=log_dir)

        documents_root = resolve_root(root, config, state)
        store = DocumentStore(documents_root, extension=config.documents.extension)
        parser = DocumentParser(kanban_key=config.documents.kanban_key)
        library = Library(store, parser=parser, event_logger=event_logger)

        workspace = cls(config, state, state_store, library, event_logger=event_logger, rng=rng)
        if load:
            workspace.load()
        return workspace

    @property
    def root(self) -> Path:
        return self.library.store.root

    def load(self) -> ReconcileReport:
        """Load the library and reconcile ids."""
        try:
            self.report = self.library.load()
        except Exception as e:
            if self.event_logger is not None:
                self.event_logger.log_error(str(e), {"root": str(self.root)})
            raise
        return self.report

    def save_state(self) -> None:
        self.state_store.save(self.state)

    def set_root(self, root: Path | str) -> Path:
        """Persist a new projects folder."""
        resolved = Path(root).expanduser().resolve()
        self.state.root_path = str(resolved)
        self.save_state()
        logger.info("Projects folder set to %s", resolved)
        return resolved

    def suggest(self, todo_filter: Filter | None = None) -> SuggestionSession:
        return self.engine.suggest(todo_filter)

    def confirm_candidate(self, finished: bool) -> int | None:
        """
        Resolve the pending candidate and save state.

        Returns:
            The project id added to the history, if any
        """
        _, description = self.history.candidate_label()
        project_id: int | None = None
        if finished:
            project_id = self.history.accept()
        else:
            project_id = self.state.curr_project
            self.history.reject()
        self.history.save()
        if self.event_logger is not None:
            self.event_logger.log_candidate(project_id, description, finished)
        return project_id if finished else None
