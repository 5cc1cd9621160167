"""
The project library.

Loads every project document under the configured folder, gives every
project, board and todo a stable numeric id, writes newly assigned ids
back into the documents, and answers queries about the result.

Id reconciliation runs in three passes, each relying on the previous one:

1. Projects: one pool over the whole library, ids stored in front matter.
2. Boards: one pool per project, ids stored on the heading line.
3. Todos: one pool over the whole library, ids stored on the todo line.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

from busymango.core.documents.models import UNSET, IdField, Project, Todo
from busymango.core.documents.parser import DocumentLayout, DocumentParser
from busymango.core.documents.store import DocumentStore
from busymango.core.errors import ReconcileError
from busymango.core.ids.pool import IdPool

if TYPE_CHECKING:
    from busymango.utils.logging import MangoLogger

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Keys every flushed front matter block ends up carrying
METADATA_DEFAULTS: dict[str, Any] = {
    "areas": [],
    "interest": "none",
    "strategy": "none",
    "urgency": "none",
}


@dataclass
class ProjectDocument:
    """Write-back handle tying a project to the file it came from."""

    path: Path
    project: Project
    layout: DocumentLayout
    metadata: dict[str, Any] = field(default_factory=dict)
    dirty: bool = False

    def set_project_id(self, identifier: int) -> None:
        self.project.id = identifier
        self.metadata["id"] = identifier
        self.dirty = True

    def set_board_id(self, board_index: int, identifier: int) -> None:
        self.project.boards[board_index].id = identifier
        if self.layout.set_board_id(board_index, identifier):
            self.dirty = True
        else:
            logger.debug(
                "Board %d of %s has no heading, id %d kept in memory only",
                board_index,
                self.path.name,
                identifier,
            )

    def set_todo_id(self, board_index: int, todo_index: int, identifier: int) -> None:
        self.project.boards[board_index].todos[todo_index].id = identifier
        self.layout.set_todo_id(board_index, todo_index, identifier)
        self.dirty = True

    def merged_metadata(self) -> dict[str, Any]:
        merged = dict(self.metadata)
        for key, default in METADATA_DEFAULTS.items():
            if key not in merged or merged[key] is None:
                merged[key] = list(default) if isinstance(default, list) else default
        return merged


@dataclass
class ReconcileReport:
    """What a reconciliation pass assigned and wrote."""

    projects: int = 0
    boards: int = 0
    todos: int = 0
    flushed: list[Path] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.projects + self.boards + self.todos


def fill_missing_ids(
    items: Sequence[T],
    get: Callable[[T], IdField],
    assign: Callable[[int, int], None],
    scope: str,
) -> int:
    """
    Assign ids to every item whose id is None, reusing gaps first.

    Args:
        items: Items of one id scope, in assignment order
        get: Reads an item's id
        assign: Called with (item index, new id)
        scope: Name used in log and error messages

    Returns:
        Number of ids assigned

    Raises:
        ReconcileError: If an item's id was never initialized or isn't an int
    """
    occupied: list[int] = []
    missing: list[int] = []
    seen: set[int] = set()

    for index, item in enumerate(items):
        identifier = get(item)
        if identifier is UNSET:
            raise ReconcileError(f"{scope} #{index} has an uninitialized id")
        if identifier is None:
            missing.append(index)
            continue
        if not isinstance(identifier, int):
            raise ReconcileError(f"{scope} #{index} has a non-integer id {identifier!r}")
        if identifier in seen:
            logger.warning("Duplicate %s id %d", scope, identifier)
        seen.add(identifier)
        occupied.append(identifier)

    if not missing:
        return 0

    pool = IdPool(occupied)
    for index in missing:
        identifier = pool.yield_id()
        logger.debug("Assigning %s id %d to #%d", scope, identifier, index)
        assign(index, identifier)
    return len(missing)


class Library:
    """
    All projects found under one folder.

    Example:
        >>> library = Library(DocumentStore(Path("projects")))
        >>> report = library.load()
        >>> library.get_all_project_names()
        ['Garden', 'Home']
    """

    def __init__(
        self,
        store: DocumentStore,
        parser: DocumentParser | None = None,
        event_logger: MangoLogger | None = None,
    ) -> None:
        self.store = store
        self.parser = parser or DocumentParser()
        self.event_logger = event_logger
        self.projects: list[Project] = []
        self.documents: list[ProjectDocument] = []

    # ------------------------------------------------------------------
    # Loading and reconciliation
    # ------------------------------------------------------------------

    def load(self) -> ReconcileReport:
        """
        Parse every document, then reconcile and flush ids.

        The library is replaced only once every document parsed; a single
        unparseable document aborts the load.

        Raises:
            DocumentParseError: If any document can't be parsed
            FileNotFoundError: If the projects folder doesn't exist
        """
        documents: list[ProjectDocument] = []
        for path in self.store.list_documents():
            metadata, body = self.store.read(path)
            parsed = self.parser.parse(body, metadata, path.stem, source=str(path))
            documents.append(
                ProjectDocument(
                    path=path,
                    project=parsed.project,
                    layout=parsed.layout,
                    metadata=metadata,
                )
            )

        self.documents = documents
        self.projects = [doc.project for doc in documents]
        logger.info("Loaded %d projects from %s", len(self.projects), self.store.root)

        if self.event_logger is not None:
            self.event_logger.log_library_load(
                str(self.store.root),
                projects=len(self.projects),
                todos=sum(1 for p in self.projects for _ in p.iter_todos()),
            )

        return self.reconcile()

    def reconcile(self) -> ReconcileReport:
        """
        Fill in missing ids in three passes and flush touched documents.

        Raises:
            ReconcileError: If the parser left an id uninitialized
        """
        report = ReconcileReport()

        report.projects = fill_missing_ids(
            self.documents,
            lambda doc: doc.project.id,
            lambda index, identifier: self.documents[index].set_project_id(identifier),
            "project",
        )

        for doc in self.documents:
            report.boards += fill_missing_ids(
                doc.project.boards,
                lambda board: board.id,
                doc.set_board_id,
                f"board in {doc.project.name}",
            )

        todo_slots = [
            (doc, board_index, todo_index, todo)
            for doc in self.documents
            for board_index, board in enumerate(doc.project.boards)
            for todo_index, todo in enumerate(board.todos)
        ]

        def assign_todo(index: int, identifier: int) -> None:
            doc, board_index, todo_index, _ = todo_slots[index]
            doc.set_todo_id(board_index, todo_index, identifier)

        report.todos = fill_missing_ids(
            todo_slots, lambda slot: slot[3].id, assign_todo, "todo"
        )

        report.flushed = self.flush()

        if report.total:
            logger.info(
                "Assigned %d project, %d board and %d todo ids",
                report.projects,
                report.boards,
                report.todos,
            )
            if self.event_logger is not None:
                self.event_logger.log_ids_assigned(
                    projects=report.projects,
                    boards=report.boards,
                    todos=report.todos,
                    documents=[str(p) for p in report.flushed],
                )
        return report

    def flush(self) -> list[Path]:
        """
        Write touched documents back to disk.

        Body text first, then front matter. The two writes are independent:
        if the second fails the document keeps its new body, and the next
        load re-detects whatever ids did not persist.
        """
        flushed: list[Path] = []
        for doc in self.documents:
            if not doc.dirty:
                continue
            rendered = doc.layout.render()
            self.store.process_body(doc.path, lambda _body: rendered)

            merged = doc.merged_metadata()

            def replace(metadata: dict[str, Any]) -> None:
                metadata.clear()
                metadata.update(merged)

            self.store.process_metadata(doc.path, replace)
            doc.metadata = merged
            doc.dirty = False
            flushed.append(doc.path)
            logger.info("Wrote ids to %s", doc.path)
        return flushed

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_all_project_names(self) -> list[str]:
        return [p.name for p in self.projects]

    def get_all_project_files(self) -> list[Path]:
        return [doc.path for doc in self.documents]

    def get_all_areas(self) -> list[str]:
        """Area tags across all projects, deduplicated and sorted."""
        return sorted({area for p in self.projects for area in p.areas})

    def get_project_by_id(self, identifier: int | None) -> Project | None:
        if identifier is None:
            return None
        for project in self.projects:
            if project.id == identifier:
                return project
        return None

    def get_project_by_name(self, name: str) -> Project | None:
        for project in self.projects:
            if project.name == name:
                return project
        return None

    def get_todo_by_id(self, identifier: int | None) -> Todo | None:
        if identifier is None:
            return None
        for project in self.projects:
            for todo in project.iter_todos():
                if todo.id == identifier:
                    return todo
        return None

    def get_available_todos(self) -> list[Todo]:
        """Available todos of every project, in library order."""
        return [todo for project in self.projects for todo in project.get_available_todos()]
