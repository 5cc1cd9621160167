"""
Live task model built from project documents.

A Project owns ordered Boards, a Board owns ordered Todos, and every Todo
and Board points back at its owners once the document is loaded. These
are plain dataclasses rather than pydantic models: the back-references
form cycles, and identity (not field equality) is what distinguishes two
todos with the same text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Iterator, Union

URGENT_MARKER = "!"


class _Unset:
    """Sentinel type for an id field the parser has not initialized."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset()

# int: assigned, None: needs assignment, UNSET: never initialized
IdField = Union[int, None, _Unset]


class Priority(IntEnum):
    """Priority levels, lower is more important."""

    URGENT = 0
    HIGH = 1
    NORMAL = 2
    LOW = 3
    NONE = 4

    @classmethod
    def from_name(cls, name: object) -> Priority:
        """Parse a priority name; anything unrecognized is NONE."""
        if not isinstance(name, str) or not name:
            return cls.NONE
        try:
            return cls[name.strip().upper()]
        except KeyError:
            return cls.NONE

    @property
    def is_considerable(self) -> bool:
        """NORMAL or more important."""
        return self <= Priority.NORMAL

    @property
    def weight(self) -> int:
        """Ranking weight; doubles with each step of importance."""
        return _PRIORITY_WEIGHTS[self]


_PRIORITY_WEIGHTS = {
    Priority.NONE: 0,
    Priority.LOW: 1,
    Priority.NORMAL: 2,
    Priority.HIGH: 4,
    Priority.URGENT: 8,
}


class ProjectType(str, Enum):
    """How a project document is structured."""

    KANBAN = "kanban"
    FREEFORM = "freeform"


class BoardKind(str, Enum):
    """Discriminant of the Board variant."""

    KANBAN = "kanban"
    TOPIC = "topic"


class Column(str, Enum):
    """Kanban column a board represents."""

    IN_WORK = "in work"
    TODO = "todo"
    DEEP_TODO = "deep todo"
    REPETITIVE = "repetitive"

    @classmethod
    def from_heading(cls, heading: str) -> Column:
        """Map heading text to a column; unknown headings are TODO."""
        try:
            return cls(heading.strip().lower())
        except ValueError:
            return cls.TODO


@dataclass(eq=False)
class Todo:
    """A single open checkbox item."""

    id: IdField = UNSET
    description: str = ""
    project: Project | None = field(default=None, repr=False)
    board: Board | None = field(default=None, repr=False)

    @property
    def is_urgent(self) -> bool:
        return self.description.startswith(URGENT_MARKER)

    @property
    def urgency(self) -> Priority:
        if self.is_urgent:
            return Priority.URGENT
        return self._owner().urgency

    @property
    def strategy(self) -> Priority:
        return self._owner().strategy

    @property
    def interest(self) -> Priority:
        return self._owner().interest

    def _owner(self) -> Project:
        if self.project is None:
            raise RuntimeError(f"Todo {self.description!r} is not attached to a project")
        return self.project

    def __str__(self) -> str:
        owner = self.project.name if self.project is not None else "?"
        return f"{owner}: {self.description}"


@dataclass(eq=False)
class Board:
    """
    A grouping of todos inside a project.

    Tagged variant: `kind` selects which payload is meaningful. KANBAN
    boards carry a `column`, TOPIC boards carry a `name`.
    """

    kind: BoardKind
    column: Column | None = None
    name: str | None = None
    id: IdField = UNSET
    todos: list[Todo] = field(default_factory=list)
    project: Project | None = field(default=None, repr=False)

    @classmethod
    def kanban(cls, column: Column, id: IdField = UNSET) -> Board:
        return cls(kind=BoardKind.KANBAN, column=column, id=id)

    @classmethod
    def topic(cls, name: str, id: IdField = UNSET) -> Board:
        return cls(kind=BoardKind.TOPIC, name=name, id=id)

    @property
    def label(self) -> str:
        if self.kind == BoardKind.KANBAN and self.column is not None:
            return self.column.value
        return self.name or ""


@dataclass(eq=False)
class Project:
    """A project parsed from one document."""

    name: str
    type: ProjectType
    id: IdField = UNSET
    boards: list[Board] = field(default_factory=list)
    urgency: Priority = Priority.NONE
    strategy: Priority = Priority.NONE
    interest: Priority = Priority.NONE
    areas: list[str] = field(default_factory=list)

    def attach(self) -> None:
        """Point every board and todo back at this project."""
        for board in self.boards:
            board.project = self
            for todo in board.todos:
                todo.project = self
                todo.board = board

    def iter_todos(self) -> Iterator[Todo]:
        for board in self.boards:
            yield from board.todos

    def get_todos_by_column(self, column: Column) -> list[Todo]:
        """Todos of the first board with the given column (kanban only)."""
        if self.type != ProjectType.KANBAN:
            return []
        for board in self.boards:
            if board.column == column:
                return board.todos
        return []

    def get_available_todos(self) -> list[Todo]:
        """
        Todos that may be suggested right now.

        Kanban projects offer their repetitive todos plus whatever is in
        work, falling back to the todo column only when nothing is in work.
        Deep todos never surface. Freeform projects offer everything.
        """
        if self.type == ProjectType.KANBAN:
            todos = list(self.get_todos_by_column(Column.REPETITIVE))
            in_work = self.get_todos_by_column(Column.IN_WORK)
            todos.extend(in_work if in_work else self.get_todos_by_column(Column.TODO))
            return todos
        return list(self.iter_todos())

    def __str__(self) -> str:
        return self.name
