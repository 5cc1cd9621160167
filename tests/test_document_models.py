"""
Tests for the project/board/todo model.
"""

import pytest

from busymango.core.documents.models import (
    UNSET,
    Board,
    BoardKind,
    Column,
    Priority,
    Project,
    ProjectType,
    Todo,
)


def kanban_project(columns: dict[Column, list[str]]) -> Project:
    boards = []
    for column, descriptions in columns.items():
        board = Board.kanban(column, id=len(boards))
        board.todos = [Todo(id=None, description=d) for d in descriptions]
        boards.append(board)
    project = Project(name="board", type=ProjectType.KANBAN, id=0, boards=boards)
    project.attach()
    return project


def descriptions(todos):
    return [todo.description for todo in todos]


class TestPriority:
    """Test priority parsing and ordering."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("urgent", Priority.URGENT),
            ("High", Priority.HIGH),
            (" NORMAL ", Priority.NORMAL),
            ("low", Priority.LOW),
            ("none", Priority.NONE),
            ("bogus", Priority.NONE),
            ("", Priority.NONE),
            (None, Priority.NONE),
            (3, Priority.NONE),
        ],
    )
    def test_from_name(self, name, expected):
        """Names are case-insensitive; anything else is NONE."""
        assert Priority.from_name(name) == expected

    def test_lower_is_more_important(self):
        """URGENT sorts before NONE."""
        assert Priority.URGENT < Priority.HIGH < Priority.NORMAL < Priority.LOW < Priority.NONE

    def test_is_considerable(self):
        """NORMAL or better is considerable."""
        assert Priority.URGENT.is_considerable
        assert Priority.NORMAL.is_considerable
        assert not Priority.LOW.is_considerable
        assert not Priority.NONE.is_considerable

    def test_weights_double(self):
        """Each step up doubles the ranking weight."""
        assert [p.weight for p in Priority] == [8, 4, 2, 1, 0]


class TestColumn:
    """Test kanban column recognition."""

    def test_known_headings(self):
        """Headings map case-insensitively."""
        assert Column.from_heading("In Work") == Column.IN_WORK
        assert Column.from_heading("deep todo") == Column.DEEP_TODO
        assert Column.from_heading(" Repetitive ") == Column.REPETITIVE

    def test_unknown_heading_is_todo(self):
        """Anything else is treated as the todo column."""
        assert Column.from_heading("Backlog") == Column.TODO


class TestTodo:
    """Test derived todo priorities."""

    def test_urgent_marker_overrides_project(self, make_project):
        """A leading ! makes the todo urgent regardless of the project."""
        project = make_project("home", 0, ["!fix fence", "paint"], urgency=Priority.LOW)
        urgent, plain = project.boards[0].todos
        assert urgent.is_urgent
        assert urgent.urgency == Priority.URGENT
        assert plain.urgency == Priority.LOW

    def test_strategy_and_interest_come_from_project(self, make_project):
        """Only urgency has a per-todo override."""
        project = make_project(
            "home", 0, ["!x"], strategy=Priority.HIGH, interest=Priority.LOW
        )
        todo = project.boards[0].todos[0]
        assert todo.strategy == Priority.HIGH
        assert todo.interest == Priority.LOW

    def test_unattached_todo_has_no_priorities(self):
        """Priorities need an owning project."""
        with pytest.raises(RuntimeError, match="not attached"):
            _ = Todo(description="orphan").strategy

    def test_str(self, make_project):
        """Todos render as 'project: description'."""
        project = make_project("home", 0, ["paint"])
        assert str(project.boards[0].todos[0]) == "home: paint"

    def test_ids_default_to_unset(self):
        """A fresh todo's id is the falsy UNSET sentinel."""
        todo = Todo()
        assert todo.id is UNSET
        assert not todo.id
        assert repr(UNSET) == "UNSET"

    def test_identity_not_equality(self):
        """Todos with the same text are still different todos."""
        assert Todo(id=None, description="a") != Todo(id=None, description="a")


class TestBoard:
    """Test board variants."""

    def test_kanban_variant(self):
        board = Board.kanban(Column.IN_WORK)
        assert board.kind == BoardKind.KANBAN
        assert board.label == "in work"
        assert board.id is UNSET

    def test_topic_variant(self):
        board = Board.topic("Fiction", id=3)
        assert board.kind == BoardKind.TOPIC
        assert board.label == "Fiction"
        assert board.id == 3


class TestAvailableTodos:
    """Test which todos a project offers."""

    def test_kanban_prefers_in_work(self):
        """With work in progress, the todo column is held back."""
        project = kanban_project(
            {
                Column.IN_WORK: ["a"],
                Column.TODO: ["b"],
                Column.DEEP_TODO: ["c"],
                Column.REPETITIVE: ["d"],
            }
        )
        assert descriptions(project.get_available_todos()) == ["d", "a"]

    def test_kanban_falls_back_to_todo_column(self):
        """An empty in-work column releases the todo column."""
        project = kanban_project(
            {
                Column.IN_WORK: [],
                Column.TODO: ["b", "e"],
                Column.DEEP_TODO: ["c"],
                Column.REPETITIVE: ["d"],
            }
        )
        assert descriptions(project.get_available_todos()) == ["d", "b", "e"]

    def test_kanban_never_offers_deep_todos(self):
        project = kanban_project({Column.DEEP_TODO: ["c"]})
        assert project.get_available_todos() == []

    def test_freeform_offers_everything(self, make_project):
        project = make_project("notes", 0, ["a", "b"])
        assert descriptions(project.get_available_todos()) == ["a", "b"]

    def test_todos_by_column_is_kanban_only(self, make_project):
        project = make_project("notes", 0, ["a"])
        assert project.get_todos_by_column(Column.TODO) == []

    def test_attach_wires_back_references(self, make_project):
        project = make_project("notes", 0, ["a"])
        board = project.boards[0]
        todo = board.todos[0]
        assert board.project is project
        assert todo.project is project
        assert todo.board is board
