"""
Project document parser.

Turns the Markdown body of one project document into a Project with its
Boards and Todos, and remembers where every heading and todo line sits so
ids can later be written back without touching anything else.

A document is cut into three parts:

    head   everything before the first `##` heading, kept verbatim
    body   from the first heading through the last heading or todo line
    tail   whatever follows, kept verbatim

Only body lines are parsed, and only the recorded heading/todo lines of the
body are ever rewritten.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from busymango.core.documents.models import (
    Board,
    Column,
    Priority,
    Project,
    ProjectType,
    Todo,
)
from busymango.core.errors import DocumentParseError
from busymango.core.ids.annotations import get_id, remove_id, set_id

logger = logging.getLogger(__name__)

HEADING_MARKER = "##"
TODO_MARKER = "- [ ]"
DEFAULT_TOPIC = "Default"
DEFAULT_KANBAN_KEY = "kanban-plugin"

LINE_SPLIT_PATTERN = re.compile(r"\r?\n")


@dataclass
class DocumentLayout:
    """
    Line-level layout of a parsed document.

    `board_lines[b]` is the body line index of board b's heading (None for
    the implicit Default topic, which has no heading). `todo_lines[b][t]`
    is the body line index of todo t on board b.
    """

    head: list[str] = field(default_factory=list)
    lines: list[str] = field(default_factory=list)
    tail: list[str] = field(default_factory=list)
    board_lines: list[int | None] = field(default_factory=list)
    todo_lines: list[list[int]] = field(default_factory=list)

    def set_board_id(self, board_index: int, identifier: int) -> bool:
        """Annotate a board heading. Returns False if the board has no heading."""
        line_index = self.board_lines[board_index]
        if line_index is None:
            return False
        self.lines[line_index] = set_id(self.lines[line_index], identifier)
        return True

    def set_todo_id(self, board_index: int, todo_index: int, identifier: int) -> None:
        line_index = self.todo_lines[board_index][todo_index]
        self.lines[line_index] = set_id(self.lines[line_index], identifier)

    def render(self) -> str:
        return "\n".join([*self.head, *self.lines, *self.tail])


@dataclass
class ParsedDocument:
    """A project together with the layout it was parsed from."""

    project: Project
    layout: DocumentLayout


def split_lines(text: str) -> list[str]:
    return LINE_SPLIT_PATTERN.split(text)


def split_sections(
    lines: list[str], source: str | None = None
) -> tuple[list[str], list[str], list[str]]:
    """
    Cut document lines into head, body and tail.

    Raises:
        DocumentParseError: If the document has no `##` heading at all
    """
    first_heading = next(
        (i for i, line in enumerate(lines) if line.startswith(HEADING_MARKER)), None
    )
    if first_heading is None:
        raise DocumentParseError(f"No headings in document {source or '<text>'}", path=source)

    head = lines[:first_heading]
    rest = lines[first_heading:]

    last_structural = None
    for i in range(len(rest) - 1, -1, -1):
        stripped = rest[i].strip()
        if stripped.startswith(TODO_MARKER) or stripped.startswith(HEADING_MARKER):
            last_structural = i
            break

    if last_structural is None:
        return head, rest, []
    return head, rest[: last_structural + 1], rest[last_structural + 1:]


def parse_todo(line: str) -> Todo:
    """Build a Todo from a checkbox line (marker included)."""
    text = line.strip()[len(TODO_MARKER):]
    todo = Todo(id=get_id(text))
    description = remove_id(text).strip()
    todo.description = description.replace("[[", "").replace("]]", "")
    return todo


def parse_body(
    lines: list[str], project_type: ProjectType
) -> tuple[list[Board], list[int | None], list[list[int]]]:
    """
    Parse body lines into boards.

    Returns:
        (boards, board line indexes, todo line indexes per board)
    """
    board_lines: list[int | None] = [
        i for i, line in enumerate(lines) if line.startswith(HEADING_MARKER)
    ]
    if project_type == ProjectType.FREEFORM and not board_lines:
        board_lines = [None]

    boards: list[Board] = []
    todo_lines: list[list[int]] = []

    for board_index, start in enumerate(board_lines):
        begin = start if start is not None else 0
        following = board_lines[board_index + 1] if board_index + 1 < len(board_lines) else None
        end = following if following is not None else len(lines)

        heading = lines[start] if start is not None else None
        if project_type == ProjectType.KANBAN:
            board = _kanban_board(heading or "")
        else:
            board = _topic_board(heading)

        positions: list[int] = []
        for line_index in range(begin, end):
            line = lines[line_index]
            # Topic boards tolerate indented (nested) checkboxes
            candidate = line if project_type == ProjectType.KANBAN else line.strip()
            if candidate.startswith(TODO_MARKER):
                board.todos.append(parse_todo(line))
                positions.append(line_index)

        boards.append(board)
        todo_lines.append(positions)

    return boards, board_lines, todo_lines


def _heading_text(heading: str) -> str:
    return heading[len(HEADING_MARKER):].strip()


def _kanban_board(heading: str) -> Board:
    text = _heading_text(heading)
    return Board.kanban(Column.from_heading(remove_id(text)), id=get_id(text))


def _topic_board(heading: str | None) -> Board:
    if heading is None:
        return Board.topic(DEFAULT_TOPIC, id=None)
    text = _heading_text(heading)
    return Board.topic(remove_id(text).strip() or DEFAULT_TOPIC, id=get_id(text))


def _metadata_id(value: Any, source: str | None) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool):
        logger.warning("Ignoring boolean id %r in %s", value, source)
        return None
    try:
        identifier = int(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-integer id %r in %s", value, source)
        return None
    if identifier < 0:
        logger.warning("Ignoring negative id %d in %s", identifier, source)
        return None
    return identifier


def _metadata_areas(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value else []
    if isinstance(value, (list, tuple)):
        return [str(area) for area in value if area is not None and str(area)]
    return [str(value)]


class DocumentParser:
    """
    Parser for project documents.

    Example:
        >>> parser = DocumentParser()
        >>> doc = parser.parse("## Todo\\n- [ ] buy milk", {"kanban-plugin": "basic"}, "Home")
        >>> doc.project.boards[0].todos[0].description
        'buy milk'
    """

    def __init__(self, kanban_key: str = DEFAULT_KANBAN_KEY) -> None:
        self.kanban_key = kanban_key

    def project_type(self, metadata: Mapping[str, Any]) -> ProjectType:
        return ProjectType.KANBAN if self.kanban_key in metadata else ProjectType.FREEFORM

    def parse(
        self,
        text: str,
        metadata: Mapping[str, Any],
        name: str,
        source: str | None = None,
    ) -> ParsedDocument:
        """
        Parse a document body into a project.

        Args:
            text: Document text without its metadata block
            metadata: Parsed metadata block
            name: Project name (usually the file stem)
            source: Path used in error and log messages

        Returns:
            ParsedDocument with back-references wired

        Raises:
            DocumentParseError: If the document has no headings
        """
        head, body, tail = split_sections(split_lines(text), source or name)
        project_type = self.project_type(metadata)
        boards, board_lines, todo_lines = parse_body(body, project_type)

        project = Project(
            name=name,
            type=project_type,
            id=_metadata_id(metadata.get("id"), source or name),
            boards=boards,
            urgency=Priority.from_name(metadata.get("urgency")),
            strategy=Priority.from_name(metadata.get("strategy")),
            interest=Priority.from_name(metadata.get("interest")),
            areas=_metadata_areas(metadata.get("areas")),
        )
        project.attach()

        logger.debug(
            "Parsed %s: %s project, %d boards, %d todos",
            source or name,
            project_type.value,
            len(boards),
            sum(len(b.todos) for b in boards),
        )

        layout = DocumentLayout(
            head=head,
            lines=body,
            tail=tail,
            board_lines=board_lines,
            todo_lines=todo_lines,
        )
        return ParsedDocument(project=project, layout=layout)
