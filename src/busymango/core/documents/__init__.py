"""
Project documents: the task model, its parser, and file storage.
"""

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
from busymango.core.documents.parser import (
    DocumentLayout,
    DocumentParser,
    ParsedDocument,
    parse_body,
    parse_todo,
    split_sections,
)
from busymango.core.documents.store import DocumentStore

__all__ = [
    # Models
    "UNSET",
    "Board",
    "BoardKind",
    "Column",
    "Priority",
    "Project",
    "ProjectType",
    "Todo",
    # Parser
    "DocumentLayout",
    "DocumentParser",
    "ParsedDocument",
    "parse_body",
    "parse_todo",
    "split_sections",
    # Storage
    "DocumentStore",
]
