"""
Structured JSONL event logging for busymango.

Provides a MangoLogger class that writes timestamped JSON Lines events for
debugging and for looking back at what was suggested and accepted. Events
are written to ~/.local/share/busymango/logs/{session}.jsonl

Each log line is valid JSON with the format:
{
  "timestamp": "2026-01-15T12:34:56.789Z",
  "event_type": "suggestion_accept",
  "data": { ... event-specific data ... }
}
"""

from __future__ import annotations

import os
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from busymango.core.documents.models import Todo


class EventType(str, Enum):
    """Types of events that can be logged."""

    LIBRARY_LOAD = "library_load"
    IDS_ASSIGNED = "ids_assigned"
    SUGGESTION_ACCEPT = "suggestion_accept"
    SUGGESTION_REJECT = "suggestion_reject"
    CANDIDATE_ACCEPT = "candidate_accept"
    CANDIDATE_REJECT = "candidate_reject"
    ERROR = "error"


class LogEntry(BaseModel):
    """A single structured log entry in JSONL format."""

    model_config = ConfigDict(use_enum_values=True)

    timestamp: datetime = Field(..., description="When the event occurred (ISO 8601 format)")
    event_type: EventType = Field(..., description="Type of event")
    data: dict[str, Any] = Field(default_factory=dict, description="Event-specific data")


def get_default_log_dir() -> Path:
    xdg_data_home = os.environ.get("XDG_DATA_HOME")
    if not xdg_data_home:
        xdg_data_home = os.path.expanduser("~/.local/share")
    return Path(xdg_data_home) / "busymango" / "logs"


class MangoLogger:
    """
    Structured JSONL logger for busymango events.

    Example:
        logger = MangoLogger.init("20260115-123456")
        logger.log_event(EventType.LIBRARY_LOAD, {"projects": 4})
    """

    def __init__(self, log_file: Path):
        """
        Initialize logger with a log file path.

        Args:
            log_file: Path to the JSONL log file (will be created if needed)
        """
        self.log_file = Path(log_file)
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def init(session_id: str, log_dir: Path | None = None) -> MangoLogger:
        """
        Initialize a logger for a session.

        Args:
            session_id: Unique session identifier (used for filename)
            log_dir: Directory for log files (defaults to the XDG data location)

        Raises:
            ValueError: If session_id is empty
        """
        if not session_id:
            raise ValueError("session_id cannot be empty")
        return MangoLogger((log_dir or get_default_log_dir()) / f"{session_id}.jsonl")

    def log_event(self, event_type: EventType, data: dict[str, Any] | None = None) -> None:
        """
        Write a log event to the JSONL file.

        Write failures are reported on stdout and never raised.
        """
        if data is None:
            data = {}

        try:
            entry = LogEntry(timestamp=datetime.now(timezone.utc), event_type=event_type, data=data)
            log_line = entry.model_dump_json(exclude_none=True) + "\n"
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(log_line)
        except OSError as e:
            print(f"Warning: Failed to write to log file {self.log_file}: {e}", flush=True)

    def log_library_load(self, root: str, projects: int, todos: int) -> None:
        self.log_event(
            EventType.LIBRARY_LOAD, {"root": root, "projects": projects, "todos": todos}
        )

    def log_ids_assigned(
        self, projects: int, boards: int, todos: int, documents: list[str]
    ) -> None:
        self.log_event(
            EventType.IDS_ASSIGNED,
            {
                "projects": projects,
                "boards": boards,
                "todos": todos,
                "documents": documents,
            },
        )

    def log_suggestion(self, todo: Todo, accepted: bool, position: int) -> None:
        """
        Log an answer to a suggestion.

        Args:
            todo: The suggested todo
            accepted: Whether the user took it
            position: Zero-based position of the todo in the session
        """
        self.log_event(
            EventType.SUGGESTION_ACCEPT if accepted else EventType.SUGGESTION_REJECT,
            {
                "todo_id": todo.id if isinstance(todo.id, int) else None,
                "project": todo.project.name if todo.project is not None else None,
                "description": todo.description,
                "position": position,
            },
        )

    def log_candidate(self, project_id: int | None, description: str, finished: bool) -> None:
        """Log the confirmation (or not) of the previous candidate."""
        self.log_event(
            EventType.CANDIDATE_ACCEPT if finished else EventType.CANDIDATE_REJECT,
            {"project_id": project_id, "description": description},
        )

    def log_error(self, message: str, context: dict[str, Any] | None = None) -> None:
        data: dict[str, Any] = {"message": message}
        if context:
            data["context"] = context
        self.log_event(EventType.ERROR, data)

    def get_log_file(self) -> Path:
        """Get the path to the log file."""
        return self.log_file
