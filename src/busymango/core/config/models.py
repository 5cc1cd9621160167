"""
Configuration data models for busymango.

These models define the structure of .mango.json and
~/.config/busymango/config.json, with validation via Pydantic.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DocumentsConfig(BaseModel):
    """
    Where project documents live and how they are recognized.
    """
    root: Optional[str] = Field(
        default=None,
        description="Projects folder (overrides the persisted root path)"
    )
    extension: str = Field(
        default="md",
        min_length=1,
        description="File extension of project documents"
    )
    kanban_key: str = Field(
        default="kanban-plugin",
        min_length=1,
        description="Front matter key whose presence marks a kanban document"
    )

    @field_validator("extension")
    @classmethod
    def strip_dot(cls, v: str) -> str:
        """Accept '.md' as well as 'md'."""
        return v.lstrip(".") or "md"


class StateFileConfig(BaseModel):
    """
    Persisted application state location.
    """
    path: Optional[str] = Field(
        default=None,
        description="State file path (defaults to $XDG_DATA_HOME/busymango/state.json)"
    )


class LoggingConfig(BaseModel):
    """
    Structured event log settings.
    """
    enabled: bool = Field(
        default=True,
        description="Write JSONL event logs"
    )
    dir: Optional[str] = Field(
        default=None,
        description="Log directory (defaults to $XDG_DATA_HOME/busymango/logs)"
    )


class MangoConfig(BaseModel):
    """
    Top-level busymango configuration.

    Loaded from defaults, user config, project config, and env vars.

    Example:
        >>> config = MangoConfig(documents=DocumentsConfig(root="~/notes/projects"))
        >>> config.documents.extension
        'md'
    """
    documents: DocumentsConfig = Field(
        default_factory=DocumentsConfig,
        description="Project document discovery"
    )
    state: StateFileConfig = Field(
        default_factory=StateFileConfig,
        description="Persisted state location"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Event log settings"
    )

    model_config = ConfigDict(
        extra="allow",  # Allow extra fields for forward compatibility
        validate_assignment=True,
    )
