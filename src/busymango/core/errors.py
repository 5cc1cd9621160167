"""Exception hierarchy shared by the busymango core."""


class BusyMangoError(Exception):
    """Base exception for busymango errors."""


class DocumentParseError(BusyMangoError):
    """A project document cannot be turned into a project."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class ReconcileError(BusyMangoError):
    """Id reconciliation found an id field the parser never initialized."""


class StateError(BusyMangoError):
    """Persisted application state cannot be read or written."""
