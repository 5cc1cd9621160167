"""
Work history and persisted application state.
"""

from busymango.core.history.history import History
from busymango.core.history.models import AppState
from busymango.core.history.store import StateStore, get_default_state_path

__all__ = [
    "AppState",
    "History",
    "StateStore",
    "get_default_state_path",
]
