"""Utility modules for busymango."""

from .logging import EventType, LogEntry, MangoLogger

__all__ = [
    "EventType",
    "LogEntry",
    "MangoLogger",
]
