"""
busymango - what should I work on next?

Reads a folder of Markdown project documents (kanban boards or freeform
topic lists), keeps stable ids on every project, board and todo, and
suggests todos one at a time, weighted by priority and recent history.
"""

__version__ = "0.3.0"

# Re-export core models for convenience
from busymango.core.documents.models import Board, Priority, Project, Todo
from busymango.core.suggestions.filter import Filter

__all__ = ["Board", "Filter", "Priority", "Project", "Todo", "__version__"]
