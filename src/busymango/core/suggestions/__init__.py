"""
Suggestion system for busymango.

Filters the library's available todos, orders them with priority-weighted
randomness and recent history, and hands them out one at a time.
"""

from busymango.core.suggestions.engine import (
    SuggestionEngine,
    SuggestionOutcome,
    SuggestionSession,
    SuggestionSessionError,
)
from busymango.core.suggestions.filter import Filter
from busymango.core.suggestions.ranking import biased_sort, draw_score, weighted_shuffle

__all__ = [
    # Filter
    "Filter",
    # Ranking
    "biased_sort",
    "draw_score",
    "weighted_shuffle",
    # Engine
    "SuggestionEngine",
    "SuggestionOutcome",
    "SuggestionSession",
    "SuggestionSessionError",
]
