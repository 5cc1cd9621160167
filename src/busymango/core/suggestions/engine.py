"""
Suggestion engine for busymango.

Composes the library, the work history, a filter and the ranking into the
"what should I work on next" sequence, and exposes it as a session that
any presentation layer (the CLI, a test) drives by answering one pending
candidate at a time.
"""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import TYPE_CHECKING

from busymango.core.documents.models import Todo
from busymango.core.errors import BusyMangoError
from busymango.core.history.history import History
from busymango.core.library.library import Library
from busymango.core.suggestions.filter import Filter
from busymango.core.suggestions.ranking import biased_sort, weighted_shuffle

if TYPE_CHECKING:
    from busymango.utils.logging import MangoLogger

logger = logging.getLogger(__name__)


class SuggestionSessionError(BusyMangoError):
    """A session was answered when no candidate was pending."""


class SuggestionOutcome(str, Enum):
    """State of a suggestion session."""

    PENDING = "pending"  # a candidate awaits an answer
    ACCEPTED = "accepted"  # the user took a candidate
    NO_TODOS_FOUND = "no_todos_found"  # nothing matched the filter
    EXHAUSTED = "exhausted"  # every candidate was declined

    @property
    def message(self) -> str:
        return {
            SuggestionOutcome.PENDING: "",
            SuggestionOutcome.ACCEPTED: "Have fun!",
            SuggestionOutcome.NO_TODOS_FOUND: "No todos found for the given filter!",
            SuggestionOutcome.EXHAUSTED: "No todos for you!",
        }[self]


class SuggestionSession:
    """
    An ordered run of candidates awaiting accept/reject decisions.

    The session never blocks: callers read `pending`, ask the user however
    they like, and call `answer()`. Dropping a session without answering
    changes nothing.

    Example:
        session = engine.suggest(Filter(urgent=True))
        while session.pending is not None:
            session.answer(ask_user(session.pending))
        print(session.outcome.message)
    """

    def __init__(
        self,
        candidates: list[Todo],
        history: History,
        event_logger: MangoLogger | None = None,
    ) -> None:
        self.candidates = candidates
        self._history = history
        self._event_logger = event_logger
        self._position = 0
        self._accepted: Todo | None = None

    @property
    def is_empty(self) -> bool:
        return not self.candidates

    @property
    def pending(self) -> Todo | None:
        """The candidate awaiting a decision, or None once the session is over."""
        if self._accepted is not None or self._position >= len(self.candidates):
            return None
        return self.candidates[self._position]

    @property
    def accepted(self) -> Todo | None:
        return self._accepted

    @property
    def position(self) -> int:
        return self._position

    @property
    def outcome(self) -> SuggestionOutcome:
        if self._accepted is not None:
            return SuggestionOutcome.ACCEPTED
        if self.is_empty:
            return SuggestionOutcome.NO_TODOS_FOUND
        if self._position >= len(self.candidates):
            return SuggestionOutcome.EXHAUSTED
        return SuggestionOutcome.PENDING

    def answer(self, accepted: bool) -> SuggestionOutcome:
        """
        Answer the pending candidate.

        Accepting makes it the history candidate and saves state; declining
        moves on to the next one.

        Raises:
            SuggestionSessionError: If no candidate is pending
        """
        todo = self.pending
        if todo is None:
            raise SuggestionSessionError(
                f"No pending candidate (session is {self.outcome.value})"
            )

        if accepted:
            self._accepted = todo
            self._history.set_candidate(todo)
            self._history.save()
            logger.info("Accepted suggestion: %s", todo)
            if self._event_logger is not None:
                self._event_logger.log_suggestion(todo, accepted=True, position=self._position)
        else:
            logger.debug("Declined suggestion: %s", todo)
            if self._event_logger is not None:
                self._event_logger.log_suggestion(todo, accepted=False, position=self._position)
            self._position += 1

        return self.outcome


class SuggestionEngine:
    """
    Builds suggestion sessions.

    Todos from projects that are not in the recent history come first, in
    a priority-weighted shuffle. Todos from recently worked projects follow,
    in history order with a gentle priority bias.
    """

    def __init__(
        self,
        library: Library,
        history: History,
        rng: random.Random | None = None,
        event_logger: MangoLogger | None = None,
    ) -> None:
        self.library = library
        self.history = history
        self.rng = rng or random.Random()
        self.event_logger = event_logger

    def rank(self, todo_filter: Filter) -> list[Todo]:
        """Candidate order for a filter."""
        available = todo_filter.apply(self.library.get_available_todos())

        history_todos = todo_filter.apply(
            todo
            for project in self.history.history_projects()
            for todo in project.get_available_todos()
        )
        in_history = {id(todo) for todo in history_todos}
        fresh = [todo for todo in available if id(todo) not in in_history]

        logger.debug(
            "Filter %s: %d fresh, %d from history",
            todo_filter.describe(),
            len(fresh),
            len(history_todos),
        )
        return weighted_shuffle(fresh, self.rng) + biased_sort(history_todos, self.rng)

    def suggest(self, todo_filter: Filter | None = None) -> SuggestionSession:
        """Start a suggestion session for a filter (everything if omitted)."""
        return SuggestionSession(
            self.rank(todo_filter or Filter()),
            self.history,
            event_logger=self.event_logger,
        )
