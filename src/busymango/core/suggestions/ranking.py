"""
Priority-weighted randomized ordering of todos.

Each todo draws one exponential sample per priority dimension, scaled by
the priority weight and by how much the dimension counts:

    score = sum(-ln(U_d) * weight(priority_d) * scale_d)

with scales urgency 100, strategy 10, interest 1, so urgency dominates
strategy, which dominates interest, in expectation. A todo with no
priority anywhere always scores 0.
"""

from __future__ import annotations

import math
import random
from collections.abc import Sequence

from busymango.core.documents.models import Priority, Todo

DIMENSION_SCALES: dict[str, int] = {
    "urgency": 100,
    "strategy": 10,
    "interest": 1,
}


def _exponential(rng: random.Random) -> float:
    # 1 - random() lies in (0, 1], so the log is always defined
    return -math.log(1.0 - rng.random())


def _dimension_priorities(todo: Todo) -> dict[str, Priority]:
    return {
        "urgency": todo.urgency,
        "strategy": todo.strategy,
        "interest": todo.interest,
    }


def draw_score(todo: Todo, rng: random.Random | None = None) -> float:
    """Draw a fresh random score for a todo (higher means more pressing)."""
    rng = rng or random.Random()
    total = 0.0
    for dimension, priority in _dimension_priorities(todo).items():
        if priority.weight == 0:
            continue
        total += _exponential(rng) * priority.weight * DIMENSION_SCALES[dimension]
    return total


def weighted_shuffle(todos: Sequence[Todo], rng: random.Random | None = None) -> list[Todo]:
    """
    Shuffle todos so that higher priorities tend to come first.

    Every call redraws all scores. Todos with equal scores (in practice,
    todos without any priority) are shuffled among themselves.

    Args:
        todos: Todos to order
        rng: Random source (a fresh one if omitted)

    Returns:
        New list, most pressing first
    """
    rng = rng or random.Random()
    scored = [(draw_score(todo, rng), rng.random(), todo) for todo in todos]
    scored.sort(key=lambda entry: (-entry[0], entry[1]))
    return [todo for _, _, todo in scored]


def biased_sort(todos: Sequence[Todo], rng: random.Random | None = None) -> list[Todo]:
    """
    Nudge higher-priority todos earlier while mostly keeping the given order.

    Each todo's sort key is its position minus its score. Todos without
    priority keep exactly their relative order.

    Args:
        todos: Todos in their base order
        rng: Random source (a fresh one if omitted)

    Returns:
        New list in biased order
    """
    rng = rng or random.Random()
    scored = [(index - draw_score(todo, rng), todo) for index, todo in enumerate(todos)]
    scored.sort(key=lambda entry: entry[0])
    return [todo for _, todo in scored]
