"""
Gap-filling identifier allocation.

An IdPool is seeded with the ids already in use inside one scope (the
whole library for projects and todos, a single project for boards) and
hands out ids that reuse holes in the sequence before extending it.

Example:
    >>> pool = IdPool([0, 2, 5])
    >>> sorted(pool.yield_id() for _ in range(3))
    [1, 3, 4]
    >>> pool.yield_id()
    6
"""

from __future__ import annotations

from typing import Iterable


class IdPool:
    """Allocator for non-negative integer ids within a single scope.

    Free ids are kept on a stack of ranges: the most recently pushed gap is
    handed out first, highest id first, so callers must not rely on gaps
    being reused in ascending order, only on them being reused before the
    range is extended. Memory grows with the number of gaps, not their size.
    """

    __slots__ = ("_free", "_next")

    def __init__(self, used: Iterable[int] = ()) -> None:
        occupied = sorted(used)
        if occupied and occupied[0] < 0:
            raise ValueError(f"Ids must be non-negative, got {occupied[0]}")

        self._free: list[range] = []

        if not occupied:
            self._next = 0
            return

        self._next = occupied[-1] + 1

        previous = -1
        for value in occupied:
            if value > previous + 1:
                self._free.append(range(previous + 1, value))
            previous = max(previous, value)

    @property
    def next_id(self) -> int:
        """First id past the end of the used range."""
        return self._next

    @property
    def free_ids(self) -> list[int]:
        """Snapshot of the free list, in push order."""
        return [identifier for gap in self._free for identifier in gap]

    @property
    def free_count(self) -> int:
        """Number of ids waiting to be reused below next_id."""
        return sum(len(gap) for gap in self._free)

    def yield_id(self) -> int:
        """Return a free id, reusing gaps before extending the range."""
        if self._free:
            gap = self._free[-1]
            if len(gap) == 1:
                self._free.pop()
            else:
                self._free[-1] = gap[:-1]
            return gap[-1]
        allocated = self._next
        self._next += 1
        return allocated

    def free_id(self, identifier: int) -> None:
        """Give an id back to the pool."""
        if identifier < 0:
            raise ValueError(f"Ids must be non-negative, got {identifier}")
        if not self.is_id_free(identifier):
            self._free.append(range(identifier, identifier + 1))

    def is_id_free(self, identifier: int) -> bool:
        """Check whether an id would be available for allocation."""
        if identifier >= self._next:
            return True
        return any(identifier in gap for gap in self._free)
