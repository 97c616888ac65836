"""Lazy lexicographic enumeration of constraint solutions.

The ``Enumerator`` walks the assignment space depth first, one variable at a
time, in declaration order. At each position it asks the governing constraint
for the feasible range given the already-assigned prefix, records the upper
bound in ``limits``, and tries candidates from the bottom up. Candidates are
stepped through ``greatest_lower_bound`` so that values a disjunction rules out
are jumped over instead of visited.

State machine:
    SEEKING    searching for the first or next solution
    READY      holds a full assignment that has not been emitted yet
    EXHAUSTED  terminal; ``next`` raises StopIteration

Solutions come out in strictly ascending lexicographic order. A single call to
``next`` may do unbounded backtracking before it returns. Domains whose upper
bound is ``HI_SENTINEL`` make the solution set effectively infinite; bound
every dimension when a finite enumeration is required.
"""

from __future__ import annotations

from enum import Enum
from typing import (
    Callable,
    Generic,
    Iterator,
    List,
    Optional,
    Sequence,
    Tuple,
    TypeVar,
)

from fdenum.config import ENUMERATION_CONFIG, EnumerationConfig
from fdenum.logging import get_logger
from fdenum.model.constraints import Constraint
from fdenum.model.projection import as_tuple
from fdenum.solver.bounds import greatest_lower_bound, lower_bound, upper_bound
from fdenum.solver.validation import validate_causality
from fdenum.types.base import UNSAT

__all__ = ["EnumeratorState", "Enumerator"]

T = TypeVar("T")

logger = get_logger(__name__)


class EnumeratorState(Enum):
    SEEKING = "seeking"
    READY = "ready"
    EXHAUSTED = "exhausted"


class Enumerator(Generic[T]):
    """Pull-based iterator over all satisfying assignments.

    Implements both the explicit ``has_next()``/``next()`` protocol and the
    Python iterator protocol.

    Args:
        constraints: One constraint per variable, in declaration order.
        projection: Maps each assignment snapshot (a tuple) to the emitted
            value. Defaults to returning the tuple itself.
        config: Enumeration settings; defaults to the global config.

    Raises:
        InvalidConstraintError: If a constraint references its own variable or
            a later one.
    """

    def __init__(
        self,
        constraints: Sequence[Constraint],
        projection: Optional[Callable[[Tuple[int, ...]], T]] = None,
        config: Optional[EnumerationConfig] = None,
    ) -> None:
        self._constraints: Tuple[Constraint, ...] = tuple(constraints)
        validate_causality(self._constraints)

        self._projection = projection if projection is not None else as_tuple
        self._config = config or ENUMERATION_CONFIG

        size = len(self._constraints)
        # Allocated once and reused for the whole search.
        self._values: List[int] = [0] * size
        self._limits: List[int] = [0] * size
        self.solutions_found = 0

        self._state = EnumeratorState.SEEKING
        if self._find_least_solution(0):
            self._state = EnumeratorState.READY
        else:
            self._exhaust()

    @property
    def state(self) -> EnumeratorState:
        return self._state

    def has_next(self) -> bool:
        return self._state is EnumeratorState.READY

    def next(self) -> T:
        """Return the current solution and advance to the following one.

        Raises:
            StopIteration: If the enumeration is exhausted.
        """
        if self._state is not EnumeratorState.READY:
            raise StopIteration
        result = self._projection(tuple(self._values))
        self.solutions_found += 1

        interval = self._config.progress_log_interval
        if interval > 0 and self.solutions_found % interval == 0:
            logger.debug("Enumerated %d solutions", self.solutions_found)

        self._state = EnumeratorState.SEEKING
        self._next_solution()
        return result

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        return self.next()

    def _exhaust(self) -> None:
        self._state = EnumeratorState.EXHAUSTED
        logger.debug(
            "Enumeration exhausted after %d solutions over %d variables",
            self.solutions_found,
            len(self._constraints),
        )

    def _next_solution(self) -> None:
        """Advance from the emitted solution to the next one, or exhaust."""
        index = self._advance(len(self._constraints) - 1)
        if index is not None and self._find_least_solution(index):
            self._state = EnumeratorState.READY
        else:
            self._exhaust()

    def _advance(self, index: int) -> Optional[int]:
        """Step the rightmost advanceable position at or left of ``index``.

        Positions whose value already reached their limit, or whose constraint
        admits nothing further below the limit, are skipped leftwards.

        Returns:
            The position just after the one that was stepped, or None if
            every position is exhausted.
        """
        values = self._values
        while index >= 0:
            if values[index] < self._limits[index]:
                candidate = greatest_lower_bound(
                    self._constraints[index], values[index] + 1, values
                )
                if candidate is not UNSAT and candidate <= self._limits[index]:
                    values[index] = candidate
                    return index + 1
            index -= 1
        return None

    def _find_least_solution(self, start: int) -> bool:
        """Complete ``values[:start]`` to the least full solution.

        Backtracking is not limited to ``start``: when the suffix cannot be
        completed, earlier positions are advanced as well, which is how a
        failed completion continues the leftward walk.

        Returns:
            True if ``values`` now holds a full solution.
        """
        values = self._values
        size = len(self._constraints)
        index = start
        while index < size:
            constraint = self._constraints[index]
            lb = lower_bound(constraint, values)
            ub = upper_bound(constraint, values)
            if lb is not UNSAT and ub is not UNSAT and lb <= ub:
                self._limits[index] = ub
                values[index] = lb
                index += 1
                continue
            advanced = self._advance(index - 1)
            if advanced is None:
                return False
            index = advanced
        return True
