"""Bound evaluation for constraint variants.

All queries share one candidate-relative protocol:

- ``greatest_lower_bound(c, v, values)`` is the least value ``w >= v`` that
  ``c`` accepts under the prefix assignment ``values``, or ``UNSAT``.
- ``least_upper_bound(c, v, values)`` is the greatest value ``w <= v`` that
  ``c`` accepts, or ``UNSAT``.

Absolute bounds are the special case anchored at the sentinels:
``lower_bound`` queries from ``LO_SENTINEL`` and ``upper_bound`` from
``HI_SENTINEL``. Every interval is clamped to ``[LO_SENTINEL, HI_SENTINEL]``
before use, so strict adjustments never leave the domain.

Interval variants (ranges, single-sided bounds, congruence, weighted sums)
reduce to a ``(lo, hi)`` pair; ``Conjunction`` and ``Disjunction`` combine the
answers of their clauses.
"""

from __future__ import annotations

from typing import FrozenSet, Sequence, Tuple

from fdenum.model.constraints import (
    Congruence,
    Conjunction,
    Constraint,
    Disjunction,
    LinearLowerBound,
    RelaxedLowerBound,
    RelaxedUpperBound,
    StaticRange,
    StrictLowerBound,
    StrictUpperBound,
)
from fdenum.types.base import HI_SENTINEL, LO_SENTINEL, UNSAT, Bound

__all__ = [
    "greatest_lower_bound",
    "least_upper_bound",
    "lower_bound",
    "upper_bound",
    "is_feasible",
    "pivot",
    "dependencies",
]


def _interval(constraint: Constraint, values: Sequence[int]) -> Tuple[int, int]:
    """Return the clamped ``(lo, hi)`` interval of an interval-shaped variant.

    The pair may be empty (``lo > hi``).
    """
    if isinstance(constraint, StaticRange):
        lo, hi = constraint.lower, constraint.upper
    elif isinstance(constraint, RelaxedLowerBound):
        lo, hi = constraint.expression.evaluate(values), HI_SENTINEL
    elif isinstance(constraint, StrictLowerBound):
        lo, hi = constraint.expression.evaluate(values) + 1, HI_SENTINEL
    elif isinstance(constraint, RelaxedUpperBound):
        lo, hi = LO_SENTINEL, constraint.expression.evaluate(values)
    elif isinstance(constraint, StrictUpperBound):
        lo, hi = LO_SENTINEL, constraint.expression.evaluate(values) - 1
    elif isinstance(constraint, Congruence):
        lo = hi = constraint.expression.evaluate(values)
    elif isinstance(constraint, LinearLowerBound):
        lo = sum(coeff * values[idx] for coeff, idx in constraint.terms)
        hi = HI_SENTINEL
    else:
        raise TypeError(f"Unknown constraint type: {type(constraint).__name__}")
    return max(lo, LO_SENTINEL), min(hi, HI_SENTINEL)


def greatest_lower_bound(
    constraint: Constraint, candidate: int, values: Sequence[int]
) -> Bound:
    """Least value at or above ``candidate`` accepted by ``constraint``.

    Args:
        constraint: Constraint governing the variable being assigned.
        candidate: Value to start the upward search from.
        values: Assignment vector; only positions up to the constraint's
            pivot are read.

    Returns:
        The feasible value, or ``UNSAT`` when nothing at or above
        ``candidate`` (up to ``HI_SENTINEL``) is feasible.
    """
    if isinstance(constraint, Conjunction):
        if not constraint.clauses:
            return max(candidate, LO_SENTINEL) if candidate <= HI_SENTINEL else UNSAT
        # Raise the candidate until every clause accepts it unchanged.
        current = candidate
        while True:
            highest = current
            for clause in constraint.clauses:
                bound = greatest_lower_bound(clause, current, values)
                if bound is UNSAT:
                    return UNSAT
                if bound > highest:
                    highest = bound
            if highest == current:
                return current
            current = highest
    if isinstance(constraint, Disjunction):
        best: Bound = UNSAT
        for clause in constraint.clauses:
            bound = greatest_lower_bound(clause, candidate, values)
            if bound is not UNSAT and (best is UNSAT or bound < best):
                best = bound
        return best
    lo, hi = _interval(constraint, values)
    value = max(candidate, lo)
    return value if value <= hi else UNSAT


def least_upper_bound(
    constraint: Constraint, candidate: int, values: Sequence[int]
) -> Bound:
    """Greatest value at or below ``candidate`` accepted by ``constraint``.

    Mirror image of ``greatest_lower_bound``.
    """
    if isinstance(constraint, Conjunction):
        if not constraint.clauses:
            return min(candidate, HI_SENTINEL) if candidate >= LO_SENTINEL else UNSAT
        current = candidate
        while True:
            lowest = current
            for clause in constraint.clauses:
                bound = least_upper_bound(clause, current, values)
                if bound is UNSAT:
                    return UNSAT
                if bound < lowest:
                    lowest = bound
            if lowest == current:
                return current
            current = lowest
    if isinstance(constraint, Disjunction):
        best: Bound = UNSAT
        for clause in constraint.clauses:
            bound = least_upper_bound(clause, candidate, values)
            if bound is not UNSAT and (best is UNSAT or bound > best):
                best = bound
        return best
    lo, hi = _interval(constraint, values)
    value = min(candidate, hi)
    return value if value >= lo else UNSAT


def lower_bound(constraint: Constraint, values: Sequence[int]) -> Bound:
    """Least feasible value overall, or ``UNSAT``."""
    return greatest_lower_bound(constraint, LO_SENTINEL, values)


def upper_bound(constraint: Constraint, values: Sequence[int]) -> Bound:
    """Greatest feasible value overall, or ``UNSAT``."""
    return least_upper_bound(constraint, HI_SENTINEL, values)


def is_feasible(constraint: Constraint, value: int, values: Sequence[int]) -> bool:
    """Return True if ``constraint`` accepts ``value`` under ``values``."""
    return greatest_lower_bound(constraint, value, values) == value


def pivot(constraint: Constraint) -> int:
    """Highest variable index referenced by ``constraint``, or -1 if none."""
    if isinstance(constraint, StaticRange):
        return -1
    if isinstance(constraint, (Conjunction, Disjunction)):
        return max((pivot(c) for c in constraint.clauses), default=-1)
    if isinstance(
        constraint,
        (
            RelaxedLowerBound,
            StrictLowerBound,
            RelaxedUpperBound,
            StrictUpperBound,
            Congruence,
        ),
    ):
        return constraint.expression.pivot
    if isinstance(constraint, LinearLowerBound):
        return max(idx for _, idx in constraint.terms)
    raise TypeError(f"Unknown constraint type: {type(constraint).__name__}")


def dependencies(constraint: Constraint) -> FrozenSet[int]:
    """Indices of all variables referenced by ``constraint``."""
    if isinstance(constraint, StaticRange):
        return frozenset()
    if isinstance(constraint, (Conjunction, Disjunction)):
        return frozenset().union(*(dependencies(c) for c in constraint.clauses))
    if isinstance(constraint, LinearLowerBound):
        return frozenset(idx for _, idx in constraint.terms)
    if isinstance(
        constraint,
        (
            RelaxedLowerBound,
            StrictLowerBound,
            RelaxedUpperBound,
            StrictUpperBound,
            Congruence,
        ),
    ):
        return frozenset(constraint.expression.variables())
    raise TypeError(f"Unknown constraint type: {type(constraint).__name__}")
