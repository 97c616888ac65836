"""Constraint variants.

Each constraint restricts the value of the single variable it is declared for.
Variants are frozen dataclasses that carry data only; bound evaluation lives in
``fdenum.solver.bounds`` and dispatches on the variant type. Constraints refer
to other variables through ``LinearExpression`` indices, never through live
values, so one constraint object can be shared by any number of enumerators.

Variants:
    StaticRange        lb <= v <= ub
    Conjunction        every clause holds
    Disjunction        at least one clause holds
    RelaxedLowerBound  v >= e
    StrictLowerBound   v >  e
    RelaxedUpperBound  v <= e
    StrictUpperBound   v <  e
    Congruence         v == e
    LinearLowerBound   v >= sum(c_i * x_i), upper side unbounded
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from fdenum.model.expression import (
    LinearExpression,
    Operand,
    _check_int,
    as_expression,
)

__all__ = [
    "Constraint",
    "StaticRange",
    "Conjunction",
    "Disjunction",
    "RelaxedLowerBound",
    "StrictLowerBound",
    "RelaxedUpperBound",
    "StrictUpperBound",
    "Congruence",
    "LinearLowerBound",
    "describe",
]


@dataclass(frozen=True)
class Constraint:
    """Base class for all constraint variants.

    Supports ``a & b`` and ``a | b`` as shorthand for conjunction and
    disjunction.
    """

    def __and__(self, other: Constraint) -> Conjunction:
        return Conjunction((self, other))

    def __or__(self, other: Constraint) -> Disjunction:
        return Disjunction((self, other))


def _check_clauses(owner: object, clauses: Sequence[Constraint]) -> None:
    clauses = tuple(clauses)
    for clause in clauses:
        if not isinstance(clause, Constraint):
            raise TypeError(
                f"{type(owner).__name__} clauses must be Constraint instances, "
                f"got {type(clause).__name__}"
            )
    object.__setattr__(owner, "clauses", clauses)


def _check_expression(owner: object, expression: Operand) -> None:
    object.__setattr__(owner, "expression", as_expression(expression))


@dataclass(frozen=True)
class StaticRange(Constraint):
    """Fixed interval ``[lower, upper]``; empty when ``lower > upper``."""

    lower: int
    upper: int

    def __post_init__(self) -> None:
        for edge in (self.lower, self.upper):
            if isinstance(edge, bool) or not isinstance(edge, int):
                raise TypeError(
                    f"StaticRange bounds must be ints, got {type(edge).__name__}"
                )


@dataclass(frozen=True)
class Conjunction(Constraint):
    """Intersection of the feasible sets of ``clauses``."""

    clauses: Tuple[Constraint, ...]

    def __post_init__(self) -> None:
        _check_clauses(self, self.clauses)


@dataclass(frozen=True)
class Disjunction(Constraint):
    """Union of the feasible sets of ``clauses``."""

    clauses: Tuple[Constraint, ...]

    def __post_init__(self) -> None:
        _check_clauses(self, self.clauses)


@dataclass(frozen=True)
class RelaxedLowerBound(Constraint):
    expression: LinearExpression

    def __post_init__(self) -> None:
        _check_expression(self, self.expression)


@dataclass(frozen=True)
class StrictLowerBound(Constraint):
    expression: LinearExpression

    def __post_init__(self) -> None:
        _check_expression(self, self.expression)


@dataclass(frozen=True)
class RelaxedUpperBound(Constraint):
    expression: LinearExpression

    def __post_init__(self) -> None:
        _check_expression(self, self.expression)


@dataclass(frozen=True)
class StrictUpperBound(Constraint):
    expression: LinearExpression

    def __post_init__(self) -> None:
        _check_expression(self, self.expression)


@dataclass(frozen=True)
class Congruence(Constraint):
    """Value must equal ``expression`` exactly."""

    expression: LinearExpression

    def __post_init__(self) -> None:
        _check_expression(self, self.expression)


@dataclass(frozen=True)
class LinearLowerBound(Constraint):
    """Weighted-sum lower bound ``v >= sum(coefficient * values[index])``.

    Attributes:
        terms: ``(coefficient, variable index)`` pairs.
    """

    terms: Tuple[Tuple[int, int], ...]

    def __post_init__(self) -> None:
        terms = tuple(
            (_check_int(c, "Term coefficient"), _check_int(i, "Variable index"))
            for c, i in self.terms
        )
        if not terms:
            raise ValueError("LinearLowerBound requires at least one term")
        for _, idx in terms:
            if idx < 0:
                raise ValueError(f"Variable index must be non-negative, got {idx}")
        object.__setattr__(self, "terms", terms)

    def as_expression(self) -> LinearExpression:
        return LinearExpression(tuple((c, (i,)) for c, i in self.terms))


def describe(constraint: Constraint, names: Optional[Sequence[str]] = None) -> str:
    """Render a constraint as a compact human-readable string.

    Args:
        constraint: Constraint to render.
        names: Optional variable display names indexed by variable index.

    Returns:
        For example ``and(between(-2, 2), or(< x, > x))``.
    """
    if isinstance(constraint, StaticRange):
        return f"between({constraint.lower}, {constraint.upper})"
    if isinstance(constraint, Conjunction):
        inner = ", ".join(describe(c, names) for c in constraint.clauses)
        return f"and({inner})"
    if isinstance(constraint, Disjunction):
        inner = ", ".join(describe(c, names) for c in constraint.clauses)
        return f"or({inner})"
    if isinstance(constraint, RelaxedLowerBound):
        return f">= {constraint.expression.to_string(names)}"
    if isinstance(constraint, StrictLowerBound):
        return f"> {constraint.expression.to_string(names)}"
    if isinstance(constraint, RelaxedUpperBound):
        return f"<= {constraint.expression.to_string(names)}"
    if isinstance(constraint, StrictUpperBound):
        return f"< {constraint.expression.to_string(names)}"
    if isinstance(constraint, Congruence):
        return f"== {constraint.expression.to_string(names)}"
    if isinstance(constraint, LinearLowerBound):
        return f"at_least({constraint.as_expression().to_string(names)})"
    raise TypeError(f"Unknown constraint type: {type(constraint).__name__}")
