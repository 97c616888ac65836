"""Constructors for building constraints.

These are the intended way to create constraints before handing them to
``ConstraintSet.declare``. Operands accept an int, a ``Variable`` handle or a
``LinearExpression``; references to variables are resolved by index when the
constraint is evaluated, so a combinator can be built before the variable it
will govern is declared.

Example:
    cs = ConstraintSet()
    x = cs.declare(between(0, 5), name="x")
    y = cs.declare(and_(between(-2, 2), not_equal(x)), name="y")
"""

from __future__ import annotations

from typing import Tuple, Union

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
from fdenum.model.expression import Operand, Variable
from fdenum.types.base import HI_SENTINEL, LO_SENTINEL

__all__ = [
    "and_",
    "or_",
    "between",
    "unbounded",
    "at_least",
    "less_than",
    "greater_than",
    "less_or_equal",
    "greater_or_equal",
    "equal",
    "not_equal",
]


def and_(*clauses: Constraint) -> Conjunction:
    """All of ``clauses`` must hold."""
    return Conjunction(clauses)


def or_(*clauses: Constraint) -> Disjunction:
    """At least one of ``clauses`` must hold."""
    return Disjunction(clauses)


def between(lb: int, ub: int) -> StaticRange:
    """Inclusive range ``[lb, ub]``. Empty when ``lb > ub``."""
    return StaticRange(lb, ub)


def unbounded() -> StaticRange:
    """Whole sentinel domain ``[LO_SENTINEL, HI_SENTINEL]``."""
    return StaticRange(LO_SENTINEL, HI_SENTINEL)


def at_least(*operands: Union[Variable, Tuple[int, Variable]]) -> LinearLowerBound:
    """Weighted-sum lower bound.

    Args:
        *operands: ``Variable`` handles (coefficient 1) or
            ``(coefficient, Variable)`` pairs.

    Returns:
        Constraint ``v >= sum(coefficient * variable)``.

    Raises:
        TypeError: If an operand is neither form.
        ValueError: If no operands are given.
    """
    terms = []
    for operand in operands:
        if isinstance(operand, Variable):
            terms.append((1, operand.index))
        elif (
            isinstance(operand, tuple)
            and len(operand) == 2
            and isinstance(operand[1], Variable)
        ):
            terms.append((operand[0], operand[1].index))
        else:
            raise TypeError(
                "at_least() operands must be Variable or (coefficient, Variable), "
                f"got {operand!r}"
            )
    return LinearLowerBound(tuple(terms))


def less_than(operand: Operand) -> StrictUpperBound:
    return StrictUpperBound(operand)


def greater_than(operand: Operand) -> StrictLowerBound:
    return StrictLowerBound(operand)


def less_or_equal(operand: Operand) -> RelaxedUpperBound:
    return RelaxedUpperBound(operand)


def greater_or_equal(operand: Operand) -> RelaxedLowerBound:
    return RelaxedLowerBound(operand)


def equal(operand: Operand) -> Congruence:
    return Congruence(operand)


def not_equal(operand: Operand) -> Disjunction:
    """Shorthand for ``or_(less_than(operand), greater_than(operand))``."""
    return Disjunction((StrictUpperBound(operand), StrictLowerBound(operand)))
