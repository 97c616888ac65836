"""Constraint model package.

Defines variable handles and linear expressions, the constraint variants and
the combinators that build them, stock projections, and ``ConstraintSet``,
the declaration registry through which enumeration is started.
"""

from fdenum.model.combinators import (
    and_,
    at_least,
    between,
    equal,
    greater_or_equal,
    greater_than,
    less_or_equal,
    less_than,
    not_equal,
    or_,
    unbounded,
)
from fdenum.model.constraint_set import ConstraintSet, DeclarationsFrozenError
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
    describe,
)
from fdenum.model.expression import LinearExpression, Variable, as_expression
from fdenum.model.projection import as_dict, as_tuple, formatted

__all__ = [
    # Registry
    "ConstraintSet",
    "DeclarationsFrozenError",
    # Expressions
    "Variable",
    "LinearExpression",
    "as_expression",
    # Variants
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
    # Combinators
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
    # Projections
    "as_tuple",
    "as_dict",
    "formatted",
]
