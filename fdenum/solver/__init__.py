"""Search engine and bound evaluation.

``bounds`` answers per-variable feasibility queries for every constraint
variant; ``enumerator`` drives the backtracking search that yields solutions
in lexicographic order; ``validation`` enforces the declaration-order rule.
"""

from fdenum.solver.bounds import (
    dependencies,
    greatest_lower_bound,
    is_feasible,
    least_upper_bound,
    lower_bound,
    pivot,
    upper_bound,
)
from fdenum.solver.enumerator import Enumerator, EnumeratorState
from fdenum.solver.validation import InvalidConstraintError, validate_causality

__all__ = [
    "Enumerator",
    "EnumeratorState",
    "InvalidConstraintError",
    "validate_causality",
    "greatest_lower_bound",
    "least_upper_bound",
    "lower_bound",
    "upper_bound",
    "is_feasible",
    "pivot",
    "dependencies",
]
