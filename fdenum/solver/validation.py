"""Causality validation for declared constraints.

A constraint declared for variable ``i`` may only reference variables with a
lower index. This lets the search assign variables strictly left to right
without revisiting earlier decisions. Violations are reported rather than
silently reordered.
"""

from __future__ import annotations

from typing import Sequence

from fdenum.model.constraints import Constraint
from fdenum.solver.bounds import pivot

__all__ = [
    "InvalidConstraintError",
    "validate_causality",
]


class InvalidConstraintError(ValueError):
    """A constraint references its own variable or a later one.

    Attributes:
        index: Index of the variable whose constraint is invalid.
        pivot: Highest variable index that constraint references.
    """

    def __init__(self, index: int, pivot: int) -> None:
        self.index = index
        self.pivot = pivot
        super().__init__(
            f"constraint {index} depends on variable {pivot}; "
            f"constraints may only reference variables declared before them"
        )


def validate_causality(constraints: Sequence[Constraint]) -> None:
    """Ensure every constraint's pivot is below its own index.

    Args:
        constraints: Constraints in declaration order.

    Raises:
        InvalidConstraintError: For the first offending constraint.
    """
    for index, constraint in enumerate(constraints):
        ith = pivot(constraint)
        if ith >= index:
            raise InvalidConstraintError(index, ith)
