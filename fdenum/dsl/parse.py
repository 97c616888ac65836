"""Build constraint sets from validated problem dictionaries.

Variables are declared in document order. While a variable's constraint is
being built only the variables above it are in scope, so a reference to the
variable itself or to a later one is reported as an unknown name.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union

from fdenum.config import EnumerationConfig
from fdenum.dsl.expression import parse_expression, parse_operand
from fdenum.dsl.loader import load_problem_yaml
from fdenum.logging import get_logger
from fdenum.model.constraint_set import ConstraintSet
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
from fdenum.model.expression import Variable
from fdenum.types.base import HI_SENTINEL, LO_SENTINEL

__all__ = ["Problem", "build_constraint", "build_problem", "load_problem"]

logger = get_logger(__name__)

_BOUND_KINDS = {
    "less_than": StrictUpperBound,
    "greater_than": StrictLowerBound,
    "less_or_equal": RelaxedUpperBound,
    "greater_or_equal": RelaxedLowerBound,
    "equal": Congruence,
}


@dataclass
class Problem:
    """A parsed problem file.

    Attributes:
        constraint_set: Declarations in document order.
        limit: Default enumeration limit from the file, if any.
        name: Optional problem name.
        description: Optional free-text description.
    """

    constraint_set: ConstraintSet
    limit: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None


def build_constraint(
    node: Mapping[str, Any], scope: Mapping[str, Variable]
) -> Constraint:
    """Translate one single-key constraint mapping into a Constraint.

    Args:
        node: Mapping such as ``{"between": [0, 5]}``.
        scope: Variables that may be referenced, by name.

    Raises:
        ValueError: For unknown keys, bad operands, or unknown names.
    """
    if not isinstance(node, Mapping) or len(node) != 1:
        raise ValueError(f"Constraint must be a single-key mapping, got {node!r}")
    ((kind, arg),) = node.items()

    if kind == "between":
        lb, ub = arg
        return StaticRange(lb, ub)
    if kind == "unbounded":
        return StaticRange(LO_SENTINEL, HI_SENTINEL)
    if kind in ("and", "or"):
        clauses = tuple(build_constraint(c, scope) for c in arg)
        return Conjunction(clauses) if kind == "and" else Disjunction(clauses)
    if kind in _BOUND_KINDS:
        return _BOUND_KINDS[kind](parse_operand(arg, scope))
    if kind == "not_equal":
        expression = parse_operand(arg, scope)
        return Disjunction(
            (StrictUpperBound(expression), StrictLowerBound(expression))
        )
    if kind == "at_least":
        expression = parse_expression(arg, scope)
        terms = []
        for coeff, indices in expression.terms:
            if len(indices) != 1:
                raise ValueError(
                    f"at_least expects a weighted sum of variables, got '{arg}'"
                )
            terms.append((coeff, indices[0]))
        return LinearLowerBound(tuple(terms))
    raise ValueError(f"Unknown constraint kind '{kind}'")


def build_problem(
    data: Dict[str, Any],
    projection: Optional[Callable[[Tuple[int, ...]], Any]] = None,
    config: Optional[EnumerationConfig] = None,
) -> Problem:
    """Declare every variable of a validated problem dictionary.

    Args:
        data: Output of ``load_problem_yaml``.
        projection: Projection for the resulting ConstraintSet.
        config: Enumeration settings for the resulting ConstraintSet.

    Returns:
        The assembled Problem.
    """
    constraint_set: ConstraintSet = ConstraintSet(projection, config)
    scope: Dict[str, Variable] = {}
    for name, node in data["variables"].items():
        try:
            constraint = build_constraint(node, scope)
        except ValueError as exc:
            raise ValueError(f"Variable '{name}': {exc}") from exc
        scope[name] = constraint_set.declare(constraint, name=name)

    logger.debug("Built problem with %d variables", len(constraint_set))
    return Problem(
        constraint_set=constraint_set,
        limit=data.get("limit"),
        name=data.get("name"),
        description=data.get("description"),
    )


def load_problem(
    source: Union[str, Path],
    projection: Optional[Callable[[Tuple[int, ...]], Any]] = None,
    config: Optional[EnumerationConfig] = None,
) -> Problem:
    """Read, validate and build a problem file.

    Args:
        source: Path to a YAML problem file.
        projection: Projection for the resulting ConstraintSet.
        config: Enumeration settings for the resulting ConstraintSet.
    """
    path = Path(source)
    data = load_problem_yaml(path.read_text(encoding="utf-8"))
    problem = build_problem(data, projection, config)
    if problem.name is None:
        problem.name = path.stem
    return problem
