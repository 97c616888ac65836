"""fdenum: finite-domain constraint enumeration.

fdenum enumerates every integer assignment that satisfies a set of
per-variable constraints, lazily and in lexicographic order. Each variable is
declared with one constraint that may only refer to variables declared before
it; the search assigns variables left to right, narrowing each one to the
interval its constraint allows under the current prefix, and backtracks when a
suffix cannot be completed.

Primary API:
    ConstraintSet - Declaration registry; iterate it to enumerate solutions
    between, and_, or_, less_than, greater_than, ... - Constraint combinators
    Enumerator - The pull-based search engine behind iteration
    load_problem() - Build a ConstraintSet from a YAML problem description

Example:
    from fdenum import ConstraintSet, and_, between, greater_than, less_than, or_

    cs = ConstraintSet()
    x = cs.declare(between(0, 5), name="x")
    y = cs.declare(and_(between(-2, 2), or_(less_than(x), greater_than(x))), name="y")

    for x_val, y_val in cs:
        assert x_val != y_val
"""

from __future__ import annotations

from fdenum import cli, logging
from fdenum._version import __version__
from fdenum.config import ENUMERATION_CONFIG, EnumerationConfig
from fdenum.dsl import load_problem, load_problem_yaml
from fdenum.model import (
    ConstraintSet,
    DeclarationsFrozenError,
    LinearExpression,
    Variable,
    and_,
    as_dict,
    as_tuple,
    at_least,
    between,
    equal,
    formatted,
    greater_or_equal,
    greater_than,
    less_or_equal,
    less_than,
    not_equal,
    or_,
    unbounded,
)
from fdenum.solver import Enumerator, EnumeratorState, InvalidConstraintError
from fdenum.types.base import HI_SENTINEL, LO_SENTINEL, UNSAT

__all__ = [
    # Version
    "__version__",
    # Registry and search
    "ConstraintSet",
    "Enumerator",
    "EnumeratorState",
    # Errors
    "InvalidConstraintError",
    "DeclarationsFrozenError",
    # Expressions
    "Variable",
    "LinearExpression",
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
    # Sentinels
    "LO_SENTINEL",
    "HI_SENTINEL",
    "UNSAT",
    # Configuration
    "EnumerationConfig",
    "ENUMERATION_CONFIG",
    # DSL
    "load_problem",
    "load_problem_yaml",
    # Utilities
    "cli",
    "logging",
]
