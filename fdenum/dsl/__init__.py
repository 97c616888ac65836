"""YAML problem format.

A problem file lists variables in declaration order, each with one constraint
written as a single-key mapping. ``load_problem`` reads, validates and builds
a file into a ``Problem`` whose ``constraint_set`` is ready to enumerate.
"""

from fdenum.dsl.expression import parse_expression, parse_operand
from fdenum.dsl.loader import load_problem_yaml, load_schema
from fdenum.dsl.parse import Problem, build_constraint, build_problem, load_problem

__all__ = [
    "Problem",
    "load_problem",
    "load_problem_yaml",
    "load_schema",
    "build_problem",
    "build_constraint",
    "parse_expression",
    "parse_operand",
]
