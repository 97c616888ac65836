"""Tests for building constraint sets from problem files."""

from pathlib import Path

import pytest

from fdenum.dsl.loader import load_problem_yaml
from fdenum.dsl.parse import Problem, build_constraint, build_problem, load_problem
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
from fdenum.model.expression import Variable
from fdenum.model.projection import as_dict

x = Variable(0, "x")
y = Variable(1, "y")
SCOPE = {"x": x, "y": y}


@pytest.mark.parametrize(
    "node,expected",
    [
        ({"between": [1, 4]}, between(1, 4)),
        ({"unbounded": True}, unbounded()),
        ({"less_than": "x"}, less_than(x)),
        ({"greater_than": 3}, greater_than(3)),
        ({"less_or_equal": "x + y"}, less_or_equal(x + y)),
        ({"greater_or_equal": "2*y"}, greater_or_equal(2 * y)),
        ({"equal": "x - 1"}, equal(x - 1)),
        ({"not_equal": "y"}, not_equal(y)),
        ({"at_least": "x + 3*y"}, at_least(x, (3, y))),
        (
            {"and": [{"between": [0, 9]}, {"or": [{"equal": 1}, {"equal": "x"}]}]},
            and_(between(0, 9), or_(equal(1), equal(x))),
        ),
    ],
)
def test_build_constraint(node, expected):
    assert build_constraint(node, SCOPE) == expected


@pytest.mark.parametrize(
    "node,message",
    [
        ({"at_least": "x + 1"}, "weighted sum"),
        ({"at_least": "x*y"}, "weighted sum"),
        ({"mystery": 1}, "Unknown constraint kind"),
        ({"less_than": "w"}, "Unknown variable 'w'"),
        ({}, "single-key"),
    ],
)
def test_build_constraint_errors(node, message):
    with pytest.raises(ValueError, match=message):
        build_constraint(node, SCOPE)


def test_build_problem_declares_in_order():
    data = load_problem_yaml(
        """
name: ordered
description: three variables
limit: 2
variables:
  c: {between: [0, 1]}
  a: {greater_than: c}
  b: {equal: "a + c"}
"""
    )
    problem = build_problem(data)
    assert isinstance(problem, Problem)
    assert problem.name == "ordered"
    assert problem.description == "three variables"
    assert problem.limit == 2
    assert problem.constraint_set.names == ("c", "a", "b")


def test_build_problem_rejects_self_reference():
    data = load_problem_yaml("variables:\n  x: {less_than: x}\n")
    with pytest.raises(ValueError, match="Variable 'x': Unknown variable 'x'"):
        build_problem(data)


def test_load_problem_pairs(integration_dir: Path):
    problem = load_problem(integration_dir / "pairs.yaml")
    cs = problem.constraint_set

    assert problem.name == "pairs"
    assert problem.limit == 100
    assert cs.count() == 27
    assert cs.first() == (0, -2)


def test_load_problem_staircase(integration_dir: Path):
    problem = load_problem(integration_dir / "staircase.yaml")
    solutions = problem.constraint_set.solutions()

    # Name falls back to the file stem.
    assert problem.name == "staircase"
    assert problem.limit is None
    assert len(solutions) == 11
    assert solutions[0] == (0, 0, 0)
    assert solutions[-1] == (1, 1, 2)
    for a, b, c in solutions:
        assert a <= b <= c and a + b + c <= 4


def test_load_problem_islands(integration_dir: Path):
    problem = load_problem(integration_dir / "islands.yaml")
    solutions = problem.constraint_set.solutions()

    assert [s[0] for s in solutions[::2]] == [0, 1, 5, 6, 9]
    assert len(solutions) == 10
    assert solutions[-1] == (9, 18, 19)


def test_load_problem_forward_reference(integration_dir: Path):
    with pytest.raises(ValueError, match="Variable 'y': Unknown variable 'z'"):
        load_problem(integration_dir / "forward_reference.yaml")


def test_load_problem_with_projection(integration_dir: Path):
    problem = load_problem(
        integration_dir / "pairs.yaml", projection=as_dict(["x", "y"])
    )
    assert problem.constraint_set.first() == {"x": 0, "y": -2}


def test_load_problem_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_problem(tmp_path / "absent.yaml")
