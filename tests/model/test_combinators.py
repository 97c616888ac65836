"""Tests for constraint combinators."""

import pytest

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
from fdenum.model.constraints import (
    Congruence,
    Conjunction,
    Disjunction,
    LinearLowerBound,
    RelaxedLowerBound,
    RelaxedUpperBound,
    StaticRange,
    StrictLowerBound,
    StrictUpperBound,
)
from fdenum.model.expression import LinearExpression, Variable
from fdenum.types.base import HI_SENTINEL, LO_SENTINEL


def test_range_combinators():
    assert between(1, 4) == StaticRange(1, 4)
    assert unbounded() == StaticRange(LO_SENTINEL, HI_SENTINEL)


def test_logical_combinators():
    a, b, c = between(0, 1), between(2, 3), between(4, 5)
    assert and_(a, b, c) == Conjunction((a, b, c))
    assert or_(a, b) == Disjunction((a, b))
    assert and_() == Conjunction(())


def test_comparison_combinators():
    x = Variable(0)
    expr = LinearExpression.of(x)
    assert less_than(x) == StrictUpperBound(expr)
    assert greater_than(x) == StrictLowerBound(expr)
    assert less_or_equal(x) == RelaxedUpperBound(expr)
    assert greater_or_equal(x) == RelaxedLowerBound(expr)
    assert equal(x + 2) == Congruence(expr + 2)


def test_not_equal_is_strict_disjunction():
    x = Variable(0)
    assert not_equal(x) == or_(less_than(x), greater_than(x))


def test_at_least_terms():
    x, y = Variable(0), Variable(1)
    assert at_least(x, (3, y)) == LinearLowerBound(((1, 0), (3, 1)))


def test_at_least_rejects_bad_operands():
    with pytest.raises(TypeError):
        at_least(5)
    with pytest.raises(TypeError):
        at_least((2, 0))
    with pytest.raises(ValueError):
        at_least()
