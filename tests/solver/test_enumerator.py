"""Tests for the backtracking enumerator."""

import logging
from itertools import product

import pytest

from fdenum.config import EnumerationConfig
from fdenum.model.combinators import (
    and_,
    at_least,
    between,
    equal,
    greater_than,
    less_than,
    not_equal,
    or_,
)
from fdenum.model.expression import Variable
from fdenum.solver.enumerator import Enumerator, EnumeratorState
from fdenum.solver.validation import InvalidConstraintError
from fdenum.types.base import HI_SENTINEL, LO_SENTINEL

x = Variable(0, "x")
y = Variable(1, "y")
z = Variable(2, "z")


def test_two_by_two_in_lexicographic_order():
    enum = Enumerator([between(0, 1), between(0, 1)])
    assert list(enum) == [(0, 0), (0, 1), (1, 0), (1, 1)]


def test_not_equal_pairs():
    constraints = [between(0, 5), and_(between(-2, 2), not_equal(x))]
    solutions = list(Enumerator(constraints))

    expected = [(a, b) for a in range(0, 6) for b in range(-2, 3) if a != b]
    assert solutions == expected
    assert len(solutions) == 27


def test_empty_domain_yields_nothing():
    enum = Enumerator([between(0, 3), between(3, 1)])
    assert not enum.has_next()
    assert enum.state is EnumeratorState.EXHAUSTED
    assert list(enum) == []


def test_empty_constraint_list_yields_one_empty_solution():
    enum = Enumerator([])
    assert enum.has_next()
    assert enum.next() == ()
    assert not enum.has_next()


def test_product_of_independent_ranges():
    ranges = [(0, 2), (-1, 1), (5, 8)]
    solutions = list(Enumerator([between(lo, hi) for lo, hi in ranges]))
    expected = list(product(*(range(lo, hi + 1) for lo, hi in ranges)))
    assert solutions == expected
    assert len(solutions) == 3 * 3 * 4


def test_solutions_strictly_increase_and_are_distinct():
    constraints = [
        between(0, 3),
        and_(between(0, 3), greater_than(x)),
        and_(between(0, 6), at_least(x, y)),
    ]
    solutions = list(Enumerator(constraints))
    assert solutions
    assert all(a < b for a, b in zip(solutions, solutions[1:]))
    for a, b, c in solutions:
        assert b > a and c >= a + b


def test_dead_end_suffix_backtracks_left():
    # y must exceed x and stay within 0..2; x == 2 has no completion.
    constraints = [between(0, 2), and_(between(0, 2), greater_than(x))]
    assert list(Enumerator(constraints)) == [(0, 1), (0, 2), (1, 2)]


def test_deep_dead_end_backtracking():
    # z == x + y only fits when x + y <= 1.
    constraints = [between(0, 3), between(0, 3), and_(between(0, 1), equal(x + y))]
    assert list(Enumerator(constraints)) == [(0, 0, 0), (0, 1, 1), (1, 0, 1)]


def test_disjoint_union_jumps_gaps():
    constraints = [or_(between(0, 1), between(5, 6), between(9, 9))]
    assert list(Enumerator(constraints)) == [(0,), (1,), (5,), (6,), (9,)]


def test_dependent_disjunction():
    # y < x, or x < y < 4
    follower = and_(
        between(0, 5), or_(less_than(x), and_(greater_than(x), less_than(4)))
    )
    solutions = list(Enumerator([between(1, 2), follower]))
    assert solutions == [(1, 0), (1, 2), (1, 3), (2, 0), (2, 1), (2, 3)]


def test_congruence_chain():
    constraints = [between(1, 3), equal(2 * x), equal(y - x)]
    assert list(Enumerator(constraints)) == [(1, 2, 1), (2, 4, 2), (3, 6, 3)]


def test_upper_sentinel_terminates():
    enum = Enumerator([between(HI_SENTINEL - 2, HI_SENTINEL)])
    assert [v for (v,) in enum] == [HI_SENTINEL - 2, HI_SENTINEL - 1, HI_SENTINEL]


def test_unbounded_starts_at_lower_sentinel():
    enum = Enumerator(
        [and_(between(LO_SENTINEL, HI_SENTINEL), less_than(LO_SENTINEL + 2))]
    )
    assert list(enum) == [(LO_SENTINEL,), (LO_SENTINEL + 1,)]


def test_has_next_next_protocol():
    enum = Enumerator([between(0, 1)])
    assert enum.state is EnumeratorState.READY
    assert enum.has_next()
    assert enum.next() == (0,)
    assert enum.has_next()
    assert enum.next() == (1,)
    assert not enum.has_next()
    with pytest.raises(StopIteration):
        enum.next()
    # Stays exhausted.
    assert not enum.has_next()
    assert enum.solutions_found == 2


def test_has_next_is_idempotent():
    enum = Enumerator([between(0, 1)])
    assert enum.has_next() and enum.has_next()
    assert enum.next() == (0,)


def test_projection_is_applied_per_solution():
    calls = []

    def project(values):
        calls.append(values)
        return sum(values)

    enum = Enumerator([between(0, 1), between(10, 11)], projection=project)
    assert enum.next() == 10
    assert len(calls) == 1
    assert isinstance(calls[0], tuple)
    assert list(enum) == [11, 11, 12]


def test_projection_snapshot_is_not_mutated():
    seen = list(Enumerator([between(0, 2)], projection=lambda v: v))
    assert seen == [(0,), (1,), (2,)]


def test_independent_enumerators_share_constraints():
    constraints = [between(0, 1), between(0, 1)]
    first, second = Enumerator(constraints), Enumerator(constraints)
    assert first.next() == (0, 0)
    assert first.next() == (0, 1)
    assert second.next() == (0, 0)


def test_drained_enumerator_leaves_constraints_reusable():
    constraints = [
        or_(between(0, 1), between(4, 5)),
        and_(between(-2, 6), not_equal(x)),
        and_(between(0, 9), at_least(x, y)),
    ]
    first = Enumerator(constraints)
    drained = list(first)
    assert first.state is EnumeratorState.EXHAUSTED
    assert drained

    second = Enumerator(constraints)
    assert list(second) == drained


def test_causality_violation():
    with pytest.raises(InvalidConstraintError) as exc_info:
        Enumerator([between(0, 1), less_than(y)])
    assert exc_info.value.index == 1
    assert exc_info.value.pivot == 1
    assert "constraint 1 depends on variable 1" in str(exc_info.value)


def test_forward_reference_is_invalid():
    with pytest.raises(InvalidConstraintError) as exc_info:
        Enumerator([less_than(z), between(0, 1), between(0, 1)])
    assert exc_info.value.index == 0
    assert exc_info.value.pivot == 2


def test_progress_logging(caplog):
    config = EnumerationConfig(progress_log_interval=2)
    enum = Enumerator([between(0, 4)], config=config)
    with caplog.at_level(logging.DEBUG, logger="fdenum"):
        list(enum)
    progress = [r for r in caplog.records if "Enumerated" in r.getMessage()]
    assert [r.getMessage() for r in progress] == [
        "Enumerated 2 solutions",
        "Enumerated 4 solutions",
    ]
