"""Tests for Variable handles and LinearExpression."""

import pytest

from fdenum.model.expression import LinearExpression, Variable, as_expression


def test_normal_form_merges_and_orders_terms():
    expr = LinearExpression(((2, (1,)), (3, ()), (1, (0,)), (-2, (1,))))
    assert expr.terms == ((3, ()), (1, (0,)))


def test_index_tuples_are_sorted():
    assert LinearExpression(((1, (2, 0)),)).terms == ((1, (0, 2)),)


def test_structural_equality_and_hash():
    a = LinearExpression(((1, (0,)), (2, (1,))))
    b = LinearExpression(((2, (1,)), (1, (0,))))
    assert a == b
    assert hash(a) == hash(b)


def test_add_term_merges_and_cancels():
    expr = LinearExpression.constant(5).add_term(2, 0)
    assert expr.terms == ((5, ()), (2, (0,)))

    expr = expr.add_term(3, 0)
    assert expr.terms == ((5, ()), (5, (0,)))

    expr = expr.add_term(-5, 0)
    assert expr.terms == ((5, ()),)


def test_add_accepts_raw_terms():
    expr = LinearExpression().add((2, (1,))).add((3, ())).add((-2, (1,)))
    assert expr == LinearExpression.constant(3)


def test_add_term_with_product():
    expr = LinearExpression().add_term(4, 1, 0)
    assert expr.terms == ((4, (0, 1)),)
    assert expr.evaluate([2, 3]) == 24


def test_constant_zero_is_empty():
    expr = LinearExpression.constant(0)
    assert expr.terms == ()
    assert expr.evaluate([]) == 0
    assert str(expr) == "0"


def test_evaluate_reads_only_referenced_indices():
    expr = LinearExpression(((2, (0,)), (-1, ())))
    # Only position 0 is read.
    assert expr.evaluate([4]) == 7
    assert expr.evaluate([4, 99, 99]) == 7


def test_evaluate_squares():
    x = Variable(0, "x")
    assert (x * x + 1).evaluate([-3]) == 10


def test_pivot_and_variables():
    x, y, z = Variable(0), Variable(1), Variable(2)
    expr = 2 * x + z - 1
    assert expr.pivot == 2
    assert expr.variables() == (0, 2)
    assert LinearExpression.constant(4).pivot == -1
    assert (x * y).pivot == 1


def test_is_constant():
    assert LinearExpression.constant(3).is_constant
    assert LinearExpression().is_constant
    assert not Variable(0).as_expression().is_constant


def test_operator_sugar():
    x, y = Variable(0, "x"), Variable(1, "y")
    values = [3, 4]

    assert (x + 1).evaluate(values) == 4
    assert (1 + x).evaluate(values) == 4
    assert (x - y).evaluate(values) == -1
    assert (10 - x).evaluate(values) == 7
    assert (-x).evaluate(values) == -3
    assert (3 * x).evaluate(values) == 9
    assert (x * 3).evaluate(values) == 9
    assert (2 * x + y - 1).evaluate(values) == 9
    assert ((x + 1) * (y - 1)).evaluate(values) == 12


def test_subtracting_itself_is_zero():
    x = Variable(0)
    assert (x - x).terms == ()


def test_to_string():
    x, y = Variable(0), Variable(1)
    expr = 2 * x + y - 1
    assert expr.to_string(["x", "y"]) == "2*x + y - 1"
    assert str(expr) == "2*v0 + v1 - 1"
    assert (-x - 3 * y).to_string(["a", "b"]) == "-a - 3*b"
    assert (x * x).to_string(["x"]) == "x*x"
    assert LinearExpression.constant(-4).to_string() == "-4"


def test_variable_label_and_equality():
    assert Variable(3).label == "v3"
    assert Variable(3, "z").label == "z"
    # Names are display only.
    assert Variable(3, "a") == Variable(3, "b")


def test_invalid_inputs():
    with pytest.raises(ValueError):
        Variable(-1)
    with pytest.raises(TypeError):
        Variable("0")
    with pytest.raises(TypeError):
        LinearExpression.constant(1.5)
    with pytest.raises(TypeError):
        LinearExpression(((True, ()),))
    with pytest.raises(ValueError):
        LinearExpression(((1, (-2,)),))


def test_as_expression_coercion():
    x = Variable(1)
    assert as_expression(5) == LinearExpression.constant(5)
    assert as_expression(x) == LinearExpression.of(x)
    expr = x + 1
    assert as_expression(expr) is expr
    with pytest.raises(TypeError):
        as_expression(True)
    with pytest.raises(TypeError):
        as_expression("x")
