"""Parsing of expression strings used in problem files.

Grammar (whitespace is ignored):

    expr   := [+|-] term ((+|-) term)*
    term   := factor (* factor)*
    factor := INTEGER | NAME

Names resolve against the variables declared so far. A name repeated within a
term raises that variable to a power, e.g. ``x*x``.
"""

from __future__ import annotations

import re
from typing import List, Mapping, Tuple, Union

from fdenum.model.expression import LinearExpression, Variable

__all__ = [
    "parse_expression",
    "parse_operand",
]

_TOKEN_REGEX = re.compile(r"\s*(?:(\d+)|([A-Za-z_][A-Za-z0-9_]*)|(\S))")


def _tokenize(text: str) -> List[Tuple[str, str]]:
    tokens: List[Tuple[str, str]] = []
    pos = 0
    text = text.rstrip()
    while pos < len(text):
        match = _TOKEN_REGEX.match(text, pos)
        if match is None:  # pragma: no cover - regex always consumes one char
            break
        number, name, symbol = match.groups()
        if number is not None:
            tokens.append(("int", number))
        elif name is not None:
            tokens.append(("name", name))
        elif symbol in ("+", "-", "*"):
            tokens.append(("op", symbol))
        else:
            raise ValueError(
                f"Unexpected character '{symbol}' in expression '{text}'"
            )
        pos = match.end()
    return tokens


def parse_expression(
    text: str, variables: Mapping[str, Variable]
) -> LinearExpression:
    """Parse ``text`` into a LinearExpression.

    Args:
        text: Expression such as ``"2*x + y - 1"``.
        variables: Declared variables by name.

    Returns:
        The parsed expression in normal form.

    Raises:
        ValueError: On syntax errors or references to undeclared names.
    """
    tokens = _tokenize(text)
    if not tokens:
        raise ValueError("Empty expression")

    result = LinearExpression()
    pos = 0
    sign = 1
    expect_term = True
    while pos < len(tokens):
        kind, value = tokens[pos]
        if expect_term:
            if kind == "op" and value in ("+", "-") and pos == 0:
                sign = -1 if value == "-" else 1
                pos += 1
                continue
            coefficient = sign
            indices: List[int] = []
            while True:
                if pos >= len(tokens):
                    raise ValueError(f"Expression '{text}' ends unexpectedly")
                kind, value = tokens[pos]
                if kind == "int":
                    coefficient *= int(value)
                elif kind == "name":
                    if value not in variables:
                        raise ValueError(
                            f"Unknown variable '{value}' in expression '{text}'"
                        )
                    indices.append(variables[value].index)
                else:
                    raise ValueError(
                        f"Unexpected operator '{value}' in expression '{text}'"
                    )
                pos += 1
                if pos < len(tokens) and tokens[pos] == ("op", "*"):
                    pos += 1
                    continue
                break
            result = result.add_term(coefficient, *indices)
            expect_term = False
        else:
            if kind != "op" or value == "*":
                raise ValueError(f"Expected '+' or '-' in expression '{text}'")
            sign = -1 if value == "-" else 1
            pos += 1
            expect_term = True
    if expect_term:
        raise ValueError(f"Expression '{text}' ends unexpectedly")
    return result


def parse_operand(
    operand: Union[int, str], variables: Mapping[str, Variable]
) -> LinearExpression:
    """Coerce a problem-file operand (int or expression string)."""
    if isinstance(operand, bool):
        raise ValueError(f"Invalid operand {operand!r}")
    if isinstance(operand, int):
        return LinearExpression.constant(operand)
    if isinstance(operand, str):
        return parse_expression(operand, variables)
    raise ValueError(
        f"Invalid operand {operand!r}; expected int or expression string"
    )
