"""Variable handles and linear expressions over declared variables.

A ``LinearExpression`` is an immutable sum of terms. Each term pairs an integer
coefficient with a sorted tuple of variable indices; an index repeated ``k``
times raises that variable to the ``k``-th power, and the empty tuple is the
constant term. Terms are kept in normal form: identical index tuples are
merged, zero coefficients dropped, and the remainder ordered by index tuple so
that structurally equal expressions compare and hash equal.

Example:
    x, y = Variable(0, "x"), Variable(1, "y")
    expr = 2 * x + y - 1
    expr.evaluate([3, 4])  # 9
    expr.pivot             # 1
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence, Tuple, Union

__all__ = [
    "Term",
    "Variable",
    "LinearExpression",
    "Operand",
    "as_expression",
]

#: A single ``(coefficient, sorted variable indices)`` term.
Term = Tuple[int, Tuple[int, ...]]


def _check_int(value: object, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{what} must be an int, got {type(value).__name__}")
    return value


def _normalize(terms: Sequence[Term]) -> Tuple[Term, ...]:
    merged: Dict[Tuple[int, ...], int] = {}
    for coefficient, indices in terms:
        _check_int(coefficient, "Term coefficient")
        key = tuple(sorted(indices))
        for idx in key:
            _check_int(idx, "Variable index")
            if idx < 0:
                raise ValueError(f"Variable index must be non-negative, got {idx}")
        merged[key] = merged.get(key, 0) + coefficient
    return tuple(
        (coeff, key) for key, coeff in sorted(merged.items()) if coeff != 0
    )


@dataclass(frozen=True)
class Variable:
    """Handle to a declared variable.

    Handles are created by ``ConstraintSet.declare`` and only carry the index
    into the assignment vector. The value is looked up at evaluation time.

    Attributes:
        index: Zero-based position in the assignment vector.
        name: Optional display name; not part of equality.
    """

    index: int
    name: Optional[str] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        _check_int(self.index, "Variable index")
        if self.index < 0:
            raise ValueError(f"Variable index must be non-negative, got {self.index}")

    @property
    def label(self) -> str:
        """Display name, falling back to ``v<index>``."""
        return self.name if self.name is not None else f"v{self.index}"

    def as_expression(self) -> LinearExpression:
        return LinearExpression.of(self)

    def __add__(self, other: Operand) -> LinearExpression:
        return self.as_expression() + other

    __radd__ = __add__

    def __sub__(self, other: Operand) -> LinearExpression:
        return self.as_expression() - other

    def __rsub__(self, other: Operand) -> LinearExpression:
        return as_expression(other) - self.as_expression()

    def __neg__(self) -> LinearExpression:
        return -self.as_expression()

    def __mul__(self, other: Operand) -> LinearExpression:
        return self.as_expression() * other

    __rmul__ = __mul__


@dataclass(frozen=True)
class LinearExpression:
    """Immutable sum of ``(coefficient, indices)`` terms in normal form.

    Attributes:
        terms: Canonically ordered terms. Any sequence passed in is normalized.
    """

    terms: Tuple[Term, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "terms", _normalize(self.terms))

    @classmethod
    def constant(cls, value: int) -> LinearExpression:
        """Expression consisting of the single constant ``value``."""
        return cls(((_check_int(value, "Constant"), ()),))

    @classmethod
    def of(cls, variable: Variable, coefficient: int = 1) -> LinearExpression:
        """Expression ``coefficient * variable``."""
        return cls(((coefficient, (variable.index,)),))

    def add_term(self, coefficient: int, *indices: int) -> LinearExpression:
        """Return this expression with one more term added.

        An existing term over the same index multiset absorbs the coefficient
        (and disappears if the sum is zero); otherwise the term is inserted in
        canonical position.
        """
        key = tuple(sorted(indices))
        terms = list(self.terms)
        for i, (coeff, idxs) in enumerate(terms):
            if idxs == key:
                total = coeff + coefficient
                if total == 0:
                    del terms[i]
                else:
                    terms[i] = (total, idxs)
                return LinearExpression(tuple(terms))
        terms.append((coefficient, key))
        return LinearExpression(tuple(terms))

    def add(self, other: Union[Operand, Term]) -> LinearExpression:
        """Return the sum of this expression and ``other``.

        ``other`` may also be a single ``(coefficient, indices)`` term.
        """
        if isinstance(other, tuple):
            coefficient, indices = other
            return self.add_term(coefficient, *indices)
        result = self
        for coeff, idxs in as_expression(other).terms:
            result = result.add_term(coeff, *idxs)
        return result

    def scale(self, factor: int) -> LinearExpression:
        _check_int(factor, "Scale factor")
        return LinearExpression(tuple((c * factor, idxs) for c, idxs in self.terms))

    def evaluate(self, values: Sequence[int]) -> int:
        """Evaluate against an assignment vector.

        Only indices that appear in the expression are read, so a partially
        assigned vector is fine as long as it covers ``pivot``.
        """
        total = 0
        for coeff, idxs in self.terms:
            product = coeff
            for idx in idxs:
                product *= values[idx]
            total += product
        return total

    @property
    def pivot(self) -> int:
        """Highest referenced variable index, or -1 for a constant."""
        return max((idx for _, idxs in self.terms for idx in idxs), default=-1)

    @property
    def is_constant(self) -> bool:
        return all(not idxs for _, idxs in self.terms)

    def variables(self) -> Tuple[int, ...]:
        """Sorted distinct variable indices referenced by this expression."""
        return tuple(sorted({idx for _, idxs in self.terms for idx in idxs}))

    def to_string(self, names: Optional[Sequence[str]] = None) -> str:
        """Render as ``2*x + y - 1``.

        Args:
            names: Optional display names indexed by variable index. Indices
                without a name render as ``v<index>``.
        """

        def label(idx: int) -> str:
            if names is not None and idx < len(names):
                return names[idx]
            return f"v{idx}"

        ordered = [t for t in self.terms if t[1]] + [t for t in self.terms if not t[1]]
        if not ordered:
            return "0"
        parts = []
        for i, (coeff, idxs) in enumerate(ordered):
            magnitude = abs(coeff)
            factors = [label(idx) for idx in idxs]
            if not factors or magnitude != 1:
                factors.insert(0, str(magnitude))
            body = "*".join(factors)
            if i == 0:
                parts.append(f"-{body}" if coeff < 0 else body)
            else:
                parts.append(f" - {body}" if coeff < 0 else f" + {body}")
        return "".join(parts)

    def __str__(self) -> str:
        return self.to_string()

    def __add__(self, other: Operand) -> LinearExpression:
        return self.add(other)

    __radd__ = __add__

    def __sub__(self, other: Operand) -> LinearExpression:
        return self.add(as_expression(other).scale(-1))

    def __rsub__(self, other: Operand) -> LinearExpression:
        return as_expression(other).add(self.scale(-1))

    def __neg__(self) -> LinearExpression:
        return self.scale(-1)

    def __mul__(self, other: Operand) -> LinearExpression:
        if isinstance(other, int) and not isinstance(other, bool):
            return self.scale(other)
        rhs = as_expression(other)
        # Term-wise product; repeated indices become powers.
        return LinearExpression(
            tuple(
                (c1 * c2, idxs1 + idxs2)
                for c1, idxs1 in self.terms
                for c2, idxs2 in rhs.terms
            )
        )

    __rmul__ = __mul__


#: Anything accepted where an expression is expected.
Operand = Union[int, Variable, LinearExpression]


def as_expression(operand: Operand) -> LinearExpression:
    """Coerce an int, ``Variable`` or ``LinearExpression`` to an expression.

    Raises:
        TypeError: For any other operand type (including ``bool``).
    """
    if isinstance(operand, LinearExpression):
        return operand
    if isinstance(operand, Variable):
        return LinearExpression.of(operand)
    if isinstance(operand, int) and not isinstance(operand, bool):
        return LinearExpression.constant(operand)
    raise TypeError(
        f"Expected int, Variable or LinearExpression, got {type(operand).__name__}"
    )
