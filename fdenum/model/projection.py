"""Stock projections from raw assignments to caller-facing results.

A projection is any callable taking the assignment snapshot (a tuple of ints,
one per declared variable) and returning a value of the caller's choosing.
The enumerator applies it once per solution, only when that solution is
requested.
"""

from __future__ import annotations

from typing import Callable, Dict, Sequence, Tuple, TypeVar

__all__ = [
    "Projection",
    "as_tuple",
    "as_dict",
    "formatted",
]

T = TypeVar("T")

#: Callable mapping an assignment snapshot to a result.
Projection = Callable[[Tuple[int, ...]], T]


def as_tuple(values: Tuple[int, ...]) -> Tuple[int, ...]:
    """Identity projection; the default."""
    return tuple(values)


def as_dict(names: Sequence[str]) -> Projection[Dict[str, int]]:
    """Project to ``{name: value}`` using ``names`` in declaration order."""
    keys = tuple(names)

    def project(values: Tuple[int, ...]) -> Dict[str, int]:
        return dict(zip(keys, values, strict=True))

    return project


def formatted(template: str, names: Sequence[str]) -> Projection[str]:
    """Project to ``template.format(**{name: value})``.

    Example:
        formatted("({x}, {y})", ["x", "y"])((1, 2))  # "(1, 2)"
    """
    to_dict = as_dict(names)

    def project(values: Tuple[int, ...]) -> str:
        return template.format(**to_dict(values))

    return project
