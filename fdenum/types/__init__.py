"""Shared typing constructs for fdenum.

Defines the sentinel bounds that stand in for "unbounded", the ``UNSAT``
marker returned by bound queries, and the ``Bound`` alias. Contains no search
logic.
"""

from fdenum.types.base import HI_SENTINEL, LO_SENTINEL, UNSAT, Bound, Unsat

__all__ = [
    # Sentinels
    "LO_SENTINEL",
    "HI_SENTINEL",
    "UNSAT",
    # Type aliases
    "Bound",
    "Unsat",
]
