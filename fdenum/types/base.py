"""Base constants and aliases for bound computations."""

from __future__ import annotations

from enum import Enum
from typing import Literal, Union

#: Lowest representable domain value. One unit above the 32-bit minimum so that
#: ``LO_SENTINEL - 1`` is still a valid machine integer.
LO_SENTINEL = -(2**31) + 1

#: Highest representable domain value (32-bit maximum).
HI_SENTINEL = 2**31 - 1


class Unsat(Enum):
    """Marker type for "no feasible value in this direction"."""

    UNSAT = "UNSAT"

    def __repr__(self) -> str:
        return "UNSAT"


#: Singleton returned by bound queries when no feasible value exists.
UNSAT: Literal[Unsat.UNSAT] = Unsat.UNSAT

#: Result of a candidate-relative bound query.
Bound = Union[int, Unsat]
