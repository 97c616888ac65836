"""Declaration registry and entry point for enumeration.

``ConstraintSet`` hands out variable handles in declaration order and keeps the
constraint governing each one. The declarations freeze the first time an
enumeration is requested; at that point every constraint is checked to only
reference earlier variables.

Example:
    cs = ConstraintSet(projection=lambda v: (v[0], v[1]))
    x = cs.declare(between(0, 1), name="x")
    y = cs.declare(between(0, 1), name="y")
    list(cs)  # [(0, 0), (0, 1), (1, 0), (1, 1)]
"""

from __future__ import annotations

from itertools import islice
from typing import (
    Callable,
    Generic,
    Iterator,
    List,
    Optional,
    Tuple,
    TypeVar,
)

import networkx as nx
import pandas as pd

from fdenum.config import ENUMERATION_CONFIG, EnumerationConfig
from fdenum.logging import get_logger
from fdenum.model.constraints import Constraint, describe
from fdenum.model.expression import Variable
from fdenum.model.projection import as_tuple
from fdenum.solver.bounds import dependencies, pivot
from fdenum.solver.enumerator import Enumerator
from fdenum.solver.validation import validate_causality

__all__ = ["ConstraintSet", "DeclarationsFrozenError"]

T = TypeVar("T")

logger = get_logger(__name__)


class DeclarationsFrozenError(RuntimeError):
    """A declaration was attempted after enumeration started."""


class ConstraintSet(Generic[T]):
    """Ordered set of variable declarations with a solution projection.

    Args:
        projection: Maps each assignment snapshot to the value yielded by
            iteration. Defaults to the snapshot tuple.
        config: Enumeration settings passed to every enumerator.
    """

    def __init__(
        self,
        projection: Optional[Callable[[Tuple[int, ...]], T]] = None,
        config: Optional[EnumerationConfig] = None,
    ) -> None:
        self._constraints: List[Constraint] = []
        self._variables: List[Variable] = []
        self._projection = projection if projection is not None else as_tuple
        self._config = config or ENUMERATION_CONFIG
        self._frozen = False

    def declare(self, constraint: Constraint, name: Optional[str] = None) -> Variable:
        """Register a new variable governed by ``constraint``.

        Args:
            constraint: Constraint on the new variable. It may reference only
                variables declared earlier; this is checked at freeze time.
            name: Optional unique display name; defaults to ``v<index>``.

        Returns:
            Handle for referencing the variable in later constraints.

        Raises:
            DeclarationsFrozenError: If enumeration has already started.
            TypeError: If ``constraint`` is not a Constraint.
            ValueError: If ``name`` is already used.
        """
        if self._frozen:
            raise DeclarationsFrozenError(
                "Cannot declare variables after enumeration has started"
            )
        if not isinstance(constraint, Constraint):
            raise TypeError(
                f"declare() expects a Constraint, got {type(constraint).__name__}"
            )
        index = len(self._constraints)
        variable = Variable(index, name if name is not None else f"v{index}")
        if variable.label in self.names:
            raise ValueError(f"Variable name '{variable.label}' is already declared")
        self._constraints.append(constraint)
        self._variables.append(variable)
        return variable

    @property
    def constraints(self) -> Tuple[Constraint, ...]:
        return tuple(self._constraints)

    @property
    def variables(self) -> Tuple[Variable, ...]:
        return tuple(self._variables)

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(v.label for v in self._variables)

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def __len__(self) -> int:
        return len(self._constraints)

    def freeze(self) -> None:
        """Validate causality and stop accepting declarations.

        Raises:
            InvalidConstraintError: If some constraint references its own
                variable or a later one. The set stays unfrozen in that case.
        """
        if self._frozen:
            return
        validate_causality(self._constraints)
        self._frozen = True
        logger.debug("Froze constraint set with %d variables", len(self))

    def iterate(
        self, projection: Optional[Callable[[Tuple[int, ...]], T]] = None
    ) -> Enumerator[T]:
        """Freeze the declarations and return a fresh enumerator.

        Args:
            projection: Overrides the set's projection for this enumerator.
        """
        self.freeze()
        return Enumerator(
            self._constraints,
            projection if projection is not None else self._projection,
            self._config,
        )

    def __iter__(self) -> Iterator[T]:
        return self.iterate()

    def solutions(self, limit: Optional[int] = None) -> List[T]:
        """Return up to ``limit`` projected solutions (all when None)."""
        return list(islice(self.iterate(), limit))

    def first(self) -> Optional[T]:
        """Return the least solution, or None when unsatisfiable."""
        return next(self.iterate(), None)

    def count(self, limit: Optional[int] = None) -> int:
        """Count solutions, stopping at ``limit`` when given."""
        return sum(1 for _ in islice(self.iterate(as_tuple), limit))

    def to_dataframe(self, limit: Optional[int] = None) -> pd.DataFrame:
        """Raw assignments as a DataFrame with one column per variable.

        The projection is bypassed; rows are in enumeration order.
        """
        rows = list(islice(self.iterate(as_tuple), limit))
        return pd.DataFrame(rows, columns=list(self.names), dtype="int64")

    def dependency_graph(self) -> nx.DiGraph:
        """Build the variable dependency graph.

        Nodes are variable indices carrying ``name``, ``constraint`` (rendered
        text) and ``pivot`` attributes. An edge ``i -> j`` means the constraint
        on ``j`` reads variable ``i``. A valid set always yields a DAG whose
        edges point from lower to higher indices.
        """
        graph = nx.DiGraph()
        names = self.names
        for variable, constraint in zip(self._variables, self._constraints):
            graph.add_node(
                variable.index,
                name=variable.label,
                constraint=describe(constraint, names),
                pivot=pivot(constraint),
            )
        for index, constraint in enumerate(self._constraints):
            for source in sorted(dependencies(constraint)):
                graph.add_edge(source, index)
        return graph
