"""Generic constraint satisfaction solving.

A :class:`System` is built from constraints and enumerates every
assignment that satisfies all of them, lazily and without duplicates.
Problems plug into the engine through three small contracts:

- :class:`Assignment` for the representation of (partial) solutions,
- :class:`Constraint` for checking and pruning,
- :class:`Heuristic` for the search order.

Two constraint families ship with the package: the generic
:class:`DiscreteConstraint` (and :class:`TableConstraint`), and the
minesweeper oriented :class:`MineConstraint`.

Example::

    from farc3 import MineAssignment, MineConstraint, System

    system = System([MineConstraint([0, 1, 2], 2), MineConstraint([1, 2], 1)])
    set(system.solve()) == {
        MineAssignment.new(safe_tiles=[1], mine_tiles=[2, 0]),
        MineAssignment.new(safe_tiles=[2], mine_tiles=[1, 0]),
    }
"""

from .core.assignment import Assignment, DiscreteAssignment
from .core.constraint import Constraint, brute_force
from .core.errors import (
    ConfigurationError,
    FarcError,
    HeuristicError,
    ProblemFormatError,
    UndecidedVariableError,
    UnknownVariableError,
)
from .core.model import Bound
from .core.system import System, SystemIter
from .heuristics import Heuristic, MaxDegree, FirstUnassigned, MinimumRemainingValues
from .systems import DiscreteConstraint, MineAssignment, MineConstraint, TableConstraint

__all__ = [
    "Assignment",
    "DiscreteAssignment",
    "Constraint",
    "brute_force",
    "Bound",
    "System",
    "SystemIter",
    "Heuristic",
    "MinimumRemainingValues",
    "FirstUnassigned",
    "MaxDegree",
    "DiscreteConstraint",
    "TableConstraint",
    "MineConstraint",
    "MineAssignment",
    "FarcError",
    "ConfigurationError",
    "UnknownVariableError",
    "HeuristicError",
    "ProblemFormatError",
    "UndecidedVariableError",
]

__version__ = "0.1.0"
