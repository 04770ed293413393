"""Constraint contract and brute-force helpers."""

from __future__ import annotations

from itertools import product
from typing import AbstractSet, Any, Dict, Iterable, Iterator, List, Mapping, Optional, Type

from .assignment import Assignment, DiscreteAssignment
from .errors import UndecidedVariableError
from .model import Domain, Domains, Value, Variable, ordered

Eliminations = Mapping[Variable, AbstractSet[Value]]


class Constraint:
    """Base contract for a relation over a fixed scope of variables.

    Subclasses should be immutable and compare equal by value: a
    :class:`~farc3.core.system.System` stores equal constraints once.
    """

    kind: str = "constraint"
    #: Assignment type the engine builds when every constraint agrees on it.
    assignment_type: Type[Assignment] = DiscreteAssignment

    @classmethod
    def from_config(cls, data: Mapping[str, Any]) -> "Constraint":
        raise NotImplementedError(f"{cls.__name__} cannot be loaded from a problem file")

    def scope(self) -> AbstractSet[Variable]:
        raise NotImplementedError

    def is_satisfied(self, assignment: Assignment) -> bool:
        """Whether a decided scope satisfies the constraint.

        Raises :class:`UndecidedVariableError` if any scoped variable is
        still undecided in ``assignment``.
        """
        raise NotImplementedError

    def propagate(self, assignment: Assignment, domains: Domains) -> Eliminations:
        """Values of undecided scoped variables that can no longer be taken.

        Returning nothing is always sound; it only makes search slower.
        """
        return {}

    def reduce(self, other: "Constraint", assignment: Assignment, domains: Domains) -> Eliminations:
        """Eliminations that follow from this constraint and ``other`` together.

        The engine calls this for every pair of constraints sharing a
        variable. A typical rule subtracts ``other`` when its undecided
        variables are a strict subset of this constraint's undecided
        variables. Like :meth:`propagate`, returning nothing is sound.
        """
        return {}

    def size(self) -> Optional[int]:
        """Approximate number of local solutions, or ``None`` if unknown."""
        return None

    def domain_hint(self, var: Variable) -> Optional[Domain]:
        """Values ``var`` can take under this constraint, if it knows."""
        return None

    def require_decided(self, assignment: Assignment) -> None:
        missing = [var for var in self.scope() if not assignment.is_decided(var)]
        if missing:
            raise UndecidedVariableError(
                f"{type(self).__name__} checked with undecided variables {ordered(missing)!r}"
            )


def filter_satisfying(
    assignments: Iterable[Assignment], constraints: Iterable[Constraint]
) -> List[Assignment]:
    """Keep assignments that satisfy every constraint."""
    constraints = list(constraints)
    result = []
    for a in assignments:
        if all(c.is_satisfied(a) for c in constraints):
            result.append(a)
    return result


def brute_force(
    domains: Mapping[Variable, Iterable[Value]],
    constraints: Iterable[Constraint],
    assignment_type: Type[Assignment] = DiscreteAssignment,
) -> List[Assignment]:
    """Enumerate the full cartesian product and keep satisfying assignments.

    Exponential; meant as a reference for small problems.
    """
    variables = ordered(domains)
    value_lists = [ordered(domains[var]) for var in variables]

    def candidates() -> Iterator[Assignment]:
        for values in product(*value_lists):
            assignment = assignment_type()
            for var, value in zip(variables, values):
                assignment = assignment.extend(var, value)
            yield assignment

    return filter_satisfying(candidates(), constraints)


def wipe_out(assignment: Assignment, domains: Domains, scope: Iterable[Variable]) -> Dict[Variable, AbstractSet[Value]]:
    """Eliminate every remaining value of the undecided variables in ``scope``."""
    return {
        var: frozenset(domains[var])
        for var in scope
        if not assignment.is_decided(var)
    }
