"""Constraints over variables with arbitrary discrete values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional, Set, Tuple

from . import register_constraint
from ..core.assignment import Assignment
from ..core.constraint import Constraint, Eliminations, wipe_out
from ..core.errors import ConfigurationError, ProblemFormatError
from ..core.model import Bound, Domain, Domains, Value, Variable, hashable


@register_constraint
@dataclass(frozen=True)
class DiscreteConstraint(Constraint):
    """Cardinality constraint: ``count`` of ``variables`` take ``value``.

    ``bound`` chooses between exactly, at least and at most ``count``.
    Any value other than ``value`` counts as the complement.
    """
    variables: FrozenSet[Variable]
    value: Value
    count: int
    bound: Bound = Bound.EXACTLY

    kind = "discrete"

    def __post_init__(self) -> None:
        object.__setattr__(self, "variables", frozenset(self.variables))
        object.__setattr__(self, "bound", Bound(self.bound))
        if self.count < 0:
            raise ConfigurationError(f"cardinality count must be non-negative, got {self.count}")

    @classmethod
    def from_config(cls, data: Mapping[str, Any]) -> "DiscreteConstraint":
        try:
            bound = Bound(data.get("bound", Bound.EXACTLY))
        except ValueError:
            raise ProblemFormatError(f"unknown bound {data['bound']!r}") from None
        variables = [hashable(var) for var in data["variables"]]
        return cls(variables, hashable(data["value"]), int(data["count"]), bound)

    def scope(self) -> FrozenSet[Variable]:
        return self.variables

    def matches(self, assignment: Assignment) -> int:
        return sum(
            1 for var in self.variables
            if assignment.is_decided(var) and assignment.value(var) == self.value
        )

    def is_satisfied(self, assignment: Assignment) -> bool:
        self.require_decided(assignment)
        hits = self.matches(assignment)
        if self.bound.has_upper and hits > self.count:
            return False
        if self.bound.has_lower and hits < self.count:
            return False
        return True

    def propagate(self, assignment: Assignment, domains: Domains) -> Eliminations:
        hits = self.matches(assignment)
        open_vars = [
            var for var in self.variables
            if not assignment.is_decided(var) and self.value in domains[var]
        ]

        if self.bound.has_upper and hits > self.count:
            return wipe_out(assignment, domains, self.variables)
        if self.bound.has_lower and hits + len(open_vars) < self.count:
            return wipe_out(assignment, domains, self.variables)

        if self.bound.has_upper and hits == self.count:
            # bound met, everything else takes the complement
            return {var: {self.value} for var in open_vars}
        if self.bound.has_lower and hits + len(open_vars) == self.count:
            return {var: domains[var] - {self.value} for var in open_vars}
        return {}

    def undecided(self, assignment: Assignment) -> FrozenSet[Variable]:
        return frozenset(var for var in self.variables if not assignment.is_decided(var))

    def reduce(self, other: Constraint, assignment: Assignment, domains: Domains) -> Eliminations:
        """Subtract an exact count on the same value over a strict subset."""
        if not (
            isinstance(other, DiscreteConstraint)
            and other.value == self.value
            and self.bound is Bound.EXACTLY
            and other.bound is Bound.EXACTLY
        ):
            return {}
        ours, theirs = self.undecided(assignment), other.undecided(assignment)
        if not theirs or not theirs < ours:
            return {}
        left = (self.count - self.matches(assignment)) - (other.count - other.matches(assignment))
        open_vars = [var for var in ours - theirs if self.value in domains[var]]
        if left < 0 or len(open_vars) < left:
            return wipe_out(assignment, domains, self.variables)
        if left == 0:
            return {var: {self.value} for var in open_vars}
        if len(open_vars) == left:
            return {var: domains[var] - {self.value} for var in open_vars}
        return {}


@register_constraint
@dataclass(frozen=True)
class TableConstraint(Constraint):
    """Extensional constraint listing every allowed tuple of values.

    ``allowed`` holds tuples aligned with ``variables``. Propagation keeps
    only values that still appear in some tuple compatible with the
    current domains.
    """
    variables: Tuple[Variable, ...]
    allowed: FrozenSet[Tuple[Value, ...]]

    kind = "table"

    def __post_init__(self) -> None:
        variables = tuple(self.variables)
        allowed = frozenset(tuple(values) for values in self.allowed)
        if len(set(variables)) != len(variables):
            raise ConfigurationError(f"table constraint repeats a variable: {variables!r}")
        for values in allowed:
            if len(values) != len(variables):
                raise ConfigurationError(
                    f"tuple {values!r} does not match variables {variables!r}"
                )
        object.__setattr__(self, "variables", variables)
        object.__setattr__(self, "allowed", allowed)

    @classmethod
    def from_assignments(cls, assignments: Iterable[Iterable[Tuple[Variable, Value]]]) -> "TableConstraint":
        """Build from allowed assignments given as ``(variable, value)`` pairs.

        Every assignment must cover the same variables.
        """
        variables: Optional[Tuple[Variable, ...]] = None
        allowed: Set[Tuple[Value, ...]] = set()
        for pairs in assignments:
            mapping: Dict[Variable, Value] = dict(pairs)
            if variables is None:
                variables = tuple(mapping)
            elif set(mapping) != set(variables):
                raise ConfigurationError(
                    f"variables are not consistent, expected all assignments to use {variables!r}"
                )
            allowed.add(tuple(mapping[var] for var in variables))
        return cls(variables or (), frozenset(allowed))

    @classmethod
    def from_config(cls, data: Mapping[str, Any]) -> "TableConstraint":
        variables = tuple(hashable(var) for var in data["variables"])
        return cls(variables, frozenset(tuple(hashable(value) for value in row) for row in data["allowed"]))

    def scope(self) -> FrozenSet[Variable]:
        return frozenset(self.variables)

    def size(self) -> int:
        return len(self.allowed)

    def domain_hint(self, var: Variable) -> Optional[Domain]:
        idx = self.variables.index(var)
        return frozenset(values[idx] for values in self.allowed)

    def is_satisfied(self, assignment: Assignment) -> bool:
        self.require_decided(assignment)
        return tuple(assignment.value(var) for var in self.variables) in self.allowed

    def propagate(self, assignment: Assignment, domains: Domains) -> Eliminations:
        support = [
            values for values in self.allowed
            if all(value in domains[var] for var, value in zip(self.variables, values))
        ]
        if not support:
            return wipe_out(assignment, domains, self.variables)

        eliminated = {}
        for idx, var in enumerate(self.variables):
            if assignment.is_decided(var):
                continue
            supported = {values[idx] for values in support}
            unsupported = domains[var] - supported
            if unsupported:
                eliminated[var] = unsupported
        return eliminated
