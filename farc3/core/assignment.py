"""Assignments of values to variables along one search branch."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, Mapping, Tuple

from .model import Value, Variable, ordered_items

_MISSING = object()


class Assignment:
    """Base contract for a partial or complete variable -> value mapping.

    Implementations are immutable: :meth:`extend` returns a new assignment
    and leaves ``self`` untouched, so sibling branches of a search never
    observe each other's decisions. Equality and hashing must only depend
    on the decided pairs, never on the order they were made in.
    """

    def is_decided(self, var: Variable) -> bool:
        raise NotImplementedError

    def value(self, var: Variable) -> Value:
        """Return the value of a decided variable, raising ``KeyError`` otherwise."""
        raise NotImplementedError

    def extend(self, var: Variable, value: Value) -> "Assignment":
        raise NotImplementedError

    def items(self) -> Iterator[Tuple[Variable, Value]]:
        raise NotImplementedError

    def intersection(self, other: "Assignment") -> "Assignment":
        """Pairs decided identically in both assignments."""
        raise NotImplementedError

    def union(self, other: "Assignment") -> "Assignment":
        """Pairs decided in either assignment, minus those that contradict."""
        raise NotImplementedError

    def get(self, var: Variable, default: Any = None) -> Any:
        if self.is_decided(var):
            return self.value(var)
        return default

    def to_dict(self) -> Dict[Variable, Value]:
        return dict(self.items())

    def __contains__(self, var: Variable) -> bool:
        return self.is_decided(var)

    def __iter__(self) -> Iterator[Tuple[Variable, Value]]:
        return self.items()

    def __len__(self) -> int:
        return sum(1 for _ in self.items())

    def __str__(self) -> str:
        pairs = ordered_items(self.items())
        return " ".join(f"{var}={value}" for var, value in pairs)


@dataclass(frozen=True, eq=False)
class DiscreteAssignment(Assignment):
    """Immutable mapping from variable to any hashable value."""
    assignments: Mapping[Variable, Value] = field(default_factory=dict)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[Variable, Value]]) -> "DiscreteAssignment":
        return cls(dict(pairs))

    def is_decided(self, var: Variable) -> bool:
        return var in self.assignments

    def value(self, var: Variable) -> Value:
        return self.assignments[var]

    def extend(self, var: Variable, value: Value) -> "DiscreteAssignment":
        current = self.assignments.get(var, _MISSING)
        if current is not _MISSING:
            if current == value:
                return self
            raise ValueError(f"{var!r} is already decided as {current!r}")
        assignments = dict(self.assignments)
        assignments[var] = value
        return DiscreteAssignment(assignments)

    def items(self) -> Iterator[Tuple[Variable, Value]]:
        return iter(self.assignments.items())

    def intersection(self, other: Assignment) -> "DiscreteAssignment":
        return DiscreteAssignment({
            var: value
            for var, value in self.assignments.items()
            if other.is_decided(var) and other.value(var) == value
        })

    def union(self, other: Assignment) -> "DiscreteAssignment":
        merged = dict(self.assignments)
        for var, value in other.items():
            current = merged.get(var, _MISSING)
            if current is _MISSING:
                merged[var] = value
            elif current != value:
                # conflict, drop the variable
                del merged[var]
        return DiscreteAssignment(merged)

    def __len__(self) -> int:
        return len(self.assignments)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DiscreteAssignment):
            return NotImplemented
        return dict(self.assignments) == dict(other.assignments)

    def __hash__(self) -> int:
        return hash(frozenset(self.assignments.items()))

    def __repr__(self) -> str:
        return f"DiscreteAssignment({dict(ordered_items(self.assignments.items()))!r})"
