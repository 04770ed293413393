"""Backtracking constraint solver with incremental propagation."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import (
    Deque,
    Dict,
    FrozenSet,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Set,
    Tuple,
    Type,
    Union,
)

from ..heuristics import Heuristic, make_heuristic
from ..utils.logger import get_logger
from .assignment import Assignment, DiscreteAssignment
from .constraint import Constraint, Eliminations
from .errors import HeuristicError, UnknownVariableError
from .model import BOOLEAN_DOMAIN, Value, Variable, ordered

LOGGER = get_logger(__name__)

VariableSpec = Union[Mapping[Variable, Iterable[Value]], Iterable[Variable], None]


class System:
    """A set of constraints over a universe of variables.

    The universe is either declared up front (``variables``) or derived
    from the constraint scopes. Variables without a declared domain take
    the intersection of the domain hints of their constraints, falling
    back to ``domain``.

    A system holds no search state; every :meth:`solve` call returns an
    independent :class:`SystemIter`.
    """

    def __init__(
        self,
        constraints: Iterable[Constraint] = (),
        variables: VariableSpec = None,
        domain: Iterable[Value] = BOOLEAN_DOMAIN,
        assignment: Optional[Assignment] = None,
    ) -> None:
        self._constraints: List[Constraint] = []
        self._index: Dict[Constraint, int] = {}
        self._default_domain: FrozenSet[Value] = frozenset(domain)
        self._assignment = assignment
        self._declared: Optional[Dict[Variable, Optional[FrozenSet[Value]]]] = None
        if variables is not None:
            if isinstance(variables, Mapping):
                self._declared = {var: frozenset(values) for var, values in variables.items()}
            else:
                self._declared = {var: None for var in variables}
        self.extend(constraints)

    @classmethod
    def from_constraints(cls, *constraints: Constraint, **kwargs) -> "System":
        return cls(constraints, **kwargs)

    # ------------------------------------------------------------------
    # Set-like behaviour
    # ------------------------------------------------------------------
    def insert(self, constraint: Constraint) -> bool:
        """Add a constraint. Returns whether an equal one was already present."""
        if constraint in self._index:
            return True
        if self._declared is not None:
            unknown = [var for var in constraint.scope() if var not in self._declared]
            if unknown:
                raise UnknownVariableError(
                    f"{constraint!r} scopes undeclared variables {ordered(unknown)!r}"
                )
        self._index[constraint] = len(self._constraints)
        self._constraints.append(constraint)
        return False

    def extend(self, constraints: Iterable[Constraint]) -> None:
        for constraint in constraints:
            self.insert(constraint)

    def remove(self, constraint: Constraint) -> Optional[Constraint]:
        idx = self._index.pop(constraint, None)
        if idx is None:
            return None
        removed = self._constraints.pop(idx)
        for i in range(idx, len(self._constraints)):
            self._index[self._constraints[i]] = i
        return removed

    def is_empty(self) -> bool:
        return not self._constraints

    def __len__(self) -> int:
        return len(self._constraints)

    def __iter__(self) -> Iterator[Constraint]:
        return iter(self._constraints)

    def __contains__(self, constraint: object) -> bool:
        return constraint in self._index

    def __repr__(self) -> str:
        return f"System({self._constraints!r})"

    # ------------------------------------------------------------------
    # Universe
    # ------------------------------------------------------------------
    @property
    def constraints(self) -> Tuple[Constraint, ...]:
        return tuple(self._constraints)

    def variables(self) -> List[Variable]:
        universe: Set[Variable] = set()
        if self._declared is not None:
            universe.update(self._declared)
        for constraint in self._constraints:
            universe.update(constraint.scope())
        return ordered(universe)

    def domains(self) -> Dict[Variable, FrozenSet[Value]]:
        """Initial domain of every variable in the universe."""
        domains: Dict[Variable, FrozenSet[Value]] = {}
        for var in self.variables():
            declared = self._declared.get(var) if self._declared is not None else None
            if declared is not None:
                domains[var] = declared
                continue
            hinted: Optional[FrozenSet[Value]] = None
            for constraint in self._constraints:
                if var not in constraint.scope():
                    continue
                hint = constraint.domain_hint(var)
                if hint is not None:
                    hint = frozenset(hint)
                    hinted = hint if hinted is None else hinted & hint
            domains[var] = hinted if hinted is not None else self._default_domain
        return domains

    def empty_assignment(self) -> Assignment:
        if self._assignment is not None:
            return self._assignment
        kinds = {constraint.assignment_type for constraint in self._constraints}
        if len(kinds) == 1:
            return kinds.pop()()
        return DiscreteAssignment()

    # ------------------------------------------------------------------
    # Solving
    # ------------------------------------------------------------------
    def solve(self) -> "SystemIter":
        """Lazily enumerate every solution using minimum-remaining-values."""
        return self.solve_with(make_heuristic())

    def solve_with(self, heuristic: Heuristic) -> "SystemIter":
        return SystemIter(self, heuristic)

    def solve_with_default(self, heuristic: Union[str, Type[Heuristic]]) -> "SystemIter":
        """Solve with a heuristic given by class or registry name."""
        return self.solve_with(make_heuristic(heuristic))


class SearchState(str, Enum):
    """States of the search loop."""
    PROPAGATING = "propagating"
    BRANCHING = "branching"
    BACKTRACKING = "backtracking"
    SOLUTION = "solution"
    EXHAUSTED = "exhausted"


@dataclass
class ChoicePoint:
    """A branching decision that can be revisited on backtrack."""
    variable: Variable
    remaining: Deque[Value]
    domains: Dict[Variable, FrozenSet[Value]]
    assignment: Assignment


@dataclass
class SearchStats:
    nodes: int = 0
    backtracks: int = 0
    solutions: int = 0


@dataclass(eq=False)
class SystemIter:
    """Resumable depth-first search over one :class:`System`.

    Each ``next()`` runs the state machine until it reaches the next
    solution or runs out of choice points. The constraint set is captured
    when the iterator is created.
    """
    system: System
    heuristic: Heuristic
    stats: SearchStats = field(default_factory=SearchStats)

    def __post_init__(self) -> None:
        self.constraints: Tuple[Constraint, ...] = self.system.constraints
        self._references: Dict[Variable, List[Constraint]] = {}
        for constraint in self.constraints:
            for var in constraint.scope():
                self._references.setdefault(var, []).append(constraint)
        # constraints sharing at least one variable, in system order
        self._overlaps: Dict[Constraint, List[Constraint]] = {}
        for constraint in self.constraints:
            scope = constraint.scope()
            self._overlaps[constraint] = [
                other for other in self.constraints
                if other is not constraint and not scope.isdisjoint(other.scope())
            ]
        self._domains: Dict[Variable, FrozenSet[Value]] = self.system.domains()
        self._assignment: Assignment = self.system.empty_assignment()
        self._stack: List[ChoicePoint] = []
        self._queue: Deque[Constraint] = deque(self.constraints)
        self._queued: Set[Constraint] = set(self.constraints)
        self._forced: List[Variable] = [var for var, dom in self._domains.items() if len(dom) == 1]
        self.state = SearchState.PROPAGATING

    def __iter__(self) -> "SystemIter":
        return self

    def __next__(self) -> Assignment:
        while True:
            if self.state is SearchState.PROPAGATING:
                self._step_propagate()
            elif self.state is SearchState.BRANCHING:
                self._step_branch()
            elif self.state is SearchState.BACKTRACKING:
                self._step_backtrack()
            elif self.state is SearchState.SOLUTION:
                solution = self._step_solution()
                if solution is not None:
                    return solution
            else:
                raise StopIteration

    def close(self) -> None:
        """Stop the search and drop every saved choice point."""
        self._stack.clear()
        self._queue.clear()
        self._queued.clear()
        self._forced = []
        self.state = SearchState.EXHAUSTED

    # ------------------------------------------------------------------
    # States
    # ------------------------------------------------------------------
    def _step_propagate(self) -> None:
        self.stats.nodes += 1
        if not self._propagate():
            self.state = SearchState.BACKTRACKING
        elif len(self._assignment) == len(self._domains):
            self.state = SearchState.SOLUTION
        else:
            self.state = SearchState.BRANCHING

    def _step_branch(self) -> None:
        undecided = {
            var: dom for var, dom in self._domains.items()
            if not self._assignment.is_decided(var)
        }
        var, values = self.heuristic.select(undecided, self.constraints)
        if var not in undecided:
            raise HeuristicError(f"{type(self.heuristic).__name__} selected decided or unknown variable {var!r}")
        values = list(values)
        if not values:
            raise HeuristicError(f"{type(self.heuristic).__name__} offered no values for {var!r}")
        outside = [value for value in values if value not in undecided[var]]
        if outside:
            raise HeuristicError(f"values {outside!r} are not in the domain of {var!r}")
        if len(set(values)) != len(values):
            raise HeuristicError(f"{type(self.heuristic).__name__} offered {var!r} the same value twice: {values!r}")

        self._stack.append(ChoicePoint(var, deque(values[1:]), dict(self._domains), self._assignment))
        self._decide(var, values[0])
        self.state = SearchState.PROPAGATING

    def _step_backtrack(self) -> None:
        self.stats.backtracks += 1
        while self._stack:
            point = self._stack[-1]
            if point.remaining:
                value = point.remaining.popleft()
                self._domains = dict(point.domains)
                self._assignment = point.assignment
                self._queue.clear()
                self._queued.clear()
                self._forced = []
                self._decide(point.variable, value)
                self.state = SearchState.PROPAGATING
                return
            self._stack.pop()
        LOGGER.debug(
            "Search exhausted after %d nodes, %d backtracks, %d solutions",
            self.stats.nodes, self.stats.backtracks, self.stats.solutions,
        )
        self.state = SearchState.EXHAUSTED

    def _step_solution(self) -> Optional[Assignment]:
        self.state = SearchState.BACKTRACKING
        solution = self._assignment
        for constraint in self.constraints:
            if not constraint.is_satisfied(solution):
                LOGGER.debug("Rejected complete assignment %s: %r", solution, constraint)
                return None
        self.stats.solutions += 1
        LOGGER.debug("Solution %d: %s", self.stats.solutions, solution)
        return solution

    # ------------------------------------------------------------------
    # Propagation
    # ------------------------------------------------------------------
    def _decide(self, var: Variable, value: Value) -> None:
        self._domains[var] = frozenset((value,))
        self._assignment = self._assignment.extend(var, value)
        self._enqueue(var)

    def _enqueue(self, var: Variable) -> None:
        for constraint in self._references.get(var, ()):
            if constraint not in self._queued:
                self._queued.add(constraint)
                self._queue.append(constraint)

    def _propagate(self) -> bool:
        """Run constraints to a fixed point. Returns ``False`` on a wipe-out."""
        while self._queue or self._forced:
            if self._forced:
                var = self._forced.pop()
                dom = self._domains[var]
                if not dom:
                    return False
                if not self._assignment.is_decided(var):
                    self._decide(var, next(iter(dom)))
                continue

            constraint = self._queue.popleft()
            self._queued.discard(constraint)
            scope = constraint.scope()
            if all(self._assignment.is_decided(var) for var in scope):
                if not constraint.is_satisfied(self._assignment):
                    return False
                continue

            if not self._eliminate(constraint, constraint.propagate(self._assignment, self._domains)):
                return False
            for other in self._overlaps[constraint]:
                if not self._eliminate(constraint, constraint.reduce(other, self._assignment, self._domains)):
                    return False
                if not self._eliminate(other, other.reduce(constraint, self._assignment, self._domains)):
                    return False

        # variables that start out with an empty domain have no constraint to notice
        return all(self._domains.values())

    def _eliminate(self, constraint: Constraint, eliminated: Eliminations) -> bool:
        """Shrink domains. Returns ``False`` once a domain becomes empty."""
        for var, values in eliminated.items():
            if var not in self._domains:
                raise UnknownVariableError(f"{constraint!r} eliminated values of unknown variable {var!r}")
            dom = self._domains[var]
            remaining = dom - frozenset(values)
            if remaining == dom:
                continue
            if not remaining:
                return False
            self._domains[var] = remaining
            if len(remaining) == 1 and not self._assignment.is_decided(var):
                self._forced.append(var)
            self._enqueue(var)
        return True
