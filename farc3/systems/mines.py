"""Mine counting constraints for minesweeper-style boards."""

from __future__ import annotations

from dataclasses import dataclass, field
from math import comb
from typing import Any, FrozenSet, Iterable, Iterator, Mapping, Tuple

from . import register_constraint
from ..core.assignment import Assignment
from ..core.constraint import Constraint, Eliminations, wipe_out
from ..core.errors import ConfigurationError
from ..core.model import BOOLEAN_DOMAIN, Domain, Domains, Variable, hashable


@dataclass(frozen=True, eq=True)
class MineAssignment(Assignment):
    """Tiles known to be safe and tiles known to hold a mine."""
    safe_tiles: FrozenSet[Variable] = field(default_factory=frozenset)
    mine_tiles: FrozenSet[Variable] = field(default_factory=frozenset)

    @classmethod
    def new(cls, safe_tiles: Iterable[Variable] = (), mine_tiles: Iterable[Variable] = ()) -> "MineAssignment":
        return cls(frozenset(safe_tiles), frozenset(mine_tiles))

    @classmethod
    def all_safe(cls, tiles: Iterable[Variable]) -> "MineAssignment":
        return cls.new(safe_tiles=tiles)

    @classmethod
    def all_mine(cls, tiles: Iterable[Variable]) -> "MineAssignment":
        return cls.new(mine_tiles=tiles)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[Variable, bool]]) -> "MineAssignment":
        safe, mines = set(), set()
        for tile, mine in pairs:
            (mines if mine else safe).add(tile)
        return cls(frozenset(safe), frozenset(mines))

    def is_decided(self, var: Variable) -> bool:
        return var in self.safe_tiles or var in self.mine_tiles

    def value(self, var: Variable) -> bool:
        if var in self.mine_tiles:
            return True
        if var in self.safe_tiles:
            return False
        raise KeyError(var)

    def extend(self, var: Variable, value: Any) -> "MineAssignment":
        if value not in BOOLEAN_DOMAIN:
            raise ValueError(f"mine assignments only hold booleans, got {value!r} for {var!r}")
        mine = bool(value)
        if self.is_decided(var):
            if self.value(var) == mine:
                return self
            raise ValueError(f"{var!r} is already decided as {self.value(var)!r}")
        if mine:
            return MineAssignment(self.safe_tiles, self.mine_tiles | {var})
        return MineAssignment(self.safe_tiles | {var}, self.mine_tiles)

    def items(self) -> Iterator[Tuple[Variable, bool]]:
        for tile in self.safe_tiles:
            yield tile, False
        for tile in self.mine_tiles:
            yield tile, True

    def intersection(self, other: Assignment) -> "MineAssignment":
        if not isinstance(other, MineAssignment):
            other = MineAssignment.from_pairs(other.items())
        return MineAssignment(self.safe_tiles & other.safe_tiles, self.mine_tiles & other.mine_tiles)

    def union(self, other: Assignment) -> "MineAssignment":
        if not isinstance(other, MineAssignment):
            other = MineAssignment.from_pairs(other.items())
        safe = self.safe_tiles | other.safe_tiles
        mines = self.mine_tiles | other.mine_tiles
        # tiles marked both ways contradict each other and are dropped
        conflicts = safe & mines
        return MineAssignment(safe - conflicts, mines - conflicts)

    def __len__(self) -> int:
        return len(self.safe_tiles) + len(self.mine_tiles)


def choose_num(n: int, r: int) -> int:
    """Number of ways to pick ``r`` unordered items out of ``n``."""
    if r < 0 or r > n:
        return 0
    return comb(n, r)


@register_constraint
@dataclass(frozen=True)
class MineConstraint(Constraint):
    """Exactly ``count`` of ``tiles`` hold a mine."""
    tiles: FrozenSet[Variable]
    count: int

    kind = "mines"
    assignment_type = MineAssignment

    def __post_init__(self) -> None:
        object.__setattr__(self, "tiles", frozenset(self.tiles))
        if self.count < 0:
            raise ConfigurationError(f"mine count must be non-negative, got {self.count}")

    @classmethod
    def from_config(cls, data: Mapping[str, Any]) -> "MineConstraint":
        return cls([hashable(tile) for tile in data["tiles"]], int(data["count"]))

    def scope(self) -> FrozenSet[Variable]:
        return self.tiles

    def size(self) -> int:
        return choose_num(len(self.tiles), self.count)

    def domain_hint(self, var: Variable) -> Domain:
        return frozenset(BOOLEAN_DOMAIN)

    def mines(self, assignment: Assignment) -> int:
        return sum(
            1 for tile in self.tiles
            if assignment.is_decided(tile) and assignment.value(tile)
        )

    def is_satisfied(self, assignment: Assignment) -> bool:
        self.require_decided(assignment)
        return self.mines(assignment) == self.count

    def undecided(self, assignment: Assignment) -> FrozenSet[Variable]:
        return frozenset(tile for tile in self.tiles if not assignment.is_decided(tile))

    def propagate(self, assignment: Assignment, domains: Domains) -> Eliminations:
        return self._place(
            self.undecided(assignment), self.count - self.mines(assignment), assignment, domains,
        )

    def reduce(self, other: Constraint, assignment: Assignment, domains: Domains) -> Eliminations:
        """Subtract ``other`` when its open tiles lie strictly inside ours.

        ``{0, 1, 2} = 2`` with ``{1, 2} = 1`` leaves ``{0} = 1``.
        """
        if not isinstance(other, MineConstraint):
            return {}
        ours, theirs = self.undecided(assignment), other.undecided(assignment)
        if not theirs or not theirs < ours:
            return {}
        left = (self.count - self.mines(assignment)) - (other.count - other.mines(assignment))
        return self._place(ours - theirs, left, assignment, domains)

    def _place(
        self, tiles: FrozenSet[Variable], count: int, assignment: Assignment, domains: Domains,
    ) -> Eliminations:
        """Eliminations for ``count`` more mines among the undecided ``tiles``."""
        unknown = [tile for tile in tiles if True in domains[tile]]
        if count < 0 or len(unknown) < count:
            return wipe_out(assignment, domains, self.tiles)
        if count == 0:
            return {tile: {True} for tile in unknown}
        if len(unknown) == count:
            return {tile: {False} for tile in unknown}
        return {}
