from __future__ import annotations

from typing import Mapping, Sequence

from . import Choice, Heuristic, register_heuristic
from ..core.constraint import Constraint
from ..core.model import Domain, Variable, order_key, ordered


@register_heuristic
class FirstUnassigned(Heuristic):
    """Static ordering: smallest undecided variable first."""
    name = "first"

    def select(self, domains: Mapping[Variable, Domain], constraints: Sequence[Constraint]) -> Choice:
        var = min(domains, key=order_key)
        return var, ordered(domains[var])
