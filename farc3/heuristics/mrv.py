from __future__ import annotations

from typing import Mapping, Sequence

from . import Choice, Heuristic, register_heuristic
from ..core.constraint import Constraint
from ..core.model import Domain, Variable, order_key, ordered


@register_heuristic
class MinimumRemainingValues(Heuristic):
    """Branch on the variable with the smallest domain.

    Ties go to the smallest variable; values are tried in sorted order.
    """
    name = "mrv"

    def select(self, domains: Mapping[Variable, Domain], constraints: Sequence[Constraint]) -> Choice:
        var = min(domains, key=lambda v: (len(domains[v]), order_key(v)))
        return var, ordered(domains[var])
